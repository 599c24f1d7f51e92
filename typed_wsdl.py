"""
typed_wsdl.py
Catalog of generated declarations. Every table is keyed service -> port.
"""
from typing import Dict, List

GENERATED_DATA_STRING = "GeneratedDataString"
COMMON_SERVICE = "Common"
COMMON_PORT = "Types"


class TypedWsdl:
    """
    files:      service -> port -> file identifier ("<service>/<port>")
    methods:    service -> port -> method name -> signature text
    types:      service -> port -> type name -> declaration body
    namespaces: service -> port -> namespace -> member name -> declaration text
    """
    def __init__(self, files=None, methods=None, types=None, namespaces=None, warnings=None):
        self.files: Dict[str, Dict[str, str]] = files if files is not None else {}
        self.methods: Dict[str, Dict[str, Dict[str, str]]] = methods if methods is not None else {}
        self.types: Dict[str, Dict[str, Dict[str, str]]] = types if types is not None else {}
        self.namespaces: Dict[str, Dict[str, Dict[str, Dict[str, str]]]] = namespaces if namespaces is not None else {}
        # diagnostics recorded while building, not part of the generated output
        self.warnings: List[str] = warnings if warnings is not None else []

    def ensure_port(self, service: str, port: str, file: str) -> None:
        if service not in self.types:
            self.types[service] = {}
            self.methods[service] = {}
            self.files[service] = {}
            self.namespaces[service] = {}
        if port not in self.types[service]:
            self.types[service][port] = {}
            self.methods[service][port] = {}
            self.files[service][port] = file
            self.namespaces[service][port] = {}

    def __eq__(self, other):
        if not isinstance(other, TypedWsdl):
            return NotImplemented
        return (self.files == other.files and self.methods == other.methods
                and self.types == other.types and self.namespaces == other.namespaces)

    def __repr__(self):
        return f"TypedWsdl(files={self.files!r})"
