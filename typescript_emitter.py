"""
typescript_emitter.py
Assembles the TypeScript text blocks of every generated file from a TypedWsdl catalog
and writes them to disk.
"""
import os
import re
from typing import List, NamedTuple

from shape_model import TS_PRIMITIVES
from typed_wsdl import GENERATED_DATA_STRING, TypedWsdl

INDENT = "    "
TYPES_MODULE = "../Types"
CLIENT_IMPORT = "import { Client } from 'soap';"

# "name: Foo;", "name: Foo[];" and "Array<Foo>"
FIELD_TYPE_REFERENCE = re.compile(r"(?:: |Array<)([A-Za-z_$][A-Za-z0-9_$.]*)(?=(?:\[\])*[;>])")


class OutputFile(NamedTuple):
    file: str
    data: List[str]


def find_type_references(text: str) -> List[str]:
    """Identifiers used as field types that are not TypeScript primitives, in first-seen order."""
    found = []
    for match in FIELD_TYPE_REFERENCE.finditer(text):
        name = match.group(1)
        if name not in TS_PRIMITIVES and name not in found:
            found.append(name)
    return found


def output_typed_wsdl(catalog: TypedWsdl) -> List[OutputFile]:
    outputs = []
    for service, ports in catalog.files.items():
        for port, file in ports.items():
            data: List[str] = []
            namespaces = catalog.namespaces.get(service, {}).get(port, {})
            unknown_types: List[str] = []

            def collect_references(text: str) -> None:
                for type_name in find_type_references(text):
                    # references into this file's own namespaces resolve locally
                    if type_name.split('.')[0] in namespaces or type_name in unknown_types:
                        continue
                    unknown_types.append(type_name)

            for name, body in catalog.types.get(service, {}).get(port, {}).items():
                if name == GENERATED_DATA_STRING:
                    data.append(body)
                    continue
                collect_references(body)
                data.append(f"export type {name} = {body}")
            # hoisted shapes can hold the only use of a shared type
            for declarations in namespaces.values():
                for declaration in declarations.values():
                    collect_references(declaration)

            if unknown_types:
                data.insert(0, f"import {{ {', '.join(unknown_types)} }} from '{TYPES_MODULE}';")

            methods = catalog.methods.get(service, {}).get(port, {})
            if methods:
                data.insert(0, CLIENT_IMPORT)
                members = [f"{method}: {signature};" for method, signature in methods.items()]
                data.append(f"export interface I{port}Soap extends Client {{\n{INDENT}" + f"\n{INDENT}".join(members) + "\n}")

            for ns, declarations in namespaces.items():
                members = [declaration.replace("\n", "\n" + INDENT) for declaration in declarations.values()]
                if members:
                    data.append(f"export namespace {ns} {{\n{INDENT}" + f"\n{INDENT}".join(members) + "\n}")

            outputs.append(OutputFile(file, data))
    return outputs


def write_output_files(outputs: List[OutputFile], output_dir: str, verbose: bool = False) -> List[str]:
    written = []
    for output in outputs:
        path = os.path.join(output_dir, *output.file.split('/')) + ".ts"
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write("\n\n".join(output.data) + "\n")
        if verbose:
            print(f"[DEBUG] Wrote {path}")
        written.append(path)
    return written
