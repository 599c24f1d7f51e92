"""
shape_model.py
Intermediate representation used between a raw field tree and its TypeScript text:
primitive type tables, leaf values and the per-port TypeCollector that tracks hoisted shapes.
"""
from typing import Dict, NamedTuple, Optional, Union

# XML schema type (without namespace prefix) -> TypeScript primitive
XS_TO_TS_TYPE = {
    # string family
    'string': 'string',
    'normalizedString': 'string',
    'token': 'string',
    'language': 'string',
    'Name': 'string',
    'NCName': 'string',
    'NMTOKEN': 'string',
    'ID': 'string',
    'IDREF': 'string',
    'ENTITY': 'string',
    'QName': 'string',
    'anyURI': 'string',
    'duration': 'string',
    'gYear': 'string',
    'gYearMonth': 'string',
    'gMonth': 'string',
    'gMonthDay': 'string',
    'gDay': 'string',
    # binary
    'base64Binary': 'string',
    'hexBinary': 'string',
    # boolean
    'boolean': 'boolean',
    # numeric
    'integer': 'number',
    'decimal': 'number',
    'int': 'number',
    'long': 'number',
    'short': 'number',
    'byte': 'number',
    'double': 'number',
    'float': 'number',
    'unsignedLong': 'number',
    'unsignedInt': 'number',
    'unsignedShort': 'number',
    'unsignedByte': 'number',
    'positiveInteger': 'number',
    'negativeInteger': 'number',
    'nonPositiveInteger': 'number',
    'nonNegativeInteger': 'number',
    # dates
    'dateTime': 'Date',
    'date': 'Date',
    'time': 'Date',
    # anything
    'anyType': 'any',
}

# Types that never need an import in generated code
TS_PRIMITIVES = frozenset(['boolean', 'number', 'string']) | frozenset(XS_TO_TS_TYPE.values())

# Restriction keywords that are not enumeration values
FACET_KEYWORDS = frozenset(['length', 'pattern', 'minLength', 'maxLength'])


class Leaf(NamedTuple):
    """A resolved leaf field: optional documentation comment and the type text (ending with ';')."""
    doc: Optional[str]
    type_text: str


# A shape maps field names to a Leaf, pre-rendered type text or a nested shape
Shape = Dict[str, Union[Leaf, str, 'Shape']]


class TypeCollector:
    """
    Tracks candidate and committed hoisted shapes for one port.

    registered: name -> stable declaration body, read-only while a pass is being built
    collected:  name -> candidate body for the current pass, None once two candidates disagree
    """
    def __init__(self, ns: str):
        self.ns = ns
        self.registered: Dict[str, str] = {}
        self.collected: Dict[str, Optional[str]] = {}

    def reference(self, name: str) -> str:
        return f"{self.ns}.I{name}"

    def offer(self, name: str, text: str) -> Optional[str]:
        """
        Offer the rendered body of a nested shape found under field `name`.
        Returns the shared reference when the body matches the registered one.
        """
        if name in self.registered and self.registered[name] == text:
            return self.reference(name)
        if name in self.collected:
            if self.collected[name] != text:
                self.collected[name] = None
        else:
            self.collected[name] = text
        return None

    def register_collected(self) -> 'TypeCollector':
        for name, text in self.collected.items():
            if text is not None:
                self.registered[name] = text
            else:
                self.registered.pop(name, None)
        self.collected.clear()
        return self
