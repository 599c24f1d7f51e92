"""
shape_renderer.py
Serializes a shape into a TypeScript object type body.
"""
import json
import re
from typing import Optional

from shape_model import Leaf, Shape

INDENT = "    "
BARE_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def property_name(name: str, quote_properties: Optional[bool] = None) -> str:
    if quote_properties or (quote_properties is None and not BARE_IDENTIFIER.match(name)):
        return json.dumps(name)
    return name


def strip_namespace(type_text: str) -> str:
    """
    For types like "xsd:string" only the "string" part is kept.
    A generic wrapper in front of the prefix survives: "Array<xs:Foo>;" -> "Array<Foo>;".
    """
    colon = type_text.find(':')
    if colon == -1:
        return type_text
    quote = type_text.find('"')
    if quote != -1 and quote < colon:
        # literal union, colons belong to the values
        return type_text
    preamble = type_text[:colon]
    last_open_bracket = preamble.rfind('<')
    if last_open_bracket != -1:
        return preamble[:last_open_bracket + 1] + type_text[colon + 1:]
    return type_text[colon + 1:]


def indent_block(text: str) -> str:
    return text.replace("\n", "\n" + INDENT)


def render_shape(shape: Shape, quote_properties: Optional[bool] = None) -> str:
    lines = []
    for name, value in shape.items():
        prop = property_name(name, quote_properties)
        if isinstance(value, Leaf):
            if value.doc:
                lines.append(value.doc)
            lines.append(f"{prop}: {strip_namespace(value.type_text)}")
        elif isinstance(value, str):
            lines.append(f"{prop}: {value}")
        else:
            lines.append(f"{prop}: {indent_block(render_shape(value, quote_properties))};")
    if not lines:
        return "{}"
    return "{\n" + INDENT + ("\n" + INDENT).join(lines) + "\n}"
