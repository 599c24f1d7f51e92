"""
schema_translator.py
Recursive-descent translation of XML schema nodes into standalone TypeScript
enum and type declarations.
"""
import re
from typing import Dict, List, Optional, Set, Union

from schema_model import NodeKind, SchemaNode

NEW_LINE = "\n"
EMPTY_LINE = "\n\n"
MEMBER_INDENT = "    "
SCHEMA_GROUPS = ("types", "complexTypes")

# Element types that can be expressed without a foreign reference
RECOGNIZED_ELEMENT_TYPES = frozenset([
    "xs:int",
    "xs:double",
    "xs:decimal",
    "xs:boolean",
    "xs:dateTime",
    "xs:string",
])
LOCAL_PREFIX = "tns"


def to_ts_name(name: str) -> str:
    """Replace every character that is not legal in an identifier with '_'."""
    return re.sub(r"[^A-Za-z0-9_]", "_", name or "")


def parse_type(type_name: str) -> str:
    parts = (type_name or "").split(':')
    ns, name = (parts[0], parts[1]) if len(parts) > 1 else ("", parts[0])
    if ns == LOCAL_PREFIX:
        return name
    if name == "dateTime":
        return "Date"
    if name in ("int", "double", "decimal"):
        return "number"
    return name


def is_optional(node: SchemaNode) -> bool:
    return node.attr("nillable") == "true" or node.attr("minOccurs") == "0"


def is_list(node: SchemaNode) -> bool:
    return node.attr("minOccurs") == "0" and bool(node.attr("maxOccurs"))


def is_recognized_element_type(type_name: Optional[str]) -> bool:
    if not type_name:
        return False
    return type_name.startswith(LOCAL_PREFIX) or type_name in RECOGNIZED_ELEMENT_TYPES


class SchemaTranslator:
    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.warnings: List[str] = []
        self._handlers = {
            NodeKind.SIMPLE_TYPE: self._simple_type,
            NodeKind.COMPLEX_TYPE: self._complex_type,
            NodeKind.SEQUENCE: self._sequence,
            NodeKind.ELEMENT: self._element,
            NodeKind.RESTRICTION: self._restriction,
            NodeKind.ENUMERATION: self._enumeration,
            NodeKind.COMPLEX_CONTENT: self._complex_content,
            NodeKind.EXTENSION: self._extension,
            NodeKind.PATTERN: self._pattern,
            NodeKind.UNKNOWN: self._unknown,
        }

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}")

    def log_warning(self, warning: str) -> None:
        self.warnings.append(warning)
        if self.verbose:
            print(f"[WARNING] {warning}")

    def translate(self, node: Union[SchemaNode, List[SchemaNode]], base_type: Optional[str] = None) -> str:
        if isinstance(node, list):
            texts = (self.translate(child, base_type) for child in node)
            return NEW_LINE.join(text for text in texts if text)
        handler = self._handlers.get(node.kind, self._unknown)
        return handler(node, base_type)

    def _simple_type(self, node: SchemaNode, base_type: Optional[str]) -> str:
        members = self.translate(node.children, base_type)
        if not members.strip():
            return ""
        return f"export enum {to_ts_name(node.attr('name'))} {{{NEW_LINE}{members}{NEW_LINE}}}"

    def _complex_type(self, node: SchemaNode, base_type: Optional[str]) -> str:
        body = self.translate(node.children, base_type) or "{}"
        return f"export type {to_ts_name(node.attr('name'))} = {body}"

    def _sequence(self, node: SchemaNode, base_type: Optional[str]) -> str:
        fields = self.translate(node.children, base_type)
        if not fields:
            return "{}"
        return f"{{{NEW_LINE}{fields}{NEW_LINE}}}"

    def _element(self, node: SchemaNode, base_type: Optional[str]) -> str:
        type_name = node.attr("type")
        if not is_recognized_element_type(type_name):
            # Foreign and inline types have no declaration to point at
            self.debug_print(f"Skipping element '{node.attr('name')}' of type '{type_name}'")
            return ""
        optional = "?" if is_optional(node) else ""
        suffix = "[]" if is_list(node) else ""
        return f"{MEMBER_INDENT}{to_ts_name(node.attr('name'))}{optional}: {to_ts_name(parse_type(type_name))}{suffix};"

    def _restriction(self, node: SchemaNode, base_type: Optional[str]) -> str:
        return self.translate(node.children, parse_type(node.attr("base")))

    def _enumeration(self, node: SchemaNode, base_type: Optional[str]) -> str:
        if base_type != "string":
            return ""
        value = node.attr("value")
        return f'{MEMBER_INDENT}{value} = "{value}",'

    def _complex_content(self, node: SchemaNode, base_type: Optional[str]) -> str:
        return self.translate(node.children, base_type)

    def _extension(self, node: SchemaNode, base_type: Optional[str]) -> str:
        return f"{parse_type(node.attr('base'))} & {self.translate(node.children, base_type)}"

    def _pattern(self, node: SchemaNode, base_type: Optional[str]) -> str:
        return ""

    def _unknown(self, node: SchemaNode, base_type: Optional[str]) -> str:
        self.log_warning(f"Unhandled schema node '{node.tag}' ({node.attributes})")
        return ""

    def translate_schemas(self, schemas: Dict[str, Dict[str, Dict[str, SchemaNode]]]) -> str:
        declarations = []
        for namespace, groups in schemas.items():
            for group in SCHEMA_GROUPS:
                for name, node in (groups.get(group) or {}).items():
                    text = self.translate(node)
                    if text:
                        declarations.append(text)
        return EMPTY_LINE.join(declarations)

    def enum_names(self, schemas: Dict[str, Dict[str, Dict[str, SchemaNode]]]) -> Set[str]:
        """Qualified names ("<namespace>#<name>") of the simple types that translate to enums."""
        names = set()
        for namespace, groups in schemas.items():
            for name, node in (groups.get("types") or {}).items():
                if node.kind is NodeKind.SIMPLE_TYPE and has_string_enumeration(node):
                    names.add(f"{namespace}#{node.attr('name') or name}")
        return names


def has_string_enumeration(node: SchemaNode) -> bool:
    for child in node.children:
        if child.kind is NodeKind.RESTRICTION and parse_type(child.attr("base")) == "string":
            if any(c.kind is NodeKind.ENUMERATION for c in child.children):
                return True
    return False
