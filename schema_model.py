"""
schema_model.py
Tagged nodes of an XML schema document as handed over by the schema collaborator.
"""
from enum import Enum
from typing import Any, Dict, List, Optional


class NodeKind(Enum):
    SIMPLE_TYPE = "simpleType"
    COMPLEX_TYPE = "complexType"
    SEQUENCE = "sequence"
    ELEMENT = "element"
    RESTRICTION = "restriction"
    ENUMERATION = "enumeration"
    COMPLEX_CONTENT = "complexContent"
    EXTENSION = "extension"
    PATTERN = "pattern"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: str) -> 'NodeKind':
        # Namespace prefixes ("xs:element") are not part of the kind
        local = tag.split(':')[-1] if tag else ""
        try:
            kind = cls(local)
        except ValueError:
            return cls.UNKNOWN
        return kind


class SchemaNode:
    def __init__(self, kind: NodeKind, attributes: Optional[Dict[str, str]] = None,
                 children: Optional[List['SchemaNode']] = None, tag: Optional[str] = None):
        self.kind = kind
        self.attributes = attributes or {}
        self.children = children or []
        self.tag = tag or kind.value  # raw tag, kept for diagnostics

    def attr(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def __repr__(self):
        return f"SchemaNode(kind={self.kind.name}, tag={self.tag!r}, attributes={self.attributes!r}, children={len(self.children)})"


def schema_node_from_dict(data: Dict[str, Any]) -> SchemaNode:
    """
    Build a SchemaNode from either
      {"kind": "element", "attributes": {"name": "id"}, "children": [...]}
    or the node-soap style
      {"name": "element", "$name": "id", "children": [...]}
    """
    tag = data.get("kind") or data.get("name") or ""
    attributes = dict(data.get("attributes") or {})
    for key, value in data.items():
        if key.startswith('$'):
            attributes[key[1:]] = value
    children = [schema_node_from_dict(child) for child in data.get("children") or []]
    return SchemaNode(NodeKind.from_tag(tag), attributes, children, tag=tag)


def schemas_from_dict(data: Dict[str, Any]) -> Dict[str, Dict[str, Dict[str, SchemaNode]]]:
    """namespace key -> group ("types" / "complexTypes") -> type name -> SchemaNode"""
    schemas = {}
    for namespace, groups in data.items():
        schemas[namespace] = {}
        for group, objects in (groups or {}).items():
            schemas[namespace][group] = {
                name: schema_node_from_dict(node) for name, node in (objects or {}).items()
            }
    return schemas
