# description_loader.py
# Reads a service description and its schema from JSON documents on disk.
import json
import os
from typing import Any, Dict, Optional

from schema_model import schemas_from_dict


class DescriptionLoadError(Exception):
    pass


def load_json_document(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise DescriptionLoadError(f"Input file '{path}' does not exist.")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DescriptionLoadError(f"Could not read '{path}': {e}") from e
    if not isinstance(document, dict):
        raise DescriptionLoadError(f"'{path}' must contain a JSON object, got {type(document).__name__}")
    return document


def _expect_object(value: Any, where: str, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DescriptionLoadError(f"'{path}': {where} must be a JSON object, got {type(value).__name__}")
    return value


def check_field_tree(tree: Dict[str, Any], where: str, path: str) -> None:
    for key, value in tree.items():
        if isinstance(value, str):
            continue
        check_field_tree(_expect_object(value, f"{where}.{key}", path), f"{where}.{key}", path)


def check_description(document: Dict[str, Any], path: str) -> Dict[str, Any]:
    """service -> port -> operation -> {"input": tree, "output": tree}; leaves are annotation strings"""
    for service, ports in document.items():
        for port, operations in _expect_object(ports, service, path).items():
            where = f"{service}.{port}"
            for method, io in _expect_object(operations, where, path).items():
                io = _expect_object(io, f"{where}.{method}", path)
                for direction in ("input", "output"):
                    if io.get(direction) is not None:
                        tree_where = f"{where}.{method}.{direction}"
                        check_field_tree(_expect_object(io[direction], tree_where, path), tree_where, path)
    return document


def check_schema_node(node: Any, where: str, path: str) -> None:
    node = _expect_object(node, where, path)
    if node.get("attributes") is not None:
        _expect_object(node["attributes"], f"{where}.attributes", path)
    children = node.get("children")
    if children is None:
        return
    if not isinstance(children, list):
        raise DescriptionLoadError(f"'{path}': {where}.children must be a JSON array, got {type(children).__name__}")
    for index, child in enumerate(children):
        check_schema_node(child, f"{where}.children[{index}]", path)


def check_schema(document: Dict[str, Any], path: str) -> Dict[str, Any]:
    """namespace -> group -> type name -> schema node"""
    for namespace, groups in document.items():
        for group, objects in _expect_object(groups or {}, namespace, path).items():
            where = f"{namespace}.{group}"
            for name, node in _expect_object(objects or {}, where, path).items():
                check_schema_node(node, f"{where}.{name}", path)
    return document


class JsonServiceSource:
    """
    Service source backed by two JSON files:
      description: service -> port -> operation -> {"input": tree, "output": tree}
      schema:      namespace -> {"types": {...}, "complexTypes": {...}}
    """
    def __init__(self, description_path: str, schema_path: Optional[str] = None):
        self.description_path = description_path
        self.schema_path = schema_path

    def describe(self) -> Dict[str, Any]:
        return check_description(load_json_document(self.description_path), self.description_path)

    def schemas(self) -> Dict[str, Any]:
        if not self.schema_path:
            return {}
        document = load_json_document(self.schema_path)
        return schemas_from_dict(check_schema(document, self.schema_path))
