"""
shape_builder.py
Turns one raw field tree from a service description into a nested shape,
resolving primitive, enum and array encodings. When a TypeCollector is supplied,
nested shapes are offered to it for deduplication.
"""
import re
from typing import AbstractSet, Any, Dict, Optional

from shape_model import FACET_KEYWORDS, XS_TO_TS_TYPE, Leaf, Shape, TypeCollector
from shape_renderer import indent_block, render_shape
from type_annotation import parse_type_annotation

ARRAY_SUFFIX = "[]"
METADATA_KEYS = ("targetNSAlias", "targetNamespace")
ARRAY_ELEMENT_IDENTIFIER = re.compile(r"^[A-Za-z0-9.]+$")


def array_of(type_text: str) -> str:
    if ARRAY_ELEMENT_IDENTIFIER.match(type_text):
        return type_text + ARRAY_SUFFIX
    return f"Array<{type_text}>"


class ShapeBuilder:
    def __init__(self, known_enums: Optional[AbstractSet[str]] = None):
        """
        Args:
            known_enums: qualified names ("<targetNamespace>#<name>") of enumerated types;
                every facet value of such a leaf is kept in its literal union
        """
        self.known_enums = frozenset(known_enums or ())

    def build(self, tree: Dict[str, Any], collector: Optional[TypeCollector] = None) -> Shape:
        shape: Shape = {}
        target_namespace = tree.get("targetNamespace")
        for key, value in tree.items():
            if key in METADATA_KEYS:
                continue
            is_array = key.endswith(ARRAY_SUFFIX)
            name = key[:-len(ARRAY_SUFFIX)] if is_array else key
            if isinstance(value, str):
                shape[name] = self.build_leaf(value, is_array, target_namespace)
            elif is_array:
                shape[name] = self._build_array_branch(name, value, collector)
            else:
                shape[name] = self._build_branch(name, value, collector)
        return shape

    def build_leaf(self, annotation_text: str, is_array: bool = False, target_namespace: Optional[str] = None) -> Leaf:
        annotation = parse_type_annotation(annotation_text)
        full_name = f"{target_namespace}#{annotation.display_name}" if target_namespace else annotation.display_name

        type_class = XS_TO_TS_TYPE.get(annotation.local_base_type)
        if type_class is None:
            type_class = annotation.base_type
            is_known_enum = full_name in self.known_enums
            if is_known_enum or annotation.facet_data:
                values = annotation.facet_values()
                if not is_known_enum:
                    values = [v for v in values if v not in FACET_KEYWORDS]
                if values:
                    type_class = '"' + '" | "'.join(values) + '"'

        if is_array:
            type_class = array_of(type_class)

        doc = None
        if annotation.facet_data:
            doc = f"/** {full_name}({annotation.facet_data}) */"
        return Leaf(doc, type_class + ";")

    def _build_branch(self, name: str, subtree: Dict[str, Any], collector: Optional[TypeCollector]):
        nested = self.build(subtree, collector)
        if collector is not None and collector.ns:
            reference = collector.offer(name, render_shape(nested))
            if reference:
                return reference + ";"
        return nested

    def _build_array_branch(self, name: str, subtree: Dict[str, Any], collector: Optional[TypeCollector]) -> str:
        nested = self.build(subtree, collector)
        text = render_shape(nested)
        if collector is not None and collector.ns:
            reference = collector.offer(name, text)
            if reference:
                text = reference
        return array_of(indent_block(text)) + ";"
