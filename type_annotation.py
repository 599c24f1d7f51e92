"""
type_annotation.py
Lark grammar for the pipe-delimited leaf annotations found in a service description,
e.g. "id|xs:int" or "status|tns:StatusType|Active,Inactive".
"""
from typing import List, Optional

from lark import Lark, Transformer


grammar = r"""
    start: segment ("|" segment)*
    segment: SEGMENT?

    SEGMENT: /[^|]+/
"""

parser = Lark(
    grammar,
    start='start',
    parser='lalr'
)


class AnnotationSegments(Transformer):
    def segment(self, items):
        return str(items[0]) if items else ""

    def start(self, items):
        return list(items)


class TypeAnnotation:
    """
    Parsed leaf annotation: display name, namespace-qualified base type and
    optional facet/enum data (comma separated).
    """
    def __init__(self, display_name: str, base_type: str, facet_data: Optional[str] = None):
        self.display_name = display_name
        self.base_type = base_type
        self.facet_data = facet_data

    @property
    def local_base_type(self) -> str:
        # "xs:int" -> "int"
        parts = self.base_type.split(':')
        return parts[1] if len(parts) > 1 and parts[1] else parts[0]

    def facet_values(self) -> List[str]:
        if not self.facet_data:
            return []
        return self.facet_data.split(',')

    def __repr__(self):
        return f"TypeAnnotation(display_name={self.display_name!r}, base_type={self.base_type!r}, facet_data={self.facet_data!r})"


def parse_type_annotation(text: str) -> TypeAnnotation:
    tree = parser.parse(text)
    segments = AnnotationSegments().transform(tree)
    if len(segments) == 1:
        # No pipe at all: the whole text is passed through as the type
        return TypeAnnotation(segments[0], segments[0])
    display_name = segments[0]
    # A missing base type degrades to the display name
    base_type = segments[1] or display_name
    facet_data = segments[2] if len(segments) > 2 and segments[2] else None
    return TypeAnnotation(display_name, base_type, facet_data)
