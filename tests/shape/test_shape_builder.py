from shape_builder import ShapeBuilder, array_of
from shape_model import Leaf, TypeCollector
from shape_renderer import render_shape


def test_primitive_leaves_resolve_to_typescript_types():
    shape = ShapeBuilder().build({
        "id": "id|xs:int",
        "price": "price|xsd:decimal",
        "name": "name|xs:string",
        "active": "active|xs:boolean",
        "created": "created|xs:dateTime",
        "payload": "payload|xs:base64Binary",
        "extra": "extra|xs:anyType",
    })
    assert shape == {
        "id": Leaf(None, "number;"),
        "price": Leaf(None, "number;"),
        "name": Leaf(None, "string;"),
        "active": Leaf(None, "boolean;"),
        "created": Leaf(None, "Date;"),
        "payload": Leaf(None, "string;"),
        "extra": Leaf(None, "any;"),
    }


def test_metadata_keys_are_not_fields():
    shape = ShapeBuilder().build({
        "targetNSAlias": "tns",
        "targetNamespace": "urn:example",
        "id": "id|xs:int",
    })
    assert list(shape) == ["id"]


def test_facet_values_become_a_literal_union_with_documentation():
    shape = ShapeBuilder().build({"status": "Status|tns:Status|Active,Inactive"})
    assert shape["status"] == Leaf('/** Status(Active,Inactive) */', '"Active" | "Inactive";')


def test_facet_keywords_are_dropped_unless_known_enum():
    tree = {"targetNamespace": "urn:codes", "code": "Code|tns:Code|maxLength,pattern"}
    plain = ShapeBuilder().build(tree)
    # nothing left for a union: the qualified base type passes through
    assert plain["code"] == Leaf('/** urn:codes#Code(maxLength,pattern) */', 'tns:Code;')

    known = ShapeBuilder(known_enums={"urn:codes#Code"}).build(tree)
    assert known["code"].type_text == '"maxLength" | "pattern";'


def test_keyword_filter_keeps_other_values():
    shape = ShapeBuilder().build({"size": "Size|tns:Size|length,Small,Large"})
    assert shape["size"].type_text == '"Small" | "Large";'


def test_array_of_bare_identifier_uses_suffix():
    shape = ShapeBuilder().build({"tags[]": "tag|xs:string"})
    assert shape == {"tags": Leaf(None, "string[];")}


def test_array_of_non_identifier_uses_generic_wrapper():
    shape = ShapeBuilder().build({
        "refs[]": "ref|tns:Thing",
        "colors[]": "Color|tns:Color|Red,Green",
    })
    assert shape["refs"].type_text == "Array<tns:Thing>;"
    assert shape["colors"].type_text == 'Array<"Red" | "Green">;'


def test_array_of_union_with_colons_keeps_its_values():
    shape = ShapeBuilder().build({"urns[]": "U|tns:U|urn:a,urn:b"})
    assert render_shape(shape) == '{\n    /** U(urn:a,urn:b) */\n    urns: Array<"urn:a" | "urn:b">;\n}'


def test_array_of_helper():
    assert array_of("Foo") == "Foo[]"
    assert array_of("PortTypes.IFoo") == "PortTypes.IFoo[]"
    assert array_of("{}") == "Array<{}>"


def test_malformed_annotation_is_passed_through():
    shape = ShapeBuilder().build({"odd": "SomethingElse"})
    assert shape["odd"] == Leaf(None, "SomethingElse;")


def test_nested_branch_without_collector_stays_inline():
    shape = ShapeBuilder().build({"address": {"city": "city|xs:string"}})
    assert shape == {"address": {"city": Leaf(None, "string;")}}


def test_array_branch_is_rendered_inline():
    shape = ShapeBuilder().build({"items[]": {"sku": "sku|xs:string"}})
    assert shape["items"] == "Array<{\n        sku: string;\n    }>;"


def test_registered_shape_is_replaced_by_reference():
    collector = TypeCollector("PortTypes")
    collector.registered["address"] = "{\n    city: string;\n}"
    shape = ShapeBuilder().build({
        "address": {"city": "city|xs:string"},
        "items[]": {"city": "city|xs:string"},
    }, collector)
    assert shape["address"] == "PortTypes.Iaddress;"
    # a different field name never matches
    assert isinstance(shape["items"], str) and shape["items"].startswith("Array<{")
    assert collector.collected == {"items": "{\n    city: string;\n}"}


def test_registered_array_shape_is_referenced_with_suffix():
    collector = TypeCollector("PortTypes")
    collector.registered["items"] = "{\n    sku: string;\n}"
    shape = ShapeBuilder().build({"items[]": {"sku": "sku|xs:string"}}, collector)
    assert shape["items"] == "PortTypes.Iitems[];"


def test_differing_candidates_are_marked_conflicting():
    collector = TypeCollector("PortTypes")
    builder = ShapeBuilder()
    builder.build({"address": {"city": "city|xs:string"}}, collector)
    builder.build({"address": {"city": "city|xs:string"}}, collector)
    assert collector.collected == {"address": "{\n    city: string;\n}"}
    builder.build({"address": {"zip": "zip|xs:string"}}, collector)
    assert collector.collected == {"address": None}


def test_builder_never_writes_the_registry():
    collector = TypeCollector("PortTypes")
    ShapeBuilder().build({"a": {"b": {"c": "c|xs:int"}}}, collector)
    assert collector.registered == {}
    assert list(collector.collected) == ["b", "a"]


def test_rendered_shape_for_a_mixed_tree():
    shape = ShapeBuilder().build({
        "id": "id|xs:int",
        "status": "Status|tns:Status|On,Off",
        "owner": {"name": "name|xs:string"},
    })
    assert render_shape(shape) == (
        "{\n"
        "    id: number;\n"
        "    /** Status(On,Off) */\n"
        '    status: "On" | "Off";\n'
        "    owner: {\n"
        "        name: string;\n"
        "    };\n"
        "}"
    )
