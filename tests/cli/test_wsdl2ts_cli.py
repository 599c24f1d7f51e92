import os
import pytest
import wsdl2ts

SCHEMA = {
    "urn:shop": {
        "types": {
            "Color": {
                "name": "simpleType",
                "$name": "Color",
                "children": [{
                    "name": "restriction",
                    "$base": "xs:string",
                    "children": [
                        {"name": "enumeration", "$value": "Red"},
                        {"name": "enumeration", "$value": "Green"},
                    ],
                }],
            },
        },
        "complexTypes": {
            "Item": {
                "name": "complexType",
                "$name": "Item",
                "children": [{
                    "name": "sequence",
                    "children": [
                        {"name": "element", "$name": "sku", "$type": "xs:string"},
                        {"name": "element", "$name": "color", "$type": "tns:Color", "$minOccurs": "0"},
                    ],
                }],
            },
        },
    },
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("WSDL2TS_OUTPUT_DIR", "WSDL2TS_SCHEMA", "WSDL2TS_MAX_PASSES", "WSDL2TS_VERBOSE"):
        monkeypatch.delenv(name, raising=False)


def read(path):
    with open(path, encoding="utf-8") as f:
        return f.read()


def test_cli_writes_port_and_schema_files(temp_dir, write_json, shared_address_description, capsys):
    description = write_json("description.json", shared_address_description)
    schema = write_json("schema.json", SCHEMA)
    out_dir = os.path.join(temp_dir, "out")

    wsdl2ts.main(["-d", description, "-s", schema, "-o", out_dir])

    port_file = read(os.path.join(out_dir, "AddressService", "AddressPort.ts"))
    assert port_file.startswith("import { Client } from 'soap';\n\nexport type IFooInput = {\n    id: number;\n}\n\n")
    assert "export namespace AddressPortTypes {" in port_file
    types_file = read(os.path.join(out_dir, "Types.ts"))
    assert types_file == (
        'export enum Color {\n'
        '    Red = "Red",\n'
        '    Green = "Green",\n'
        '}\n'
        '\n'
        'export type Item = {\n'
        '    sku: string;\n'
        '    color?: Color;\n'
        '}\n'
    )
    assert "Generated 2 file(s)" in capsys.readouterr().out


def test_cli_merges_several_descriptions(temp_dir, write_json):
    first = write_json("first.json", {"S": {"P": {"M1": {}}}})
    second = write_json("second.json", {"S": {"P": {"M2": {}}}})
    out_dir = os.path.join(temp_dir, "out")

    wsdl2ts.main(["-d", first, "-d", second, "-o", out_dir])

    port_file = read(os.path.join(out_dir, "S", "P.ts"))
    assert "export type IM1Input = {}" in port_file
    assert "export type IM2Input = {}" in port_file
    assert "    M2Async: " in port_file


def test_cli_quote_properties_flag(temp_dir, write_json):
    description = write_json("d.json", {"S": {"P": {"M": {"input": {"id": "id|xs:int"}}}}})
    out_dir = os.path.join(temp_dir, "out")
    wsdl2ts.main(["-d", description, "-o", out_dir, "--quote-properties"])
    assert 'export type IMInput = {\n    "id": number;\n}' in read(os.path.join(out_dir, "S", "P.ts"))


def test_cli_reports_missing_description(temp_dir, capsys):
    with pytest.raises(SystemExit) as excinfo:
        wsdl2ts.main(["-d", os.path.join(temp_dir, "nope.json"), "-o", temp_dir])
    assert excinfo.value.code == 1
    assert "Error: Input file" in capsys.readouterr().out


def test_cli_prints_fixpoint_warning(temp_dir, write_json, capsys):
    description = write_json("d.json", {"S": {"P": {"M": {"output": {
        "person": {"name": "name|xs:string", "address": {"city": "city|xs:string"}},
    }}}}})
    wsdl2ts.main(["-d", description, "-o", temp_dir, "--max-passes", "1"])
    assert "Warning: Aborted nested interface changes for port P" in capsys.readouterr().out


def test_environment_overrides_output_dir(temp_dir, write_json, monkeypatch):
    description = write_json("d.json", {"S": {"P": {"M": {}}}})
    env_dir = os.path.join(temp_dir, "from_env")
    monkeypatch.setenv("WSDL2TS_OUTPUT_DIR", env_dir)
    wsdl2ts.main(["-d", description, "-o", os.path.join(temp_dir, "ignored")])
    assert os.path.exists(os.path.join(env_dir, "S", "P.ts"))
    assert not os.path.exists(os.path.join(temp_dir, "ignored"))


def test_max_passes_must_be_positive(write_json):
    description = write_json("d.json", {})
    with pytest.raises(SystemExit):
        wsdl2ts.parse_arguments(["-d", description, "-o", "out", "--max-passes", "0"])


@pytest.mark.parametrize("value", ["0", "-3", "many"])
def test_invalid_max_passes_from_environment_is_an_error(temp_dir, write_json, monkeypatch, capsys, value):
    description = write_json("d.json", {"S": {"P": {"M": {}}}})
    monkeypatch.setenv("WSDL2TS_MAX_PASSES", value)
    with pytest.raises(SystemExit) as excinfo:
        wsdl2ts.main(["-d", description, "-o", temp_dir])
    assert excinfo.value.code == 1
    assert "Error: WSDL2TS_MAX_PASSES:" in capsys.readouterr().out


def test_max_passes_from_environment_is_applied(temp_dir, write_json, monkeypatch, capsys):
    description = write_json("d.json", {"S": {"P": {"M": {"output": {
        "person": {"name": "name|xs:string", "address": {"city": "city|xs:string"}},
    }}}}})
    monkeypatch.setenv("WSDL2TS_MAX_PASSES", "1")
    wsdl2ts.main(["-d", description, "-o", temp_dir])
    assert "Warning: Aborted nested interface changes for port P" in capsys.readouterr().out


def test_misshapen_description_is_reported(temp_dir, write_json, capsys):
    description = write_json("d.json", {"S": {"P": ["M"]}})
    with pytest.raises(SystemExit) as excinfo:
        wsdl2ts.main(["-d", description, "-o", temp_dir])
    assert excinfo.value.code == 1
    assert "Error: " in capsys.readouterr().out
