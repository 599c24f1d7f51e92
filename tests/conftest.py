import sys
import os
import json
from tempfile import TemporaryDirectory
import pytest
# Ensure the project root is on sys.path for all tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with TemporaryDirectory() as dir_path:
        yield dir_path

@pytest.fixture
def write_json(temp_dir):
    """Write a JSON document into the temporary directory and return its path."""
    def _write(name, document):
        path = os.path.join(temp_dir, name)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f)
        return path
    return _write

@pytest.fixture
def shared_address_description():
    """Two operations whose outputs carry the same nested 'address' shape."""
    return {
        "AddressService": {
            "AddressPort": {
                "Foo": {
                    "input": {"id": "id|xs:int"},
                    "output": {"address": {"city": "city|xs:string"}},
                },
                "Bar": {
                    "input": {"name": "name|xs:string"},
                    "output": {"address": {"city": "city|xs:string"}},
                },
            }
        }
    }
