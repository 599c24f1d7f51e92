#!/usr/bin/env python3
"""
wsdl2ts

Generates TypeScript declarations for a SOAP service from its structured description
(service -> port -> operation -> input/output field trees) and its XML schema, both
given as JSON documents. Nested shapes that repeat inside a port are hoisted into one
shared namespace per port.

Usage:
    python wsdl2ts.py --description <file> [--description <file> ...] --output <output_dir>
                      [--schema <file>] [--quote-properties | --no-quote-properties]
                      [--known-enum <qname> ...] [--max-passes <n>] [--verbose]

Arguments:
    --description, -d : JSON service description; several descriptions are merged in order
    --schema, -s      : JSON schema document, rendered into Types.ts
    --output, -o      : Directory where the .ts files are written
    --quote-properties: Quote every property name
    --no-quote-properties: Never quote property names
                      (default: quote only names that are not identifiers)
    --known-enum      : Qualified name ("<targetNamespace>#<name>") of an enumerated type
    --max-passes      : Upper bound on deduplication passes per port (default: 32)
    --verbose, -v     : Print debug information

Environment overrides:
    WSDL2TS_OUTPUT_DIR, WSDL2TS_SCHEMA, WSDL2TS_MAX_PASSES, WSDL2TS_VERBOSE

Example:
    python wsdl2ts.py -d weather.json -s weather_schema.json -o ./generated
"""

import argparse
import os
import sys
from typing import List, Optional

from catalog_builder import DEFAULT_MAX_PASSES, generate_typed_wsdl
from catalog_merger import merge_typed_wsdl
from description_loader import DescriptionLoadError, JsonServiceSource
from typed_wsdl import TypedWsdl
from typescript_emitter import output_typed_wsdl, write_output_files


class DeclarationGenerator:
    """
    Builds one catalog per description file, merges them and writes the result.
    """

    def __init__(self, description_files: List[str], output_dir: str, schema_file: Optional[str] = None,
                 quote_properties: Optional[bool] = None, known_enums: Optional[List[str]] = None,
                 max_passes: int = DEFAULT_MAX_PASSES, verbose: bool = False):
        self.description_files = description_files
        self.output_dir = output_dir
        self.schema_file = schema_file
        self.quote_properties = quote_properties
        self.known_enums = set(known_enums or [])
        self.max_passes = max_passes
        self.verbose = verbose
        self.catalog: Optional[TypedWsdl] = None

    def build_catalog(self) -> TypedWsdl:
        catalogs = []
        for index, description_file in enumerate(self.description_files):
            # the shared schema is rendered once, with the first description
            schema_file = self.schema_file if index == 0 else None
            source = JsonServiceSource(description_file, schema_file)
            catalogs.append(generate_typed_wsdl(
                source,
                quote_properties=self.quote_properties,
                known_enums=self.known_enums,
                max_passes=self.max_passes,
                verbose=self.verbose,
            ))
        self.catalog = merge_typed_wsdl(catalogs[0], *catalogs[1:])
        return self.catalog

    def write(self) -> List[str]:
        if self.catalog is None:
            self.build_catalog()
        return write_output_files(output_typed_wsdl(self.catalog), self.output_dir, self.verbose)


def parse_max_passes(value) -> int:
    try:
        passes = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"expected an integer, got {value!r}")
    if passes < 1:
        raise ValueError(f"must be at least 1, got {passes}")
    return passes


def max_passes_argument(value: str) -> int:
    try:
        return parse_max_passes(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate TypeScript declarations from a SOAP service description",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument('--description', '-d', action='append', required=True,
                        help='JSON service description (repeatable, merged in order)')
    parser.add_argument('--schema', '-s', help='JSON schema document')
    parser.add_argument('--output', '-o', required=True, help='Directory where output files will be generated')
    quoting = parser.add_mutually_exclusive_group()
    quoting.add_argument('--quote-properties', dest='quote_properties', action='store_true', default=None,
                         help='Quote every property name')
    quoting.add_argument('--no-quote-properties', dest='quote_properties', action='store_false',
                         help='Never quote property names')
    parser.add_argument('--known-enum', action='append', default=[],
                        help='Qualified name of an enumerated type (repeatable)')
    parser.add_argument('--max-passes', type=max_passes_argument, default=DEFAULT_MAX_PASSES,
                        help='Upper bound on deduplication passes per port')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output for debugging')

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_arguments(argv)

    # Override with environment variables if set
    output_dir = os.environ.get('WSDL2TS_OUTPUT_DIR', args.output)
    schema_file = os.environ.get('WSDL2TS_SCHEMA', args.schema)
    max_passes = args.max_passes
    if 'WSDL2TS_MAX_PASSES' in os.environ:
        try:
            max_passes = parse_max_passes(os.environ['WSDL2TS_MAX_PASSES'])
        except ValueError as e:
            print(f"Error: WSDL2TS_MAX_PASSES: {e}")
            sys.exit(1)
    verbose = args.verbose or os.environ.get('WSDL2TS_VERBOSE', '').lower() in ('1', 'true', 'yes')

    generator = DeclarationGenerator(
        args.description,
        output_dir,
        schema_file=schema_file,
        quote_properties=args.quote_properties,
        known_enums=args.known_enum,
        max_passes=max_passes,
        verbose=verbose,
    )

    try:
        written = generator.write()
    except DescriptionLoadError as e:
        print(f"Error: {e}")
        sys.exit(1)

    for warning in generator.catalog.warnings:
        print(f"Warning: {warning}")
    print(f"Generated {len(written)} file(s) in {output_dir}.")


if __name__ == '__main__':
    main()
