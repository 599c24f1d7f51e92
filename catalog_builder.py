"""
catalog_builder.py
Drives the per-port deduplication fixpoint over a service description and
emits the final declarations and call signatures into a TypedWsdl catalog.
"""
from typing import AbstractSet, Any, Dict, List, Optional, Protocol

from schema_translator import SchemaTranslator
from shape_builder import ShapeBuilder
from shape_model import TypeCollector
from shape_renderer import render_shape
from typed_wsdl import COMMON_PORT, COMMON_SERVICE, GENERATED_DATA_STRING, TypedWsdl

DEFAULT_MAX_PASSES = 32


class ServiceSource(Protocol):
    def describe(self) -> Dict[str, Any]:
        """service -> port -> operation -> {"input": tree, "output": tree}"""
        ...

    def schemas(self) -> Dict[str, Any]:
        """namespace -> {"types": {...}, "complexTypes": {...}} of SchemaNode"""
        ...


def callback_signature(method: str) -> str:
    return (
        f"(input: Partial<I{method}Input>, "
        f"cb: (err: any | null, result: I{method}Output, rawResult: string, "
        "soapHeader: {[k: string]: any; }, rawRequest: string) => any, "
        "options?: any, extraHeaders?: any) => void"
    )


def async_signature(method: str) -> str:
    return (
        f"(input: Partial<I{method}Input>, options?: any, extraHeaders?: any) => "
        f"Promise<[I{method}Output, string, {{[k: string]: any; }}, string]>"
    )


class CatalogBuilder:
    def __init__(self, quote_properties: Optional[bool] = None, known_enums: Optional[AbstractSet[str]] = None,
                 max_passes: int = DEFAULT_MAX_PASSES, verbose: bool = False):
        """
        Args:
            quote_properties: True quotes every property name, False never, None only where needed
            known_enums: qualified names of enumerated types, see ShapeBuilder
            max_passes: upper bound on deduplication passes per port
            verbose: print diagnostics as they happen
        """
        self.quote_properties = quote_properties
        self.shape_builder = ShapeBuilder(known_enums)
        self.max_passes = max_passes
        self.verbose = verbose
        self.warnings: List[str] = []

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}")

    def log_warning(self, warning: str) -> None:
        self.warnings.append(warning)
        if self.verbose:
            print(f"[WARNING] {warning}")

    def build(self, description: Dict[str, Any], catalog: Optional[TypedWsdl] = None) -> TypedWsdl:
        catalog = catalog if catalog is not None else TypedWsdl()
        for service, ports in description.items():
            for port, operations in ports.items():
                self.debug_print(f"-- {service}.{port}")
                catalog.ensure_port(service, port, f"{service}/{port}")
                collector = TypeCollector(f"{port}Types")
                self.stabilize(port, operations, collector)
                self.emit_port(catalog, service, port, operations, collector)
        return catalog

    def run_pass(self, operations: Dict[str, Any], collector: TypeCollector) -> None:
        for method, io in operations.items():
            self.shape_builder.build(io.get("input") or {}, collector)
            self.shape_builder.build(io.get("output") or {}, collector)

    def stabilize(self, port: str, operations: Dict[str, Any], collector: TypeCollector) -> int:
        """Run passes until the registered shapes stop changing. Returns the number of passes."""
        for pass_index in range(self.max_passes):
            self.run_pass(operations, collector)
            before = dict(collector.registered)
            collector.register_collected()
            if before == collector.registered:
                self.debug_print(f"{port}: stable after {pass_index + 1} pass(es)")
                return pass_index + 1
        self.log_warning(f"Aborted nested interface changes for port {port} after {self.max_passes} passes")
        return self.max_passes

    def render_tree(self, tree: Dict[str, Any], collector: TypeCollector) -> str:
        return render_shape(self.shape_builder.build(tree, collector), self.quote_properties)

    def emit_port(self, catalog: TypedWsdl, service: str, port: str, operations: Dict[str, Any],
                  collector: TypeCollector) -> None:
        if collector.registered:
            members = catalog.namespaces[service][port].setdefault(collector.ns, {})
            for name, body in collector.registered.items():
                members[name] = f"export type I{name} = {body}"

        types = catalog.types[service][port]
        methods = catalog.methods[service][port]
        for method, io in operations.items():
            types[f"I{method}Input"] = self.render_tree(io.get("input") or {}, collector)
            types[f"I{method}Output"] = self.render_tree(io.get("output") or {}, collector)
            methods[method] = callback_signature(method)
            methods[f"{method}Async"] = async_signature(method)
        # the final rendering only reads the registry
        collector.collected.clear()

    def add_schema_types(self, catalog: TypedWsdl, schemas: Dict[str, Any],
                         translator: Optional[SchemaTranslator] = None) -> TypedWsdl:
        translator = translator or SchemaTranslator(self.verbose)
        catalog.files[COMMON_SERVICE] = {COMMON_PORT: COMMON_PORT}
        catalog.types[COMMON_SERVICE] = {
            COMMON_PORT: {GENERATED_DATA_STRING: translator.translate_schemas(schemas)},
        }
        self.warnings.extend(translator.warnings)
        return catalog


def generate_typed_wsdl(source: ServiceSource, quote_properties: Optional[bool] = None,
                        known_enums: Optional[AbstractSet[str]] = None,
                        max_passes: int = DEFAULT_MAX_PASSES, verbose: bool = False) -> TypedWsdl:
    """
    Build the full catalog for one service source: per-port declarations and the
    shared schema types. Errors raised by the source propagate unchanged.
    """
    description = source.describe()
    schemas = source.schemas()
    translator = SchemaTranslator(verbose)
    enums = set(known_enums or ()) | translator.enum_names(schemas)
    builder = CatalogBuilder(quote_properties, enums, max_passes, verbose)
    catalog = builder.build(description)
    if schemas:
        builder.add_schema_types(catalog, schemas, translator)
    catalog.warnings.extend(builder.warnings)
    return catalog
