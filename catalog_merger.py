"""
catalog_merger.py
Deep union of independently built TypedWsdl catalogs. Later catalogs win on conflicts.
"""
import copy

from typed_wsdl import TypedWsdl


def merge_typed_wsdl(a: TypedWsdl, *bs: TypedWsdl) -> TypedWsdl:
    x = TypedWsdl(
        files=copy.deepcopy(a.files),
        methods=copy.deepcopy(a.methods),
        types=copy.deepcopy(a.types),
        namespaces=copy.deepcopy(a.namespaces),
        warnings=list(a.warnings),
    )
    for b in bs:
        x.warnings.extend(b.warnings)
        for service, ports in b.files.items():
            if service not in x.files:
                x.files[service] = copy.deepcopy(ports)
                x.methods[service] = copy.deepcopy(b.methods.get(service, {}))
                x.types[service] = copy.deepcopy(b.types.get(service, {}))
                x.namespaces[service] = copy.deepcopy(b.namespaces.get(service, {}))
                continue
            for port, file in ports.items():
                b_methods = b.methods.get(service, {}).get(port, {})
                b_types = b.types.get(service, {}).get(port, {})
                b_namespaces = b.namespaces.get(service, {}).get(port, {})
                if port not in x.files[service]:
                    x.files[service][port] = file
                    x.methods.setdefault(service, {})[port] = copy.deepcopy(b_methods)
                    x.types.setdefault(service, {})[port] = copy.deepcopy(b_types)
                    x.namespaces.setdefault(service, {})[port] = copy.deepcopy(b_namespaces)
                    continue
                x.files[service][port] = file
                x.methods.setdefault(service, {}).setdefault(port, {}).update(b_methods)
                x.types.setdefault(service, {}).setdefault(port, {}).update(b_types)
                namespaces = x.namespaces.setdefault(service, {}).setdefault(port, {})
                for ns, members in b_namespaces.items():
                    if ns not in namespaces:
                        namespaces[ns] = copy.deepcopy(members)
                    else:
                        namespaces[ns].update(members)
    return x
