# propgraphml/__init__.py
"""propgraphml: GraphML import and property-type reconciliation for property graphs."""
from __future__ import annotations

import logging
from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    # namespaces
    "adapters": "propgraphml.adapters",
    "io": "propgraphml.io",
    "core": "propgraphml.core",
    # direct convenience
    "graphml": "propgraphml.io.graphml",
    "meta": "propgraphml.io.meta",
    "dataframe": "propgraphml.adapters.dataframe_adapter",
    "networkx": "propgraphml.adapters.networkx",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Core
    "PropertyGraph": ("propgraphml.core.graph", "PropertyGraph"),
    "EntityKind": ("propgraphml.core.structure", "EntityKind"),
    "EntityRef": ("propgraphml.core.structure", "EntityRef"),
    "ScalarType": ("propgraphml.core.types", "ScalarType"),
    "ImportConfig": ("propgraphml.config", "ImportConfig"),

    # GraphML import
    "GraphMLReader": ("propgraphml.io.graphml", "GraphMLReader"),
    "from_graphml": ("propgraphml.io.graphml", "from_graphml"),
    "ProgressReporter": ("propgraphml.io.batch", "ProgressReporter"),

    # Export-side type reconciliation
    "collect_prop_types_for_nodes": ("propgraphml.io.meta", "collect_prop_types_for_nodes"),
    "collect_prop_types_for_relationships": ("propgraphml.io.meta", "collect_prop_types_for_relationships"),
    "type_for": ("propgraphml.io.meta", "type_for"),
    "labels_string": ("propgraphml.io.meta", "labels_string"),

    # Adapters
    "to_dataframes": ("propgraphml.adapters.dataframe_adapter", "to_dataframes"),
    "to_nx": ("propgraphml.adapters.networkx", "to_nx"),
    "from_nx": ("propgraphml.adapters.networkx", "from_nx"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("propgraphml")
except PackageNotFoundError:
    __version__ = "0.0.0"
