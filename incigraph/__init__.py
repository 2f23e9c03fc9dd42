# incigraph/__init__.py
"""incigraph: incidence-matrix digraphs and fixed-length cycle search."""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    "core": "incigraph.core",
    "algorithms": "incigraph.algorithms",
    "utils": "incigraph.utils",
    "plotting": "incigraph.utils.plotting",
    "printing": "incigraph.utils.printing",
    "demo": "incigraph.demo",
    "cli": "incigraph.cli",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Core
    "Graph": ("incigraph.core.graph", "Graph"),
    "Vertex": ("incigraph.core._helpers", "Vertex"),
    "Edge": ("incigraph.core._helpers", "Edge"),
    # Errors
    "GraphError": ("incigraph.core.errors", "GraphError"),
    "DuplicateNameError": ("incigraph.core.errors", "DuplicateNameError"),
    "VertexNotFoundError": ("incigraph.core.errors", "VertexNotFoundError"),
    "DimensionMismatchError": ("incigraph.core.errors", "DimensionMismatchError"),
    "InvalidWeightError": ("incigraph.core.errors", "InvalidWeightError"),
    "SearchCancelled": ("incigraph.core.errors", "SearchCancelled"),
    # Cycle search
    "enumerate_cycles_of_length": ("incigraph.algorithms.cycles", "enumerate_cycles_of_length"),
    "canonical_key": ("incigraph.algorithms.cycles", "canonical_key"),
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
    __version__ = _pkg_version("incigraph")
except PackageNotFoundError:
    __version__ = "0.0.0"
