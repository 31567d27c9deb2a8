"""Unit dependency graph: construction, inversion, cycle detection."""

from .algorithms import (
    cyclic_units,
    find_all_cycles,
    is_acyclic,
    tarjan_scc,
    transitive_dependencies,
    transitive_dependents,
)
from .models import DependencyGraph, ExternalRequires, invert_graph

__all__ = [
    "DependencyGraph",
    "ExternalRequires",
    "cyclic_units",
    "find_all_cycles",
    "invert_graph",
    "is_acyclic",
    "tarjan_scc",
    "transitive_dependencies",
    "transitive_dependents",
]
