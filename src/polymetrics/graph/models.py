"""Unit-level dependency graph.

Edges are directed: ``edges[A]`` contains B means unit A depends on unit B.
Reverse edges are derived from ``edges`` and never mutated independently.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

# module name -> names of the units requesting it from across a unit boundary
ExternalRequires = dict[str, set[str]]


def invert_graph(edges: Mapping[str, set[str]]) -> dict[str, set[str]]:
    """Invert a dependency graph.

    Input: {unit: {units it depends on}}
    Output: {unit: {units that depend on it}}

    Units that are never a dependency target are absent from the result.
    """
    inverted: dict[str, set[str]] = {}
    for unit, deps in edges.items():
        for dep in deps:
            inverted.setdefault(dep, set()).add(unit)
    return inverted


@dataclass
class DependencyGraph:
    """Directed graph over unit names, one entry per discovered unit."""

    edges: dict[str, set[str]] = field(default_factory=dict)
    _reverse: Optional[dict[str, set[str]]] = field(default=None, init=False, repr=False)

    @property
    def reverse_edges(self) -> dict[str, set[str]]:
        if self._reverse is None:
            self._reverse = invert_graph(self.edges)
        return self._reverse

    @property
    def nodes(self) -> set[str]:
        return set(self.edges)

    @property
    def edge_count(self) -> int:
        return sum(len(deps) for deps in self.edges.values())

    def dependencies(self, unit: str) -> frozenset[str]:
        """Units ``unit`` depends on; empty for unknown units."""
        return frozenset(self.edges.get(unit, ()))

    def dependents(self, unit: str) -> frozenset[str]:
        """Units depending on ``unit``; empty when nothing depends on it."""
        return frozenset(self.reverse_edges.get(unit, ()))

    def __contains__(self, unit: str) -> bool:
        return unit in self.edges

    def __len__(self) -> int:
        return len(self.edges)
