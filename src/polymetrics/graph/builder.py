"""Dependency graph construction from resolved module references."""

from typing import Iterable

from ..architecture.models import Unit
from ..architecture.resolver import ModuleIndex
from ..logging_config import get_logger
from .models import DependencyGraph, ExternalRequires

logger = get_logger(__name__)


def unit_dependencies(unit: Unit, index: ModuleIndex, include_interface_edges: bool = True) -> set[str]:
    """Units referenced by ``unit``'s modules.

    External references and references back into the unit itself are
    discarded. With ``include_interface_edges=False`` only implementation
    modules contribute.
    """
    deps: set[str] = set()
    for module in index.modules_of(unit.name):
        if module.is_abstract and not include_interface_edges:
            continue
        for reference in module.requires:
            target = index.resolve(reference)
            if target is not None and target != unit.name:
                deps.add(target)
    return deps


def build_dependency_graph(
    units: Iterable[Unit], index: ModuleIndex, include_interface_edges: bool = True
) -> DependencyGraph:
    """Build the unit dependency graph.

    Every unit gets an entry, units without dependencies map to an empty set.
    """
    edges = {
        unit.name: unit_dependencies(unit, index, include_interface_edges) for unit in units
    }
    graph = DependencyGraph(edges=edges)
    logger.debug(f"Built dependency graph: {len(graph)} units, {graph.edge_count} edges")
    return graph


def collect_external_requires(units: Iterable[Unit], index: ModuleIndex) -> ExternalRequires:
    """Map each required module to the set of units requesting it.

    Only requests crossing a unit boundary count. Pure external consumers
    (bases) are never requesters.
    """
    requires: ExternalRequires = {}
    for unit in units:
        if unit.kind.is_external_consumer:
            continue
        for module in index.modules_of(unit.name):
            for reference in module.requires:
                owner = index.unit_of(reference)
                if owner is not None and owner != unit.name:
                    requires.setdefault(reference, set()).add(unit.name)
    return requires


def externally_visible_modules(
    unit_name: str, external_requires: ExternalRequires, index: ModuleIndex
) -> set[str]:
    """Modules of ``unit_name`` that other units require."""
    return {module for module in external_requires if index.unit_of(module) == unit_name}
