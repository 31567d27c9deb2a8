"""Martin metrics computation over the unit graph.

Computes per-unit metrics:
- Afferent Coupling (Ca): internal units depending on this one (bases excluded)
- Efferent Coupling (Ce): units this one depends on
- Instability (I): Ce / (Ca + Ce), 0.0 if isolated
- Abstractness (A): interface modules / modules required by other units
- Main Sequence Distance (D): |A + I - 1|

and the aggregate codebase health.
"""

from typing import Iterable, Mapping, Optional, Sequence

import numpy as np

from ..config import DEFAULT_THRESHOLDS
from ..graph.builder import externally_visible_modules
from ..graph.models import DependencyGraph, ExternalRequires
from .models import HealthSummary, Unit, UnitKind, UnitMetrics
from .resolver import ModuleIndex

HEALTHY_DISTANCE = DEFAULT_THRESHOLDS.healthy_distance


def efferent_coupling(graph: DependencyGraph, unit: str) -> int:
    """Count of units this unit depends on (outgoing dependencies)."""
    return len(graph.dependencies(unit))


def afferent_coupling(graph: DependencyGraph, unit: str) -> int:
    """Count of units that depend on this unit (incoming dependencies)."""
    return len(graph.dependents(unit))


def internal_dependents(
    graph: DependencyGraph, unit: str, kinds: Mapping[str, UnitKind]
) -> frozenset[str]:
    """Dependents of ``unit`` that are not pure external consumers."""
    return frozenset(
        dep for dep in graph.dependents(unit) if not _kind_of(kinds, dep).is_external_consumer
    )


def external_consumers(
    graph: DependencyGraph, unit: str, kinds: Mapping[str, UnitKind]
) -> frozenset[str]:
    """Dependents of ``unit`` that are pure external consumers (bases)."""
    return frozenset(
        dep for dep in graph.dependents(unit) if _kind_of(kinds, dep).is_external_consumer
    )


def _kind_of(kinds: Mapping[str, UnitKind], unit: str) -> UnitKind:
    return kinds.get(unit, UnitKind.DIRECTORY)


def instability(ca: int, ce: int) -> float:
    """Compute instability I = Ce / (Ca + Ce).

    Ranges from 0 (stable) to 1 (unstable). An isolated unit (Ca=Ce=0) is
    stable by convention.
    """
    total = ca + ce
    if total == 0:
        return 0.0
    return ce / total


def abstractness(interface_count: int, visible_count: int) -> float:
    """Compute abstractness A = interface modules / externally visible modules.

    Ranges from 0 (every external access reaches implementation) to 1
    (every external access goes through an interface). Nothing visible
    means nothing leaks, so A = 1.0.
    """
    if visible_count == 0:
        return 1.0
    return interface_count / visible_count


def distance(abstractness_val: float, instability_val: float) -> float:
    """Compute distance from the main sequence D = |A + I - 1|.

    The main sequence is the line A + I = 1:
    - D = 0: ideal balance (stable units abstract, unstable units concrete)
    - D = 1 with A=0, I=0: zone of pain (depended on and leaky)
    - D = 1 with A=1, I=1: zone of uselessness (clean interface nobody needs)
    """
    return abs(abstractness_val + instability_val - 1.0)


def is_entry_point(kind: UnitKind, ca: int, consumers: Iterable[str]) -> bool:
    """Whether a unit is an entry point: no internal dependents.

    Components must also be referenced by at least one base, otherwise they
    are unused rather than entry points. Bases are always entry points.
    """
    if kind.is_external_consumer:
        return True
    if kind.has_consumer_distinction:
        return ca == 0 and any(True for _ in consumers)
    return ca == 0


def compute_unit_metrics(
    unit: Unit,
    graph: DependencyGraph,
    kinds: Mapping[str, UnitKind],
    external_requires: ExternalRequires,
    index: ModuleIndex,
) -> UnitMetrics:
    """Calculate all metrics for a single unit."""
    ca = len(internal_dependents(graph, unit.name, kinds))
    ce = efferent_coupling(graph, unit.name)
    i = instability(ca, ce)
    entry = is_entry_point(unit.kind, ca, external_consumers(graph, unit.name, kinds))

    a: Optional[float] = None
    d: Optional[float] = None
    interface_count = 0
    leaky_count = 0
    if unit.kind.detects_interfaces and not entry:
        visible = externally_visible_modules(unit.name, external_requires, index)
        interface_count = sum(1 for name in visible if index.module(name).is_abstract)
        leaky_count = len(visible) - interface_count
        a = abstractness(interface_count, len(visible))
        d = distance(a, i)

    return UnitMetrics(
        name=unit.name,
        kind=unit.kind,
        afferent_coupling=ca,
        efferent_coupling=ce,
        instability=i,
        abstractness=a,
        distance=d,
        is_entry_point=entry,
        interface_modules=interface_count,
        leaky_modules=leaky_count,
    )


def sort_by_distance(metrics: Iterable[UnitMetrics]) -> list[UnitMetrics]:
    """Worst distance first; units without a distance last, then by name."""
    return sorted(
        metrics,
        key=lambda m: (not m.has_distance, -(m.distance or 0.0), m.name),
    )


def compute_all_metrics(
    units: Sequence[Unit],
    graph: DependencyGraph,
    external_requires: ExternalRequires,
    index: ModuleIndex,
    reportable_only: bool = True,
) -> list[UnitMetrics]:
    """Calculate metrics for every reportable unit.

    Plain directories, interface groups and bases are not reportable unless
    ``reportable_only`` is False.
    """
    kinds = {unit.name: unit.kind for unit in units}
    return sort_by_distance(
        compute_unit_metrics(unit, graph, kinds, external_requires, index)
        for unit in units
        if unit.kind.is_reportable or not reportable_only
    )


def codebase_health(
    metrics: Sequence[UnitMetrics],
    cycle_count: int = 0,
    threshold: float = HEALTHY_DISTANCE,
) -> HealthSummary:
    """Calculate overall codebase health.

    Distance aggregates cover units with a defined distance only. A
    workspace is healthy when the mean distance is below ``threshold`` and
    there are no cycles.
    """
    distances = np.array([m.distance for m in metrics if m.has_distance], dtype=float)
    if distances.size:
        mean_d = float(distances.mean())
        max_d = float(distances.max())
        min_d = float(distances.min())
    else:
        mean_d = max_d = min_d = 0.0

    return HealthSummary(
        unit_count=len(metrics),
        measured_count=int(distances.size),
        excluded_count=len(metrics) - int(distances.size),
        mean_distance=mean_d,
        max_distance=max_d,
        min_distance=min_d,
        cycle_count=cycle_count,
        healthy=mean_d < threshold and cycle_count == 0,
    )


def _measured(metrics: Iterable[UnitMetrics]) -> list[UnitMetrics]:
    return [m for m in metrics if m.abstractness is not None]


def problematic_units(
    metrics: Iterable[UnitMetrics], threshold: float = HEALTHY_DISTANCE
) -> list[UnitMetrics]:
    """Units further than ``threshold`` from the main sequence, worst first."""
    return sort_by_distance(m for m in metrics if m.has_distance and m.distance > threshold)


def stable_abstractions(
    metrics: Iterable[UnitMetrics], balance: float = DEFAULT_THRESHOLDS.balance
) -> list[UnitMetrics]:
    """Abstract units that are stable (the ideal for heavily used units)."""
    return [m for m in _measured(metrics) if m.abstractness > balance and m.instability < balance]


def unstable_concretions(
    metrics: Iterable[UnitMetrics], balance: float = DEFAULT_THRESHOLDS.balance
) -> list[UnitMetrics]:
    """Concrete units that are unstable (the ideal for leaf units)."""
    return [m for m in _measured(metrics) if m.abstractness < balance and m.instability > balance]


def zone_of_pain(
    metrics: Iterable[UnitMetrics], threshold: float = DEFAULT_THRESHOLDS.zone_of_pain
) -> list[UnitMetrics]:
    """Concrete, stable units: heavily depended on and leaking implementation."""
    return [
        m for m in _measured(metrics) if m.abstractness < threshold and m.instability < threshold
    ]


def zone_of_uselessness(
    metrics: Iterable[UnitMetrics], threshold: float = DEFAULT_THRESHOLDS.zone_of_uselessness
) -> list[UnitMetrics]:
    """Abstract, unstable units: clean interface nobody needs."""
    return [
        m for m in _measured(metrics) if m.abstractness > threshold and m.instability > threshold
    ]
