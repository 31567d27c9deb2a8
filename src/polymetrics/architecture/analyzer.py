"""WorkspaceAnalyzer: the full metrics pipeline over one workspace.

Orchestrates:
1. Unit discovery (directories -> Unit objects)
2. Module indexing (declared names -> owning unit)
3. Dependency graph and external-requires construction
4. Cycle detection
5. Martin metrics and aggregate health
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..config import MetricsConfig
from ..exceptions import InsufficientDataError, UnitNotFoundError
from ..graph.algorithms import Cycle, find_all_cycles
from ..graph.builder import build_dependency_graph, collect_external_requires
from ..graph.models import DependencyGraph, ExternalRequires
from ..logging_config import get_logger
from ..workspace import resolve_top_namespace
from .discovery import discover_units
from .metrics import codebase_health, compute_all_metrics
from .models import HealthSummary, Unit, UnitMetrics
from .resolver import ModuleIndex, build_module_index

logger = get_logger(__name__)


@dataclass
class AnalysisResult:
    """Everything one analysis run produced."""

    root: Path
    units: list[Unit]
    index: ModuleIndex
    graph: DependencyGraph
    external_requires: ExternalRequires
    cycles: list[Cycle]
    metrics: list[UnitMetrics]
    health: HealthSummary
    top_namespace: Optional[str] = None
    _units_by_name: dict[str, Unit] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self._units_by_name = {unit.name: unit for unit in self.units}

    @property
    def healthy(self) -> bool:
        return self.health.healthy

    def unit(self, name: str) -> Unit:
        """Look up a discovered unit by name.

        Raises:
            UnitNotFoundError: If no unit has that name
        """
        try:
            return self._units_by_name[name]
        except KeyError:
            raise UnitNotFoundError(name, self._units_by_name) from None

    def metrics_for(self, name: str) -> UnitMetrics:
        """Metrics of a reported unit.

        Raises:
            UnitNotFoundError: If the unit is unknown or was not reported
        """
        for metrics in self.metrics:
            if metrics.name == name:
                return metrics
        raise UnitNotFoundError(name, (m.name for m in self.metrics))

    def to_dict(self) -> dict[str, Any]:
        return {
            "metrics": [m.to_dict() for m in self.metrics],
            "health": self.health.to_dict(),
            "cycles": [list(cycle) for cycle in self.cycles],
            "healthy": self.health.healthy,
            "conflicts": [
                {
                    "module": c.module,
                    "kept_unit": c.kept_unit,
                    "ignored_unit": c.ignored_unit,
                    "ignored_path": c.ignored_path,
                }
                for c in self.index.conflicts
            ],
        }


class WorkspaceAnalyzer:
    """Runs discovery, resolution, graph building, cycle detection and metrics."""

    def __init__(self, root: Path, config: Optional[MetricsConfig] = None):
        self.root = Path(root)
        self.config = config or MetricsConfig()

    def analyze(self) -> AnalysisResult:
        """Analyze the workspace.

        Raises:
            InvalidPathError: If the root is not a directory
            NamingCollisionError: If a plain-directory unit has clashing files
            InsufficientDataError: If no units were found
        """
        config = self.config
        top_namespace = resolve_top_namespace(self.root, config)

        # 1. Discover units
        units = discover_units(
            self.root,
            top_namespace=top_namespace,
            ignored_dirs=config.ignored_dirs,
            follow_symlinks=config.follow_symlinks,
        )
        if not units:
            raise InsufficientDataError(f"no source units found under {self.root}")
        logger.debug(f"Discovered {len(units)} units")

        # 2. Index declared modules
        index = build_module_index(self.root, units, top_namespace=top_namespace)

        # 3. Build unit graph and external requires
        graph = build_dependency_graph(units, index, config.include_interface_edges)
        external_requires = collect_external_requires(units, index)
        logger.debug(f"External requires: {len(external_requires)} modules requested across units")

        # 4. Detect cycles
        cycles = find_all_cycles(graph)
        if cycles:
            logger.debug(f"Found {len(cycles)} dependency cycles")

        # 5. Metrics and health
        metrics = compute_all_metrics(
            units,
            graph,
            external_requires,
            index,
            reportable_only=not config.report_all_units,
        )
        health = codebase_health(
            metrics,
            cycle_count=len(cycles),
            threshold=config.thresholds.healthy_distance,
        )
        logger.debug(
            f"Analysis complete: {health.unit_count} units reported, "
            f"mean distance {health.mean_distance:.3f}, healthy={health.healthy}"
        )

        return AnalysisResult(
            root=self.root,
            units=units,
            index=index,
            graph=graph,
            external_requires=external_requires,
            cycles=cycles,
            metrics=metrics,
            health=health,
            top_namespace=top_namespace,
        )
