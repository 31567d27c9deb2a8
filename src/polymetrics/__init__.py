"""
polymetrics - Martin package metrics for convention-structured workspaces

Discovers components, bases and packages from directory conventions, builds
the unit dependency graph from module declarations, and reports coupling,
instability, abstractness, distance from the main sequence and dependency
cycles.
"""

__version__ = "0.3.0"

from .api import analyze
from .architecture.analyzer import AnalysisResult, WorkspaceAnalyzer
from .architecture.models import HealthSummary, Unit, UnitKind, UnitMetrics
from .config import MetricsConfig, ThresholdConfig, load_config
from .exceptions import PolyMetricsError

__all__ = [
    "analyze",  # Main entry point
    "WorkspaceAnalyzer",
    "AnalysisResult",
    "HealthSummary",
    "MetricsConfig",
    "PolyMetricsError",
    "ThresholdConfig",
    "Unit",
    "UnitKind",
    "UnitMetrics",
    "load_config",
]
