"""Architecture analysis: unit discovery, module resolution, coupling metrics."""

from .discovery import classify_path, discover_units
from .models import HealthSummary, ModuleInfo, Unit, UnitKind, UnitMetrics
from .resolver import ModuleIndex, build_module_index

__all__ = [
    "HealthSummary",
    "ModuleIndex",
    "ModuleInfo",
    "Unit",
    "UnitKind",
    "UnitMetrics",
    "build_module_index",
    "classify_path",
    "discover_units",
]
