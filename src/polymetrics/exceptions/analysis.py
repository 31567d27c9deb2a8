"""Analysis-related exceptions: discovery clashes, missing data, lookups."""

from typing import Iterable, List, Optional

from .base import PolyMetricsError


class AnalysisError(PolyMetricsError):
    """Base class for analysis-related errors."""
    pass


class NamingCollisionError(AnalysisError):
    """Raised when two source roots contribute the same filename to one unit.

    Only plain-directory units can collide: every marker-based unit lives
    under a single source root.
    """

    def __init__(self, unit: str, duplicates: Iterable[str], files: Iterable[str]):
        self.unit = unit
        self.duplicates = sorted(duplicates)
        self.files = sorted(files)
        super().__init__(
            f"Filename clash in unit '{unit}': {', '.join(self.duplicates)} "
            "appears in multiple source roots",
            details={
                "unit": unit,
                "duplicates": ", ".join(self.duplicates),
                "files": ", ".join(self.files),
            },
        )


class InsufficientDataError(AnalysisError):
    """Raised when there's not enough data for analysis."""

    def __init__(self, reason: str, minimum_required: Optional[int] = None):
        details = {"reason": reason}
        if minimum_required is not None:
            details["minimum_required"] = str(minimum_required)

        super().__init__(f"Insufficient data for analysis: {reason}", details=details)
        self.reason = reason
        self.minimum_required = minimum_required


class UnitNotFoundError(AnalysisError):
    """Raised when a detail view is requested for an unknown unit."""

    def __init__(self, name: str, available: Iterable[str]):
        self.name = name
        self.available: List[str] = sorted(available)
        super().__init__(f"Unit '{name}' not found", details={"name": name})
