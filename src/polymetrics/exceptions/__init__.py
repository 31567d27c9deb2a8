"""Exception hierarchy for polymetrics."""

from .analysis import (
    AnalysisError,
    InsufficientDataError,
    NamingCollisionError,
    UnitNotFoundError,
)
from .base import PolyMetricsError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "PolyMetricsError",
    "AnalysisError",
    "NamingCollisionError",
    "InsufficientDataError",
    "UnitNotFoundError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
