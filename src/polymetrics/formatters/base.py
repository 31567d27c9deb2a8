"""Base formatter interface for polymetrics report rendering."""

from abc import ABC, abstractmethod

from ..architecture.analyzer import AnalysisResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: AnalysisResult) -> None:
        """Write the report for ``result`` to the terminal."""

    @abstractmethod
    def format(self, result: AnalysisResult) -> str:
        """Return formatted string representation of the report."""
