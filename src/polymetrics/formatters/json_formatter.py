"""JSON formatter for polymetrics."""

import json

from ..architecture.analyzer import AnalysisResult
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report as JSON.

    Undefined abstractness and distance are emitted as ``null``.
    """

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result))

    def format(self, result: AnalysisResult) -> str:
        return json.dumps(result.to_dict(), indent=2)
