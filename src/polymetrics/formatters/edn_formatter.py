"""EDN formatter for polymetrics.

Emits the JSON report's data as one EDN map for Clojure tooling: keys are
hyphenated keywords (``:mean-distance``), cycles and metrics are vectors,
and undefined abstractness or distance is ``nil``.
"""

from typing import Any

from ..architecture.analyzer import AnalysisResult
from .base import BaseFormatter

_STRING_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def keyword(name: str) -> str:
    """``mean_distance`` -> ``:mean-distance``."""
    return ":" + name.replace("_", "-")


def to_edn(value: Any) -> str:
    """Serialize plain Python data (the shape of ``to_dict()``) as EDN.

    >>> to_edn({"unit_count": 2, "cycles": [("a", "b")], "distance": None})
    '{:unit-count 2 :cycles [["a" "b"]] :distance nil}'
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return '"' + "".join(_STRING_ESCAPES.get(ch, ch) for ch in value) + '"'
    if isinstance(value, dict):
        return "{" + " ".join(f"{keyword(str(k))} {to_edn(v)}" for k, v in value.items()) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(to_edn(v) for v in value) + "]"
    if isinstance(value, (set, frozenset)):
        return "#{" + " ".join(sorted(to_edn(v) for v in value)) + "}"
    raise TypeError(f"Cannot serialize {type(value).__name__} as EDN")


class EdnFormatter(BaseFormatter):
    """Render the report as a single EDN map."""

    def render(self, result: AnalysisResult) -> None:
        print(self.format(result))

    def format(self, result: AnalysisResult) -> str:
        data = result.to_dict()
        data["healthy?"] = data.pop("healthy")
        return to_edn(data)
