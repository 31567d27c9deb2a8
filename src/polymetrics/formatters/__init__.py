"""Output formatters for polymetrics."""

from .base import BaseFormatter
from .edn_formatter import EdnFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter, format_cycle, format_metric

FORMATTERS = {
    "text": RichFormatter,
    "json": JsonFormatter,
    "edn": EdnFormatter,
}


def get_formatter(name: str, **kwargs) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "text", "json", "edn"
        **kwargs: Passed to the text formatter (console, thresholds)

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    cls = FORMATTERS.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(FORMATTERS))}")
    if cls is RichFormatter:
        return cls(**kwargs)
    return cls()


__all__ = [
    "BaseFormatter",
    "EdnFormatter",
    "FORMATTERS",
    "JsonFormatter",
    "RichFormatter",
    "format_cycle",
    "format_metric",
    "get_formatter",
]
