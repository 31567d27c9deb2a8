"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..architecture.analyzer import AnalysisResult
from ..config import MetricsConfig, load_config
from ..exceptions import PolyMetricsError
from ..logging_config import get_logger

console = Console()
err_console = Console(stderr=True)

logger = get_logger(__name__)

EXIT_HEALTHY = 0
EXIT_UNHEALTHY = 1
EXIT_ERROR = 2


def resolve_config(
    root: Path,
    config: Optional[Path] = None,
    top_namespace: Optional[str] = None,
    report_all: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> MetricsConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if top_namespace is not None:
        overrides["top_namespace"] = top_namespace
    if report_all:
        overrides["report_all_units"] = True
    return load_config(config_file=config, root=root, verbose=verbose, quiet=quiet, **overrides)


def run_analysis(root: Path, config: MetricsConfig) -> AnalysisResult:
    """Analyze ``root``, turning library errors into exit code 2."""
    from ..api import analyze

    try:
        return analyze(root, config=config)
    except PolyMetricsError as e:
        fail(e)


def fail(error: PolyMetricsError) -> None:
    """Report an error on stderr and exit with code 2."""
    logger.debug(f"{error.__class__.__name__}: {error}")
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(EXIT_ERROR)
