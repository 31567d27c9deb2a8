"""Main report command: metrics table, summary, cycles and verdict."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..exceptions import PolyMetricsError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import EXIT_HEALTHY, EXIT_UNHEALTHY, console, fail, resolve_config, run_analysis


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    path: Path = typer.Option(
        Path("."),
        "-C",
        "--path",
        help="Workspace root to analyze (default: current directory)",
    ),
    output_format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: text | json | edn",
        click_type=click.Choice(["text", "json", "edn"], case_sensitive=False),
    ),
    report_all: bool = typer.Option(
        False,
        "--all",
        help="Report every unit kind, not only components and packages",
    ),
    top_namespace: Optional[str] = typer.Option(
        None,
        "--top-namespace",
        help="Top namespace stripped before unit-name inference",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Report Martin package metrics for a convention-structured workspace.

    Discovers components, bases and packages, builds the unit dependency
    graph and prints coupling (Ca, Ce), instability (I), abstractness (A)
    and distance from the main sequence (D), plus any dependency cycles.

    Exit codes: 0 healthy, 1 needs attention, 2 could not analyze.

    [bold cyan]Examples:[/bold cyan]

      polymetrics

      polymetrics -C /path/to/workspace --format json

      polymetrics unit user
    """
    if version:
        from .. import __version__

        console.print(f"[bold cyan]polymetrics[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(EXIT_HEALTHY)

    try:
        settings = resolve_config(
            path,
            config=config,
            top_namespace=top_namespace,
            report_all=report_all,
            verbose=verbose,
            quiet=quiet,
        )
    except PolyMetricsError as e:
        fail(e)

    setup_logging(verbosity=settings.verbosity, log_file=str(log_file) if log_file else None)

    ctx.ensure_object(dict)
    ctx.obj["path"] = path
    ctx.obj["config"] = settings
    ctx.obj["format"] = output_format.lower()

    if ctx.invoked_subcommand is not None:
        return

    result = run_analysis(path, settings)
    formatter = get_formatter(ctx.obj["format"], console=console, thresholds=settings.thresholds)
    formatter.render(result)

    raise typer.Exit(EXIT_HEALTHY if result.healthy else EXIT_UNHEALTHY)
