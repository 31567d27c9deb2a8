"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="polymetrics",
    help="polymetrics - Martin package metrics for convention-structured workspaces",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .report import main as _main_callback  # noqa: F401, E402
from .unit import unit as _unit  # noqa: F401, E402


def main() -> None:
    """Console script entry point."""
    app()
