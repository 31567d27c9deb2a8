"""Unit detail command: dependencies, dependents, blast radius and explanations."""

import json

import typer
from rich.markup import escape

from ..architecture.analyzer import AnalysisResult
from ..architecture.models import UnitMetrics
from ..exceptions import UnitNotFoundError
from ..formatters import format_metric
from ..formatters.edn_formatter import to_edn
from ..graph import transitive_dependents
from . import app
from ._common import EXIT_ERROR, EXIT_HEALTHY, console, err_console, run_analysis
from ._explain import (
    describe_abstractness,
    describe_distance,
    describe_instability,
    describe_overall_health,
)


def unit_detail(result: AnalysisResult, name: str) -> dict:
    """Collect the detail view of one reported unit.

    Raises:
        UnitNotFoundError: If ``name`` is not a reported unit
    """
    m = result.metrics_for(name)
    blast = transitive_dependents(result.graph, name)
    blast.discard(name)
    return {
        "metrics": m.to_dict(),
        "dependencies": sorted(result.graph.dependencies(name)),
        "dependents": sorted(result.graph.dependents(name)),
        "blast_radius": sorted(blast),
        "in_cycle": any(name in cycle for cycle in result.cycles),
        "explanations": {
            "instability": describe_instability(
                m.instability, m.efferent_coupling, m.afferent_coupling
            ),
            "abstractness": describe_abstractness(m),
            "distance": describe_distance(m.distance, m.abstractness, m.instability),
            "assessment": describe_overall_health(m),
        },
    }


def _print_names(title: str, names: list[str], empty: str, count_label: str) -> None:
    console.print(f"[bold]{title}[/bold]")
    if not names:
        console.print(f"  {empty}")
    else:
        console.print(f"  {count_label.format(count=len(names))}")
        for dep in names:
            console.print(f"    - {escape(dep)}")
    console.print()


def _print_detail(m: UnitMetrics, detail: dict) -> None:
    explanations = detail["explanations"]

    console.print(f"[bold]Unit:[/bold] {escape(m.name)}")
    console.print(f"[bold]Kind:[/bold] {m.kind.value}")
    console.print("-" * 50)
    console.print()

    _print_names(
        "DEPENDENCIES",
        detail["dependencies"],
        "This unit has no dependencies on other units.",
        "Depends on {count} unit(s):",
    )
    _print_names(
        "DEPENDENTS",
        detail["dependents"],
        "No other units depend on this one.",
        "{count} unit(s) depend on this:",
    )
    _print_names(
        "BLAST RADIUS",
        detail["blast_radius"],
        "A change here affects no other unit.",
        "A change here can affect {count} unit(s):",
    )

    console.print("[bold]METRICS[/bold]")
    console.print()
    console.print(f"  Afferent Coupling (Ca): {m.afferent_coupling}")
    console.print("    Number of units that depend on this one.")
    console.print()
    console.print(f"  Efferent Coupling (Ce): {m.efferent_coupling}")
    console.print("    Number of units this one depends on.")
    console.print()
    console.print(f"  Instability (I): {format_metric(m.instability)}")
    console.print(f"    {explanations['instability']}")
    console.print()
    console.print(f"  Abstractness (A): {format_metric(m.abstractness)}")
    if m.abstractness is not None:
        console.print(
            f"    External access: {m.interface_modules} interface, "
            f"{m.leaky_modules} implementation module(s)"
        )
    console.print(f"    {explanations['abstractness']}")
    console.print()
    console.print(f"  Distance (D): {format_metric(m.distance)}")
    console.print(f"    {explanations['distance']}")
    console.print()

    if detail["in_cycle"]:
        console.print("[red]⚠ This unit is part of a dependency cycle.[/red]")
        console.print()

    console.print("[bold]ASSESSMENT[/bold]")
    console.print(f"  {explanations['assessment']}")


@app.command()
def unit(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Unit name to inspect"),
):
    """
    Show detailed metrics and explanations for one unit.

    [bold cyan]Examples:[/bold cyan]

      polymetrics unit user

      polymetrics -C /path/to/workspace --format json unit user

      polymetrics --format edn unit user
    """
    obj = ctx.obj or {}
    result = run_analysis(obj["path"], obj["config"])

    try:
        detail = unit_detail(result, name)
    except UnitNotFoundError as e:
        err_console.print(f"[red]Error:[/red] Unit '{escape(name)}' not found.")
        err_console.print()
        err_console.print("Available units:")
        for available in e.available:
            err_console.print(f"  {escape(available)}")
        raise typer.Exit(EXIT_ERROR)

    output_format = obj.get("format")
    if output_format == "json":
        print(json.dumps(detail, indent=2))
    elif output_format == "edn":
        print(to_edn(detail))
    else:
        _print_detail(result.metrics_for(name), detail)
    raise typer.Exit(EXIT_HEALTHY)
