"""Rich terminal formatter for polymetrics."""

import io
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..architecture.analyzer import AnalysisResult
from ..architecture.models import HealthSummary, UnitMetrics
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from .base import BaseFormatter

ARROW = "→"


def format_metric(value: Optional[float], decimals: int = 2) -> str:
    """Format a metric value, ``-`` when undefined."""
    if value is None:
        return "-"
    return f"{value:.{decimals}f}"


def _distance_style(distance: Optional[float], thresholds: ThresholdConfig) -> str:
    if distance is None:
        return "dim"
    if distance >= thresholds.healthy_distance:
        return "red"
    if distance >= thresholds.zone_of_pain:
        return "yellow"
    return "green"


def format_cycle(cycle) -> str:
    """``a -> b -> c -> a``: a cycle closed back on its first unit."""
    return f" {ARROW} ".join([*cycle, cycle[0]])


class RichFormatter(BaseFormatter):
    """Metrics table sorted by distance, summary, cycles and verdict."""

    def __init__(
        self,
        console: Optional[Console] = None,
        thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
    ):
        self.console = console or Console()
        self.thresholds = thresholds

    def render(self, result: AnalysisResult) -> None:
        self._render_to(self.console, result)

    def format(self, result: AnalysisResult) -> str:
        buffer = io.StringIO()
        self._render_to(Console(file=buffer, width=100, color_system=None), result)
        return buffer.getvalue()

    def _render_to(self, console: Console, result: AnalysisResult) -> None:
        console.print(self._metrics_table(result.metrics))
        self._print_summary(console, result.health)
        self._print_cycles(console, result.cycles)
        self._print_conflicts(console, result)
        console.print()
        if result.health.healthy:
            console.print("[green]✓ Codebase is healthy[/green]")
        else:
            console.print("[yellow]⚠ Codebase needs attention[/yellow]")

    def _metrics_table(self, metrics: list[UnitMetrics]) -> Table:
        table = Table(show_header=True, header_style="bold", pad_edge=True)
        table.add_column("Unit", min_width=24)
        table.add_column("Kind")
        table.add_column("Ca", justify="right")
        table.add_column("Ce", justify="right")
        table.add_column("I", justify="right")
        table.add_column("A", justify="right")
        table.add_column("D", justify="right")

        for m in metrics:
            style = _distance_style(m.distance, self.thresholds)
            name = escape(m.name)
            if m.is_entry_point:
                name += " [dim](entry)[/dim]"
            table.add_row(
                name,
                m.kind.value,
                str(m.afferent_coupling),
                str(m.efferent_coupling),
                format_metric(m.instability),
                format_metric(m.abstractness),
                f"[{style}]{format_metric(m.distance)}[/{style}]",
            )
        return table

    def _print_summary(self, console: Console, health: HealthSummary) -> None:
        console.print()
        console.print("[bold]Summary:[/bold]")
        console.print(f"  Unit count:     {health.unit_count}")
        if health.excluded_count:
            console.print(
                f"  Measured:       {health.measured_count} "
                f"[dim]({health.excluded_count} without distance)[/dim]"
            )
        console.print(f"  Mean distance:  {health.mean_distance:.3f}")
        console.print(f"  Max distance:   {health.max_distance:.3f}")
        console.print(f"  Min distance:   {health.min_distance:.3f}")

    def _print_cycles(self, console: Console, cycles) -> None:
        if not cycles:
            return
        console.print()
        console.print(f"[red]⚠ Cycles detected ({len(cycles)}):[/red]")
        for cycle in cycles:
            console.print(f"  {escape(format_cycle(cycle))}")

    def _print_conflicts(self, console: Console, result: AnalysisResult) -> None:
        conflicts = result.index.conflicts
        if not conflicts:
            return
        console.print()
        console.print(f"[yellow]Duplicate module declarations ({len(conflicts)}):[/yellow]")
        for c in conflicts:
            console.print(
                f"  {c.module}: kept in [bold]{c.kept_unit}[/bold], "
                f"ignored in {c.ignored_unit} [dim]({c.ignored_path})[/dim]"
            )
