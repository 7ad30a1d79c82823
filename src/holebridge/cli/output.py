"""Console rendering for the holebridge CLI.

Everything the command prints goes through the shared ``console`` so tests
can capture it. Run results are rendered from ``ProcessingStats``.
"""

from collections.abc import Iterable

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from holebridge.domain import Polygon
from holebridge.utils.logging import ProcessingStats

console = Console()

# Rows shown before a polygon table is cut short
TABLE_LIMIT = 20


def format_duration(seconds: float) -> str:
    """Render a duration as ms, s or m+s."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m {rest:.1f}s"


def added_vertex_count(polygon: Polygon) -> int:
    """Vertices bridging adds: each closed hole plus its repeated outer vertex."""
    return sum(len(h.points) + (0 if h.is_closed() else 1) + 1 for h in polygon.holes)


def create_progress() -> Progress:
    """Progress display counting finished polygons."""
    return Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        BarColumn(bar_width=32),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def print_banner(version: str) -> None:
    console.rule(f"[bold]holebridge[/bold] {version}", align="left")


def print_document_overview(document_path: str, polygons: list[Polygon]) -> None:
    """One line naming the document and what it holds."""
    with_holes = sum(1 for p in polygons if p.has_holes())
    holes = sum(p.hole_count for p in polygons)
    console.print(
        f"[bold]{document_path}[/bold]: {len(polygons)} polygons, "
        f"{with_holes} with holes, {holes} holes"
    )


def polygon_table(polygons: list[Polygon], title: str | None = None) -> Table:
    """Table of polygons with their hole and vertex counts.

    Only the first ``TABLE_LIMIT`` polygons get a row; the caption counts
    the rest.
    """
    table = Table(title=title, title_justify="left")
    table.add_column("Polygon")
    table.add_column("Holes", justify="right")
    table.add_column("Vertices", justify="right")
    table.add_column("Added", justify="right")

    for polygon in polygons[:TABLE_LIMIT]:
        table.add_row(
            polygon.id,
            str(polygon.hole_count),
            str(polygon.vertex_count),
            f"+{added_vertex_count(polygon)}",
        )
    if len(polygons) > TABLE_LIMIT:
        table.caption = f"{len(polygons) - TABLE_LIMIT} more not shown"
    return table


def print_plan(polygons: list[Polygon], ray_target: str, verbose: bool) -> None:
    """Describe what a run would do without doing it."""
    with_holes = [p for p in polygons if p.has_holes()]

    plan = Table.grid(padding=(0, 2))
    plan.add_column(style="dim")
    plan.add_column(justify="right")
    plan.add_row("polygons", str(len(polygons)))
    plan.add_row("to simplify", str(len(with_holes)))
    plan.add_row("holes", str(sum(p.hole_count for p in with_holes)))
    plan.add_row("vertices added", str(sum(added_vertex_count(p) for p in with_holes)))
    plan.add_row("ray target", ray_target)
    console.print(plan)

    if verbose and with_holes:
        console.print(polygon_table(with_holes))
    console.print("[green]dry run[/green], nothing written")


def print_run_summary(stats: ProcessingStats, output_path: str) -> None:
    """Summarize a finished run, with per-polygon timings when any completed."""
    status = "[red]finished with failures[/red]" if stats.error_count else "[green]done[/green]"
    console.print(f"{status} in {format_duration(stats.duration_seconds)}")

    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="dim")
    summary.add_column()
    summary.add_row("output", output_path)
    summary.add_row("simplified", str(stats.processed_count))
    summary.add_row("holes eliminated", str(stats.holes_eliminated))
    summary.add_row("passed through", str(stats.skipped_count))
    summary.add_row("failed", str(stats.error_count))
    if stats.avg_polygon_time_ms is not None:
        summary.add_row(
            "per polygon",
            f"{stats.avg_polygon_time_ms:.1f}ms avg, "
            f"{stats.min_polygon_time_ms:.1f}ms min, "
            f"{stats.max_polygon_time_ms:.1f}ms max",
        )
    console.print(summary)


def print_failures(errors: Iterable[tuple[str, str]]) -> None:
    """List polygons left out of the output and why."""
    table = Table(title="Failed polygons", title_justify="left", title_style="bold red")
    table.add_column("Polygon")
    table.add_column("Reason", overflow="fold")
    for polygon_id, reason in errors:
        table.add_row(polygon_id, reason)
    console.print(table)


def print_cancelled(stats: ProcessingStats) -> None:
    console.print(
        f"[yellow]cancelled[/yellow] after {stats.processed_count} polygons, "
        f"{stats.cancelled_count} pending tasks dropped; no output written"
    )


def print_error(message: str, details: str | None = None) -> None:
    console.print(f"[bold red]error:[/bold red] {message}")
    if details:
        console.print(f"  {details}", style="dim")
