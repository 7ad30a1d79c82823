"""CLI application entry point for holebridge.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from holebridge import __version__
from holebridge.cli.output import (
    console,
    create_progress,
    polygon_table,
    print_banner,
    print_cancelled,
    print_document_overview,
    print_error,
    print_failures,
    print_plan,
    print_run_summary,
)
from holebridge.config import (
    BridgeConfig,
    GeometryConfig,
    HolebridgeSettings,
    LoggingConfig,
    ProcessingConfig,
    RayTarget,
)
from holebridge.core import PolygonProcessor
from holebridge.domain import Polygon
from holebridge.exceptions import DocumentError, DocumentLoadError, HolebridgeError
from holebridge.io import PolygonReader, PolygonWriter

app = typer.Typer(
    name="holebridge",
    help="Eliminate polygon holes by bridging them into the outer boundary.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Holebridge[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def simplify(
    input_document: Annotated[
        Path,
        typer.Argument(
            help="Path to input polygon document (JSON)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-simple.json)",
        ),
    ] = None,
    ray_target: Annotated[
        str,
        typer.Option(
            "--ray-target",
            "-r",
            help="Ring the bridge ray is cast against (outer|hole)",
        ),
    ] = "outer",
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            "-t",
            help="Point equality tolerance (0 = exact)",
            min=0.0,
        ),
    ] = 0.0,
    bridge_tolerance: Annotated[
        float,
        typer.Option(
            "--bridge-tolerance",
            help="Tolerance for matching a ray hit to an outer vertex (0 = exact)",
            min=0.0,
        ),
    ] = 0.0,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    list_holes: Annotated[
        bool,
        typer.Option(
            "--list-holes",
            help="List all polygons with holes and exit",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Analyze and show what would be done without writing output",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Turn every polygon with holes into a single simple ring.

    Each hole is bridged into the outer boundary through a mutually visible
    vertex pair, rightmost hole first.

    Example:
        holebridge parcels.json

    This will create parcels-simple.json with one flat coordinate array per polygon.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_document.exists():
        print_error(
            f"Input file not found: {input_document}",
            details=f"The file '{input_document}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_document.is_file():
        print_error(
            f"Input path is not a file: {input_document}",
            details="Please provide a path to a JSON polygon document.",
        )
        raise typer.Exit(code=1)

    try:
        target = RayTarget(ray_target.lower())
    except ValueError:
        print_error(
            f"Invalid ray target: {ray_target}",
            details="Valid values: outer, hole",
        )
        raise typer.Exit(code=1)

    settings = HolebridgeSettings(
        bridge=BridgeConfig(ray_target=target),
        geometry=GeometryConfig(
            vertex_tolerance=tolerance,
            bridge_tolerance=bridge_tolerance,
        ),
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
            quiet=quiet,
        ),
    )

    try:
        polygons = _load_polygons(input_document)

        if list_holes:
            _list_holes(polygons)
            raise typer.Exit(code=0)

        if not quiet:
            print_banner(__version__)
            print_document_overview(str(input_document), polygons)

        if dry_run:
            print_plan(polygons, settings.bridge.ray_target.value, verbose)
            raise typer.Exit(code=0)

        if verbose:
            with_holes = [p for p in polygons if p.has_holes()]
            if with_holes:
                console.print(polygon_table(with_holes, title="Polygons to simplify"))

        actual_output_path = output or PolygonWriter.get_output_path(input_document)
        to_process = sum(1 for p in polygons if p.has_holes())
        processor = PolygonProcessor(settings)

        try:
            if not quiet and to_process:
                auto = " (auto)" if workers is None else ""
                actual_workers = workers or os.cpu_count() or 1
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"{actual_workers} workers{auto}", total=to_process
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    stats = processor.process(
                        input_path=input_document,
                        output_path=actual_output_path,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = processor.process(
                    input_path=input_document,
                    output_path=actual_output_path,
                    max_workers=workers,
                )
        except KeyboardInterrupt:
            if not quiet:
                print_cancelled(processor.processing_logger.stats)
            raise typer.Exit(code=130) from None

        if not quiet:
            print_run_summary(stats, str(actual_output_path))

        if stats.error_count:
            print_failures(stats.errors)
            raise typer.Exit(code=2)

    except HolebridgeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _load_polygons(document_path: Path) -> list[Polygon]:
    """Read every polygon of a document.

    Raises:
        DocumentError: If the document cannot be read or validated
    """
    try:
        with PolygonReader(document_path) as reader:
            return list(reader.iter_polygons())
    except DocumentError:
        raise
    except Exception as e:
        raise DocumentLoadError(str(document_path), str(e)) from e


def _list_holes(polygons: list[Polygon]) -> None:
    """Print the polygons that have holes, one table row each."""
    with_holes = [p for p in polygons if p.has_holes()]
    if not with_holes:
        console.print("no polygons with holes")
        return
    console.print(polygon_table(with_holes, title=f"{len(with_holes)} polygons with holes"))


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
