"""Parallel processing orchestration for polygon documents.

Each polygon's elimination sequence is independent, so documents are
processed in parallel at the polygon level using ProcessPoolExecutor.

Key components:
- process_polygon: Top-level picklable function for parallel execution
- PolygonProcessor: Main orchestrator class for document processing
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from holebridge.config import HolebridgeSettings
from holebridge.core.elimination import HoleEliminator
from holebridge.domain import Polygon, Ring
from holebridge.io import PolygonReader, PolygonWriter
from holebridge.utils import ProcessingLogger, ProcessingStats, configure_logging


def process_polygon(
    polygon_dict: dict[str, Any],
    config_dict: dict[str, Any],
) -> dict[str, Any]:
    """Eliminate all holes of a single polygon.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the polygon, eliminates its holes, and returns the result.

    Args:
        polygon_dict: Serialized polygon (from Polygon.to_dict())
        config_dict: Serialized settings (bridge and geometry sections)

    Returns:
        Dictionary containing either:
        - Success: {"ring": ring_dict, "holes_eliminated": int, "duration_ms": float}
        - Error: {"error": str, "polygon_id": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        polygon = Polygon.from_dict(polygon_dict)
        settings = HolebridgeSettings(**config_dict)

        ring = HoleEliminator(settings).eliminate(polygon)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "ring": ring.to_dict(),
            "holes_eliminated": polygon.hole_count,
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        tb = traceback.format_exc()
        return {
            "error": str(e),
            "polygon_id": polygon_dict.get("id", "unknown"),
            "traceback": tb,
            "duration_ms": duration_ms,
        }


class PolygonProcessor:
    """Orchestrates parallel hole elimination for a polygon document.

    Manages the complete workflow:
    1. Load the document
    2. Split polygons into those with holes and those without
    3. Eliminate holes in parallel using worker processes
    4. Collect results and update statistics
    5. Save the simplified document

    Polygons without holes are written through unchanged. Polygons that fail
    are logged and left out of the output.

    Example:
        settings = HolebridgeSettings()
        processor = PolygonProcessor(settings)
        stats = processor.process(
            input_path=Path("parcels.json"),
            output_path=Path("parcels-simple.json"),
            max_workers=4
        )
    """

    def __init__(self, config: HolebridgeSettings) -> None:
        """Initialize polygon processor with configuration.

        Args:
            config: Holebridge settings
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=config.logging.quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def process(
        self,
        input_path: Path,
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Process a polygon document with parallel hole elimination.

        Args:
            input_path: Path to input document
            output_path: Path for output document (auto-generated if None)
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, polygon_id, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            FileNotFoundError: If the document does not exist
            DocumentFormatError: If the document is not a valid polygon document
            KeyboardInterrupt: If processing is cancelled by user
        """
        self.processing_logger = ProcessingLogger(self.logger)
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        if output_path is None:
            output_path = PolygonWriter.get_output_path(input_path)

        self.logger.info(
            "Starting document processing",
            input=str(input_path),
            output=str(output_path),
            max_workers=max_workers,
        )

        reader = PolygonReader(input_path)
        reader.load()

        try:
            all_polygons = list(reader.iter_polygons())
            to_process: list[Polygon] = []
            for polygon in all_polygons:
                if polygon.has_holes():
                    to_process.append(polygon)
                else:
                    self.processing_logger.log_polygon_skipped(polygon.id, "no holes")

            self.logger.info(
                "Filtered polygons",
                total=len(all_polygons),
                to_process=len(to_process),
                skipped=stats.skipped_count,
            )

            results: dict[str, Ring] = {}
            if to_process:
                results = self._process_polygons_parallel(
                    polygons=to_process,
                    max_workers=max_workers,
                    stats=stats,
                    progress_callback=progress_callback,
                )
            else:
                self.logger.info("No polygons with holes")

            self._save_document(output_path, all_polygons, results)

        finally:
            reader.close()

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            holes_eliminated=stats.holes_eliminated,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _process_polygons_parallel(
        self,
        polygons: list[Polygon],
        max_workers: int | None,
        stats: ProcessingStats,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> dict[str, Ring]:
        """Eliminate holes of polygons in parallel using ProcessPoolExecutor.

        Args:
            polygons: Polygons with at least one hole
            max_workers: Maximum worker processes
            stats: Statistics object to update
            progress_callback: Optional callback(completed, total, polygon_id, success)

        Returns:
            Dictionary mapping polygon ids to simplified rings
        """
        results: dict[str, Ring] = {}
        config_dict = self.config.model_dump(include={"bridge", "geometry"})

        total = len(polygons)
        completed = 0
        pending_futures: dict = {}

        self.logger.info(
            "Starting parallel processing",
            polygon_count=total,
            max_workers=max_workers,
        )

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for polygon in polygons:
                self.processing_logger.log_polygon_start(polygon.id, polygon.hole_count)
                future = executor.submit(process_polygon, polygon.to_dict(), config_dict)
                pending_futures[future] = polygon.id

            try:
                for future in as_completed(list(pending_futures)):
                    polygon_id = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()

                        if "error" in result:
                            self.processing_logger.log_polygon_error(
                                polygon_id=result["polygon_id"],
                                error=Exception(result["error"]),
                                traceback=result.get("traceback"),
                            )
                        else:
                            success = True
                            ring = Ring.from_dict(result["ring"])
                            results[polygon_id] = ring
                            self.processing_logger.log_polygon_complete(
                                polygon_id=polygon_id,
                                holes_eliminated=result["holes_eliminated"],
                                vertex_count=len(ring),
                                duration_ms=result.get("duration_ms", 0.0),
                            )

                    except Exception as e:
                        self.processing_logger.log_polygon_error(
                            polygon_id=polygon_id,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, polygon_id, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return results

    def _save_document(
        self,
        output_path: Path,
        polygons: list[Polygon],
        results: dict[str, Ring],
    ) -> None:
        """Save simplified rings in document order.

        Args:
            output_path: Path to save the document
            polygons: All polygons of the input document
            results: Simplified rings keyed by polygon id
        """
        writer = PolygonWriter(output_path)

        for polygon in polygons:
            if not polygon.has_holes():
                writer.add_ring(polygon.id, Ring(points=list(polygon.outer.points)))
            elif polygon.id in results:
                writer.add_ring(polygon.id, results[polygon.id])

        writer.save()

        self.logger.info(
            "Document saved",
            output=str(output_path),
            polygons=writer.packet_count,
        )
