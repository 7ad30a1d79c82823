"""Tests for logging utilities and processing statistics."""

from unittest.mock import Mock

from holebridge.utils import ProcessingLogger, ProcessingStats, configure_logging


class TestProcessingStats:
    """Tests for ProcessingStats."""

    def test_duration(self) -> None:
        """Test duration from start and end times."""
        stats = ProcessingStats(start_time=10.0, end_time=12.5)
        assert stats.duration_seconds == 2.5

    def test_duration_unfinished(self) -> None:
        """Test that an unfinished run has zero duration."""
        assert ProcessingStats(start_time=10.0).duration_seconds == 0.0

    def test_timings(self) -> None:
        """Test timing aggregates."""
        stats = ProcessingStats(polygon_timings_ms=[1.0, 2.0, 6.0])
        assert stats.avg_polygon_time_ms == 3.0
        assert stats.min_polygon_time_ms == 1.0
        assert stats.max_polygon_time_ms == 6.0

    def test_timings_empty(self) -> None:
        """Test that aggregates are None before any polygon completes."""
        stats = ProcessingStats()
        assert stats.avg_polygon_time_ms is None
        assert stats.min_polygon_time_ms is None
        assert stats.max_polygon_time_ms is None


class TestProcessingLogger:
    """Tests for ProcessingLogger."""

    def test_counts_events(self) -> None:
        """Test that events update the statistics."""
        processing_logger = ProcessingLogger(Mock())

        processing_logger.log_polygon_start("a", 2)
        processing_logger.log_polygon_complete("a", 2, 14, 3.5)
        processing_logger.log_polygon_skipped("b", "no holes")
        processing_logger.log_polygon_error("c", ValueError("boom"))

        stats = processing_logger.stats
        assert stats.processed_count == 1
        assert stats.holes_eliminated == 2
        assert stats.skipped_count == 1
        assert stats.error_count == 1
        assert stats.errors == [("c", "boom")]
        assert stats.polygon_timings_ms == [3.5]

    def test_error_logged_with_type(self) -> None:
        """Test that errors carry their exception type."""
        logger = Mock()
        ProcessingLogger(logger).log_polygon_error("c", ValueError("boom"))

        _, kwargs = logger.error.call_args
        assert kwargs["error_type"] == "ValueError"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_writes_log_file(self, tmp_path) -> None:
        """Test that the given log file is created."""
        log_file = tmp_path / "run.log"
        logger = configure_logging(log_file=log_file, quiet=True)

        assert logger is not None
        assert log_file.exists()
