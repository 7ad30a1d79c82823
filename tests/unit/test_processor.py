"""Tests for parallel processing orchestration."""

import json
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest

from holebridge.config import BridgeConfig, HolebridgeSettings, LoggingConfig, RayTarget
from holebridge.core.processor import PolygonProcessor, process_polygon
from holebridge.domain import Point, Polygon, Ring


@pytest.fixture
def polygon_with_hole() -> Polygon:
    """Create a square polygon with one square hole."""
    # Outer ring (CW)
    outer = Ring(points=[Point(0, 0), Point(0, 4), Point(4, 4), Point(4, 0)])
    # Hole (CCW)
    hole = Ring(points=[Point(1, 1), Point(2, 1), Point(2, 2), Point(1, 2)])
    return Polygon(id="lot-1", outer=outer, holes=[hole])


@pytest.fixture
def polygon_without_hole() -> Polygon:
    """Create a square polygon without holes."""
    outer = Ring(points=[Point(0, 0), Point(0, 4), Point(4, 4), Point(4, 0)])
    return Polygon(id="lot-2", outer=outer)


@pytest.fixture
def settings() -> HolebridgeSettings:
    """Create test settings."""
    return HolebridgeSettings()


@pytest.fixture
def config_dict(settings: HolebridgeSettings) -> dict:
    """Serialized settings as sent to workers."""
    return settings.model_dump(include={"bridge", "geometry"})


def _write_document(path: Path, polygons: list[Polygon]) -> Path:
    """Write polygons as an input document."""
    entries = []
    for polygon in polygons:
        entries.append(
            {
                "id": polygon.id,
                "outer": [[p.x, p.y] for p in polygon.outer.points],
                "holes": [[[p.x, p.y] for p in h.points] for h in polygon.holes],
            }
        )
    path.write_text(json.dumps({"polygons": entries}), encoding="utf-8")
    return path


def _mock_executor(result: dict) -> tuple[MagicMock, MagicMock]:
    """Executor whose single future returns ``result``."""
    mock_executor = MagicMock()
    mock_future = MagicMock()
    mock_future.result.return_value = result
    mock_executor.submit.return_value = mock_future
    mock_executor.__enter__.return_value = mock_executor
    mock_executor.__exit__.return_value = None
    return mock_executor, mock_future


class TestProcessPolygon:
    """Tests for process_polygon function."""

    def test_process_polygon_with_hole(self, polygon_with_hole: Polygon, config_dict: dict):
        """Test processing a polygon with a hole."""
        result = process_polygon(polygon_with_hole.to_dict(), config_dict)

        assert "error" not in result
        assert result["holes_eliminated"] == 1
        assert result["duration_ms"] >= 0

        ring = Ring.from_dict(result["ring"])
        assert len(ring) == 10
        assert ring.points[3] == Point(4, 0)

    def test_process_polygon_without_hole(
        self, polygon_without_hole: Polygon, config_dict: dict
    ):
        """Test that a hole-free polygon comes back unchanged."""
        result = process_polygon(polygon_without_hole.to_dict(), config_dict)

        assert result["holes_eliminated"] == 0
        assert Ring.from_dict(result["ring"]).points == polygon_without_hole.outer.points

    def test_process_polygon_handles_error(self, config_dict: dict):
        """Test that process_polygon handles errors gracefully."""
        invalid_dict = {"id": "broken", "holes": []}

        result = process_polygon(invalid_dict, config_dict)

        assert "error" in result
        assert "traceback" in result
        assert result["polygon_id"] == "broken"

    def test_process_polygon_hole_ray_target_error(self, polygon_with_hole: Polygon):
        """Test that bridge failures are reported, not raised."""
        config = HolebridgeSettings(bridge=BridgeConfig(ray_target=RayTarget.HOLE))
        result = process_polygon(
            polygon_with_hole.to_dict(), config.model_dump(include={"bridge", "geometry"})
        )

        assert "error" in result
        assert "Bridge construction failed" in result["error"]


class TestPolygonProcessor:
    """Tests for PolygonProcessor class."""

    def test_init(self, settings: HolebridgeSettings):
        """Test PolygonProcessor initialization."""
        with patch("holebridge.core.processor.configure_logging") as mock_logging:
            mock_logging.return_value = Mock()
            processor = PolygonProcessor(settings)

            assert processor.config == settings
            mock_logging.assert_called_once()

    def test_init_quiet_logging(self, tmp_path: Path):
        """Test that quiet logging settings reach the logging setup."""
        settings = HolebridgeSettings(
            logging=LoggingConfig(log_file=tmp_path / "run.log", quiet=True)
        )
        with patch("holebridge.core.processor.configure_logging") as mock_logging:
            mock_logging.return_value = Mock()
            PolygonProcessor(settings)

        mock_logging.assert_called_once_with(
            log_file=tmp_path / "run.log",
            console_level="WARNING",
            file_level="DEBUG",
            quiet=True,
        )

    @patch("holebridge.core.processor.configure_logging")
    def test_process_no_polygons_to_process(
        self,
        mock_logging,
        settings: HolebridgeSettings,
        polygon_without_hole: Polygon,
        tmp_path: Path,
    ):
        """Test processing a document with no holes."""
        mock_logging.return_value = Mock()
        input_path = _write_document(tmp_path / "in.json", [polygon_without_hole])

        processor = PolygonProcessor(settings)
        stats = processor.process(input_path)

        assert stats.processed_count == 0
        assert stats.skipped_count == 1
        assert stats.error_count == 0
        assert stats.duration_seconds >= 0

        output = json.loads((tmp_path / "in-simple.json").read_text(encoding="utf-8"))
        assert output["polygons"][0]["id"] == "lot-2"

    @patch("holebridge.core.processor.configure_logging")
    @patch("holebridge.core.processor.ProcessPoolExecutor")
    def test_process_with_polygons(
        self,
        mock_executor_class,
        mock_logging,
        settings: HolebridgeSettings,
        polygon_with_hole: Polygon,
        polygon_without_hole: Polygon,
        tmp_path: Path,
    ):
        """Test processing a document with polygons requiring elimination."""
        mock_logging.return_value = Mock()
        input_path = _write_document(
            tmp_path / "in.json", [polygon_with_hole, polygon_without_hole]
        )
        output_path = tmp_path / "out.json"

        ring = Ring(points=[Point(0, 0), Point(0, 4), Point(4, 4)])
        mock_executor, mock_future = _mock_executor(
            {"ring": ring.to_dict(), "holes_eliminated": 1, "duration_ms": 2.0}
        )
        mock_executor_class.return_value = mock_executor

        with patch("holebridge.core.processor.as_completed") as mock_as_completed:
            mock_as_completed.return_value = [mock_future]

            processor = PolygonProcessor(settings)
            stats = processor.process(input_path, output_path, max_workers=1)

        assert stats.processed_count == 1
        assert stats.holes_eliminated == 1
        assert stats.skipped_count == 1
        assert stats.error_count == 0
        assert stats.avg_polygon_time_ms == 2.0

        output = json.loads(output_path.read_text(encoding="utf-8"))
        assert [p["id"] for p in output["polygons"]] == ["lot-1", "lot-2"]
        assert output["polygons"][0]["polygon"]["positions"]["cartesian"] == [
            0.0, 0.0, 0.0, 0.0, 4.0, 0.0, 4.0, 4.0, 0.0,
        ]

    @patch("holebridge.core.processor.configure_logging")
    @patch("holebridge.core.processor.ProcessPoolExecutor")
    def test_process_handles_errors(
        self,
        mock_executor_class,
        mock_logging,
        settings: HolebridgeSettings,
        polygon_with_hole: Polygon,
        tmp_path: Path,
    ):
        """Test that processing errors are handled gracefully."""
        mock_logging.return_value = Mock()
        input_path = _write_document(tmp_path / "in.json", [polygon_with_hole])
        output_path = tmp_path / "out.json"

        mock_executor, mock_future = _mock_executor(
            {
                "error": "Test error",
                "polygon_id": "lot-1",
                "traceback": "Traceback...",
                "duration_ms": 1.0,
            }
        )
        mock_executor_class.return_value = mock_executor

        with patch("holebridge.core.processor.as_completed") as mock_as_completed:
            mock_as_completed.return_value = [mock_future]

            processor = PolygonProcessor(settings)
            stats = processor.process(input_path, output_path, max_workers=1)

        assert stats.processed_count == 0
        assert stats.error_count == 1
        assert stats.errors == [("lot-1", "Test error")]

        # Failed polygons are left out of the output
        output = json.loads(output_path.read_text(encoding="utf-8"))
        assert output["polygons"] == []

    @patch("holebridge.core.processor.configure_logging")
    @patch("holebridge.core.processor.ProcessPoolExecutor")
    def test_process_reports_progress(
        self,
        mock_executor_class,
        mock_logging,
        settings: HolebridgeSettings,
        polygon_with_hole: Polygon,
        tmp_path: Path,
    ):
        """Test that the progress callback sees each completed polygon."""
        mock_logging.return_value = Mock()
        input_path = _write_document(tmp_path / "in.json", [polygon_with_hole])

        ring = Ring(points=[Point(0, 0), Point(0, 4), Point(4, 4)])
        mock_executor, mock_future = _mock_executor(
            {"ring": ring.to_dict(), "holes_eliminated": 1, "duration_ms": 1.0}
        )
        mock_executor_class.return_value = mock_executor
        callback = Mock()

        with patch("holebridge.core.processor.as_completed") as mock_as_completed:
            mock_as_completed.return_value = [mock_future]

            processor = PolygonProcessor(settings)
            processor.process(input_path, tmp_path / "out.json", progress_callback=callback)

        callback.assert_called_once_with(1, 1, "lot-1", True)

    @patch("holebridge.core.processor.configure_logging")
    def test_process_custom_output_path(
        self,
        mock_logging,
        settings: HolebridgeSettings,
        polygon_without_hole: Polygon,
        tmp_path: Path,
    ):
        """Test processing with a custom output path."""
        mock_logging.return_value = Mock()
        input_path = _write_document(tmp_path / "in.json", [polygon_without_hole])
        custom_output = tmp_path / "custom.json"

        processor = PolygonProcessor(settings)
        processor.process(input_path, output_path=custom_output)

        assert custom_output.exists()
        assert not (tmp_path / "in-simple.json").exists()

    @patch("holebridge.core.processor.configure_logging")
    def test_process_missing_input(self, mock_logging, settings: HolebridgeSettings, tmp_path):
        """Test that a missing document raises."""
        mock_logging.return_value = Mock()

        processor = PolygonProcessor(settings)
        with pytest.raises(FileNotFoundError):
            processor.process(tmp_path / "missing.json")
