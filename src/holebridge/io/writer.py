"""Document writer for saving simplified polygons.

This module provides the PolygonWriter class for writing hole-free rings
as flat coordinate arrays.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from holebridge import __version__
from holebridge.domain import Ring
from holebridge.exceptions import DocumentSaveError
from holebridge.io.converter import ring_to_packet


class PolygonWriter:
    """Writes simplified polygons to a JSON document.

    Entries are written in the order they were added.

    Example:
        writer = PolygonWriter(Path("parcels-simple.json"))
        writer.add_ring("lot-7", ring)
        writer.save()
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the document writer.

        Args:
            output_path: Path where the document will be saved
        """
        self._output_path = output_path
        self._packets: list[dict[str, Any]] = []

    def add_ring(self, polygon_id: str, ring: Ring) -> None:
        """Queue a simplified ring for output.

        Raises:
            ValueError: If a ring with the same id was already added
        """
        if any(packet["id"] == polygon_id for packet in self._packets):
            raise ValueError(f"Polygon '{polygon_id}' already added")

        self._packets.append(ring_to_packet(polygon_id, ring))

    @property
    def packet_count(self) -> int:
        return len(self._packets)

    def to_document(self) -> dict[str, Any]:
        """Build the output document."""
        return {
            "generator": f"holebridge {__version__}",
            "created": datetime.now().strftime("%Y-%m-%dT%H:%M:%S"),
            "polygons": list(self._packets),
        }

    def save(self) -> None:
        """Save the document to the output path.

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        try:
            self._output_path.write_text(
                json.dumps(self.to_document(), indent=2), encoding="utf-8"
            )
        except OSError as e:
            raise DocumentSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_output_path(input_path: Path) -> Path:
        """Generate output path with the simplified naming convention.

        Converts: parcels.json -> parcels-simple.json

        Args:
            input_path: Original document path

        Returns:
            Path with -simple suffix before extension
        """
        return input_path.parent / f"{input_path.stem}-simple{input_path.suffix}"
