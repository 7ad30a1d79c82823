"""Document reader for loading polygon documents.

This module provides the PolygonReader class for loading JSON polygon
documents and extracting polygons into domain models.
"""

import json
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from holebridge.domain import Polygon
from holebridge.exceptions import DocumentFormatError
from holebridge.io.converter import PolygonDocument, assign_polygon_ids, record_to_domain


class PolygonReader:
    """Loads polygon documents and extracts polygon data.

    A document is either an object with a "polygons" list or a bare list of
    polygon entries.

    Example:
        reader = PolygonReader(Path("parcels.json"))
        reader.load()
        for polygon in reader.iter_polygons():
            print(polygon.id, polygon.hole_count)
    """

    def __init__(self, document_path: Path) -> None:
        """Initialize the document reader.

        Args:
            document_path: Path to the JSON document
        """
        self._document_path = document_path
        self._polygons: list[Polygon] | None = None

    def load(self) -> None:
        """Load and validate the document.

        Raises:
            FileNotFoundError: If document file does not exist
            DocumentFormatError: If the content is not a valid polygon document
        """
        if not self._document_path.exists():
            raise FileNotFoundError(f"Document not found: {self._document_path}")

        try:
            raw = json.loads(self._document_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise DocumentFormatError(str(self._document_path), f"invalid JSON: {e}") from e

        if isinstance(raw, list):
            raw = {"polygons": raw}

        try:
            document = PolygonDocument.model_validate(raw)
        except ValidationError as e:
            raise DocumentFormatError(
                str(self._document_path), f"{e.error_count()} validation errors"
            ) from e

        ids = assign_polygon_ids(document.polygons)
        polygons = [
            record_to_domain(record, polygon_id)
            for record, polygon_id in zip(document.polygons, ids)
        ]

        seen: set[str] = set()
        for polygon in polygons:
            if polygon.id in seen:
                raise DocumentFormatError(
                    str(self._document_path), f"duplicate polygon id '{polygon.id}'"
                )
            seen.add(polygon.id)

        self._polygons = polygons

    @property
    def polygon_count(self) -> int:
        """Return number of polygons in the document.

        Raises:
            RuntimeError: If document has not been loaded yet
        """
        if self._polygons is None:
            raise RuntimeError("Document not loaded. Call load() first.")

        return len(self._polygons)

    @property
    def hole_count(self) -> int:
        """Return total number of holes across all polygons.

        Raises:
            RuntimeError: If document has not been loaded yet
        """
        if self._polygons is None:
            raise RuntimeError("Document not loaded. Call load() first.")

        return sum(p.hole_count for p in self._polygons)

    def iter_polygons(self) -> Iterator[Polygon]:
        """Iterate over all polygons in document order.

        Raises:
            RuntimeError: If document has not been loaded yet
        """
        if self._polygons is None:
            raise RuntimeError("Document not loaded. Call load() first.")

        yield from self._polygons

    def get_polygon(self, polygon_id: str) -> Polygon | None:
        """Get a specific polygon by id.

        Raises:
            RuntimeError: If document has not been loaded yet
        """
        if self._polygons is None:
            raise RuntimeError("Document not loaded. Call load() first.")

        for polygon in self._polygons:
            if polygon.id == polygon_id:
                return polygon
        return None

    def close(self) -> None:
        """Release loaded polygons."""
        self._polygons = None

    def __enter__(self) -> "PolygonReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
