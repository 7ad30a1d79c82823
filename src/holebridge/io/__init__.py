"""Document I/O layer for holebridge.

This module handles reading polygon documents and writing simplified
rings. It provides a clean abstraction layer between JSON documents and
the domain models.

Key responsibilities:
- Load and validate polygon documents
- Convert document records to domain models
- Write flattened coordinate arrays with the simplified naming convention

Key classes:
- PolygonReader: Load documents and extract polygons
- PolygonWriter: Save simplified rings
"""

from holebridge.io.reader import PolygonReader
from holebridge.io.writer import PolygonWriter

__all__ = [
    "PolygonReader",
    "PolygonWriter",
]
