"""Domain models for holebridge.

This module contains the core domain models representing points, rings,
polygons and bridges. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of document format details

Key classes:
- Point: A 3D Cartesian point
- Ring: A closed ring of points
- Polygon: An outer ring with holes
- Bridge: The seam splicing a hole into the outer ring
"""

from holebridge.domain.bridge import Bridge
from holebridge.domain.polygon import Polygon
from holebridge.domain.ring import Point, Ring, WindingDirection

__all__: list[str] = [
    # Enums
    "WindingDirection",
    # Core types
    "Point",
    "Ring",
    "Polygon",
    "Bridge",
]
