"""Core geometric types for ring representation.

This module defines the fundamental geometric types used throughout holebridge:
- Point: A 3D Cartesian point, compared by exact coordinates
- Ring: An ordered, cyclic sequence of points bounding a planar region
- WindingDirection: Enum for ring winding direction
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from fontTools.misc.vector import Vector


class WindingDirection(Enum):
    """Ring winding direction in a y-up frame.

    Hole elimination expects outer rings to wind clockwise and holes
    counter-clockwise; reflex classification is only meaningful for
    clockwise rings.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 3D Cartesian space.

    Immutable and hashable. Equality is exact coordinate equality; use
    ``holebridge.core.geometry.points_match`` for tolerant comparisons.

    Attributes:
        x: X coordinate
        y: Y coordinate
        z: Z coordinate, carried through but ignored by orientation tests
    """

    x: float
    y: float
    z: float = 0.0

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert to simple (x, y, z) tuple.

        Returns:
            Tuple of (x, y, z) coordinates
        """
        return (self.x, self.y, self.z)

    def to_vector(self) -> Vector:
        """Convert to a position vector supporting subtraction and dot products.

        Returns:
            fontTools Vector of (x, y, z)
        """
        return Vector(self.to_tuple())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x, y and z fields
        """
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x, y and optional z fields

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"], z=data.get("z", 0.0))

    @classmethod
    def from_sequence(cls, coords: "list[float] | tuple[float, ...]") -> "Point":
        """Build a point from an [x, y] or [x, y, z] coordinate list.

        Raises:
            ValueError: If the sequence does not hold 2 or 3 numbers
        """
        if len(coords) == 2:
            return cls(float(coords[0]), float(coords[1]))
        if len(coords) == 3:
            return cls(float(coords[0]), float(coords[1]), float(coords[2]))
        raise ValueError(f"Expected 2 or 3 coordinates, got {len(coords)}")


@dataclass
class Ring:
    """A closed ring of points bounding a planar region.

    Consecutive points define edges, wrapping from the last point to the
    first. Rings are assumed simple. A ring may repeat its first point at
    the end (explicitly closed form, as KML and GeoJSON rings do); hole
    elimination handles both forms.

    Attributes:
        points: List of points forming the ring
    """

    points: list[Point]
    _cached_area: float | None = field(default=None, repr=False, init=False)

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        Positive area means counter-clockwise winding, negative clockwise.
        Result is cached.

        Returns:
            Signed area of the ring
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.points)
        if n < 3:
            self._cached_area = 0.0
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        self._cached_area = area / 2.0
        return self._cached_area

    @property
    def direction(self) -> WindingDirection | None:
        """Winding direction, or None for degenerate (zero-area) rings."""
        area = self.signed_area()
        if area > 0:
            return WindingDirection.COUNTER_CLOCKWISE
        if area < 0:
            return WindingDirection.CLOCKWISE
        return None

    def is_closed(self) -> bool:
        """Check whether the last point exactly repeats the first."""
        return len(self.points) > 1 and self.points[0] == self.points[-1]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the ring
        """
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ring":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a ring

        Returns:
            Ring instance
        """
        return cls(points=[Point.from_dict(p) for p in data["points"]])
