"""Polygon representation.

This module defines the polygon domain model: one outer ring and any
number of hole rings, identified by a document-level id.
"""

from dataclasses import dataclass, field
from typing import Any

from holebridge.domain.ring import Ring


@dataclass
class Polygon:
    """A multiply-connected polygon.

    Designed for efficient serialization for parallel processing.

    Attributes:
        id: Identifier of the polygon within its document
        outer: Outer boundary ring
        holes: Inner boundary rings, disjoint from each other
    """

    id: str
    outer: Ring
    holes: list[Ring] = field(default_factory=list)

    def has_holes(self) -> bool:
        """Check if polygon has at least one hole."""
        return len(self.holes) > 0

    @property
    def hole_count(self) -> int:
        return len(self.holes)

    @property
    def vertex_count(self) -> int:
        """Total number of points across the outer ring and all holes."""
        return len(self.outer.points) + sum(len(h.points) for h in self.holes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the polygon
        """
        return {
            "id": self.id,
            "outer": self.outer.to_dict(),
            "holes": [h.to_dict() for h in self.holes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a polygon

        Returns:
            Polygon instance
        """
        return cls(
            id=data["id"],
            outer=Ring.from_dict(data["outer"]),
            holes=[Ring.from_dict(h) for h in data.get("holes", [])],
        )
