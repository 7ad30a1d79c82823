"""Bridge type connecting a hole to the outer ring.

A bridge is the seam along which one hole is spliced into the outer ring:
the segment from the hole's rightmost vertex to a mutually visible vertex
on the outer ring, traversed once in each direction.
"""

from dataclasses import dataclass

from holebridge.domain.ring import Point


@dataclass(frozen=True)
class Bridge:
    """Resolved bridge between a hole and the outer ring.

    Attributes:
        hole_index: Index of the bridged hole in the hole collection
        hole_vertex_index: Index of the hole's rightmost vertex
        hole_vertex: The hole's rightmost vertex (bridge start)
        outer_vertex: Mutually visible vertex on the outer ring (bridge end)
        ray_hit: Nearest rightward crossing of the horizontal ray
        blocking_count: Reflex vertices found inside the visibility triangle
    """

    hole_index: int
    hole_vertex_index: int
    hole_vertex: Point
    outer_vertex: Point
    ray_hit: Point
    blocking_count: int = 0
