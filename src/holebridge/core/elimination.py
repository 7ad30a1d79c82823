"""Hole elimination by bridge splicing.

This module turns a polygon with holes into a single simple ring. Each call
of ``eliminate_hole`` bridges the rightmost hole into the outer ring: the
outer ring is walked in order, and at the mutually visible vertex the walk
detours around the hole, starting and ending at the hole's rightmost vertex,
before returning to the same outer vertex.

Key functions:
- splice_hole: Build the merged ring for a resolved bridge
- eliminate_hole: Bridge the rightmost hole and remove it from the collection
- eliminate_all_holes: Repeat until no holes remain

Key classes:
- HoleEliminator: Eliminates the holes of Polygon models
"""

import logging

from holebridge.config import HolebridgeSettings, get_default_settings
from holebridge.core.geometry import (
    close_ring,
    interior_wedge_contains,
    open_ring,
    points_match,
    require_ring,
)
from holebridge.core.visibility import resolve_bridge
from holebridge.domain import Point, Polygon, Ring, WindingDirection
from holebridge.exceptions import BridgeError, GeometryError, PolygonProcessingError

logger = logging.getLogger(__name__)


def _walk_hole(closed_hole: list[Point], anchor: int) -> list[Point]:
    """Hole vertices from the anchor around and back to the anchor.

    ``closed_hole`` repeats its first point at the end. Index 0 is skipped
    so the closing point is emitted only once, unless the anchor is index 0
    itself, in which case the closing point is the return to the anchor.
    Either way no two consecutive emitted points are the same vertex.
    """
    n = len(closed_hole)
    if anchor != 0:
        walk: list[Point] = []
        for j in range(n + 1):
            index = (j + anchor) % n
            if index != 0:
                walk.append(closed_hole[index])
        return walk
    return list(closed_hole)


def _splice_position(
    outer: list[Point], anchor: Point, visible_vertex: Point, tolerance: float
) -> int | None:
    """Index of the outer occurrence of the visible vertex facing the anchor.

    Earlier splices repeat their bridge vertex, so the visible vertex may
    occur more than once. Each occurrence owns a different corner of the
    ring; only the one whose interior corner contains the anchor keeps the
    new bridge clear of the existing ones. Falls back to the first
    occurrence when no corner contains it.
    """
    positions = [
        i for i, vertex in enumerate(outer) if points_match(vertex, visible_vertex, tolerance)
    ]
    if len(positions) < 2:
        return positions[0] if positions else None

    n = len(outer)
    for i in positions:
        if interior_wedge_contains(outer[i - 1], outer[i], outer[(i + 1) % n], anchor):
            return i
    return positions[0]


def splice_hole(
    outer: list[Point],
    hole: list[Point],
    hole_vertex_index: int,
    visible_vertex: Point,
    tolerance: float = 0.0,
) -> list[Point]:
    """Splice a hole into the outer ring at the visible vertex.

    The result has ``len(outer) + len(closed hole) + 1`` points: the visible
    vertex appears on both sides of the detour and the hole's anchor vertex
    opens and closes it. When the visible vertex occurs more than once, the
    occurrence whose interior corner faces the anchor is used.

    Args:
        outer: Points of the outer ring, clockwise
        hole: Points of the hole, open or explicitly closed
        hole_vertex_index: Index of the hole's bridge anchor (rightmost vertex)
        visible_vertex: Mutually visible vertex on the outer ring
        tolerance: Tolerance for locating the visible vertex in the outer ring

    Returns:
        New list of points; ``outer`` and ``hole`` are not modified

    Raises:
        BridgeError: If the visible vertex is not a vertex of the outer ring
    """
    position = _splice_position(outer, hole[hole_vertex_index], visible_vertex, tolerance)
    if position is None:
        raise BridgeError(
            f"visible vertex ({visible_vertex.x}, {visible_vertex.y}) is not on the outer ring"
        )

    detour = _walk_hole(close_ring(hole, tolerance), hole_vertex_index)

    merged: list[Point] = []
    for i, vertex in enumerate(outer):
        if i == position:
            merged.append(vertex)
            merged.extend(detour)
        merged.append(vertex)
    return merged


def eliminate_hole(
    outer: list[Point],
    holes: list[list[Point]],
    settings: HolebridgeSettings | None = None,
) -> list[Point]:
    """Bridge the rightmost hole into the outer ring.

    Removes the bridged hole from ``holes``; nothing else is mutated. Rings
    given in explicitly closed form are bridged as open rings, so the result
    is always open.

    Args:
        outer: Points of the outer ring
        holes: Mutable collection of hole rings, must not be empty
        settings: Tolerances and ray target (defaults if None)

    Returns:
        New outer ring with the hole spliced in

    Raises:
        InvalidRingError: If a ring is too small or ``holes`` is empty
        NoIntersectionError: If no bridge ray crossing exists
        BridgeError: If the visible vertex is not on the outer ring
    """
    settings = settings or get_default_settings()
    tolerance = settings.geometry.vertex_tolerance

    outer = open_ring(outer, tolerance)
    require_ring(outer, name="outer ring")
    open_holes = [open_ring(hole, tolerance) for hole in holes]
    for i, hole in enumerate(open_holes):
        require_ring(hole, name=f"hole {i}")

    bridge = resolve_bridge(outer, open_holes, settings)
    hole = open_holes[bridge.hole_index]

    merged = splice_hole(outer, hole, bridge.hole_vertex_index, bridge.outer_vertex, tolerance)
    del holes[bridge.hole_index]

    logger.debug(
        "Eliminated hole %d: %d outer + %d hole points -> %d points, %d holes left",
        bridge.hole_index, len(outer), len(hole), len(merged), len(holes),
    )
    return merged


def eliminate_all_holes(
    outer: list[Point],
    holes: list[list[Point]],
    settings: HolebridgeSettings | None = None,
) -> list[Point]:
    """Eliminate every hole, rightmost first.

    Equivalent to calling ``eliminate_hole`` once per hole, feeding each
    result back in as the outer ring. Works on a copy of ``holes``.

    Args:
        outer: Points of the outer ring
        holes: Hole rings
        settings: Tolerances and ray target (defaults if None)

    Returns:
        Simple ring without holes; a copy of ``outer`` when there are none
    """
    remaining = [list(hole) for hole in holes]
    ring = list(outer)
    for _ in range(len(remaining)):
        ring = eliminate_hole(ring, remaining, settings)
    return ring


class HoleEliminator:
    """Eliminates the holes of polygon models.

    Warns about rings that break the winding contract (outer clockwise,
    holes counter-clockwise) but does not reorient them.
    """

    def __init__(self, settings: HolebridgeSettings | None = None) -> None:
        """Initialize hole eliminator with settings."""
        self.settings = settings or get_default_settings()

    def check_winding(self, polygon: Polygon) -> list[str]:
        """List winding contract violations of a polygon."""
        problems: list[str] = []
        if polygon.outer.direction != WindingDirection.CLOCKWISE:
            problems.append("outer ring is not clockwise")
        for i, hole in enumerate(polygon.holes):
            if hole.direction != WindingDirection.COUNTER_CLOCKWISE:
                problems.append(f"hole {i} is not counter-clockwise")
        return problems

    def eliminate(self, polygon: Polygon) -> Ring:
        """Eliminate all holes of a polygon.

        Args:
            polygon: Polygon to simplify

        Returns:
            Hole-free ring tracing the same region

        Raises:
            PolygonProcessingError: If any hole cannot be bridged
        """
        for problem in self.check_winding(polygon):
            logger.warning("Polygon %s: %s", polygon.id, problem)

        try:
            points = eliminate_all_holes(
                polygon.outer.points,
                [hole.points for hole in polygon.holes],
                self.settings,
            )
        except GeometryError as e:
            raise PolygonProcessingError(polygon.id, str(e)) from e
        return Ring(points=points)
