"""Mutually visible vertex resolution.

Given an outer ring and its holes, this module finds the vertex on the outer
ring that can be joined to the rightmost vertex of the rightmost hole by a
segment that crosses no boundary. That segment becomes the bridge along
which the hole is spliced into the outer ring.

The search follows the classic rightmost-vertex construction:

1. M is the rightmost vertex of the rightmost hole.
2. A horizontal ray from M hits the nearest edge to the right at I.
3. If I is an outer vertex, it is visible.
4. Otherwise P, the edge endpoint with the greater x, is visible unless a
   reflex vertex of the outer ring lies inside triangle (M, I, P). In that
   case the blocking reflex vertex closest in angle to the ray wins.
"""

import logging
import math

from holebridge.config import HolebridgeSettings, RayTarget, get_default_settings
from holebridge.core.geometry import (
    angle_from_x_axis,
    find_vertex,
    intersect_ray_with_ring,
    point_in_triangle,
    points_match,
    reflex_vertices,
    require_ring,
    rightmost_ring_index,
    rightmost_vertex_index,
)
from holebridge.domain import Bridge, Point

logger = logging.getLogger(__name__)


def resolve_bridge(
    outer: list[Point],
    holes: list[list[Point]],
    settings: HolebridgeSettings | None = None,
) -> Bridge:
    """Resolve the bridge for the rightmost hole.

    Args:
        outer: Points of the outer ring
        holes: Hole rings; the rightmost one is bridged
        settings: Tolerances and ray target (defaults if None)

    Returns:
        Bridge from the hole's rightmost vertex to the visible outer vertex

    Raises:
        InvalidRingError: If a ring is too small or ``holes`` is empty
        NoIntersectionError: If the ray from the hole crosses no edge
    """
    settings = settings or get_default_settings()
    tolerance = settings.geometry.vertex_tolerance
    require_ring(outer, name="outer ring")

    hole_index = rightmost_ring_index(holes)
    hole = holes[hole_index]
    hole_vertex_index = rightmost_vertex_index(hole)
    m = hole[hole_vertex_index]

    if settings.bridge.ray_target == RayTarget.OUTER:
        hit = intersect_ray_with_ring(m, outer, bounded=True)
    else:
        hit = intersect_ray_with_ring(m, hole)

    logger.debug(
        "Ray from hole %d vertex %d at (%s, %s) hits (%s, %s)",
        hole_index, hole_vertex_index, m.x, m.y, hit.point.x, hit.point.y,
    )

    outer_index = find_vertex(
        outer, hit.point, settings.geometry.bridge_tolerance, planar=True
    )
    if outer_index is not None:
        return Bridge(
            hole_index=hole_index,
            hole_vertex_index=hole_vertex_index,
            hole_vertex=m,
            outer_vertex=outer[outer_index],
            ray_hit=hit.point,
        )

    e1, e2 = hit.edge
    p = e1 if e1.x > e2.x else e2

    candidates = [
        vertex for vertex in reflex_vertices(outer)
        if not points_match(vertex, p, tolerance)
    ]
    blocking = [
        vertex for vertex in candidates
        if point_in_triangle(m, hit.point, p, vertex)
    ]

    visible = p
    if blocking:
        min_angle = math.pi
        for vertex in blocking:
            angle = angle_from_x_axis(m, vertex)
            if angle < min_angle:
                min_angle = angle
                visible = vertex

    logger.debug(
        "Visible vertex (%s, %s) with %d blocking reflex vertices",
        visible.x, visible.y, len(blocking),
    )

    return Bridge(
        hole_index=hole_index,
        hole_vertex_index=hole_vertex_index,
        hole_vertex=m,
        outer_vertex=visible,
        ray_hit=hit.point,
        blocking_count=len(blocking),
    )


def find_mutually_visible_vertex(
    outer: list[Point],
    holes: list[list[Point]],
    settings: HolebridgeSettings | None = None,
) -> Point:
    """Point on the outer ring visible from the rightmost hole's rightmost vertex.

    Args:
        outer: Points of the outer ring
        holes: Hole rings
        settings: Tolerances and ray target (defaults if None)

    Returns:
        The mutually visible vertex
    """
    return resolve_bridge(outer, holes, settings).outer_vertex
