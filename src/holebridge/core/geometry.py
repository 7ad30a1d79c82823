"""Geometric primitives for hole elimination.

This module provides the leaf operations the hole eliminator is built from:
- Point matching under a configurable tolerance
- Signed area and winding direction (shoelace formula)
- Point-in-triangle containment (barycentric technique)
- Rightmost vertex / rightmost ring selection
- Reflex vertex classification
- Horizontal ray / ring edge intersection

All functions are pure, stateless, and operate on plain point lists so they
can be used from worker processes.
"""

import math
from typing import NamedTuple

from fontTools.misc.vector import Vector

from holebridge.domain import Point, Ring, WindingDirection
from holebridge.exceptions import InvalidRingError, NoIntersectionError


class RayHit(NamedTuple):
    """Nearest rightward crossing of a horizontal ray with a ring.

    Attributes:
        point: Crossing point (x, query y, 0)
        edge: The two ring vertices bounding the crossed edge
    """

    point: Point
    edge: tuple[Point, Point]


def require_ring(points: list[Point], name: str = "ring") -> None:
    """Fail fast on rings that cannot bound a region.

    Raises:
        InvalidRingError: If the ring has fewer than 3 points
    """
    if len(points) < 3:
        raise InvalidRingError(f"{name} has {len(points)} points, need at least 3", len(points))


def points_match(a: Point, b: Point, tolerance: float = 0.0, planar: bool = False) -> bool:
    """Compare two points under a tolerance.

    With tolerance 0.0 this is exact coordinate equality. Otherwise every
    compared coordinate may differ by at most ``tolerance``.

    Args:
        a: First point
        b: Second point
        tolerance: Maximum per-coordinate difference
        planar: Compare x and y only, ignoring z

    Returns:
        True if the points match
    """
    if tolerance == 0.0:
        if planar:
            return a.x == b.x and a.y == b.y
        return a == b

    if abs(a.x - b.x) > tolerance or abs(a.y - b.y) > tolerance:
        return False
    return planar or abs(a.z - b.z) <= tolerance


def find_vertex(
    ring: list[Point], point: Point, tolerance: float = 0.0, planar: bool = False
) -> int | None:
    """Return the index of the first ring vertex matching ``point``, or None."""
    for i, vertex in enumerate(ring):
        if points_match(vertex, point, tolerance, planar):
            return i
    return None


def is_vertex(
    ring: list[Point], point: Point, tolerance: float = 0.0, planar: bool = False
) -> bool:
    """Check whether a point is a vertex of a ring.

    Examples:
        >>> square = [Point(0, 0), Point(0, 4), Point(4, 4), Point(4, 0)]
        >>> is_vertex(square, Point(4, 4))
        True
        >>> is_vertex(square, Point(4, 1))
        False
    """
    return find_vertex(ring, point, tolerance, planar) is not None


def close_ring(points: list[Point], tolerance: float = 0.0) -> list[Point]:
    """Return the ring in explicitly closed form.

    A ring whose last point already matches its first is returned as a copy;
    otherwise the first point is appended.
    """
    require_ring(points)
    if points_match(points[0], points[-1], tolerance):
        return list(points)
    return [*points, points[0]]


def open_ring(points: list[Point], tolerance: float = 0.0) -> list[Point]:
    """Return the ring in open form, without a repeated closing point.

    Examples:
        >>> open_ring([Point(0, 0), Point(0, 4), Point(4, 4), Point(0, 0)])
        [Point(x=0, y=0, z=0.0), Point(x=0, y=4, z=0.0), Point(x=4, y=4, z=0.0)]
    """
    if len(points) > 1 and points_match(points[0], points[-1], tolerance):
        return list(points[:-1])
    return list(points)


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a ring using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the ring

    Returns:
        Signed area in square units. Returns 0.0 for degenerate rings.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])  # CCW square
        1.0
        >>> signed_area([p1, p4, p3, p2])  # CW square
        -1.0
    """
    return Ring(points=list(points)).signed_area()


def winding_direction(points: list[Point]) -> WindingDirection | None:
    """Winding direction of a ring, or None if it has zero area."""
    return Ring(points=list(points)).direction


def point_in_triangle(a: Point, b: Point, c: Point, point: Point) -> bool:
    """Test whether a point lies inside triangle (a, b, c).

    Expresses ``point - a`` in the basis (c - a, b - a) and solves for the
    barycentric coordinates (u, v) with dot products. The point is inside iff
    u >= 0, v >= 0 and u + v < 1: the edges a-c and a-b are inclusive, the
    edge b-c is exclusive. Triangle orientation does not matter.

    A degenerate (zero-area) triangle has no solution and contains nothing.

    Args:
        a: First triangle vertex
        b: Second triangle vertex
        c: Third triangle vertex
        point: The point to test

    Returns:
        True if the point is contained
    """
    origin = a.to_vector()
    v0 = c.to_vector() - origin
    v1 = b.to_vector() - origin
    v2 = point.to_vector() - origin

    dot00 = v0.dot(v0)
    dot01 = v0.dot(v1)
    dot02 = v0.dot(v2)
    dot11 = v1.dot(v1)
    dot12 = v1.dot(v2)

    denominator = dot00 * dot11 - dot01 * dot01
    if denominator == 0.0 or not math.isfinite(denominator):
        return False

    inverse_denominator = 1.0 / denominator
    u = (dot11 * dot02 - dot01 * dot12) * inverse_denominator
    v = (dot00 * dot12 - dot01 * dot02) * inverse_denominator

    return u >= 0 and v >= 0 and u + v < 1


def rightmost_vertex_index(ring: list[Point]) -> int:
    """Index of the vertex with the greatest x coordinate.

    Ties keep the first occurrence.

    Raises:
        InvalidRingError: If the ring has fewer than 3 points
    """
    require_ring(ring)

    maximum_x = ring[0].x
    rightmost = 0
    for i, vertex in enumerate(ring):
        if vertex.x > maximum_x:
            maximum_x = vertex.x
            rightmost = i
    return rightmost


def rightmost_ring_index(rings: list[list[Point]]) -> int:
    """Index of the ring holding the overall rightmost vertex.

    Ties keep the first ring in iteration order.

    Raises:
        InvalidRingError: If ``rings`` is empty or any ring is too small
    """
    if not rings:
        raise InvalidRingError("cannot select the rightmost ring of an empty collection")

    for i, ring in enumerate(rings):
        require_ring(ring, name=f"ring {i}")

    rightmost_x = rings[0][0].x
    rightmost = 0
    for i, ring in enumerate(rings):
        maximum_x = max(vertex.x for vertex in ring)
        if maximum_x > rightmost_x:
            rightmost_x = maximum_x
            rightmost = i
    return rightmost


def reflex_vertices(ring: list[Point]) -> list[Point]:
    """Return the reflex vertices of a ring in traversal order.

    For each vertex p1 with neighbours p0 and p2, the signed angle from
    (p0 - p1) to (p2 - p1) is measured with atan2 against the in-plane
    perpendicular of (p0 - p1); a negative signed magnitude marks p1 as
    reflex.

    The test assumes a clockwise ring (y up). On a counter-clockwise ring it
    reports the convex vertices instead; the winding is not corrected here.

    Args:
        ring: Points of the ring

    Returns:
        List of reflex vertices
    """
    n = len(ring)
    reflex: list[Point] = []
    for i in range(n):
        p0 = ring[(i - 1 + n) % n].to_vector()
        p1 = ring[i].to_vector()
        p2 = ring[(i + 1) % n].to_vector()

        v0 = p0 - p1
        v1 = p2 - p1

        v0_perp = Vector((-v0[1], v0[0], 0.0))
        angle = math.atan2(v0_perp.dot(v1), v0.dot(v1))
        perp_dot_product = abs(v0) * abs(v1) * math.sin(angle)
        if perp_dot_product < 0:
            reflex.append(ring[i])
    return reflex


def intersect_ray_with_ring(point: Point, ring: list[Point], bounded: bool = False) -> RayHit:
    """Find the nearest ring edge crossed by a rightward horizontal ray.

    Casts ``point + t * (1, 0)`` for t >= 0 against every edge. Edges of zero
    slope (horizontal or zero-length) never qualify. An edge's crossing is
    taken on its supporting line; with ``bounded`` the crossing must also lie
    within the edge's y-span. The smallest ``x - point.x`` wins, ties keeping
    the first edge in ring order.

    Args:
        point: Ray origin, normally inside the ring
        ring: Points of the ring
        bounded: Only accept crossings that lie on the edge segment itself

    Returns:
        RayHit with the crossing point and the crossed edge

    Raises:
        NoIntersectionError: If no edge qualifies
    """
    n = len(ring)
    best: RayHit | None = None
    best_distance = math.inf

    for i in range(n):
        v1 = ring[i]
        v2 = ring[(i + 1) % n]

        dy = v2.y - v1.y
        if dy == 0.0:
            continue
        if bounded and not (min(v1.y, v2.y) <= point.y <= max(v1.y, v2.y)):
            continue

        if point.y == v1.y:
            x = v1.x
        elif point.y == v2.y:
            x = v2.x
        else:
            x = v1.x + (point.y - v1.y) * (v2.x - v1.x) / dy

        if x >= point.x and x - point.x < best_distance:
            best_distance = x - point.x
            best = RayHit(Point(x, point.y, 0.0), (v1, v2))

    if best is None:
        raise NoIntersectionError(point)
    return best


def angle_from_x_axis(origin: Point, target: Point) -> float:
    """Unsigned angle between the +x axis and the vector origin -> target.

    Returns NaN when origin and target coincide, so the result never wins a
    strict minimum comparison.
    """
    direction = target.to_vector() - origin.to_vector()
    length = abs(direction)
    if length == 0.0:
        return math.nan
    cosine = max(-1.0, min(1.0, direction[0] / length))
    return abs(math.acos(cosine))


def _counter_clockwise_sweep(start: Vector, end: Vector) -> float:
    """Counter-clockwise angle from ``start`` to ``end`` in [0, 2*pi)."""
    angle = math.atan2(start[0] * end[1] - start[1] * end[0], start.dot(end))
    return angle + 2.0 * math.pi if angle < 0 else angle


def interior_wedge_contains(
    previous: Point, vertex: Point, following: Point, target: Point
) -> bool:
    """Check whether ``target`` points into the interior corner of a clockwise ring.

    The interior of a clockwise ring (y up) lies to the right of each edge,
    so at ``vertex`` it is the counter-clockwise sweep from the direction of
    ``previous`` to the direction of ``following``. Both bounding directions
    are inclusive.

    Args:
        previous: Ring vertex before ``vertex``
        vertex: Corner being tested
        following: Ring vertex after ``vertex``
        target: Point whose direction from ``vertex`` is tested

    Returns:
        True if the direction to ``target`` lies within the interior corner

    Examples:
        >>> corner = (Point(4, 4), Point(4, 0), Point(0, 0))
        >>> interior_wedge_contains(*corner, Point(2, 1))
        True
        >>> interior_wedge_contains(*corner, Point(6, 1))
        False
    """
    origin = vertex.to_vector()
    incoming = previous.to_vector() - origin
    outgoing = following.to_vector() - origin
    direction = target.to_vector() - origin
    return _counter_clockwise_sweep(incoming, direction) <= _counter_clockwise_sweep(
        incoming, outgoing
    )
