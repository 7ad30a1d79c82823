"""Core processing algorithms for holebridge.

This module contains the core algorithms for:

- Geometry primitives (containment, extremal vertices, reflex vertices, ray casting)
- Visibility resolution (finding the bridge vertex on the outer ring)
- Hole elimination (splicing holes into the outer ring)
- Document processing (parallel elimination over many polygons)

All services are designed to be:
- Stateless (safe for use in worker processes)
- Pure, except for the documented removal of one hole per elimination call

Key functions:
- point_in_triangle: Barycentric point-in-triangle test
- rightmost_vertex_index: Index of a ring's rightmost vertex
- rightmost_ring_index: Index of the ring holding the rightmost vertex
- reflex_vertices: Reflex vertices of a ring
- intersect_ray_with_ring: Nearest rightward crossing of a horizontal ray
- find_mutually_visible_vertex: Bridge vertex on the outer ring
- eliminate_hole: Splice the rightmost hole into the outer ring
- eliminate_all_holes: Splice all holes into the outer ring

Key classes:
- HoleEliminator: Eliminates the holes of Polygon models
- PolygonProcessor: Processes polygon documents in parallel
"""

from holebridge.core.elimination import (
    HoleEliminator,
    eliminate_all_holes,
    eliminate_hole,
    splice_hole,
)
from holebridge.core.geometry import (
    RayHit,
    close_ring,
    interior_wedge_contains,
    intersect_ray_with_ring,
    is_vertex,
    open_ring,
    point_in_triangle,
    points_match,
    reflex_vertices,
    rightmost_ring_index,
    rightmost_vertex_index,
    signed_area,
    winding_direction,
)
from holebridge.core.processor import PolygonProcessor, process_polygon
from holebridge.core.visibility import find_mutually_visible_vertex, resolve_bridge

__all__ = [
    # Elimination
    "HoleEliminator",
    # Processor classes
    "PolygonProcessor",
    # Geometry
    "RayHit",
    "close_ring",
    "eliminate_all_holes",
    "eliminate_hole",
    "find_mutually_visible_vertex",
    "interior_wedge_contains",
    "intersect_ray_with_ring",
    "is_vertex",
    "open_ring",
    "point_in_triangle",
    "points_match",
    "process_polygon",
    "reflex_vertices",
    "resolve_bridge",
    "rightmost_ring_index",
    "rightmost_vertex_index",
    "signed_area",
    "splice_hole",
    "winding_direction",
]
