"""Tests for mutually visible vertex resolution."""

import pytest

from holebridge.config import BridgeConfig, GeometryConfig, HolebridgeSettings, RayTarget
from holebridge.core.visibility import find_mutually_visible_vertex, resolve_bridge
from holebridge.domain import Point
from holebridge.exceptions import InvalidRingError


@pytest.fixture
def square_cw() -> list[Point]:
    """4x4 square, clockwise in a y-up frame."""
    return [Point(0, 0), Point(0, 4), Point(4, 4), Point(4, 0)]


@pytest.fixture
def square_hole() -> list[Point]:
    """Unit square hole, counter-clockwise."""
    return [Point(1, 1), Point(2, 1), Point(2, 2), Point(1, 2)]


class TestResolveBridge:
    """Tests for resolve_bridge."""

    def test_unobstructed_hit_uses_edge_endpoint(
        self, square_cw: list[Point], square_hole: list[Point]
    ) -> None:
        """Test that the crossed edge's endpoint is visible when nothing blocks it."""
        bridge = resolve_bridge(square_cw, [square_hole])

        assert bridge.hole_index == 0
        assert bridge.hole_vertex_index == 1
        assert bridge.hole_vertex == Point(2, 1)
        assert bridge.ray_hit == Point(4, 1)
        # Equal x on both endpoints picks the second one
        assert bridge.outer_vertex == Point(4, 0)
        assert bridge.blocking_count == 0

    def test_ray_hitting_outer_vertex(self) -> None:
        """Test that a ray landing exactly on an outer vertex returns it."""
        diamond = [Point(0, 2), Point(2, 4), Point(4, 2), Point(2, 0)]
        hole = [Point(1, 1.5), Point(3, 2), Point(1, 2.5)]

        bridge = resolve_bridge(diamond, [hole])

        assert bridge.outer_vertex == Point(4, 2)
        assert bridge.ray_hit == Point(4, 2)

    def test_bridge_tolerance_snaps_to_vertex(self) -> None:
        """Test that a near-miss ray hit snaps to an outer vertex within tolerance."""
        diamond = [Point(0, 2), Point(2, 4), Point(4, 2), Point(2, 0)]
        hole = [Point(1, 1.5), Point(3, 2.01), Point(1, 2.5)]
        settings = HolebridgeSettings(geometry=GeometryConfig(bridge_tolerance=0.05))

        bridge = resolve_bridge(diamond, [hole], settings)

        assert bridge.outer_vertex == Point(4, 2)

    def test_reflex_vertex_blocks_edge_endpoint(self) -> None:
        """Test that a reflex vertex inside the search triangle wins."""
        outer = [
            Point(0, 0),
            Point(0, 10),
            Point(6, 10),
            Point(8, 7),
            Point(9, 10),
            Point(12, 10),
            Point(10, 0),
        ]
        hole = [Point(2, 4), Point(4, 5), Point(2, 6)]

        bridge = resolve_bridge(outer, [hole])

        assert bridge.ray_hit.x == pytest.approx(11.0)
        assert bridge.outer_vertex == Point(8, 7)
        assert bridge.blocking_count == 1

    def test_picks_rightmost_hole(self) -> None:
        """Test that the hole with the greatest x is bridged."""
        outer = [Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0)]
        left = [Point(1, 1), Point(3, 1), Point(3, 3), Point(1, 3)]
        right = [Point(6, 6), Point(8, 6), Point(8, 8), Point(6, 8)]

        bridge = resolve_bridge(outer, [left, right])

        assert bridge.hole_index == 1
        assert bridge.hole_vertex == Point(8, 6)

    def test_empty_holes(self, square_cw: list[Point]) -> None:
        """Test that an empty hole collection is rejected."""
        with pytest.raises(InvalidRingError):
            resolve_bridge(square_cw, [])

    def test_small_outer_ring(self, square_hole: list[Point]) -> None:
        """Test that a degenerate outer ring is rejected."""
        with pytest.raises(InvalidRingError):
            resolve_bridge([Point(0, 0), Point(5, 5)], [square_hole])

    def test_hole_ray_target(self, square_cw: list[Point], square_hole: list[Point]) -> None:
        """Test that casting against the hole lands on the hole itself."""
        settings = HolebridgeSettings(bridge=BridgeConfig(ray_target=RayTarget.HOLE))

        bridge = resolve_bridge(square_cw, [square_hole], settings)

        assert bridge.ray_hit == Point(2, 1)
        assert bridge.outer_vertex == Point(2, 2)


class TestFindMutuallyVisibleVertex:
    """Tests for find_mutually_visible_vertex."""

    def test_returns_outer_vertex(
        self, square_cw: list[Point], square_hole: list[Point]
    ) -> None:
        """Test that the visible vertex is the bridge's outer end."""
        assert find_mutually_visible_vertex(square_cw, [square_hole]) == Point(4, 0)

    def test_does_not_mutate_inputs(
        self, square_cw: list[Point], square_hole: list[Point]
    ) -> None:
        """Test that the search leaves its inputs alone."""
        holes = [square_hole]
        find_mutually_visible_vertex(square_cw, holes)
        assert len(holes) == 1
        assert len(square_cw) == 4
