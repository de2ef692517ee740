"""Unit tests for loop_geometry module."""

import pytest
import math

from loop_geometry import (
    BoundingBox,
    bounding_box,
    ensure_ccw,
    ensure_cw,
    point_in_polygon,
    point_near_boundary,
    point_to_segment_distance,
    polygon_area,
    polygon_contains_polygon,
    signed_area,
)


SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


class TestArea:
    """Tests for shoelace area."""

    def test_signed_area_ccw(self):
        """CCW polygon should have positive area."""
        assert signed_area(SQUARE) == pytest.approx(100.0)

    def test_signed_area_cw(self):
        """CW polygon should have negative area."""
        assert signed_area(list(reversed(SQUARE))) == pytest.approx(-100.0)

    def test_polygon_area_is_unsigned(self):
        assert polygon_area(list(reversed(SQUARE))) == pytest.approx(100.0)

    def test_triangle(self):
        assert polygon_area([(0, 0), (10, 0), (5, 10)]) == pytest.approx(50.0)

    def test_degenerate(self):
        """Fewer than 3 points has zero area."""
        assert signed_area([]) == 0.0
        assert signed_area([(0, 0), (5, 5)]) == 0.0

    def test_collinear(self):
        assert polygon_area([(0, 0), (5, 0), (10, 0)]) == pytest.approx(0.0)

    def test_negative_coordinates(self):
        square = [(-5, -5), (5, -5), (5, 5), (-5, 5)]
        assert polygon_area(square) == pytest.approx(100.0)

    def test_winding_helpers(self):
        assert signed_area(ensure_ccw(list(reversed(SQUARE)))) > 0
        assert signed_area(ensure_cw(SQUARE)) < 0


class TestSegmentDistance:
    """Tests for point_to_segment_distance."""

    def test_perpendicular(self):
        assert point_to_segment_distance((5, 3), (0, 0), (10, 0)) == pytest.approx(3.0)

    def test_clamped_to_start(self):
        assert point_to_segment_distance((-3, 4), (0, 0), (10, 0)) == pytest.approx(5.0)

    def test_clamped_to_end(self):
        assert point_to_segment_distance((13, 4), (0, 0), (10, 0)) == pytest.approx(5.0)

    def test_on_segment(self):
        assert point_to_segment_distance((4, 0), (0, 0), (10, 0)) == pytest.approx(0.0)

    def test_zero_length_segment(self):
        assert point_to_segment_distance((3, 4), (0, 0), (0, 0)) == pytest.approx(5.0)

    def test_diagonal(self):
        d = point_to_segment_distance((0, 10), (0, 0), (10, 10))
        assert d == pytest.approx(10 / math.sqrt(2))


class TestPointInPolygon:
    """Tests for tolerant point-in-polygon."""

    def test_inside(self):
        assert point_in_polygon((5, 5), SQUARE) is True

    def test_outside(self):
        assert point_in_polygon((15, 5), SQUARE) is False

    def test_near_edge_inside_band(self):
        """A point just outside an edge counts as inside within tolerance."""
        assert point_in_polygon((15, 5), SQUARE, tolerance=8) is True

    def test_beyond_band(self):
        assert point_in_polygon((19, 5), SQUARE, tolerance=8) is False

    def test_band_is_inclusive(self):
        assert point_in_polygon((18, 5), SQUARE, tolerance=8) is True

    def test_corner_band_is_round(self):
        """Distance to a corner is Euclidean, not per axis."""
        assert point_in_polygon((16, 16), SQUARE, tolerance=8) is False
        assert point_in_polygon((15, 15), SQUARE, tolerance=8) is True

    def test_vertex_exactly(self):
        assert point_in_polygon((0, 0), SQUARE, tolerance=0) is True

    def test_degenerate_polygon(self):
        assert point_in_polygon((0, 0), [(0, 0), (1, 1)], tolerance=8) is False

    def test_concave(self):
        """Ray casting handles a notch in a U shape."""
        u_shape = [(0, 0), (30, 0), (30, 30), (20, 30), (20, 10), (10, 10), (10, 30), (0, 30)]
        assert point_in_polygon((5, 20), u_shape) is True
        assert point_in_polygon((15, 20), u_shape) is False
        assert point_in_polygon((25, 20), u_shape) is True

    def test_near_boundary_helper(self):
        assert point_near_boundary((5, 11), SQUARE, 1.0) is True
        assert point_near_boundary((5, 5), SQUARE, 1.0) is False

    def test_polygon_contains_polygon(self):
        inner = [(2, 2), (8, 2), (8, 8)]
        assert polygon_contains_polygon(SQUARE, inner) is True
        assert polygon_contains_polygon(SQUARE, inner + [(20, 20)]) is False


class TestBoundingBox:
    """Tests for bounding boxes."""

    def test_bounds(self):
        box = bounding_box([(1, 5), (-2, 3), (4, -1)])
        assert (box.min_x, box.min_y, box.max_x, box.max_y) == (-2, -1, 4, 5)

    def test_empty(self):
        assert bounding_box([]) == BoundingBox(0, 0, 0, 0)

    def test_contains_box(self):
        outer = BoundingBox(0, 0, 10, 10)
        assert outer.contains_box(BoundingBox(2, 2, 8, 8)) is True
        assert outer.contains_box(BoundingBox(2, 2, 12, 8)) is False
        assert outer.contains_box(outer) is True

    def test_expand(self):
        box = BoundingBox(0, 0, 10, 10).expand(3)
        assert box.contains_box(BoundingBox(-3, -3, 13, 13)) is True
