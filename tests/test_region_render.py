"""Unit tests for region_render module."""

import pytest
import numpy as np
from matplotlib.figure import Figure
from matplotlib.path import Path as MplPath

from closed_regions import Ring, Region, find_closed_regions
from loop_geometry import signed_area
from region_render import (
    path_from_rings,
    project_points,
    region_patch,
    region_path_data,
    render_regions,
)


def square_region():
    boundary = Ring(["a", "b", "c", "d"], [(0, 0), (100, 0), (100, 100), (0, 100)], 10000.0)
    hole = Ring(["e", "f", "g", "h"], [(25, 25), (75, 25), (75, 75), (25, 75)], 2500.0)
    return Region(boundary=boundary, holes=[hole], net_area=7500.0)


class TestProjection:
    """Tests for project_points."""

    def test_scales_to_viewport(self):
        pts = project_points([(5, 10), (10, 20)], image_size=(10, 20), viewport=(100, 100))
        np.testing.assert_allclose(pts, [[50, 50], [100, 100]])

    def test_unknown_image_size(self):
        pts = project_points([(5, 10)], image_size=(0, 20), viewport=(100, 100))
        np.testing.assert_allclose(pts, [[0, 0]])

    def test_empty(self):
        assert project_points([], image_size=(10, 10), viewport=(10, 10)).shape == (0, 2)


class TestPathData:
    """Tests for SVG path data."""

    def test_single_ring(self):
        assert path_from_rings([[(0, 0), (10, 0), (5, 10)]]) == "M 0 0 L 10 0 L 5 10 Z"

    def test_fractional_coordinates(self):
        assert path_from_rings([[(0.5, 0), (10, 0), (5, 2.25)]]) == "M 0.5 0 L 10 0 L 5 2.25 Z"

    def test_short_rings_skipped(self):
        rings = [[(0, 0), (1, 1)], [(0, 0), (10, 0), (5, 10)]]
        assert path_from_rings(rings) == "M 0 0 L 10 0 L 5 10 Z"

    def test_region_with_hole(self):
        data = region_path_data(square_region(), image_size=(100, 100), viewport=(200, 200))
        assert data.count("M ") == 2
        assert data.count("Z") == 2
        assert data.startswith("M 0 0 L 200 0 L 200 200 L 0 200 Z M 50 50")

    def test_degenerate_boundary(self):
        region = Region(boundary=Ring(["a", "b"], [(0, 0), (1, 1)], 0.0))
        assert region_path_data(region, (10, 10), (10, 10)) == ""


class TestPatches:
    """Tests for matplotlib patches and figures."""

    def test_patch_codes(self):
        patch = region_patch(square_region())
        codes = list(patch.get_path().codes)
        assert codes.count(MplPath.MOVETO) == 2
        assert codes.count(MplPath.CLOSEPOLY) == 2
        assert len(codes) == 10

    def test_opposite_winding(self):
        region = square_region()
        region.boundary.points = list(reversed(region.boundary.points))
        vertices = region_patch(region).get_path().vertices
        boundary = [tuple(p) for p in vertices[:4]]
        hole = [tuple(p) for p in vertices[5:9]]
        assert signed_area(boundary) > 0
        assert signed_area(hole) < 0

    def test_degenerate_patch(self):
        region = Region(boundary=Ring(["a", "b"], [(0, 0), (1, 1)], 0.0))
        assert region_patch(region) is None

    def test_render_saves_png(self, tmp_path, square_with_hole):
        vertices, edges = square_with_hole
        regions = find_closed_regions(vertices, edges)
        output = tmp_path / "regions.png"
        fig = render_regions(regions, vertices, edges, image_size=(120, 120), output=str(output), title="Test")
        assert isinstance(fig, Figure)
        assert output.exists() and output.stat().st_size > 0
        ax = fig.axes[0]
        assert len(ax.patches) == 1
        assert ax.get_ylim() == pytest.approx((120, 0))

    def test_render_without_size(self, triangle):
        vertices, edges = triangle
        fig = render_regions(find_closed_regions(vertices, edges), vertices, edges)
        ax = fig.axes[0]
        low, high = ax.get_ylim()
        assert low > high
