"""
Rendering of closed regions.

Projects ring points from image pixels into a viewport and draws each
region as one compound path: the boundary ring followed by its holes.
Produces SVG path data for the editor canvas and matplotlib patches for
previews and exported images.
"""

from typing import Optional

import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch
from matplotlib.path import Path as MplPath

from closed_regions import Region
from loop_geometry import ensure_ccw, ensure_cw
from topology import Vertex, Edge


Size = tuple[float, float]


def project_points(points, image_size: Size, viewport: Size) -> np.ndarray:
    """
    Scale image pixel coordinates into viewport coordinates.

    Returns:
        (N, 2) array. All zeros when the image size is unknown (a zero
        component).
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    image = np.asarray(image_size, dtype=float)
    if not image[0] or not image[1]:
        return np.zeros_like(pts)
    return pts * (np.asarray(viewport, dtype=float) / image)


def _fmt(value) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def path_from_rings(rings) -> str:
    """
    SVG path data for a list of rings.

    Each ring with at least 3 points becomes 'M x y L x y ... Z'; shorter
    rings are skipped.
    """
    commands = []
    for ring in rings:
        if len(ring) < 3:
            continue
        first, rest = ring[0], ring[1:]
        parts = [f"M {_fmt(first[0])} {_fmt(first[1])}"]
        parts.extend(f"L {_fmt(x)} {_fmt(y)}" for x, y in rest)
        parts.append("Z")
        commands.append(" ".join(parts))
    return " ".join(commands)


def region_path_data(region: Region, image_size: Size, viewport: Size) -> str:
    """
    Projected SVG path data for a region, meant for an even-odd fill.

    Returns an empty string when the boundary has fewer than 3 points.
    """
    boundary = project_points(region.boundary.points, image_size, viewport)
    if len(boundary) < 3:
        return ""
    holes = [project_points(h.points, image_size, viewport) for h in region.holes]
    holes = [h for h in holes if len(h) >= 3]
    return path_from_rings([boundary] + holes)


def region_patch(region: Region, **patch_kwargs) -> Optional[PathPatch]:
    """
    Matplotlib patch for a region in image coordinates.

    The boundary is wound counter-clockwise and holes clockwise so the
    result fills the same under even-odd and non-zero rules.
    """
    if len(region.boundary.points) < 3:
        return None

    rings = [ensure_ccw(region.boundary.points)]
    rings.extend(ensure_cw(h.points) for h in region.holes if len(h.points) >= 3)

    vertices = []
    codes = []
    for ring in rings:
        vertices.extend(ring)
        vertices.append(ring[0])
        codes.append(MplPath.MOVETO)
        codes.extend([MplPath.LINETO] * (len(ring) - 1))
        codes.append(MplPath.CLOSEPOLY)

    path = MplPath(np.asarray(vertices, dtype=float), codes)
    return PathPatch(path, **patch_kwargs)


def render_regions(
    regions: list[Region],
    vertices: list[Vertex],
    edges: list[Edge],
    image_size: Size = (0, 0),
    output: Optional[str] = None,
    title: Optional[str] = None
) -> Figure:
    """
    Draw regions, edges and vertices in image coordinates (y axis down).

    Args:
        regions: Output of find_closed_regions
        vertices: Topology vertices
        edges: Topology edges (dangling ones are skipped)
        image_size: Source image (width, height); fixes the axis limits when known
        output: If given, save the figure to this path
        title: Optional axis title

    Returns:
        The matplotlib figure.
    """
    fig = Figure(figsize=(8, 8))
    ax = fig.add_subplot(1, 1, 1)

    colors = ['tab:blue', 'tab:orange', 'tab:green', 'tab:red', 'tab:purple', 'tab:cyan']
    for i, region in enumerate(regions):
        patch = region_patch(
            region,
            facecolor=colors[i % len(colors)],
            alpha=0.25,
            edgecolor=colors[i % len(colors)],
            linewidth=1,
        )
        if patch is not None:
            ax.add_patch(patch)

    positions = {v.id: v.position for v in vertices}
    for edge in edges:
        if edge.source not in positions or edge.target not in positions:
            continue
        (x1, y1), (x2, y2) = positions[edge.source], positions[edge.target]
        ax.plot([x1, x2], [y1, y2], color='black', linewidth=1)

    if positions:
        pts = np.asarray(list(positions.values()), dtype=float)
        ax.scatter(pts[:, 0], pts[:, 1], s=12, color='black', zorder=3)

    if image_size[0] and image_size[1]:
        ax.set_xlim(0, image_size[0])
        ax.set_ylim(image_size[1], 0)
    else:
        ax.autoscale_view()
        ax.invert_yaxis()
    ax.set_aspect('equal')
    if title:
        ax.set_title(title)

    if output:
        fig.savefig(output, dpi=150)

    return fig
