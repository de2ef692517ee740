"""
Loop Geometry Module

Polygon primitives used to measure and nest closed loops of a drawn
topology graph: shoelace area, point-to-segment distance, point-in-polygon
with an edge tolerance band, and axis-aligned bounding boxes.

Drawn polygons carry pixel-level jitter, so containment treats any point
within a tolerance of an edge as inside.
"""

from __future__ import annotations
from dataclasses import dataclass
import math


# Type aliases
Point = tuple[float, float]
Polygon = list[Point]

DEFAULT_EDGE_TOLERANCE = 8.0


# =============================================================================
# Area
# =============================================================================

def signed_area(polygon: Polygon) -> float:
    """
    Calculate signed area of polygon using shoelace formula.

    Returns:
        Positive for CCW winding, negative for CW winding (y axis up).
    """
    n = len(polygon)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += polygon[i][0] * polygon[j][1]
        area -= polygon[j][0] * polygon[i][1]
    return area / 2.0


def polygon_area(polygon: Polygon) -> float:
    """Unsigned polygon area."""
    return abs(signed_area(polygon))


def ensure_ccw(polygon: Polygon) -> Polygon:
    """Ensure polygon has counter-clockwise winding order."""
    if signed_area(polygon) < 0:
        return list(reversed(polygon))
    return list(polygon)


def ensure_cw(polygon: Polygon) -> Polygon:
    """Ensure polygon has clockwise winding order."""
    if signed_area(polygon) > 0:
        return list(reversed(polygon))
    return list(polygon)


# =============================================================================
# Containment
# =============================================================================

def point_to_segment_distance(point: Point, start: Point, end: Point) -> float:
    """
    Euclidean distance from point to the closed segment start-end.

    The projection parameter is clamped to [0, 1]; a zero-length segment
    measures the distance to its start point.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if dx == 0 and dy == 0:
        return math.hypot(point[0] - start[0], point[1] - start[1])

    t = ((point[0] - start[0]) * dx + (point[1] - start[1]) * dy) / (dx * dx + dy * dy)
    t = max(0.0, min(1.0, t))
    closest_x = start[0] + t * dx
    closest_y = start[1] + t * dy
    return math.hypot(point[0] - closest_x, point[1] - closest_y)


def point_near_boundary(point: Point, polygon: Polygon, tolerance: float) -> bool:
    """Check if point lies within tolerance of any polygon edge."""
    n = len(polygon)
    for i in range(n):
        if point_to_segment_distance(point, polygon[i], polygon[(i + 1) % n]) <= tolerance:
            return True
    return False


def point_in_polygon(point: Point, polygon: Polygon, tolerance: float = 0.0) -> bool:
    """
    Check if point is inside polygon, counting the boundary band as inside.

    Args:
        point: (x, y) coordinates
        polygon: List of (x, y) vertices
        tolerance: Points within this distance of an edge are inside

    Returns:
        True if point is inside polygon or within tolerance of its boundary.
    """
    n = len(polygon)
    if n < 3:
        return False

    if point_near_boundary(point, polygon, tolerance):
        return True

    # Even-odd ray casting against a horizontal ray towards +x
    x, y = point
    inside = False

    j = n - 1
    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i

    return inside


def polygon_contains_polygon(outer: Polygon, inner: Polygon, tolerance: float = 0.0) -> bool:
    """Check that every vertex of inner is inside outer (boundary band inclusive)."""
    return all(point_in_polygon(p, outer, tolerance) for p in inner)


# =============================================================================
# Bounding Boxes
# =============================================================================

@dataclass
class BoundingBox:
    """Axis-aligned bounding box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def expand(self, margin: float) -> 'BoundingBox':
        return BoundingBox(
            self.min_x - margin,
            self.min_y - margin,
            self.max_x + margin,
            self.max_y + margin
        )

    def contains_box(self, other: 'BoundingBox') -> bool:
        return (self.min_x <= other.min_x and self.min_y <= other.min_y and
                self.max_x >= other.max_x and self.max_y >= other.max_y)


def bounding_box(polygon: Polygon) -> BoundingBox:
    """Bounding box of a point list (zero box for an empty list)."""
    if not polygon:
        return BoundingBox(0, 0, 0, 0)
    xs = [p[0] for p in polygon]
    ys = [p[1] for p in polygon]
    return BoundingBox(min(xs), min(ys), max(xs), max(ys))
