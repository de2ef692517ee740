"""Pytest fixtures for floorplan-regions tests."""

import pytest
import sys
from pathlib import Path

# Modules live at the repository root
sys.path.insert(0, str(Path(__file__).parent.parent))

from topology import Vertex, Edge


def make_ring(prefix, points):
    """Vertices and closing edges for a polygon given as a point list."""
    vertices = [Vertex(f"{prefix}{i}", p) for i, p in enumerate(points)]
    edges = [
        Edge(f"{prefix}e{i}", vertices[i].id, vertices[(i + 1) % len(vertices)].id)
        for i in range(len(vertices))
    ]
    return vertices, edges


@pytest.fixture
def ring_factory():
    """Return make_ring for tests that build their own polygons."""
    return make_ring


@pytest.fixture
def triangle():
    """Triangle A(0,0), B(10,0), C(5,10) with area 50."""
    vertices = [Vertex("A", (0, 0)), Vertex("B", (10, 0)), Vertex("C", (5, 10))]
    edges = [Edge("e1", "A", "B"), Edge("e2", "B", "C"), Edge("e3", "C", "A")]
    return vertices, edges


@pytest.fixture
def outer_square():
    return make_ring("o", [(0, 0), (100, 0), (100, 100), (0, 100)])


@pytest.fixture
def inner_square():
    return make_ring("i", [(25, 25), (75, 25), (75, 75), (25, 75)])


@pytest.fixture
def square_with_hole(outer_square, inner_square):
    """Outer 100x100 square with a 50x50 square inside it, not connected."""
    return outer_square[0] + inner_square[0], outer_square[1] + inner_square[1]


@pytest.fixture
def area_json() -> str:
    """A small exported area with a triangle and one feature of each kind."""
    return '''{
  "id": "level-1",
  "name": "Level 1",
  "descriptions": ["Ground floor"],
  "size": [1200, 800],
  "topology": [
    {"type": "node", "id": "A", "position": [0, 0]},
    {"type": "node", "id": "B", "position": [100, 0]},
    {"type": "node", "id": "C", "position": [50, 100]},
    {"type": "edge", "id": "e1", "source": "A", "target": "B"},
    {"type": "edge", "id": "e2", "source": "B", "target": "C"},
    {"type": "edge", "id": "e3", "source": "C", "target": "A"}
  ],
  "features": [
    {"type": "shop", "name": "Bakery", "position": [40, 30]},
    {"type": "restaurant", "name": "Noodles", "position": [60, 30]},
    {"type": "entrance", "label": "Stairs", "target": "level-2", "position": [50, 5]}
  ]
}'''
