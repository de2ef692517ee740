"""
Closed Region Extraction Module

Finds the enclosed areas of a drawn topology graph and the holes cut into
them. Used to fill rooms, corridors and courtyards on an annotated plan.

Algorithm:
1. Build an undirected adjacency map, dropping self-loops and dangling edges
2. Depth-first search each connected component; every back-edge closes a
   cycle on the current path
3. Deduplicate cycles by a rotation/reflection invariant key
4. Measure each loop (shoelace area) and find its tightest enclosing loop
5. Loops at even depth are region boundaries, their odd-depth direct
   children are holes ("island in a lake in an island")

Only cycles closed by back-edges of one DFS tree per component are found.
Graphs where several alternate cycles share chords can under-report.
"""

from __future__ import annotations
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Optional

from config import RegionConfig
from loop_geometry import (
    Point, DEFAULT_EDGE_TOLERANCE, polygon_area, bounding_box, polygon_contains_polygon,
)
from topology import Vertex, Edge


Adjacency = dict[str, dict[str, None]]  # dict keys as an insertion-ordered set

CYCLE_KEY_SEPARATOR = "->"


@dataclass
class Ring:
    """A closed loop with resolved geometry."""
    vertex_ids: list[str]
    points: list[Point]
    area: float

    def to_dict(self) -> dict:
        return {
            "vertex_ids": list(self.vertex_ids),
            "points": [list(p) for p in self.points],
            "area": self.area,
        }


@dataclass
class Region:
    """An enclosed area: a boundary ring minus its directly nested holes."""
    boundary: Ring
    holes: list[Ring] = field(default_factory=list)
    net_area: float = 0.0

    def to_dict(self) -> dict:
        return {
            "boundary": self.boundary.to_dict(),
            "holes": [h.to_dict() for h in self.holes],
            "net_area": self.net_area,
        }


@dataclass
class LoopInfo:
    """A discovered cycle with its points and unsigned area."""
    cycle: list[str]
    points: list[Point]
    area: float

    def to_ring(self) -> Ring:
        return Ring(vertex_ids=self.cycle, points=self.points, area=self.area)


# =============================================================================
# Input Normalization
# =============================================================================

def _coerce_vertices(vertices: Iterable) -> list[Vertex]:
    result = []
    for vertex in vertices:
        if isinstance(vertex, Vertex):
            result.append(vertex)
        elif isinstance(vertex, Mapping):
            try:
                result.append(Vertex.from_dict(vertex))
            except (ValueError, TypeError):
                continue
    return result


def _coerce_edges(edges: Iterable) -> list[Edge]:
    result = []
    for edge in edges:
        if isinstance(edge, Edge):
            result.append(edge)
        elif isinstance(edge, Mapping):
            try:
                result.append(Edge.from_dict(edge))
            except (ValueError, TypeError):
                continue
    return result


# =============================================================================
# Graph Traversal
# =============================================================================

def build_adjacency(vertices: list[Vertex], edges: list[Edge]) -> Adjacency:
    """
    Build a symmetric adjacency map.

    Self-loops and edges referencing unknown vertices are dropped.
    Neighbours keep edge insertion order.
    """
    vertex_ids = {v.id for v in vertices}
    adjacency: Adjacency = {}

    for edge in edges:
        if edge.is_self_loop:
            continue
        if edge.source not in vertex_ids or edge.target not in vertex_ids:
            continue
        adjacency.setdefault(edge.source, {})[edge.target] = None
        adjacency.setdefault(edge.target, {})[edge.source] = None

    return adjacency


def canonicalize_cycle(cycle: list[str]) -> str:
    """
    Rotation and reflection invariant key for a cycle.

    Every rotation of the cycle and of its reverse is joined with '->';
    the lexicographically smallest string wins.
    """
    if not cycle:
        return ""
    n = len(cycle)
    backward = list(reversed(cycle))
    return min(
        CYCLE_KEY_SEPARATOR.join(sequence[i:] + sequence[:i])
        for sequence in (list(cycle), backward)
        for i in range(n)
    )


def find_cycles(vertices: list[Vertex], adjacency: Adjacency) -> list[list[str]]:
    """
    Find cycles closed by DFS back-edges.

    Roots are taken in vertex list order, skipping isolated vertices.
    Traversal uses an explicit frame stack; each frame keeps a live
    neighbour iterator so the visit order matches plain recursion.

    Returns:
        Distinct cycles (>= 3 vertex ids each) in discovery order.
    """
    visited: set[str] = set()
    in_stack: set[str] = set()
    path: list[str] = []
    path_index: dict[str, int] = {}
    cycles: list[list[str]] = []
    seen_keys: set[str] = set()

    def record_cycle(start: int) -> None:
        ordered = list(dict.fromkeys(path[start:]))
        if len(ordered) < 3:
            return
        key = canonicalize_cycle(ordered)
        if key in seen_keys:
            return
        seen_keys.add(key)
        cycles.append(ordered)

    frames: list[tuple[str, Optional[str], Iterator[str]]] = []

    def enter(node: str, parent: Optional[str]) -> None:
        visited.add(node)
        in_stack.add(node)
        path_index[node] = len(path)
        path.append(node)
        frames.append((node, parent, iter(adjacency.get(node, {}))))

    for vertex in vertices:
        if vertex.id in visited or vertex.id not in adjacency:
            continue

        enter(vertex.id, None)
        while frames:
            node, parent, neighbors = frames[-1]
            for neighbor in neighbors:
                if neighbor == parent:
                    continue
                if neighbor not in visited:
                    enter(neighbor, node)
                    break
                if neighbor in in_stack:
                    record_cycle(path_index[neighbor])
            else:
                frames.pop()
                path.pop()
                del path_index[node]
                in_stack.discard(node)

    return cycles


# =============================================================================
# Nesting
# =============================================================================

def build_loop_infos(cycles: list[list[str]], vertices: list[Vertex]) -> list[LoopInfo]:
    """Resolve cycle ids to points; ids that no longer resolve are dropped."""
    positions = {v.id: v.position for v in vertices}
    loops = []
    for cycle in cycles:
        points = [positions[vid] for vid in cycle if vid in positions]
        loops.append(LoopInfo(cycle=cycle, points=points, area=polygon_area(points)))
    return loops


def resolve_nesting(
    loops: list[LoopInfo],
    tolerance: float = DEFAULT_EDGE_TOLERANCE,
    use_bbox_prefilter: bool = True
) -> tuple[list[Optional[int]], list[int]]:
    """
    Find the tightest enclosing loop of every loop.

    A candidate parent must have strictly larger area and contain every
    point of the child (edge band inclusive). The smallest such candidate
    wins; ties keep the first found. Degenerate loops (< 3 points or zero
    area) get no parent.

    Args:
        loops: Loops in discovery order
        tolerance: Edge band width for containment
        use_bbox_prefilter: Reject candidates by bounding box before the
            point-in-polygon tests (same result, fewer tests)

    Returns:
        (parents, depths), one entry per loop. Depth 0 is outermost.
    """
    boxes = [bounding_box(loop.points) for loop in loops]
    parents: list[Optional[int]] = [None] * len(loops)

    for child_idx, child in enumerate(loops):
        if len(child.points) < 3 or child.area == 0:
            continue
        best: Optional[int] = None
        for idx, candidate in enumerate(loops):
            if idx == child_idx:
                continue
            if candidate.area <= child.area or len(candidate.points) < 3:
                continue
            if use_bbox_prefilter and not boxes[idx].expand(tolerance).contains_box(boxes[child_idx]):
                continue
            if not polygon_contains_polygon(candidate.points, child.points, tolerance):
                continue
            if best is None or candidate.area < loops[best].area:
                best = idx
        parents[child_idx] = best

    # Parents are strictly larger, so every chain terminates
    depths: list[Optional[int]] = [None] * len(loops)
    for idx in range(len(loops)):
        chain = []
        current = idx
        while current is not None and depths[current] is None:
            chain.append(current)
            current = parents[current]
        depth = -1 if current is None else depths[current]
        for node in reversed(chain):
            depth += 1
            depths[node] = depth

    return parents, depths


def assemble_regions(
    loops: list[LoopInfo],
    parents: list[Optional[int]],
    depths: list[int],
    min_region_area: float = 50.0
) -> list[Region]:
    """
    Turn even-depth loops into regions with their odd-depth children as holes.

    Regions whose net area falls below min_region_area are dropped.
    """
    regions = []
    for idx, loop in enumerate(loops):
        if len(loop.points) < 3:
            continue
        if depths[idx] % 2 != 0:
            continue

        holes = [
            candidate.to_ring()
            for candidate_idx, candidate in enumerate(loops)
            if parents[candidate_idx] == idx and depths[candidate_idx] % 2 == 1
        ]
        net_area = max(loop.area - sum(h.area for h in holes), 0.0)
        if net_area < min_region_area:
            continue

        regions.append(Region(boundary=loop.to_ring(), holes=holes, net_area=net_area))

    return regions


# =============================================================================
# Entry Point
# =============================================================================

def find_closed_regions(
    vertices: Iterable,
    edges: Iterable,
    config: Optional[RegionConfig] = None,
    debug: bool = False
) -> list[Region]:
    """
    Extract the closed regions of a topology graph.

    Args:
        vertices: Vertex records or mappings with 'id' and 'position'
        edges: Edge records or mappings with 'id', 'source' and 'target'
        config: Tolerances and thresholds (defaults when omitted)
        debug: If True, print stage counts.

    Returns:
        Regions in boundary discovery order; empty when the graph encloses
        nothing. Malformed records are skipped, never raised on.
    """
    config = config or RegionConfig()
    vertices = list(vertices)
    edges = list(edges)

    if len(vertices) < config.min_graph_size or len(edges) < config.min_graph_size:
        return []

    vertex_list = _coerce_vertices(vertices)
    edge_list = _coerce_edges(edges)

    adjacency = build_adjacency(vertex_list, edge_list)
    cycles = find_cycles(vertex_list, adjacency)
    loops = build_loop_infos(cycles, vertex_list)
    parents, depths = resolve_nesting(
        loops,
        tolerance=config.edge_tolerance,
        use_bbox_prefilter=config.use_bbox_prefilter,
    )
    regions = assemble_regions(loops, parents, depths, min_region_area=config.min_region_area)

    if debug:
        print(f"  Vertices: {len(vertex_list)}, edges: {len(edge_list)}")
        print(f"  Connected vertices: {len(adjacency)}")
        print(f"  Cycles found: {len(cycles)}")
        print(f"  Max nesting depth: {max(depths, default=0)}")
        print(f"  Regions: {len(regions)}")

    return regions
