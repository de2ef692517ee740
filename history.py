"""
Undo/redo history for the annotation state.

Every commit snapshots the present state; closed regions are not part of
the state and are recomputed from whatever the present state holds.
"""

from dataclasses import dataclass, field, replace
from typing import Callable, Optional
import copy

from topology import Vertex, Edge, Feature, Position, generate_id


@dataclass
class AnnotationState:
    """Editable annotation contents."""
    vertices: list[Vertex] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    features: list[Feature] = field(default_factory=list)


class AnnotationHistory:
    """
    Linear undo/redo history.

    Example:
        >>> history = AnnotationHistory()
        >>> history.commit(lambda s: AnnotationState(vertices=s.vertices + [v]))
        >>> history.undo()
    """

    def __init__(self, initial: AnnotationState | None = None):
        self._past: list[AnnotationState] = []
        self._present = initial if initial is not None else AnnotationState()
        self._future: list[AnnotationState] = []

    @property
    def state(self) -> AnnotationState:
        return self._present

    @property
    def can_undo(self) -> bool:
        return len(self._past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._future) > 0

    def commit(self, updater: Callable[[AnnotationState], AnnotationState]) -> AnnotationState:
        """Apply updater to the present state, recording a snapshot for undo."""
        self._past.append(copy.deepcopy(self._present))
        self._future = []
        self._present = updater(self._present)
        return self._present

    def undo(self) -> AnnotationState:
        """Step back one commit (no-op when there is nothing to undo)."""
        if not self._past:
            return self._present
        self._future.insert(0, copy.deepcopy(self._present))
        self._present = self._past.pop()
        return self._present

    def redo(self) -> AnnotationState:
        """Re-apply the most recently undone commit (no-op when none)."""
        if not self._future:
            return self._present
        self._past.append(copy.deepcopy(self._present))
        self._present = self._future.pop(0)
        return self._present

    def reset(self) -> None:
        """Clear history and return to an empty state."""
        self._past = []
        self._present = AnnotationState()
        self._future = []

    # -------------------------------------------------------------------------
    # Topology edits
    # -------------------------------------------------------------------------

    def add_vertex(self, position: Position) -> Vertex:
        """Add a vertex with a generated 'v-' id."""
        vertex = Vertex(generate_id("v"), position)
        self.commit(lambda s: replace(s, vertices=s.vertices + [vertex]))
        return vertex

    def connect_vertices(self, source_id: str, target_id: str) -> Optional[Edge]:
        """
        Add an edge between two vertices.

        Returns:
            The new edge, or None for a self-edge or an edge that already
            exists in either direction (nothing is committed then).
        """
        if source_id == target_id:
            return None
        for edge in self._present.edges:
            if {edge.source, edge.target} == {source_id, target_id}:
                return None
        edge = Edge(generate_id("e"), source_id, target_id)
        self.commit(lambda s: replace(s, edges=s.edges + [edge]))
        return edge

    def move_vertex(self, vertex_id: str, position: Position) -> None:
        self.commit(lambda s: replace(s, vertices=[
            replace(v, position=position) if v.id == vertex_id else v for v in s.vertices
        ]))

    def update_vertex(self, original_id: str, new_id: str, position: Optional[Position] = None) -> str:
        """
        Rename and optionally move a vertex, re-pointing every edge that uses it.

        A blank new id keeps the original one. Returns the id in effect.
        """
        next_id = new_id.strip() or original_id

        def update(s: AnnotationState) -> AnnotationState:
            vertices = [
                Vertex(next_id, position if position is not None else v.position) if v.id == original_id else v
                for v in s.vertices
            ]
            edges = [
                Edge(
                    e.id,
                    next_id if e.source == original_id else e.source,
                    next_id if e.target == original_id else e.target,
                )
                for e in s.edges
            ]
            return replace(s, vertices=vertices, edges=edges)

        self.commit(update)
        return next_id

    def delete_vertex(self, vertex_id: str) -> None:
        """Remove a vertex and every edge touching it."""
        self.commit(lambda s: replace(
            s,
            vertices=[v for v in s.vertices if v.id != vertex_id],
            edges=[e for e in s.edges if e.source != vertex_id and e.target != vertex_id],
        ))

    def update_edge(self, original_id: str, source: str, target: str, new_id: str = "") -> None:
        """Replace an edge's endpoints; a blank new id keeps the original one."""
        next_id = new_id.strip() or original_id
        self.commit(lambda s: replace(s, edges=[
            Edge(next_id, source, target) if e.id == original_id else e for e in s.edges
        ]))

    def delete_edge(self, edge_id: str) -> None:
        self.commit(lambda s: replace(s, edges=[e for e in s.edges if e.id != edge_id]))

    # -------------------------------------------------------------------------
    # Feature edits
    # -------------------------------------------------------------------------

    def add_feature(self, feature: Feature) -> Feature:
        """Place a feature, giving it a generated 'f-' id."""
        feature = replace(feature, id=generate_id("f"))
        self.commit(lambda s: replace(s, features=s.features + [feature]))
        return feature

    def move_feature(self, feature_id: str, position: Position) -> None:
        self.commit(lambda s: replace(s, features=[
            replace(f, position=position) if f.id == feature_id else f for f in s.features
        ]))

    def delete_feature(self, feature_id: str) -> None:
        self.commit(lambda s: replace(s, features=[f for f in s.features if f.id != feature_id]))
