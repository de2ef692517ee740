"""
Topology and feature records for an annotated floor-plan area.

Positions are pixel coordinates relative to the source image. Vertices and
edges form the topology graph; features are points of interest placed on
the plan.
"""

from dataclasses import dataclass, field
from typing import Optional, Union
import uuid


Position = tuple[float, float]


def generate_id(prefix: str) -> str:
    """Short random id such as 'f-1a2b3c4d'."""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def _position_from(value) -> Position:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"Invalid position: {value!r}")
    return (float(value[0]), float(value[1]))


def _require(data: dict, key: str):
    if key not in data:
        raise ValueError(f"Missing field '{key}'")
    return data[key]


@dataclass
class Vertex:
    """A point in the topology graph."""
    id: str
    position: Position

    def to_dict(self) -> dict:
        return {"type": "node", "id": self.id, "position": list(self.position)}

    @classmethod
    def from_dict(cls, data: dict) -> "Vertex":
        return cls(
            id=str(_require(data, "id")),
            position=_position_from(_require(data, "position")),
        )


@dataclass
class Edge:
    """An undirected connection between two vertices."""
    id: str
    source: str
    target: str

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def to_dict(self) -> dict:
        return {"type": "edge", "id": self.id, "source": self.source, "target": self.target}

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            id=str(_require(data, "id")),
            source=str(_require(data, "source")),
            target=str(_require(data, "target")),
        )


Primitive = Union[Vertex, Edge]


# =============================================================================
# Features
# =============================================================================

@dataclass
class Shop:
    """A shop on the map."""
    name: str
    position: Position
    id: Optional[str] = None
    type: str = field(default="shop", init=False)

    def to_dict(self) -> dict:
        return {"type": self.type, "name": self.name, "position": list(self.position)}


@dataclass
class Restaurant:
    """A restaurant on the map."""
    name: str
    position: Position
    id: Optional[str] = None
    type: str = field(default="restaurant", init=False)

    def to_dict(self) -> dict:
        return {"type": self.type, "name": self.name, "position": list(self.position)}


@dataclass
class Entrance:
    """
    A connection to another area: door, stairs, elevator, etc.

    target is the id of the connected area, empty for outside.
    """
    label: str
    position: Position
    target: str = ""
    id: Optional[str] = None
    type: str = field(default="entrance", init=False)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "label": self.label,
            "target": self.target,
            "position": list(self.position),
        }


Feature = Union[Shop, Restaurant, Entrance]

FEATURE_TYPES = ("shop", "restaurant", "entrance")


def feature_from_dict(data: dict, feature_id: Optional[str] = None) -> Feature:
    """
    Build a feature from its exported form.

    Raises:
        ValueError: unknown type or missing position
    """
    kind = data.get("type")
    position = _position_from(_require(data, "position"))
    if kind == "shop":
        return Shop(name=str(data.get("name", "")), position=position, id=feature_id)
    if kind == "restaurant":
        return Restaurant(name=str(data.get("name", "")), position=position, id=feature_id)
    if kind == "entrance":
        return Entrance(
            label=str(data.get("label", "")),
            target=str(data.get("target", "")),
            position=position,
            id=feature_id,
        )
    raise ValueError(f"Unknown feature type: {kind!r}")


# =============================================================================
# Area
# =============================================================================

@dataclass
class Area:
    """
    An annotated area: a floor, a building, an underground mall, etc.

    Attributes:
        id: Area identifier, referenced by Entrance.target of other areas
        name: Display name
        descriptions: Free-form description lines
        size: Source image (width, height) in pixels
        topology: Mixed vertex and edge records
        features: Points of interest
    """
    id: str = ""
    name: str = ""
    descriptions: list[str] = field(default_factory=list)
    size: Position = (0, 0)
    topology: list[Primitive] = field(default_factory=list)
    features: list[Feature] = field(default_factory=list)

    @property
    def vertices(self) -> list[Vertex]:
        return [p for p in self.topology if isinstance(p, Vertex)]

    @property
    def edges(self) -> list[Edge]:
        return [p for p in self.topology if isinstance(p, Edge)]
