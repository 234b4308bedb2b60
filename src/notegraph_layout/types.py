"""
Common types for graph layout strategies.

This module provides the fundamental types shared by every layout:
- Position: 2D coordinate
- Node: Graph vertex identified by an opaque id, with optional position/payload
- Edge: Connection between two node ids
- Direction: Rank direction for hierarchical layouts
- LayoutStrategy: Names accepted by the dispatcher
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Iterator, Mapping, Optional, Sequence, Union


@dataclass(frozen=True)
class Position:
    """A 2D coordinate."""

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    @classmethod
    def coerce(cls, value: Any) -> Optional[Position]:
        """
        Build a Position from a Position, mapping with x/y, or (x, y) pair.

        Returns None when value is None.
        """
        if value is None or isinstance(value, Position):
            return value
        if isinstance(value, Mapping):
            return cls(float(value["x"]), float(value["y"]))
        if hasattr(value, "x") and hasattr(value, "y"):
            return cls(float(value.x), float(value.y))
        x, y = value
        return cls(float(x), float(y))


class Direction(str, Enum):
    """
    Rank direction for hierarchical layouts.

    - TB: ranks flow top to bottom
    - BT: ranks flow bottom to top
    - LR: ranks flow left to right
    - RL: ranks flow right to left
    """

    TB = "TB"
    BT = "BT"
    LR = "LR"
    RL = "RL"

    @property
    def is_horizontal(self) -> bool:
        """True if ranks advance along the x axis."""
        return self in (Direction.LR, Direction.RL)

    @property
    def is_reversed(self) -> bool:
        """True if ranks advance toward negative coordinates."""
        return self in (Direction.BT, Direction.RL)


DIRECTION_ALIASES: dict[str, Direction] = {
    "top-to-bottom": Direction.TB,
    "bottom-to-top": Direction.BT,
    "left-to-right": Direction.LR,
    "right-to-left": Direction.RL,
}


class LayoutStrategy(str, Enum):
    """Layout strategies understood by apply_layout()."""

    hierarchical = "hierarchical"
    force = "force"
    radial = "radial"


NodeId = Hashable


class Node:
    """
    Graph node as seen by the layout engine.

    Attributes:
        id: Opaque node identifier
        position: Current position, or None if not placed yet
        payload: Caller-owned data, returned untouched
    """

    def __init__(
        self,
        id: NodeId,
        position: Union[Position, Mapping[str, float], Sequence[float], None] = None,
        payload: Any = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize node.

        Args:
            id: Node identifier (required)
            position: Existing position as Position, {'x', 'y'} mapping or pair
            payload: Arbitrary caller data

        Raises:
            ValueError: If id is None
        """
        if id is None:
            raise ValueError("Node id cannot be None")

        self.id = id
        self.position: Optional[Position] = Position.coerce(position)
        self.payload = payload

        # Copy any additional custom properties
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def copy(self, position: Optional[Position] = None) -> Node:
        """
        Return a shallow copy, optionally with a new position.

        The payload and any extra attributes are shared with the original.
        """
        clone = Node.__new__(Node)
        clone.__dict__.update(self.__dict__)
        if position is not None:
            clone.position = position
        return clone

    def __repr__(self) -> str:
        if self.position is None:
            return f"Node(id={self.id!r})"
        return f"Node(id={self.id!r}, x={self.position.x:.2f}, y={self.position.y:.2f})"


class Edge:
    """
    Connection between two nodes, referenced by id.

    Attributes:
        source: Source node id
        target: Target node id
    """

    def __init__(self, source: NodeId, target: NodeId, **kwargs: Any) -> None:
        """
        Initialize edge between two node ids.

        Args:
            source: Source node id (required)
            target: Target node id (required)

        Raises:
            ValueError: If source or target is None
        """
        if source is None:
            raise ValueError("Edge source cannot be None")
        if target is None:
            raise ValueError("Edge target cannot be None")

        self.source = source
        self.target = target

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"Edge({self.source!r} -> {self.target!r})"


# Type aliases for Pythonic API
NodeLike = Union[Node, dict[str, Any], Any]
"""Input type for nodes: Node objects, dicts, or objects with an id attribute."""

EdgeLike = Union[Edge, dict[str, Any], Any]
"""Input type for edges: Edge objects, dicts, or objects with source/target."""

PositionLike = Union[Position, Mapping[str, float], Sequence[float]]
"""Input type for positions: Position, {'x', 'y'} mapping, or (x, y) pair."""


__all__ = [
    "Position",
    "Direction",
    "DIRECTION_ALIASES",
    "LayoutStrategy",
    "NodeId",
    "Node",
    "Edge",
    "NodeLike",
    "EdgeLike",
    "PositionLike",
]
