"""
Radial (BFS ring) layout.

Places a focus node at the center and every other node on a concentric
ring whose radius grows with its breadth-first distance from the focus.
Edges are treated as undirected.
"""

from __future__ import annotations

import math
import warnings
from typing import Any, Optional, Sequence

from ..base import StaticLayout
from ..options import (
    DEFAULT_LEVEL_SPACING,
    DEFAULT_NODE_HEIGHT,
    DEFAULT_NODE_WIDTH,
    DEFAULT_RADIAL_CENTER,
)
from ..preprocessing import bfs_levels, max_degree_node
from ..types import EdgeLike, NodeId, NodeLike, Position, PositionLike
from ..validation import (
    GraphStructureWarning,
    InvalidOptionError,
    validate_non_negative,
    validate_positive,
)


class RadialLayout(StaticLayout):
    """
    Radial layout centered on a focus node.

    Ring L holds the nodes at BFS distance L from the center, spread evenly
    at radius ``L * level_spacing`` starting from the top. Nodes that cannot
    be reached from the center share one ring just outside the rest.
    Returned positions are the top-left corner of each node box.

    Example:
        layout = RadialLayout(
            nodes=[{"id": "a"}, {"id": "b"}, {"id": "c"}],
            edges=[{"source": "a", "target": "b"}, {"source": "b", "target": "c"}],
            focus_node_id="a",
        )
        layout.run()
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        focus_node_id: Optional[NodeId] = None,
        level_spacing: float = DEFAULT_LEVEL_SPACING,
        center: PositionLike = DEFAULT_RADIAL_CENTER,
        node_width: float = DEFAULT_NODE_WIDTH,
        node_height: float = DEFAULT_NODE_HEIGHT,
    ) -> None:
        """
        Initialize radial layout.

        Args:
            nodes: List of nodes
            edges: List of edges (direction ignored)
            focus_node_id: Center node id. If None or unknown, the node with
                the most neighbors is used (first one in input order on ties).
            level_spacing: Radius increment per BFS level.
            center: Center point of the rings.
            node_width: Node box width, used for the top-left anchor offset.
            node_height: Node box height, used for the top-left anchor offset.
        """
        super().__init__(nodes=nodes, edges=edges)

        self._focus_node_id: Optional[NodeId] = focus_node_id
        self._level_spacing: float = validate_non_negative("level_spacing", level_spacing)
        self._center: Position = _coerce_center(center)
        self._node_width: float = validate_positive("node_width", node_width)
        self._node_height: float = validate_positive("node_height", node_height)

        # Internal state
        self._levels: dict[int, int] = {}
        self._center_index: int = -1

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def focus_node_id(self) -> Optional[NodeId]:
        """Get requested center node id."""
        return self._focus_node_id

    @focus_node_id.setter
    def focus_node_id(self, value: Optional[NodeId]) -> None:
        self._focus_node_id = value

    @property
    def level_spacing(self) -> float:
        """Get radius increment per level."""
        return self._level_spacing

    @level_spacing.setter
    def level_spacing(self, value: float) -> None:
        self._level_spacing = validate_non_negative("level_spacing", value)

    @property
    def center(self) -> Position:
        """Get ring center point."""
        return self._center

    @center.setter
    def center(self, value: PositionLike) -> None:
        self._center = _coerce_center(value)

    @property
    def center_node_id(self) -> Optional[NodeId]:
        """Id of the node placed at the center by the last run()."""
        if self._center_index < 0:
            return None
        return self._nodes[self._center_index].id

    @property
    def levels(self) -> dict[NodeId, int]:
        """Ring level of each node id after run()."""
        return {self._nodes[i].id: level for i, level in self._levels.items()}

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _find_center(self, adjacency: list[list[int]]) -> int:
        """Focus node if known, otherwise the first node of highest degree."""
        if self._focus_node_id is not None:
            index = self._index.get(self._focus_node_id)
            if index is not None:
                return index
            warnings.warn(
                f"Focus node {self._focus_node_id!r} not found; "
                "centering on the most connected node instead.",
                GraphStructureWarning,
                stacklevel=4,
            )
        return max_degree_node(adjacency)

    def _assign_levels(self, adjacency: list[list[int]]) -> dict[int, int]:
        levels = bfs_levels(adjacency, self._center_index)

        # Disconnected nodes share one outer ring
        outer = max(levels.values()) + 1
        for i in range(len(self._nodes)):
            if i not in levels:
                levels[i] = outer
        return levels

    def _compute(self, **kwargs: Any) -> None:
        """Compute radial positions."""
        adjacency = self._build_adjacency()
        self._center_index = self._find_center(adjacency)
        self._levels = self._assign_levels(adjacency)

        # Group by level, keeping BFS visit order within a level
        rings: dict[int, list[int]] = {}
        for node_idx, level in self._levels.items():
            rings.setdefault(level, []).append(node_idx)

        cx, cy = self._center
        half_w = self._node_width / 2
        half_h = self._node_height / 2

        for level, ring in rings.items():
            radius = level * self._level_spacing
            angle_step = 2 * math.pi / len(ring)
            for i, node_idx in enumerate(ring):
                if level == 0:
                    x, y = cx, cy
                else:
                    # Start at the top of the ring
                    angle = i * angle_step - math.pi / 2
                    x = cx + math.cos(angle) * radius
                    y = cy + math.sin(angle) * radius
                self._nodes[node_idx].position = Position(x - half_w, y - half_h)


def _coerce_center(value: PositionLike) -> Position:
    try:
        center = Position.coerce(value)
    except (TypeError, ValueError, KeyError) as exc:
        raise InvalidOptionError(f"center must be an (x, y) point, got {value!r}") from exc
    if center is None:
        raise InvalidOptionError("center must be an (x, y) point, got None")
    return center


__all__ = ["RadialLayout"]
