"""
Hierarchical (dagre-style) layered layout.

Based on the framework from:
"Methods for Visual Understanding of Hierarchical System Structures"
by Sugiyama, Tagawa, and Toda (1981), with dagre's conventions for node
sizes, separations and rank directions.

Phases:
1. Cycle removal (reverse DFS back edges)
2. Rank assignment (longest path)
3. Long edges split with virtual nodes
4. Crossing minimization (barycenter sweeps)
5. Coordinate assignment, then center anchor -> top-left anchor
"""

from __future__ import annotations

import warnings
from typing import Any, Optional, Sequence, Union

from ..base import StaticLayout
from ..options import (
    DEFAULT_CROSSING_ITERATIONS,
    DEFAULT_NODE_HEIGHT,
    DEFAULT_NODE_SEPARATION,
    DEFAULT_NODE_WIDTH,
    DEFAULT_RANK_SEPARATION,
)
from ..preprocessing import (
    IndexEdge,
    assign_ranks_longest_path,
    group_by_rank,
    minimize_crossings_barycenter,
    remove_cycles,
)
from ..types import Direction, EdgeLike, NodeId, NodeLike, Position
from ..validation import (
    GraphStructureWarning,
    validate_direction,
    validate_iterations,
    validate_non_negative,
    validate_positive,
)


class HierarchicalLayout(StaticLayout):
    """
    Layered layout for directed graphs.

    Each edge source -> target places the target at least one rank after
    the source. Ranks run along the y axis for 'TB'/'BT' and along the x
    axis for 'LR'/'RL'. Returned positions are the top-left corner of each
    node box, and the drawing's bounding box starts at the origin.

    Example:
        layout = HierarchicalLayout(
            nodes=[{"id": "a"}, {"id": "b"}, {"id": "c"}],
            edges=[
                {"source": "a", "target": "b"},
                {"source": "a", "target": "c"},
            ],
            direction="TB",
        )
        layout.run()
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        direction: Union[str, Direction] = Direction.TB,
        node_width: float = DEFAULT_NODE_WIDTH,
        node_height: float = DEFAULT_NODE_HEIGHT,
        rank_separation: float = DEFAULT_RANK_SEPARATION,
        node_separation: float = DEFAULT_NODE_SEPARATION,
        crossing_iterations: int = DEFAULT_CROSSING_ITERATIONS,
    ) -> None:
        """
        Initialize hierarchical layout.

        Args:
            nodes: List of nodes
            edges: List of directed edges
            direction: Rank direction - 'TB', 'LR', 'BT', 'RL' (or
                'top-to-bottom', 'left-to-right', ...).
            node_width: Width of every node box.
            node_height: Height of every node box.
            rank_separation: Gap between adjacent ranks.
            node_separation: Gap between adjacent nodes in the same rank.
            crossing_iterations: Number of barycenter sweeps.

        Raises:
            InvalidOptionError: If any option is out of range.
        """
        super().__init__(nodes=nodes, edges=edges)

        self._direction: Direction = validate_direction(direction)
        self._node_width: float = validate_positive("node_width", node_width)
        self._node_height: float = validate_positive("node_height", node_height)
        self._rank_separation: float = validate_non_negative("rank_separation", rank_separation)
        self._node_separation: float = validate_non_negative("node_separation", node_separation)
        self._crossing_iterations: int = validate_iterations(crossing_iterations)

        # Internal state
        self._ranks: list[int] = []
        self._layers: list[list[int]] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def direction(self) -> Direction:
        """Get rank direction."""
        return self._direction

    @direction.setter
    def direction(self, value: Union[str, Direction]) -> None:
        """Set rank direction."""
        self._direction = validate_direction(value)

    @property
    def node_width(self) -> float:
        """Get node box width."""
        return self._node_width

    @node_width.setter
    def node_width(self, value: float) -> None:
        self._node_width = validate_positive("node_width", value)

    @property
    def node_height(self) -> float:
        """Get node box height."""
        return self._node_height

    @node_height.setter
    def node_height(self, value: float) -> None:
        self._node_height = validate_positive("node_height", value)

    @property
    def rank_separation(self) -> float:
        """Get gap between adjacent ranks."""
        return self._rank_separation

    @rank_separation.setter
    def rank_separation(self, value: float) -> None:
        self._rank_separation = validate_non_negative("rank_separation", value)

    @property
    def node_separation(self) -> float:
        """Get gap between adjacent nodes in the same rank."""
        return self._node_separation

    @node_separation.setter
    def node_separation(self, value: float) -> None:
        self._node_separation = validate_non_negative("node_separation", value)

    @property
    def crossing_iterations(self) -> int:
        """Get number of crossing minimization sweeps."""
        return self._crossing_iterations

    @crossing_iterations.setter
    def crossing_iterations(self, value: int) -> None:
        self._crossing_iterations = validate_iterations(value)

    @property
    def ranks(self) -> dict[NodeId, int]:
        """Rank of each node id after run()."""
        return {self._nodes[i].id: rank for i, rank in enumerate(self._ranks)}

    @property
    def layers(self) -> list[list[NodeId]]:
        """Node ids per rank, in their final within-rank order, after run()."""
        return [[self._nodes[i].id for i in layer] for layer in self._layers]

    # -------------------------------------------------------------------------
    # Phase 1-2: Acyclic graph and ranks
    # -------------------------------------------------------------------------

    def _acyclic_edges(self) -> list[IndexEdge]:
        """Resolved edges without self-loops, with back edges reversed."""
        edges = self._edge_indices(skip_self_loops=True)
        acyclic, flipped = remove_cycles(len(self._nodes), edges)
        if flipped:
            warnings.warn(
                f"Graph contains cycles; reversed {len(flipped)} edge(s) to rank it. "
                "Hierarchical layout is designed for DAGs; results may be suboptimal.",
                GraphStructureWarning,
                stacklevel=4,
            )
        return acyclic

    # -------------------------------------------------------------------------
    # Phase 3-4: Virtual nodes and ordering
    # -------------------------------------------------------------------------

    def _order_layers(self, edges: list[IndexEdge]) -> list[list[int]]:
        """Split long edges with virtual nodes, then order each rank."""
        n = len(self._nodes)
        layers = group_by_rank(self._ranks)
        layered_edges: list[IndexEdge] = []
        next_virtual = n

        for src, tgt in edges:
            prev = src
            for rank in range(self._ranks[src] + 1, self._ranks[tgt]):
                layers[rank].append(next_virtual)
                layered_edges.append((prev, next_virtual))
                prev = next_virtual
                next_virtual += 1
            layered_edges.append((prev, tgt))

        ordered = minimize_crossings_barycenter(
            layers, layered_edges, iterations=self._crossing_iterations
        )
        # Virtual nodes only guide ordering; they take no space.
        return [[node for node in layer if node < n] for layer in ordered]

    # -------------------------------------------------------------------------
    # Phase 5: Coordinate Assignment
    # -------------------------------------------------------------------------

    def _assign_coordinates(self) -> None:
        """Assign top-left positions from rank and within-rank order."""
        horizontal = self._direction.is_horizontal
        breadth = self._node_height if horizontal else self._node_width
        depth = self._node_width if horizontal else self._node_height
        step = breadth + self._node_separation
        rank_step = depth + self._rank_separation

        n_layers = len(self._layers)
        widest = max(len(layer) for layer in self._layers)
        total_span = (widest - 1) * step

        for layer_idx, layer in enumerate(self._layers):
            # Center each rank against the widest one
            offset = (total_span - (len(layer) - 1) * step) / 2
            rank_idx = n_layers - 1 - layer_idx if self._direction.is_reversed else layer_idx
            rank_center = rank_idx * rank_step + depth / 2

            for pos, node_idx in enumerate(layer):
                within_center = offset + pos * step + breadth / 2
                if horizontal:
                    cx, cy = rank_center, within_center
                else:
                    cx, cy = within_center, rank_center
                self._nodes[node_idx].position = Position(
                    cx - self._node_width / 2,
                    cy - self._node_height / 2,
                )

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _compute(self, **kwargs: Any) -> None:
        """Compute hierarchical layout."""
        edges = self._acyclic_edges()
        self._ranks = assign_ranks_longest_path(len(self._nodes), edges)
        self._layers = self._order_layers(edges)
        self._assign_coordinates()


__all__ = ["HierarchicalLayout"]
