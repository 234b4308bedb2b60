"""
Base classes for graph layout strategies.

This module provides abstract base classes that define the common interface
and shared functionality for all layouts:

- BaseLayout: Abstract base with node/edge normalization and id lookup
- IterativeLayout: For simulation layouts driven by a tick loop (force)
- StaticLayout: For single-pass layouts (hierarchical, radial)

Layouts never modify caller-owned objects: nodes are copied on input and
positions are written to the copies.
"""

from __future__ import annotations

import logging
import warnings
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import Edge, EdgeLike, Node, NodeId, NodeLike, Position
from .validation import (
    GraphStructureWarning,
    InvalidEdgeError,
    InvalidNodeError,
    validate_edge_references,
    validate_iterations,
)

logger = logging.getLogger(__name__)


class BaseLayout(ABC):
    """
    Abstract base class for all layout strategies.

    Provides shared infrastructure:
    - Node/edge normalization via properties
    - Node id to index lookup
    - Adjacency built from edges, skipping dangling references

    Example:
        layout = SomeLayout(
            nodes=[{"id": "a"}, {"id": "b"}],
            edges=[{"source": "a", "target": "b"}],
        )
        layout.run()

        for node in layout.nodes:
            print(node.id, node.position)
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
    ) -> None:
        """
        Initialize layout with a graph.

        Args:
            nodes: List of nodes (Node objects, dicts, or objects with an id)
            edges: List of edges (Edge objects, dicts, or objects with source/target)
        """
        self._nodes: list[Node] = []
        self._edges: list[Edge] = []
        self._index: dict[NodeId, int] = {}

        if nodes is not None:
            self.nodes = nodes
        if edges is not None:
            self.edges = edges

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        """Get the list of (copied) nodes."""
        return self._nodes

    @nodes.setter
    def nodes(self, value: Sequence[NodeLike]) -> None:
        """
        Set nodes from a sequence of Node objects, dicts, or objects.

        Duplicate ids keep their first occurrence.
        """
        self._nodes = []
        self._index = {}
        duplicates = 0
        for node_data in value:
            node = as_node(node_data)
            if node.id in self._index:
                duplicates += 1
                continue
            self._index[node.id] = len(self._nodes)
            self._nodes.append(node)

        if duplicates:
            warnings.warn(
                f"Found {duplicates} node(s) with duplicate ids. "
                "Only the first occurrence of each id is laid out.",
                GraphStructureWarning,
                stacklevel=3,
            )

    @property
    def edges(self) -> list[Edge]:
        """Get the list of edges."""
        return self._edges

    @edges.setter
    def edges(self, value: Sequence[EdgeLike]) -> None:
        """Set edges from a sequence of Edge objects, dicts, or objects."""
        self._edges = [as_edge(edge_data) for edge_data in value]

    @property
    def positions(self) -> dict[NodeId, Position]:
        """Mapping of node id to computed position (placed nodes only)."""
        return {node.id: node.position for node in self._nodes if node.position is not None}

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Validate current configuration.

        Checks that all edges reference known node ids. run() does not call
        this: dangling edges are ignored during layout. Call it explicitly
        for fail-fast behavior.

        Returns:
            self (for chaining)

        Raises:
            InvalidEdgeError: If any edge references an unknown node id.
        """
        validate_edge_references(self._edges, self._index, strict=True)
        return self

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Implementations assign a position to every node in self.nodes.

        Returns:
            self (for chaining)
        """
        pass

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _edge_indices(self, skip_self_loops: bool = False) -> list[tuple[int, int]]:
        """
        Resolve edges to (source_index, target_index) pairs.

        Edges referencing unknown node ids are silently skipped.
        """
        pairs: list[tuple[int, int]] = []
        for edge in self._edges:
            src = self._index.get(edge.source)
            tgt = self._index.get(edge.target)
            if src is None or tgt is None:
                continue
            if skip_self_loops and src == tgt:
                continue
            pairs.append((src, tgt))
        return pairs

    def _build_adjacency(self) -> list[list[int]]:
        """
        Build undirected adjacency lists of distinct neighbors.

        Neighbors appear in the order their first edge was listed. Self-loops
        and dangling edges are skipped.
        """
        adj: list[dict[int, None]] = [{} for _ in self._nodes]
        for src, tgt in self._edge_indices(skip_self_loops=True):
            adj[src][tgt] = None
            adj[tgt][src] = None
        return [list(neighbors) for neighbors in adj]

    def _log_run(self) -> None:
        logger.debug(
            "%s: laying out %d node(s), %d edge(s)",
            type(self).__name__,
            len(self._nodes),
            len(self._edges),
        )


class IterativeLayout(BaseLayout):
    """
    Base class for simulation layouts.

    Provides:
    - Alpha (cooling) management
    - Tick-based iteration loop over a fixed iteration budget

    Example:
        layout = SomeForceLayout(nodes=nodes, edges=edges, iterations=100)
        layout.run()
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        iterations: int = 100,
    ) -> None:
        """
        Initialize iterative layout.

        Args:
            nodes: List of nodes
            edges: List of edges
            iterations: Number of simulation steps

        Raises:
            InvalidOptionError: If iterations < 1
        """
        super().__init__(nodes=nodes, edges=edges)
        self._iterations: int = validate_iterations(iterations)
        self._iteration: int = 0
        self._alpha: float = 1.0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def iterations(self) -> int:
        """Get number of simulation steps."""
        return self._iterations

    @iterations.setter
    def iterations(self, value: int) -> None:
        """Set number of simulation steps (minimum 1)."""
        self._iterations = validate_iterations(value)

    @property
    def alpha(self) -> float:
        """Get current cooling factor, decaying linearly from 1 toward 0."""
        return self._alpha

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def tick(self) -> bool:
        """
        Perform one iteration of the layout.

        Returns:
            True if done, False if more iterations are needed.
        """
        pass

    def kick(self) -> None:
        """Run tick() repeatedly until done or the iteration budget is spent."""
        for _ in range(self._iterations):
            if self.tick():
                break


class StaticLayout(BaseLayout):
    """
    Base class for single-pass layouts.

    These layouts compute positions in one pass without iteration.
    Examples: hierarchical, radial.
    """

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Args:
            **kwargs: Additional arguments passed to _compute()

        Returns:
            self (for chaining)
        """
        self._log_run()
        if self._nodes:
            self._compute(**kwargs)
        return self

    @abstractmethod
    def _compute(self, **kwargs: Any) -> None:
        """
        Compute node positions.

        Subclasses must implement this to perform the actual layout computation.
        Only called for non-empty graphs.
        """
        pass


def as_node(node_data: NodeLike) -> Node:
    """Copy a Node, dict, or generic object into a new Node."""
    if isinstance(node_data, Node):
        return node_data.copy()

    if isinstance(node_data, dict):
        data = dict(node_data)
        if "id" not in data:
            raise InvalidNodeError(f"Node is missing an 'id': {node_data!r}")
        if "payload" not in data and "data" in data:
            data["payload"] = data.pop("data")
        try:
            return Node(**data)
        except (TypeError, ValueError, KeyError) as exc:
            raise InvalidNodeError(f"Malformed node {node_data!r}: {exc}") from exc

    # Generic object - copy id/position/payload attributes
    if not hasattr(node_data, "id"):
        raise InvalidNodeError(f"Node is missing an 'id': {node_data!r}")
    payload = getattr(node_data, "payload", getattr(node_data, "data", None))
    try:
        return Node(node_data.id, getattr(node_data, "position", None), payload)
    except (TypeError, ValueError, KeyError) as exc:
        raise InvalidNodeError(f"Malformed node {node_data!r}: {exc}") from exc


def as_edge(edge_data: EdgeLike) -> Edge:
    """Normalize an Edge, dict, or generic object into an Edge."""
    if isinstance(edge_data, Edge):
        return edge_data
    try:
        if isinstance(edge_data, dict):
            return Edge(**edge_data)
        return Edge(getattr(edge_data, "source", None), getattr(edge_data, "target", None))
    except (TypeError, ValueError) as exc:
        raise InvalidEdgeError(f"Malformed edge {edge_data!r}: {exc}") from exc


__all__ = [
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
    "as_node",
    "as_edge",
]
