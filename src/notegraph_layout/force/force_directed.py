"""
Spring-electrical force-directed layout.

Every pair of nodes repels with an inverse-square force and every edge
acts as a linear spring. Both forces are scaled by a cooling factor
``alpha`` that decays linearly from 1 to 0 over the iteration budget, and
velocities are damped after each step, so the simulation settles.

The simulation has no randomness: nodes without a position start evenly
spaced on a circle, so identical input always gives identical output.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

import numpy as np
from typing_extensions import Self

from ..base import IterativeLayout
from ..options import (
    DEFAULT_ATTRACTION,
    DEFAULT_BARNES_HUT_THETA,
    DEFAULT_DAMPING,
    DEFAULT_ITERATIONS,
    DEFAULT_MIN_DISTANCE,
    DEFAULT_REPULSION,
)
from ..preprocessing import IndexEdge
from ..spatial.quadtree import Body, QuadTree
from ..types import EdgeLike, NodeLike, Position
from ..validation import validate_fraction, validate_non_negative, validate_positive

# Barnes-Hut only pays off beyond this many nodes
BARNES_HUT_MIN_NODES = 50


class ForceDirectedLayout(IterativeLayout):
    """
    Force-directed layout for organic clustering.

    Per iteration, with ``alpha = 1 - iteration / iterations``:

    - Repulsion: each ordered pair pushes apart with
      ``repulsion * alpha / d^2``, where ``d`` is floored at min_distance.
    - Attraction: each edge pulls its endpoints together with
      ``d * attraction * alpha``.
    - Integration: ``position += velocity``, then ``velocity *= damping``.

    Repulsion is O(n^2) per iteration. Enable use_barnes_hut for large graphs.

    Example:
        layout = ForceDirectedLayout(
            nodes=[{"id": "a"}, {"id": "b"}, {"id": "c"}],
            edges=[{"source": "a", "target": "b"}, {"source": "b", "target": "c"}],
            iterations=100,
        )
        layout.run()
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        iterations: int = DEFAULT_ITERATIONS,
        repulsion: float = DEFAULT_REPULSION,
        attraction: float = DEFAULT_ATTRACTION,
        damping: float = DEFAULT_DAMPING,
        min_distance: float = DEFAULT_MIN_DISTANCE,
        use_barnes_hut: bool = False,
        barnes_hut_theta: float = DEFAULT_BARNES_HUT_THETA,
    ) -> None:
        """
        Initialize force-directed layout.

        Args:
            nodes: List of nodes. Existing positions seed the simulation.
            edges: List of edges (direction ignored)
            iterations: Number of simulation steps
            repulsion: Pairwise repulsion constant
            attraction: Edge spring constant
            damping: Fraction of velocity kept after each step (0 to 1)
            min_distance: Distance floor for repulsion
            use_barnes_hut: Approximate repulsion with a quadtree when the
                graph has more than 50 nodes.
            barnes_hut_theta: Barnes-Hut accuracy (0 = exact, 0.5 = balanced).
        """
        super().__init__(nodes=nodes, edges=edges, iterations=iterations)

        self._repulsion: float = validate_non_negative("repulsion", repulsion)
        self._attraction: float = validate_non_negative("attraction", attraction)
        self._damping: float = validate_fraction("damping", damping)
        self._min_distance: float = validate_positive("min_distance", min_distance)
        self._use_barnes_hut: bool = bool(use_barnes_hut)
        self._barnes_hut_theta: float = validate_non_negative("barnes_hut_theta", barnes_hut_theta)

        # Internal state
        self._pos_x: Optional[np.ndarray] = None
        self._pos_y: Optional[np.ndarray] = None
        self._vel_x: Optional[np.ndarray] = None
        self._vel_y: Optional[np.ndarray] = None
        self._springs: list[IndexEdge] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def repulsion(self) -> float:
        """Get pairwise repulsion constant."""
        return self._repulsion

    @repulsion.setter
    def repulsion(self, value: float) -> None:
        self._repulsion = validate_non_negative("repulsion", value)

    @property
    def attraction(self) -> float:
        """Get edge spring constant."""
        return self._attraction

    @attraction.setter
    def attraction(self, value: float) -> None:
        self._attraction = validate_non_negative("attraction", value)

    @property
    def damping(self) -> float:
        """Get fraction of velocity kept after each step."""
        return self._damping

    @damping.setter
    def damping(self, value: float) -> None:
        self._damping = validate_fraction("damping", value)

    @property
    def min_distance(self) -> float:
        """Get distance floor for repulsion."""
        return self._min_distance

    @min_distance.setter
    def min_distance(self, value: float) -> None:
        self._min_distance = validate_positive("min_distance", value)

    @property
    def use_barnes_hut(self) -> bool:
        """Get whether Barnes-Hut approximation is enabled."""
        return self._use_barnes_hut

    @use_barnes_hut.setter
    def use_barnes_hut(self, value: bool) -> None:
        self._use_barnes_hut = bool(value)

    @property
    def barnes_hut_theta(self) -> float:
        """Get Barnes-Hut theta parameter (accuracy)."""
        return self._barnes_hut_theta

    @barnes_hut_theta.setter
    def barnes_hut_theta(self, value: float) -> None:
        self._barnes_hut_theta = validate_non_negative("barnes_hut_theta", value)

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def _initial_positions(self) -> tuple[np.ndarray, np.ndarray]:
        """Existing positions, else evenly spaced on a circle sized by node count."""
        n = len(self._nodes)
        radius = max(200.0, n * 30.0)
        xs = np.zeros(n, dtype=np.float64)
        ys = np.zeros(n, dtype=np.float64)
        for i, node in enumerate(self._nodes):
            if node.position is not None:
                xs[i], ys[i] = node.position.x, node.position.y
            else:
                angle = 2 * math.pi * i / n
                xs[i] = math.cos(angle) * radius + radius
                ys[i] = math.sin(angle) * radius + radius
        return xs, ys

    def run(self, **kwargs: Any) -> Self:
        """
        Run the simulation for the full iteration budget.

        Returns:
            self for chaining
        """
        self._log_run()
        n = len(self._nodes)
        if n == 0:
            return self

        self._pos_x, self._pos_y = self._initial_positions()
        self._vel_x = np.zeros(n, dtype=np.float64)
        self._vel_y = np.zeros(n, dtype=np.float64)
        self._springs = self._edge_indices(skip_self_loops=True)
        self._iteration = 0
        self._alpha = 1.0

        self.kick()

        for i, node in enumerate(self._nodes):
            node.position = Position(float(self._pos_x[i]), float(self._pos_y[i]))
        return self

    def tick(self) -> bool:
        """
        Perform one simulation step.

        Returns:
            True once the iteration budget is spent.
        """
        # These are set in run() before tick() is called
        assert self._pos_x is not None and self._pos_y is not None
        assert self._vel_x is not None and self._vel_y is not None

        if self._iteration >= self._iterations:
            return True

        self._alpha = 1.0 - self._iteration / self._iterations
        alpha = self._alpha

        # Repulsion between all nodes
        if self._use_barnes_hut and len(self._nodes) > BARNES_HUT_MIN_NODES:
            self._apply_repulsion_barnes_hut(alpha)
        else:
            self._apply_repulsion_naive(alpha)

        # Attraction along edges
        strength = self._attraction * alpha
        for src, tgt in self._springs:
            dx = self._pos_x[tgt] - self._pos_x[src]
            dy = self._pos_y[tgt] - self._pos_y[src]
            dist = math.sqrt(dx * dx + dy * dy)
            if dist == 0:
                continue
            force = dist * strength
            fx = (dx / dist) * force
            fy = (dy / dist) * force
            self._vel_x[src] += fx
            self._vel_y[src] += fy
            self._vel_x[tgt] -= fx
            self._vel_y[tgt] -= fy

        # Apply velocities, then damp
        self._pos_x += self._vel_x
        self._pos_y += self._vel_y
        self._vel_x *= self._damping
        self._vel_y *= self._damping

        self._iteration += 1
        return self._iteration >= self._iterations

    def _apply_repulsion_naive(self, alpha: float) -> None:
        """All-pairs repulsion, vectorized over the n x n displacement matrix."""
        assert self._pos_x is not None and self._pos_y is not None
        assert self._vel_x is not None and self._vel_y is not None

        dx = self._pos_x[:, np.newaxis] - self._pos_x[np.newaxis, :]
        dy = self._pos_y[:, np.newaxis] - self._pos_y[np.newaxis, :]
        dist = np.maximum(np.sqrt(dx * dx + dy * dy), self._min_distance)
        force = (self._repulsion * alpha) / (dist * dist)

        # Diagonal terms have dx = dy = 0 and contribute nothing
        self._vel_x += np.sum(dx / dist * force, axis=1)
        self._vel_y += np.sum(dy / dist * force, axis=1)

    def _apply_repulsion_barnes_hut(self, alpha: float) -> None:
        """Repulsion using the Barnes-Hut O(n log n) approximation."""
        assert self._pos_x is not None and self._pos_y is not None
        assert self._vel_x is not None and self._vel_y is not None

        tree = QuadTree.from_points(self._pos_x, self._pos_y, theta=self._barnes_hut_theta)
        repulsion = self._repulsion * alpha
        for i in range(len(self._nodes)):
            body = Body(float(self._pos_x[i]), float(self._pos_y[i]), index=i)
            fx, fy = tree.calculate_force(body, repulsion, self._min_distance)
            self._vel_x[i] += fx
            self._vel_y[i] += fy


__all__ = ["ForceDirectedLayout", "BARNES_HUT_MIN_NODES"]
