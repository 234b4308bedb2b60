"""
Barnes-Hut quadtree for approximate node repulsion.

Each cell stores the total mass and center of mass of the bodies below it.
When a cell is small compared to its distance from a body (``size / d <
theta``) the whole cell acts as one body, which turns the all-pairs
repulsion of the force layout into roughly O(n log n) work.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

# Coincident bodies stop subdividing here and share a leaf
MAX_DEPTH = 32


@dataclass
class Body:
    """A point mass; index is the node index in the layout."""

    x: float
    y: float
    mass: float = 1.0
    index: int = -1


@dataclass
class QuadTreeNode:
    """
    Square cell of the quadtree.

    Leaves keep their bodies in ``bodies``. Internal cells keep four child
    slots ordered NW, NE, SW, SE (y grows downward), unused slots are None.
    """

    x: float
    y: float
    half_size: float
    depth: int = 0

    center_of_mass_x: float = 0.0
    center_of_mass_y: float = 0.0
    total_mass: float = 0.0

    bodies: List[Body] = field(default_factory=list)
    children: Optional[List[Optional[QuadTreeNode]]] = None

    def is_leaf(self) -> bool:
        return self.children is None

    def is_empty(self) -> bool:
        return self.children is None and not self.bodies

    def contains(self, x: float, y: float) -> bool:
        """True if (x, y) lies inside this cell (edges inclusive)."""
        return abs(x - self.x) <= self.half_size and abs(y - self.y) <= self.half_size

    def get_quadrant(self, x: float, y: float) -> int:
        """Child slot for a point: 0=NW, 1=NE, 2=SW, 3=SE."""
        return (2 if y >= self.y else 0) | (1 if x >= self.x else 0)

    def child(self, quadrant: int) -> QuadTreeNode:
        """Child cell for a quadrant, created on first use."""
        assert self.children is not None
        cell = self.children[quadrant]
        if cell is None:
            quarter = self.half_size / 2
            cell = QuadTreeNode(
                self.x + (quarter if quadrant & 1 else -quarter),
                self.y + (quarter if quadrant & 2 else -quarter),
                quarter,
                depth=self.depth + 1,
            )
            self.children[quadrant] = cell
        return cell


class QuadTree:
    """
    Quadtree over the current node positions.

    Build it with from_points(), which inserts every point and computes the
    mass distribution, then query calculate_force() once per body:

        tree = QuadTree.from_points(xs, ys, theta=0.5)
        fx, fy = tree.calculate_force(Body(xs[i], ys[i], index=i), 5000, 50)

    theta = 0 sums every pair exactly. Larger values approximate more.
    """

    def __init__(self, bounds: Tuple[float, float, float, float], theta: float = 0.5):
        """
        Args:
            bounds: (min_x, min_y, max_x, max_y); the root cell is the
                smallest square around it
            theta: Barnes-Hut opening threshold
        """
        min_x, min_y, max_x, max_y = bounds
        half_size = max(max_x - min_x, max_y - min_y) / 2
        self.root = QuadTreeNode((min_x + max_x) / 2, (min_y + max_y) / 2, half_size)
        self.theta = theta
        self.body_count = 0

    def insert(self, body: Body) -> None:
        """Add a body, splitting occupied leaves on the way down."""
        cell = self.root
        while not cell.is_empty():
            if cell.is_leaf():
                if cell.depth >= MAX_DEPTH:
                    break
                self._split(cell)
            cell = cell.child(cell.get_quadrant(body.x, body.y))
        cell.bodies.append(body)
        self.body_count += 1

    def _split(self, cell: QuadTreeNode) -> None:
        """Turn a leaf into an internal cell, moving its bodies one level down."""
        resident = cell.bodies
        cell.bodies = []
        cell.children = [None, None, None, None]
        for body in resident:
            target = cell.child(cell.get_quadrant(body.x, body.y))
            # A lone resident always lands in an empty child
            target.bodies.append(body)

    def compute_mass_distribution(self) -> None:
        """Fill total_mass and center of mass for every cell, leaves first."""
        order: list[QuadTreeNode] = []
        stack = [self.root]
        while stack:
            cell = stack.pop()
            order.append(cell)
            if cell.children:
                stack.extend(c for c in cell.children if c is not None)

        for cell in reversed(order):
            if cell.is_leaf():
                parts = [(b.mass, b.x, b.y) for b in cell.bodies]
            else:
                parts = [
                    (c.total_mass, c.center_of_mass_x, c.center_of_mass_y)
                    for c in cell.children or ()
                    if c is not None
                ]
            mass = sum(m for m, _, _ in parts)
            cell.total_mass = mass
            if mass > 0:
                cell.center_of_mass_x = sum(m * x for m, x, _ in parts) / mass
                cell.center_of_mass_y = sum(m * y for m, _, y in parts) / mass

    def calculate_force(
        self,
        body: Body,
        repulsion: float = 1.0,
        min_distance: float = 1.0,
    ) -> Tuple[float, float]:
        """
        Repulsive force on a body from every other body in the tree.

        Uses the same law as the exact computation in the force layout:
        magnitude ``repulsion * mass / d^2`` along ``(dx, dy) / d`` with ``d``
        floored at min_distance. A cell that contains the body is always
        opened, so a body never repels itself through a summary.

        Returns:
            (fx, fy), pointing away from the other bodies
        """
        fx, fy = 0.0, 0.0
        stack = [self.root]
        while stack:
            cell = stack.pop()
            if cell.is_empty():
                continue

            if cell.is_leaf():
                for other in cell.bodies:
                    if other.index == body.index:
                        continue
                    dfx, dfy = _coulomb(
                        body.x - other.x, body.y - other.y, other.mass, repulsion, min_distance
                    )
                    fx += dfx
                    fy += dfy
                continue

            dx = body.x - cell.center_of_mass_x
            dy = body.y - cell.center_of_mass_y
            dist = math.hypot(dx, dy)
            if (
                dist > 0
                and not cell.contains(body.x, body.y)
                and 2 * cell.half_size / dist < self.theta
            ):
                dfx, dfy = _coulomb(dx, dy, cell.total_mass, repulsion, min_distance)
                fx += dfx
                fy += dfy
            else:
                stack.extend(c for c in cell.children or () if c is not None)
        return fx, fy

    @classmethod
    def from_points(
        cls,
        xs: Sequence[float],
        ys: Sequence[float],
        padding: float = 10.0,
        theta: float = 0.5,
    ) -> QuadTree:
        """
        Build a ready-to-query tree from parallel coordinate sequences.

        Body i gets index i and unit mass.
        """
        if len(xs) == 0:
            return cls((0.0, 0.0, 100.0, 100.0), theta=theta)

        tree = cls(
            (
                float(min(xs)) - padding,
                float(min(ys)) - padding,
                float(max(xs)) + padding,
                float(max(ys)) + padding,
            ),
            theta=theta,
        )
        for i, (x, y) in enumerate(zip(xs, ys)):
            tree.insert(Body(float(x), float(y), index=i))
        tree.compute_mass_distribution()
        return tree


def _coulomb(
    dx: float, dy: float, mass: float, repulsion: float, min_distance: float
) -> Tuple[float, float]:
    dist = max(math.hypot(dx, dy), min_distance)
    force = repulsion * mass / (dist * dist)
    return dx / dist * force, dy / dist * force


__all__ = ["Body", "QuadTree", "QuadTreeNode", "MAX_DEPTH"]
