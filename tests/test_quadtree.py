"""Tests for the Barnes-Hut quadtree."""

import math

import pytest

from notegraph_layout.spatial import Body, QuadTree, QuadTreeNode


class TestQuadTreeNode:
    """Tests for QuadTreeNode."""

    def test_empty_leaf(self):
        """New node is an empty leaf."""
        node = QuadTreeNode(0, 0, 10)
        assert node.is_leaf()
        assert node.is_empty()

    def test_get_quadrant(self):
        """Quadrants are NW, NE, SW, SE around the center."""
        node = QuadTreeNode(0, 0, 10)
        assert node.get_quadrant(-1, -1) == 0
        assert node.get_quadrant(1, -1) == 1
        assert node.get_quadrant(-1, 1) == 2
        assert node.get_quadrant(1, 1) == 3


class TestQuadTree:
    """Tests for QuadTree construction and force calculation."""

    def test_from_points_counts_bodies(self):
        """All points are inserted."""
        tree = QuadTree.from_points([0, 10, 20], [0, 10, 20])
        assert tree.body_count == 3
        assert tree.root.total_mass == 3

    def test_center_of_mass(self):
        """Root center of mass is the mean of the points."""
        tree = QuadTree.from_points([0, 10, 20, 30], [0, 0, 40, 40])
        assert tree.root.center_of_mass_x == pytest.approx(15)
        assert tree.root.center_of_mass_y == pytest.approx(20)

    def test_empty_points(self):
        """Empty input gives an empty tree."""
        tree = QuadTree.from_points([], [])
        assert tree.body_count == 0
        assert tree.calculate_force(Body(0, 0), 100, 1) == (0.0, 0.0)

    def test_force_points_away(self):
        """Repulsion pushes a body away from its neighbor."""
        tree = QuadTree.from_points([0, 10], [0, 0])
        fx, fy = tree.calculate_force(Body(0, 0, index=0), repulsion=100, min_distance=1)
        assert fx == pytest.approx(-1.0)
        assert fy == pytest.approx(0.0)

    def test_no_self_force(self):
        """A lone body feels nothing."""
        tree = QuadTree.from_points([5], [5])
        assert tree.calculate_force(Body(5, 5, index=0), 100, 1) == (0.0, 0.0)

    def test_min_distance_floor(self):
        """Close bodies are treated as min_distance apart."""
        tree = QuadTree.from_points([0, 1], [0, 0])
        fx, _ = tree.calculate_force(Body(0, 0, index=0), repulsion=100, min_distance=10)
        # direction -1/10, magnitude 100/10^2
        assert fx == pytest.approx(-0.1)

    def test_coincident_bodies(self):
        """Identical points share a leaf instead of subdividing forever."""
        tree = QuadTree.from_points([3, 3, 3], [7, 7, 7])
        assert tree.body_count == 3
        fx, fy = tree.calculate_force(Body(3, 7, index=1), 100, 1)
        assert (fx, fy) == (0.0, 0.0)

    def test_theta_zero_is_exact(self):
        """With theta 0 every pair is summed exactly."""
        xs = [0, 100, 200, 50, 150, 300]
        ys = [0, 50, 10, 200, 250, 120]
        tree = QuadTree.from_points(xs, ys, theta=0.0)

        for i, (x, y) in enumerate(zip(xs, ys)):
            expected_x, expected_y = 0.0, 0.0
            for j, (ox, oy) in enumerate(zip(xs, ys)):
                if i == j:
                    continue
                dx, dy = x - ox, y - oy
                dist = math.hypot(dx, dy)
                expected_x += dx / dist * 1000 / dist**2
                expected_y += dy / dist * 1000 / dist**2

            fx, fy = tree.calculate_force(Body(x, y, index=i), 1000, 1)
            assert fx == pytest.approx(expected_x)
            assert fy == pytest.approx(expected_y)

    def test_approximation_close_to_exact(self):
        """A distant cluster is approximated by its center of mass."""
        xs = [0] + [1000 + i for i in range(5)]
        ys = [0] + [1000 + i for i in range(5)]
        exact = QuadTree.from_points(xs, ys, theta=0.0)
        approx = QuadTree.from_points(xs, ys, theta=0.5)

        body = Body(0, 0, index=0)
        ex, ey = exact.calculate_force(body, 1000, 1)
        ax, ay = approx.calculate_force(body, 1000, 1)
        assert ax == pytest.approx(ex, rel=0.05)
        assert ay == pytest.approx(ey, rel=0.05)
