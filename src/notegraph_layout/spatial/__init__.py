"""
Spatial data structures for efficient force calculations.

Provides a quadtree for Barnes-Hut O(n log n) repulsion approximation.
"""

from .quadtree import Body, QuadTree, QuadTreeNode

__all__ = ["Body", "QuadTree", "QuadTreeNode"]
