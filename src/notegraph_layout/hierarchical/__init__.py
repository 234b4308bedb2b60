"""
Hierarchical graph layouts.

This module provides layouts driven by graph structure rather than physics:
- HierarchicalLayout: Layered (dagre-style) layout for directed graphs
- RadialLayout: BFS rings around a focus node
"""

from .layered import HierarchicalLayout
from .radial import RadialLayout

__all__ = [
    "HierarchicalLayout",
    "RadialLayout",
]
