"""
notegraph-layout: layout strategies for knowledge-graph views.

Takes a plain graph (node ids plus edges) and returns 2D positions.

Available strategies:
- hierarchical: Layered, dagre-style layout for directed graphs
- force: Spring-electrical force-directed simulation
- radial: BFS rings around a focus node

Most callers only need apply_layout():

    from notegraph_layout import apply_layout

    nodes = apply_layout(nodes, edges, "radial", {"focus_node_id": "a"})
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import (
    BaseLayout,
    IterativeLayout,
    StaticLayout,
)

# Entry point
from .dispatch import apply_layout, available_layouts, create_layout

# Force-directed layouts
from .force import ForceDirectedLayout

# Hierarchical layouts
from .hierarchical import HierarchicalLayout, RadialLayout

# Configuration
from .options import LayoutOptions, LayoutOptionsDict

# Preprocessing utilities
from .preprocessing import (
    assign_ranks_longest_path,
    bfs_levels,
    count_crossings,
    detect_cycle,
    has_cycle,
    minimize_crossings_barycenter,
    remove_cycles,
    topological_sort,
)

# Spatial data structures
from .spatial import Body, QuadTree, QuadTreeNode
from .types import (
    Direction,
    Edge,
    EdgeLike,
    LayoutStrategy,
    Node,
    NodeLike,
    Position,
    PositionLike,
)

# Validation utilities
from .validation import (
    GraphStructureWarning,
    InvalidEdgeError,
    InvalidNodeError,
    InvalidOptionError,
    UnknownLayoutError,
    ValidationError,
    validate_edge_references,
)

__all__ = [
    # Version
    "__version__",
    # Entry point
    "apply_layout",
    "create_layout",
    "available_layouts",
    # Shared types
    "Position",
    "Node",
    "Edge",
    "Direction",
    "LayoutStrategy",
    "NodeLike",
    "EdgeLike",
    "PositionLike",
    # Configuration
    "LayoutOptions",
    "LayoutOptionsDict",
    # Base classes
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
    # Layouts
    "HierarchicalLayout",
    "ForceDirectedLayout",
    "RadialLayout",
    # Spatial data structures
    "Body",
    "QuadTree",
    "QuadTreeNode",
    # Validation
    "ValidationError",
    "InvalidOptionError",
    "UnknownLayoutError",
    "InvalidNodeError",
    "InvalidEdgeError",
    "GraphStructureWarning",
    "validate_edge_references",
    # Preprocessing
    "detect_cycle",
    "has_cycle",
    "remove_cycles",
    "topological_sort",
    "assign_ranks_longest_path",
    "minimize_crossings_barycenter",
    "count_crossings",
    "bfs_levels",
]
