"""
Layout configuration.

LayoutOptions gathers every tunable accepted by apply_layout() together with
its default value. Options may be given as a LayoutOptions instance or as a
plain mapping using either snake_case field names or the camelCase names
used by graph front-ends (``rankSep``, ``nodeSep``, ``focusNodeId``, ...).
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, TypedDict, Union

from .types import Direction, NodeId, PositionLike
from .validation import InvalidOptionError

# Defaults shared with the layout classes
DEFAULT_NODE_WIDTH = 172.0
DEFAULT_NODE_HEIGHT = 36.0
DEFAULT_RANK_SEPARATION = 50.0
DEFAULT_NODE_SEPARATION = 25.0
DEFAULT_CROSSING_ITERATIONS = 24

DEFAULT_ITERATIONS = 100
DEFAULT_REPULSION = 5000.0
DEFAULT_ATTRACTION = 0.01
DEFAULT_DAMPING = 0.9
DEFAULT_MIN_DISTANCE = 50.0
DEFAULT_BARNES_HUT_THETA = 0.5

DEFAULT_LEVEL_SPACING = 150.0
DEFAULT_RADIAL_CENTER = (400.0, 400.0)


class LayoutOptionsDict(TypedDict, total=False):
    """Mapping form of LayoutOptions accepted by apply_layout()."""

    direction: Union[str, Direction]
    node_width: float
    node_height: float
    rank_separation: float
    node_separation: float
    crossing_iterations: int
    iterations: int
    repulsion: float
    attraction: float
    damping: float
    min_distance: float
    use_barnes_hut: bool
    barnes_hut_theta: float
    focus_node_id: Optional[NodeId]
    level_spacing: float
    center: PositionLike


# camelCase (and original short) names -> field names
OPTION_ALIASES: dict[str, str] = {
    "nodeWidth": "node_width",
    "nodeHeight": "node_height",
    "rankSep": "rank_separation",
    "rankSeparation": "rank_separation",
    "nodeSep": "node_separation",
    "nodeSeparation": "node_separation",
    "crossingIterations": "crossing_iterations",
    "repulsionConstant": "repulsion",
    "attractionConstant": "attraction",
    "minDistance": "min_distance",
    "useBarnesHut": "use_barnes_hut",
    "barnesHutTheta": "barnes_hut_theta",
    "focusNodeId": "focus_node_id",
    "levelSpacing": "level_spacing",
}


@dataclass
class LayoutOptions:
    """
    Options for every layout strategy.

    Each strategy reads only the fields relevant to it; the rest are ignored.

    Attributes:
        direction: Hierarchical rank direction ('TB', 'LR', 'BT', 'RL')
        node_width: Rendered node width (hierarchical, radial anchor offset)
        node_height: Rendered node height (hierarchical, radial anchor offset)
        rank_separation: Gap between ranks (hierarchical)
        node_separation: Gap between nodes within a rank (hierarchical)
        crossing_iterations: Barycenter sweeps (hierarchical)
        iterations: Simulation steps (force)
        repulsion: Pairwise repulsion constant (force)
        attraction: Edge spring constant (force)
        damping: Velocity retained per step (force)
        min_distance: Distance floor for repulsion (force)
        use_barnes_hut: Approximate repulsion with a quadtree (force)
        barnes_hut_theta: Barnes-Hut accuracy (force)
        focus_node_id: Center node (radial)
        level_spacing: Ring spacing (radial)
        center: Ring center point (radial)
    """

    direction: Union[str, Direction] = Direction.TB
    node_width: float = DEFAULT_NODE_WIDTH
    node_height: float = DEFAULT_NODE_HEIGHT
    rank_separation: float = DEFAULT_RANK_SEPARATION
    node_separation: float = DEFAULT_NODE_SEPARATION
    crossing_iterations: int = DEFAULT_CROSSING_ITERATIONS
    iterations: int = DEFAULT_ITERATIONS
    repulsion: float = DEFAULT_REPULSION
    attraction: float = DEFAULT_ATTRACTION
    damping: float = DEFAULT_DAMPING
    min_distance: float = DEFAULT_MIN_DISTANCE
    use_barnes_hut: bool = False
    barnes_hut_theta: float = DEFAULT_BARNES_HUT_THETA
    focus_node_id: Optional[NodeId] = None
    level_spacing: float = DEFAULT_LEVEL_SPACING
    center: PositionLike = DEFAULT_RADIAL_CENTER

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], strict: bool = False) -> LayoutOptions:
        """
        Build options from a mapping of snake_case or camelCase names.

        Args:
            values: Option names to values
            strict: If True, unknown names raise InvalidOptionError.
                Otherwise they are ignored.

        Returns:
            LayoutOptions with defaults for anything not given
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        unknown: list[str] = []
        for key, value in values.items():
            name = OPTION_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            else:
                unknown.append(key)

        if strict and unknown:
            raise InvalidOptionError(f"Unknown layout option(s): {sorted(unknown)}")
        return cls(**kwargs)

    def merged(self, overrides: Mapping[str, Any], strict: bool = False) -> LayoutOptions:
        """Return a copy with overrides (snake_case or camelCase) applied."""
        if not overrides:
            return self
        extra = LayoutOptions.from_mapping(overrides, strict=strict)
        given = {OPTION_ALIASES.get(key, key) for key in overrides}
        changes = {f.name: getattr(extra, f.name) for f in fields(extra) if f.name in given}
        return replace(self, **changes)

    def hierarchical_kwargs(self) -> dict[str, Any]:
        """Constructor arguments for HierarchicalLayout."""
        return {
            "direction": self.direction,
            "node_width": self.node_width,
            "node_height": self.node_height,
            "rank_separation": self.rank_separation,
            "node_separation": self.node_separation,
            "crossing_iterations": self.crossing_iterations,
        }

    def force_kwargs(self) -> dict[str, Any]:
        """Constructor arguments for ForceDirectedLayout."""
        return {
            "iterations": self.iterations,
            "repulsion": self.repulsion,
            "attraction": self.attraction,
            "damping": self.damping,
            "min_distance": self.min_distance,
            "use_barnes_hut": self.use_barnes_hut,
            "barnes_hut_theta": self.barnes_hut_theta,
        }

    def radial_kwargs(self) -> dict[str, Any]:
        """Constructor arguments for RadialLayout."""
        return {
            "focus_node_id": self.focus_node_id,
            "level_spacing": self.level_spacing,
            "center": self.center,
            "node_width": self.node_width,
            "node_height": self.node_height,
        }


__all__ = [
    "LayoutOptions",
    "LayoutOptionsDict",
    "OPTION_ALIASES",
    "DEFAULT_NODE_WIDTH",
    "DEFAULT_NODE_HEIGHT",
    "DEFAULT_RANK_SEPARATION",
    "DEFAULT_NODE_SEPARATION",
    "DEFAULT_CROSSING_ITERATIONS",
    "DEFAULT_ITERATIONS",
    "DEFAULT_REPULSION",
    "DEFAULT_ATTRACTION",
    "DEFAULT_DAMPING",
    "DEFAULT_MIN_DISTANCE",
    "DEFAULT_BARNES_HUT_THETA",
    "DEFAULT_LEVEL_SPACING",
    "DEFAULT_RADIAL_CENTER",
]
