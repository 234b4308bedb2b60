"""
Input validation utilities for graph layout strategies.

Provides centralized validation functions for layout options, strategy
names and edge references. Raises descriptive exceptions on invalid input.
"""

from __future__ import annotations

import math
from typing import Any, Collection, Sequence, Union

from .types import DIRECTION_ALIASES, Direction, LayoutStrategy

STRATEGY_ALIASES: dict[str, LayoutStrategy] = {
    "dagre": LayoutStrategy.hierarchical,
}


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidOptionError(ValidationError):
    """Raised when a layout option has an invalid value or unknown name."""

    pass


class UnknownLayoutError(ValidationError):
    """Raised in strict mode when a layout strategy name is not recognized."""

    pass


class InvalidNodeError(ValidationError):
    """Raised when a node is malformed."""

    pass


class InvalidEdgeError(ValidationError):
    """Raised when an edge is malformed or references unknown nodes."""

    pass


class GraphStructureWarning(UserWarning):
    """Warning issued when graph structure doesn't match algorithm assumptions."""

    pass


def validate_direction(direction: Union[str, Direction]) -> Direction:
    """
    Validate a hierarchical rank direction.

    Args:
        direction: 'TB', 'LR', 'BT', 'RL', a Direction, or a long form such
            as 'top-to-bottom'

    Returns:
        Validated Direction

    Raises:
        InvalidOptionError: If direction is not recognized
    """
    if isinstance(direction, Direction):
        return direction
    if isinstance(direction, str):
        key = direction.strip()
        if key.upper() in Direction.__members__:
            return Direction[key.upper()]
        if key.lower() in DIRECTION_ALIASES:
            return DIRECTION_ALIASES[key.lower()]
    valid = [d.value for d in Direction] + list(DIRECTION_ALIASES)
    raise InvalidOptionError(f"direction must be one of {valid}, got {direction!r}")


def validate_iterations(iterations: int) -> int:
    """
    Validate iteration count is positive.

    Args:
        iterations: Number of iterations

    Returns:
        Validated iteration count

    Raises:
        InvalidOptionError: If iterations < 1
    """
    try:
        count = int(iterations)
    except (TypeError, ValueError) as exc:
        raise InvalidOptionError(f"iterations must be an integer, got {iterations!r}") from exc
    if isinstance(iterations, bool) or count != iterations or count < 1:
        raise InvalidOptionError(f"iterations must be an integer >= 1, got {iterations!r}")
    return count


def validate_positive(name: str, value: float) -> float:
    """
    Validate that a numeric option is finite and strictly positive.

    Raises:
        InvalidOptionError: If value is not a finite number > 0
    """
    number = _to_float(name, value)
    if number <= 0:
        raise InvalidOptionError(f"{name} must be positive, got {value!r}")
    return number


def validate_non_negative(name: str, value: float) -> float:
    """
    Validate that a numeric option is finite and >= 0.

    Raises:
        InvalidOptionError: If value is not a finite number >= 0
    """
    number = _to_float(name, value)
    if number < 0:
        raise InvalidOptionError(f"{name} must be non-negative, got {value!r}")
    return number


def validate_fraction(name: str, value: float) -> float:
    """
    Validate that a numeric option lies in [0, 1].

    Raises:
        InvalidOptionError: If value is outside [0, 1]
    """
    number = _to_float(name, value)
    if number < 0 or number > 1:
        raise InvalidOptionError(f"{name} must be in [0, 1], got {value!r}")
    return number


def validate_strategy(strategy: Union[str, LayoutStrategy]) -> LayoutStrategy:
    """
    Resolve a strategy name to a LayoutStrategy.

    Args:
        strategy: 'hierarchical', 'force', 'radial' (or the alias 'dagre')

    Returns:
        Matching LayoutStrategy

    Raises:
        UnknownLayoutError: If the name is not a known strategy
    """
    if isinstance(strategy, LayoutStrategy):
        return strategy
    if isinstance(strategy, str):
        key = strategy.strip().lower()
        if key in LayoutStrategy.__members__:
            return LayoutStrategy[key]
        if key in STRATEGY_ALIASES:
            return STRATEGY_ALIASES[key]
    valid = [s.value for s in LayoutStrategy]
    raise UnknownLayoutError(f"Unknown layout strategy {strategy!r}. Available: {valid}")


def validate_edge_references(
    edges: Sequence[Any],
    node_ids: Collection[Any],
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that every edge source/target names a known node.

    Args:
        edges: Sequence of Edge objects or dicts with source/target
        node_ids: Collection of known node ids
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (edge_index, issue_description) tuples

    Raises:
        InvalidEdgeError: If strict=True and dangling edges are found
    """
    issues: list[tuple[int, str]] = []

    for i, edge in enumerate(edges):
        for attr in ("source", "target"):
            ref = _get_ref(edge, attr)
            if ref is None:
                issues.append((i, f"Edge {i}: {attr} is None"))
            elif ref not in node_ids:
                issues.append((i, f"Edge {i}: {attr} {ref!r} is not a known node id"))

    if strict and issues:
        msg = "Invalid edge references:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidEdgeError(msg)

    return issues


def _to_float(name: str, value: Any) -> float:
    """Convert an option value to a finite float."""
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidOptionError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidOptionError(f"{name} must be finite, got {value!r}")
    return number


def _get_ref(obj: Any, attr: str) -> Any:
    """Extract a node reference from an Edge, dict, or object."""
    if isinstance(obj, dict):
        return obj.get(attr)
    return getattr(obj, attr, None)


__all__ = [
    "ValidationError",
    "InvalidOptionError",
    "UnknownLayoutError",
    "InvalidNodeError",
    "InvalidEdgeError",
    "GraphStructureWarning",
    "STRATEGY_ALIASES",
    "validate_direction",
    "validate_iterations",
    "validate_positive",
    "validate_non_negative",
    "validate_fraction",
    "validate_strategy",
    "validate_edge_references",
]
