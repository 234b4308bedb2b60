"""
Single entry point for all layout strategies.

apply_layout() picks the layout matching a strategy name, runs it and
returns positioned copies of the input nodes. Unknown strategy names are
passed through: the nodes come back unpositioned rather than raising, unless
strict mode is requested.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from .base import BaseLayout, as_node
from .force import ForceDirectedLayout
from .hierarchical import HierarchicalLayout, RadialLayout
from .options import LayoutOptions
from .types import EdgeLike, LayoutStrategy, Node, NodeLike
from .validation import STRATEGY_ALIASES, UnknownLayoutError, validate_strategy

logger = logging.getLogger(__name__)


def available_layouts() -> list[str]:
    """Names of the layout strategies apply_layout() understands."""
    return [strategy.value for strategy in LayoutStrategy]


def create_layout(
    nodes: Sequence[NodeLike],
    edges: Sequence[EdgeLike],
    strategy: Union[str, LayoutStrategy],
    options: Optional[LayoutOptions] = None,
) -> BaseLayout:
    """
    Build (without running) the layout object for a strategy.

    Args:
        nodes: Input nodes
        edges: Input edges
        strategy: 'hierarchical' (alias 'dagre'), 'force' or 'radial'
        options: Layout options; defaults used when None

    Returns:
        Configured layout instance

    Raises:
        UnknownLayoutError: If strategy is not recognized
    """
    opts = options if options is not None else LayoutOptions()
    kind = validate_strategy(strategy)

    if kind is LayoutStrategy.hierarchical:
        return HierarchicalLayout(nodes=nodes, edges=edges, **opts.hierarchical_kwargs())
    if kind is LayoutStrategy.force:
        return ForceDirectedLayout(nodes=nodes, edges=edges, **opts.force_kwargs())
    return RadialLayout(nodes=nodes, edges=edges, **opts.radial_kwargs())


def apply_layout(
    nodes: Sequence[NodeLike],
    edges: Sequence[EdgeLike],
    strategy: Union[str, LayoutStrategy],
    options: Union[LayoutOptions, Mapping[str, Any], None] = None,
    *,
    strict: bool = False,
    **kwargs: Any,
) -> list[Node]:
    """
    Lay out a graph with the named strategy.

    Args:
        nodes: Nodes as Node objects, dicts ({'id', 'position', 'payload'})
            or objects with an id attribute
        edges: Edges as Edge objects, dicts ({'source', 'target'}) or objects
        strategy: 'hierarchical' (alias 'dagre'), 'force' or 'radial'
        options: LayoutOptions or mapping of option names (snake_case or
            camelCase such as 'rankSep', 'focusNodeId')
        strict: If True, unknown strategy or option names raise instead of
            being ignored
        **kwargs: Option overrides, applied on top of options

    Returns:
        New Node objects, one per input node id and in input order, with
        computed positions. Payloads are shared with the input, which is
        never modified. For an unknown strategy the nodes are returned
        without new positions.

    Raises:
        UnknownLayoutError: If strict and the strategy is not recognized
        InvalidOptionError: If an option value is invalid, or strict and an
            option name is unknown

    Example:
        >>> result = apply_layout(
        ...     [{"id": "a"}, {"id": "b"}],
        ...     [{"source": "a", "target": "b"}],
        ...     "radial",
        ...     {"focusNodeId": "a"},
        ... )
        >>> [node.id for node in result]
        ['a', 'b']
    """
    opts = _resolve_options(options, kwargs, strict)

    try:
        layout = create_layout(nodes, edges, strategy, opts)
    except UnknownLayoutError:
        if strict:
            raise
        logger.debug(
            "Unknown layout strategy %r (expected one of %s); returning nodes unchanged",
            strategy,
            available_layouts() + list(STRATEGY_ALIASES),
        )
        return [as_node(node) for node in nodes]

    logger.debug("Applying %s layout", type(layout).__name__)
    return layout.run().nodes


def _resolve_options(
    options: Union[LayoutOptions, Mapping[str, Any], None],
    overrides: Mapping[str, Any],
    strict: bool,
) -> LayoutOptions:
    if options is None:
        opts = LayoutOptions()
    elif isinstance(options, LayoutOptions):
        opts = options
    else:
        opts = LayoutOptions.from_mapping(options, strict=strict)
    return opts.merged(overrides, strict=strict)


__all__ = ["apply_layout", "create_layout", "available_layouts"]
