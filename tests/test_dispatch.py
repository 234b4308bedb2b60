"""
Tests for the apply_layout() entry point.
"""

import logging
import math

import pytest

from notegraph_layout import (
    ForceDirectedLayout,
    HierarchicalLayout,
    InvalidOptionError,
    LayoutOptions,
    Node,
    Position,
    RadialLayout,
    UnknownLayoutError,
    apply_layout,
    available_layouts,
    create_layout,
)

STRATEGIES = ["hierarchical", "force", "radial"]


def create_graph():
    """Small knowledge graph with payloads."""
    nodes = [
        {"id": "a", "payload": {"title": "Alpha"}},
        {"id": "b", "payload": {"title": "Beta"}},
        {"id": "c", "payload": {"title": "Gamma"}},
        {"id": "d", "payload": {"title": "Delta"}},
    ]
    edges = [
        {"source": "a", "target": "b"},
        {"source": "b", "target": "c"},
        {"source": "c", "target": "d"},
    ]
    return nodes, edges


class TestNodePreservation:
    """Output nodes match input nodes."""

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_same_ids_once_each(self, strategy):
        """Every input id appears exactly once, in input order."""
        nodes, edges = create_graph()
        result = apply_layout(nodes, edges, strategy)
        assert [node.id for node in result] == ["a", "b", "c", "d"]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_payload_untouched(self, strategy):
        """Payload objects are passed through as-is."""
        nodes, edges = create_graph()
        result = apply_layout(nodes, edges, strategy)
        for before, after in zip(nodes, result):
            assert after.payload is before["payload"]
            assert after.payload == before["payload"]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_input_not_modified(self, strategy):
        """Caller Node objects keep their original position."""
        nodes = [Node("a"), Node("b", position=(5, 5))]
        apply_layout(nodes, [{"source": "a", "target": "b"}], strategy)

        assert nodes[0].position is None
        assert nodes[1].position == Position(5.0, 5.0)

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_all_nodes_positioned(self, strategy):
        """Every returned node has finite coordinates."""
        nodes, edges = create_graph()
        for node in apply_layout(nodes, edges, strategy):
            assert math.isfinite(node.position.x)
            assert math.isfinite(node.position.y)

    def test_duplicate_ids_warn(self):
        """Duplicate ids keep the first node and warn."""
        from notegraph_layout import GraphStructureWarning

        nodes = [{"id": "a", "payload": 1}, {"id": "a", "payload": 2}]
        with pytest.warns(GraphStructureWarning, match="duplicate"):
            result = apply_layout(nodes, [], "radial")
        assert [(node.id, node.payload) for node in result] == [("a", 1)]


class TestEdgeCases:
    """Empty, single-node and dangling-edge graphs."""

    @pytest.mark.parametrize("strategy", STRATEGIES + ["dagre", "nonexistent"])
    def test_empty_graph(self, strategy):
        """Empty input gives empty output."""
        assert apply_layout([], [], strategy) == []

    @pytest.mark.parametrize(
        "strategy,expected",
        [
            ("hierarchical", Position(0.0, 0.0)),
            ("force", Position(400.0, 200.0)),
            ("radial", Position(314.0, 382.0)),
        ],
    )
    def test_single_node(self, strategy, expected):
        """A single node lands at a fixed position."""
        result = apply_layout([{"id": "only"}], [], strategy)
        assert len(result) == 1
        assert result[0].position == expected

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_dangling_edges_ignored(self, strategy):
        """Edges to unknown ids give the same layout as omitting them."""
        nodes, edges = create_graph()
        plain = apply_layout(nodes, edges, strategy)

        noisy_edges = edges + [
            {"source": "a", "target": "phantom"},
            {"source": "phantom", "target": "d"},
            {"source": "ghost", "target": "phantom"},
        ]
        noisy = apply_layout(nodes, noisy_edges, strategy)

        assert [n.position for n in noisy] == [n.position for n in plain]


class TestDeterminism:
    """Repeated calls give identical output."""

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_repeatable(self, strategy):
        """Two calls with the same input are bit-identical."""
        nodes, edges = create_graph()
        first = apply_layout(nodes, edges, strategy)
        second = apply_layout(nodes, edges, strategy)
        assert [n.position for n in first] == [n.position for n in second]

    def test_force_repeatable_with_seeds(self):
        """Force layout from the same seed positions is repeatable."""
        nodes = [
            {"id": "a", "position": (0, 0)},
            {"id": "b", "position": (100, 0)},
            {"id": "c"},
        ]
        edges = [{"source": "a", "target": "b"}, {"source": "b", "target": "c"}]
        first = apply_layout(nodes, edges, "force", iterations=30)
        second = apply_layout(nodes, edges, "force", iterations=30)
        assert [n.position for n in first] == [n.position for n in second]


class TestStrategyBehavior:
    """Each strategy keeps its defining property through the dispatcher."""

    def test_radial_chain_levels(self):
        """Chain A-B-C-D around A puts each node one ring further out."""
        nodes, edges = create_graph()
        result = apply_layout(nodes, edges, "radial", {"focusNodeId": "a"})

        for level, node in enumerate(result):
            cx = node.position.x + 86
            cy = node.position.y + 18
            assert math.hypot(cx - 400, cy - 400) == pytest.approx(level * 150)

    def test_hierarchical_ranks_top_to_bottom(self):
        """A -> B -> C places each node further down."""
        nodes, edges = create_graph()
        result = apply_layout(nodes, edges, "hierarchical", {"direction": "top-to-bottom"})
        ys = [node.position.y for node in result]
        assert ys[0] < ys[1] < ys[2] < ys[3]

    def test_dagre_alias(self):
        """'dagre' is the same as 'hierarchical'."""
        nodes, edges = create_graph()
        dagre = apply_layout(nodes, edges, "dagre")
        hierarchical = apply_layout(nodes, edges, "hierarchical")
        assert [n.position for n in dagre] == [n.position for n in hierarchical]

    def test_force_repulsion_monotonic(self):
        """Raising repulsionConstant separates a connected pair further."""
        nodes = [{"id": "a"}, {"id": "b"}]
        edges = [{"source": "a", "target": "b"}]

        def gap(repulsion):
            a, b = apply_layout(nodes, edges, "force", {"repulsionConstant": repulsion})
            assert math.isfinite(a.position.x) and math.isfinite(b.position.y)
            return math.hypot(a.position.x - b.position.x, a.position.y - b.position.y)

        assert gap(100000) > gap(1000)

    def test_strategy_case_insensitive(self):
        """Strategy names ignore case."""
        nodes, edges = create_graph()
        upper = apply_layout(nodes, edges, "Radial")
        lower = apply_layout(nodes, edges, "radial")
        assert [n.position for n in upper] == [n.position for n in lower]


class TestUnknownStrategy:
    """Unknown strategy names."""

    def test_returns_nodes_unchanged(self):
        """Nodes come back without new positions."""
        nodes = [
            {"id": "a", "payload": "x"},
            {"id": "b", "position": {"x": 3, "y": 4}},
        ]
        result = apply_layout(nodes, [{"source": "a", "target": "b"}], "nonexistent")

        assert [node.id for node in result] == ["a", "b"]
        assert result[0].position is None
        assert result[0].payload == "x"
        assert result[1].position == Position(3.0, 4.0)

    def test_logs_debug(self, caplog):
        """Fallback is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="notegraph_layout"):
            apply_layout([{"id": "a"}], [], "spiral")
        assert "spiral" in caplog.text

    def test_strict_raises(self):
        """Strict mode rejects unknown strategies."""
        with pytest.raises(UnknownLayoutError, match="spiral"):
            apply_layout([{"id": "a"}], [], "spiral", strict=True)


class TestOptions:
    """Option handling in apply_layout()."""

    def test_camel_case_options(self):
        """camelCase and snake_case names are equivalent."""
        nodes, edges = create_graph()
        camel = apply_layout(nodes, edges, "hierarchical", {"rankSep": 10, "nodeSep": 5})
        snake = apply_layout(
            nodes, edges, "hierarchical", {"rank_separation": 10, "node_separation": 5}
        )
        assert [n.position for n in camel] == [n.position for n in snake]
        assert camel[1].position.y == pytest.approx(46.0)

    def test_keyword_overrides(self):
        """Keyword arguments override the options mapping."""
        nodes, edges = create_graph()
        result = apply_layout(
            nodes, edges, "hierarchical", {"direction": "TB"}, direction="LR"
        )
        xs = [node.position.x for node in result]
        assert xs == sorted(xs)
        assert xs[0] < xs[-1]

    def test_options_object(self):
        """A LayoutOptions instance is accepted."""
        nodes, edges = create_graph()
        opts = LayoutOptions(focus_node_id="d", level_spacing=50)
        result = apply_layout(nodes, edges, "radial", opts)
        assert result[3].position == Position(400.0 - 86, 400.0 - 18)

    def test_unknown_option_ignored(self):
        """Unknown option names are ignored by default."""
        nodes, edges = create_graph()
        result = apply_layout(nodes, edges, "force", {"temperature": 3}, iterations=5)
        assert len(result) == 4

    def test_unknown_option_strict(self):
        """Strict mode rejects unknown option names."""
        with pytest.raises(InvalidOptionError, match="temperature"):
            apply_layout([], [], "force", {"temperature": 3}, strict=True)

    def test_invalid_option_value(self):
        """Invalid option values raise even when not strict."""
        with pytest.raises(InvalidOptionError):
            apply_layout([{"id": "a"}], [], "hierarchical", {"direction": "sideways"})


class TestCreateLayout:
    """Tests for create_layout() and available_layouts()."""

    def test_available_layouts(self):
        """All strategy names are listed."""
        assert available_layouts() == ["hierarchical", "force", "radial"]

    @pytest.mark.parametrize(
        "strategy,cls",
        [
            ("hierarchical", HierarchicalLayout),
            ("dagre", HierarchicalLayout),
            ("force", ForceDirectedLayout),
            ("radial", RadialLayout),
        ],
    )
    def test_layout_class(self, strategy, cls):
        """Each name maps to its layout class."""
        assert isinstance(create_layout([], [], strategy), cls)

    def test_unknown_raises(self):
        """create_layout() always rejects unknown names."""
        with pytest.raises(UnknownLayoutError):
            create_layout([], [], "nonexistent")

    def test_options_applied(self):
        """Options reach the layout constructor."""
        layout = create_layout([], [], "force", LayoutOptions(iterations=7, damping=0.5))
        assert layout.iterations == 7
        assert layout.damping == 0.5
