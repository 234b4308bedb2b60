"""Tests for shared layout types."""

import pytest

from notegraph_layout import Direction, Edge, Node, Position


class TestPosition:
    """Tests for Position."""

    def test_unpacking(self):
        """Positions unpack to (x, y)."""
        x, y = Position(1.5, -2.0)
        assert (x, y) == (1.5, -2.0)

    def test_frozen(self):
        """Positions are immutable."""
        pos = Position(0, 0)
        with pytest.raises(AttributeError):
            pos.x = 3

    def test_coerce_forms(self):
        """Mappings, pairs and x/y objects are coerced."""
        assert Position.coerce({"x": 1, "y": 2}) == Position(1.0, 2.0)
        assert Position.coerce((3, 4)) == Position(3.0, 4.0)
        assert Position.coerce([5, 6]) == Position(5.0, 6.0)

        class Point:
            x = 7
            y = 8

        assert Position.coerce(Point()) == Position(7.0, 8.0)

    def test_coerce_passthrough(self):
        """Position and None pass through unchanged."""
        pos = Position(1, 1)
        assert Position.coerce(pos) is pos
        assert Position.coerce(None) is None

    def test_coerce_bad_pair(self):
        """Sequences of the wrong length raise ValueError."""
        with pytest.raises(ValueError):
            Position.coerce((1, 2, 3))


class TestNode:
    """Tests for Node."""

    def test_defaults(self):
        """New nodes have no position or payload."""
        node = Node("a")
        assert node.position is None
        assert node.payload is None

    def test_position_coerced(self):
        """Position input is coerced on construction."""
        assert Node("a", position={"x": 1, "y": 2}).position == Position(1.0, 2.0)

    def test_extra_attributes(self):
        """Unknown keyword arguments become attributes."""
        node = Node("a", kind="note")
        assert node.kind == "note"

    def test_copy_shares_payload(self):
        """copy() makes a new node sharing payload and extras."""
        payload = {"body": "text"}
        node = Node("a", payload=payload, kind="note")
        clone = node.copy(position=Position(9, 9))

        assert clone is not node
        assert clone.payload is payload
        assert clone.kind == "note"
        assert clone.position == Position(9, 9)
        assert node.position is None

    def test_repr(self):
        """repr shows id and, once placed, coordinates."""
        node = Node("a")
        assert repr(node) == "Node(id='a')"
        node.position = Position(1, 2)
        assert repr(node) == "Node(id='a', x=1.00, y=2.00)"

    def test_any_hashable_id(self):
        """Ids may be any hashable value."""
        assert Node(42).id == 42
        assert Node(("note", 1)).id == ("note", 1)


class TestEdge:
    """Tests for Edge."""

    def test_endpoints(self):
        """Edge stores source and target ids."""
        edge = Edge("a", "b")
        assert (edge.source, edge.target) == ("a", "b")

    def test_none_endpoints_raise(self):
        """None endpoints raise ValueError."""
        with pytest.raises(ValueError, match="source"):
            Edge(None, "b")
        with pytest.raises(ValueError, match="target"):
            Edge("a", None)

    def test_repr(self):
        """repr shows direction."""
        assert repr(Edge("a", "b")) == "Edge('a' -> 'b')"


class TestDirection:
    """Tests for Direction."""

    def test_axes(self):
        """LR/RL run along x, TB/BT along y."""
        assert Direction.LR.is_horizontal
        assert Direction.RL.is_horizontal
        assert not Direction.TB.is_horizontal
        assert not Direction.BT.is_horizontal

    def test_reversed(self):
        """BT/RL advance toward negative coordinates."""
        assert Direction.BT.is_reversed
        assert Direction.RL.is_reversed
        assert not Direction.TB.is_reversed
        assert not Direction.LR.is_reversed

    def test_string_compare(self):
        """Directions compare equal to their short names."""
        assert Direction.TB == "TB"
