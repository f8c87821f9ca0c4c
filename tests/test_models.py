"""Tests for the routing record types."""

from routing_layout.models import Direction, Edge, Node, Point, WorkcellType


def test_node_from_dict_keeps_payload() -> None:
    data = {
        "id": "n1",
        "type": "painting",
        "name": "Paint Booth",
        "color": "#bee3f8",
        "position": {"x": 10, "y": 20},
        "custom": True,
        "notes": "second shift only",
    }
    node = Node.from_dict(data)
    assert node.id == "n1"
    assert node.type == "painting"
    assert node.position == Point(10, 20)
    assert node.extra == {"custom": True, "notes": "second shift only"}
    assert node.to_dict() == data


def test_node_from_dict_defaults() -> None:
    node = Node.from_dict({"id": "n1"})
    assert node.type == ""
    assert node.name == ""
    assert node.position == Point(0, 0)
    assert node.extra == {}


def test_node_from_dict_null_position() -> None:
    node = Node.from_dict({"id": "n1", "position": None})
    assert node.position == Point(0, 0)


def test_edge_round_trip() -> None:
    edge = Edge.from_dict({"id": "e1", "source": "a", "target": "b"})
    assert edge == Edge("e1", "a", "b")
    assert edge.to_dict() == {"id": "e1", "source": "a", "target": "b"}


def test_edge_without_id() -> None:
    edge = Edge.from_dict({"source": "a", "target": "b"})
    assert edge.id == "a->b"


def test_direction_parse() -> None:
    assert Direction.parse("vertical") is Direction.VERTICAL
    assert Direction.parse("  VERTICAL ") is Direction.VERTICAL
    assert Direction.parse("horizontal") is Direction.HORIZONTAL
    assert Direction.parse(Direction.VERTICAL) is Direction.VERTICAL


def test_direction_parse_fallback() -> None:
    assert Direction.parse("diagonal") is Direction.HORIZONTAL
    assert Direction.parse("") is Direction.HORIZONTAL
    assert Direction.parse(None) is Direction.HORIZONTAL
    assert Direction.parse(42) is Direction.HORIZONTAL


def test_workcell_type_to_dict() -> None:
    assert WorkcellType("cnc", "CNC Machine", "#fbd38d").to_dict() == {
        "name": "CNC Machine", "color": "#fbd38d",
    }
    custom = WorkcellType.from_dict({"id": "laser", "color": "#ffffff"}, custom=True)
    assert custom.name == "laser"
    assert custom.to_dict() == {"name": "laser", "color": "#ffffff", "custom": True}
