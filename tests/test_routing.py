"""Tests for the routing document export."""

import json

from routing_layout.layout_engine import auto_arrange_nodes
from routing_layout.models import Edge, Node, WorkcellType
from routing_layout.routing import (
    DEFAULT_WORKCELLS,
    build_routing_document,
    routing_document_to_json,
)


def _diagram() -> tuple[list[Node], list[Edge]]:
    nodes = [
        Node(id="n1", type="cutting", name="Cut"),
        Node(id="n2", type="welding", name="Weld"),
        Node(id="n3", type="laser", name="Laser mark"),
    ]
    edges = [Edge("e1", "n1", "n2"), Edge("e2", "n2", "n3")]
    return auto_arrange_nodes(nodes, edges), edges


def test_only_used_types_listed() -> None:
    nodes, edges = _diagram()
    doc = build_routing_document(nodes, edges)
    assert list(doc["workcellTypes"]) == ["cutting", "welding"]
    assert doc["workcellTypes"]["cutting"] == {"name": "Cutting Station", "color": "#e9d8fd"}


def test_custom_types_flagged() -> None:
    nodes, edges = _diagram()
    custom = [WorkcellType("laser", "Laser Marking", "#ffd700")]
    doc = build_routing_document(nodes, edges, custom=custom)
    assert doc["workcellTypes"]["laser"] == {
        "name": "Laser Marking", "color": "#ffd700", "custom": True,
    }


def test_custom_type_overrides_standard() -> None:
    nodes, edges = _diagram()
    custom = [WorkcellType("cutting", "Plasma Cutter", "#000000")]
    doc = build_routing_document(nodes, edges, custom=custom)
    assert doc["workcellTypes"]["cutting"]["name"] == "Plasma Cutter"
    assert doc["workcellTypes"]["cutting"]["custom"] is True


def test_workcells_and_connections() -> None:
    nodes, edges = _diagram()
    doc = build_routing_document(nodes, edges)
    assert doc["workcells"][1] == {
        "id": "n2", "type": "welding", "name": "Weld",
        "position": {"x": 350, "y": 50},
    }
    assert doc["connections"] == [
        {"source": "n1", "target": "n2"},
        {"source": "n2", "target": "n3"},
    ]


def test_json_output() -> None:
    nodes, edges = _diagram()
    text = routing_document_to_json(build_routing_document(nodes, edges))
    assert text.startswith("{\n  ")
    assert json.loads(text)["workcells"][0]["id"] == "n1"


def test_default_catalog_ids_unique() -> None:
    ids = [wc.id for wc in DEFAULT_WORKCELLS]
    assert len(ids) == len(set(ids))
    assert not any(wc.custom for wc in DEFAULT_WORKCELLS)
