"""
Manufacturing-routing export.

Serialises an arranged diagram into the document the route editor stores:
the workcell types in use, the placed workcells and their connections.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Sequence

from routing_layout.models import Edge, Node, WorkcellType


DEFAULT_WORKCELLS: tuple[WorkcellType, ...] = (
    WorkcellType("cutting", "Cutting Station", "#e9d8fd"),
    WorkcellType("welding", "Welding Station", "#feebc8"),
    WorkcellType("assembly", "Assembly Line", "#c6f6d5"),
    WorkcellType("painting", "Paint Booth", "#bee3f8"),
    WorkcellType("quality", "Quality Control", "#fed7d7"),
    WorkcellType("packaging", "Packaging Area", "#e2e8f0"),
    WorkcellType("cnc", "CNC Machine", "#fbd38d"),
    WorkcellType("molding", "Injection Molding", "#b2f5ea"),
)


def build_routing_document(
    nodes: Sequence[Node],
    edges: Iterable[Edge],
    catalog: Iterable[WorkcellType] = DEFAULT_WORKCELLS,
    custom: Iterable[WorkcellType] = (),
) -> dict[str, Any]:
    """Build the routing document for a diagram.

    Only workcell types referenced by at least one node are listed.
    Standard catalog entries come first; a custom type with the same id
    replaces the standard one.
    """
    used = {node.type for node in nodes}

    workcell_types: dict[str, dict[str, Any]] = {}
    for wc in catalog:
        if wc.id in used:
            workcell_types[wc.id] = WorkcellType(wc.id, wc.name, wc.color).to_dict()
    for wc in custom:
        if wc.id in used:
            workcell_types[wc.id] = WorkcellType(wc.id, wc.name, wc.color, custom=True).to_dict()

    return {
        "workcellTypes": workcell_types,
        "workcells": [
            {
                "id": node.id,
                "type": node.type,
                "name": node.name,
                "position": node.position.to_dict(),
            }
            for node in nodes
        ],
        "connections": [
            {"source": edge.source, "target": edge.target}
            for edge in edges
        ],
    }


def routing_document_to_json(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)
