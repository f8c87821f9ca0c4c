"""
Routing Layout MCP Server — auto-arrange production-routing diagrams.

Exposes 2 tools that let an editor or agent lay out a manufacturing routing
and serialise it:

Tools:
  1. layout   — positioning: arrange (new node positions), grid (levels/lanes)
  2. routing  — document:    export (routing JSON), catalog (default workcells)

The layout is recomputed from scratch on every call; nothing is kept
between calls.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from routing_layout.layout_engine import (
    LayoutEngineConfig,
    auto_arrange_nodes,
    compute_grid,
)
from routing_layout.models import Edge, Node, WorkcellType
from routing_layout.routing import (
    DEFAULT_WORKCELLS,
    build_routing_document,
    routing_document_to_json,
)
from routing_layout.validation import (
    ValidationError,
    validate_action,
    validate_direction,
    validate_edges,
    validate_list,
    validate_margin,
    validate_nodes,
    validate_spacing,
    validate_workcell_dict,
    _LAYOUT_ACTIONS,
    _ROUTING_ACTIONS,
)

# ---------------------------------------------------------------------------
# Logging — keep routine FastMCP INFO chatter off stderr.
# ---------------------------------------------------------------------------
logging.getLogger("mcp.server").setLevel(logging.WARNING)
logger = logging.getLogger("routing-layout")

# ---------------------------------------------------------------------------
# MCP Server
# ---------------------------------------------------------------------------
mcp = FastMCP(
    "routing-layout",
    instructions=(
        "MCP server that auto-arranges production-routing diagrams.\n\n"
        "1. layout(action, nodes, edges, ...) — arrange, grid.\n"
        "   Nodes are {id, type?, name?, color?, ...}; edges are\n"
        "   {id?, source, target}. Edges naming unknown nodes are ignored.\n"
        "   direction is 'horizontal' (default) or 'vertical'.\n"
        "2. routing(action, nodes, edges, workcells) — export, catalog.\n\n"
        "Positions returned by 'arrange' are a suggestion; callers may\n"
        "move nodes freely afterwards.\n"
    ),
)


# ===================================================================
# RESOURCES
# ===================================================================

@mcp.resource("routing://workcells/default")
def workcell_catalog() -> str:
    """Return the standard workcell types as JSON."""
    return json.dumps({wc.id: wc.to_dict() for wc in DEFAULT_WORKCELLS}, indent=2)


# ===================================================================
# TOOL 1: layout
# ===================================================================

@mcp.tool()
def layout(
    action: str,
    nodes: list[dict[str, Any]] | None = None,
    edges: list[dict[str, Any]] | None = None,
    direction: str = "horizontal",
    cell_width: float = 300,
    cell_height: float = 150,
    margin: float = 50,
) -> str:
    """Arrange a routing diagram on a level/lane grid.

    Actions:
      arrange — Return the nodes, in input order, with new positions.
                Params: nodes, edges, direction, cell_width, cell_height, margin.
      grid    — Return the level and lane chosen for each node, plus the
                roots and the nodes placed apart from the connected flow.
                Params: nodes, edges.

    Returns:
        JSON results or an error message.
    """
    try:
        action = validate_action(action, "layout", _LAYOUT_ACTIONS)
        node_dicts = validate_nodes(nodes if nodes is not None else [])
        edge_dicts = validate_edges(edges)
    except ValidationError as exc:
        return f"Error: {exc.message}"

    parsed_nodes = [Node.from_dict(n) for n in node_dicts]
    parsed_edges = [Edge.from_dict(e) for e in edge_dicts]

    # ----- grid -----
    if action == "grid":
        grid = compute_grid(parsed_nodes, parsed_edges)
        return json.dumps({
            "levels": grid.levels,
            "lanes": grid.lanes,
            "roots": grid.roots,
            "relocated": grid.relocated,
            "max_level": grid.max_level,
            "max_lane": grid.max_lane,
        })

    # ----- arrange -----
    try:
        flow = validate_direction(direction)
        cfg = LayoutEngineConfig(
            cell_width=validate_spacing(cell_width, "cell_width"),
            cell_height=validate_spacing(cell_height, "cell_height"),
            margin=validate_margin(margin),
        )
    except ValidationError as exc:
        return f"Error: {exc.message}"

    arranged = auto_arrange_nodes(parsed_nodes, parsed_edges, flow, cfg)
    logger.info("Arranged %d node(s) %s", len(arranged), flow.value)
    return json.dumps([n.to_dict() for n in arranged])


# ===================================================================
# TOOL 2: routing
# ===================================================================

@mcp.tool()
def routing(
    action: str,
    nodes: list[dict[str, Any]] | None = None,
    edges: list[dict[str, Any]] | None = None,
    workcells: list[dict[str, Any]] | None = None,
) -> str:
    """Routing document operations.

    Actions:
      export  — Build the routing JSON document ({workcellTypes, workcells,
                connections}). Params: nodes, edges, workcells (custom
                workcell types, {id, name?, color?}).
      catalog — List the standard workcell types.

    Returns:
        JSON document or an error message.
    """
    try:
        action = validate_action(action, "routing", _ROUTING_ACTIONS)
    except ValidationError as exc:
        return f"Error: {exc.message}"

    if action == "catalog":
        return workcell_catalog()

    try:
        node_dicts = validate_nodes(nodes if nodes is not None else [])
        edge_dicts = validate_edges(edges)
        custom = validate_list(workcells if workcells is not None else [], "workcells")
        for i, w in enumerate(custom):
            validate_workcell_dict(w, i)
    except ValidationError as exc:
        return f"Error: {exc.message}"

    document = build_routing_document(
        [Node.from_dict(n) for n in node_dicts],
        [Edge.from_dict(e) for e in edge_dicts],
        custom=[WorkcellType.from_dict(w, custom=True) for w in custom],
    )
    return routing_document_to_json(document)


# ===================================================================
# Entry point
# ===================================================================

def main() -> None:
    """Run the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
