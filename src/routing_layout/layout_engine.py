"""
Auto-arrange engine for production-routing diagrams.

Places workstation nodes on a level/lane grid so that the manufacturing
sequence reads as a left-to-right (or top-to-bottom) flow:

1. Graph building    — predecessor/successor sets per node id
2. Level assignment  — longest-path layering via breadth-first relaxation
3. Lane assignment   — parallel tracks inherited/averaged from predecessors,
                       with collision resolution inside each level
4. Stray placement   — isolated (and unreached) nodes after everything else
5. Position mapping  — (level, lane, direction) -> canvas coordinates

The whole computation is a pure function of its input: the same node and
edge order always gives the same positions.  Cycles are not detected; a
graph without any root falls back to the first node as the only root.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Sequence

from routing_layout.models import Direction, Edge, Node, Point

logger = logging.getLogger("routing-layout.engine")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass
class LayoutEngineConfig:
    """Spacing constants for mapping grid cells to canvas coordinates."""
    cell_width: float = 300    # Node width + horizontal gap
    cell_height: float = 150   # Node height + vertical gap
    margin: float = 50         # Offset of cell (0, 0) from the canvas origin


# ---------------------------------------------------------------------------
# Graph building
# ---------------------------------------------------------------------------

@dataclass
class GraphRecord:
    """Engine-owned view of one node; discarded after each layout."""
    id: str
    # dicts used as insertion-ordered sets so iteration follows edge order
    predecessors: dict[str, None] = field(default_factory=dict)
    successors: dict[str, None] = field(default_factory=dict)
    level: int = 0
    lane: int = 0

    @property
    def is_isolated(self) -> bool:
        return not self.predecessors and not self.successors


def build_graph(nodes: Iterable[Node], edges: Iterable[Edge]) -> dict[str, GraphRecord]:
    """Build one record per node and wire up the edges between them.

    Edges whose source or target is not a known node id are dropped.
    """
    graph: dict[str, GraphRecord] = {}
    for node in nodes:
        graph[node.id] = GraphRecord(id=node.id)

    dropped = 0
    for edge in edges:
        src = graph.get(edge.source)
        tgt = graph.get(edge.target)
        if src is None or tgt is None:
            dropped += 1
            continue
        src.successors[tgt.id] = None
        tgt.predecessors[src.id] = None

    if dropped:
        logger.debug("Dropped %d edge(s) with unknown endpoints", dropped)
    return graph


def find_roots(graph: dict[str, GraphRecord]) -> list[str]:
    """Return ids without predecessors, in input order.

    When every node has an incoming edge the first node becomes the sole root.
    """
    roots = [rid for rid, rec in graph.items() if not rec.predecessors]
    if not roots and graph:
        first = next(iter(graph))
        logger.debug("No root found, falling back to first node '%s'", first)
        roots = [first]
    return roots


# ---------------------------------------------------------------------------
# Level assignment (longest path)
# ---------------------------------------------------------------------------

def assign_levels(graph: dict[str, GraphRecord], roots: Sequence[str]) -> int:
    """Assign each reachable node its longest-path distance from a root.

    A successor is queued once every one of its predecessors has been
    expanded or is the node being expanded.  Levels only ever grow.

    Returns:
        The highest level handed out.
    """
    expanded: set[str] = set()
    queue = deque(roots)
    for rid in roots:
        graph[rid].level = 0

    max_level = 0
    while queue:
        current_id = queue.popleft()
        current = graph[current_id]

        for succ_id in current.successors:
            succ = graph[succ_id]
            candidate = current.level + 1
            if candidate > succ.level:
                succ.level = candidate
                max_level = max(max_level, candidate)

            ready = all(
                pred_id in expanded or pred_id == current_id
                for pred_id in succ.predecessors
            )
            if ready and succ_id not in expanded:
                queue.append(succ_id)

        expanded.add(current_id)

    return max_level


# ---------------------------------------------------------------------------
# Lane assignment (parallel tracks)
# ---------------------------------------------------------------------------

def _mean_lane(lanes: list[int]) -> int:
    """Mean of *lanes* rounded half up, in exact integer arithmetic."""
    return (2 * sum(lanes) + len(lanes)) // (2 * len(lanes))


def assign_lanes(
    graph: dict[str, GraphRecord],
    roots: Sequence[str],
) -> tuple[int, set[str]]:
    """Give every node reachable from a root a lane within its level.

    Roots take lanes 0, 1, 2, ... in input order.  A node with a single
    predecessor inherits its lane; a merge node waits until all its
    predecessors are placed and takes their rounded mean.  Either way the
    lane is then bumped until no placed node shares its (level, lane).

    Returns:
        ``(max_lane, placed_ids)``.
    """
    placed: set[str] = set()
    occupied: set[tuple[int, int]] = set()

    for lane, rid in enumerate(roots):
        root = graph[rid]
        root.lane = lane
        placed.add(rid)
        occupied.add((root.level, lane))

    max_lane = len(roots) - 1
    queue = deque(roots)
    while queue:
        current = graph[queue.popleft()]

        for succ_id in current.successors:
            if succ_id in placed:
                continue
            succ = graph[succ_id]

            if len(succ.predecessors) > 1:
                if not all(pred_id in placed for pred_id in succ.predecessors):
                    continue
                succ.lane = _mean_lane([graph[p].lane for p in succ.predecessors])
            else:
                succ.lane = current.lane

            while (succ.level, succ.lane) in occupied:
                succ.lane += 1

            occupied.add((succ.level, succ.lane))
            max_lane = max(max_lane, succ.lane)
            placed.add(succ_id)
            queue.append(succ_id)

    return max_lane, placed


# ---------------------------------------------------------------------------
# Disconnected / unreached nodes
# ---------------------------------------------------------------------------

def place_disconnected_nodes(
    graph: dict[str, GraphRecord],
    placed: set[str],
    max_level: int,
    max_lane: int,
) -> tuple[int, list[str]]:
    """Move isolated and unreached nodes past the connected layout.

    Each one lands on level ``max_level + 1`` in a fresh lane, in input
    order, so none of them can collide with anything else.

    Returns:
        ``(max_lane, relocated_ids)``.
    """
    relocated: list[str] = []
    for rid, rec in graph.items():
        if rid in placed and not rec.is_isolated:
            continue
        if not rec.is_isolated:
            logger.debug("Node '%s' unreachable from any root, placing it apart", rid)
        max_lane += 1
        rec.level = max_level + 1
        rec.lane = max_lane
        relocated.append(rid)
    return max_lane, relocated


# ---------------------------------------------------------------------------
# Position mapping
# ---------------------------------------------------------------------------

def map_position(
    level: int,
    lane: int,
    direction: Direction | str = Direction.HORIZONTAL,
    config: Optional[LayoutEngineConfig] = None,
) -> Point:
    """Convert a grid cell into canvas coordinates.

    Horizontal flows put levels along x and lanes along y; vertical flows
    swap them.  Unknown directions are treated as horizontal.
    """
    cfg = config or LayoutEngineConfig()
    if Direction.parse(direction) is Direction.VERTICAL:
        return Point(
            x=cfg.margin + lane * cfg.cell_width,
            y=cfg.margin + level * cfg.cell_height,
        )
    return Point(
        x=cfg.margin + level * cfg.cell_width,
        y=cfg.margin + lane * cfg.cell_height,
    )


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

@dataclass
class GridAssignment:
    """Level and lane chosen for every node id."""
    levels: dict[str, int] = field(default_factory=dict)
    lanes: dict[str, int] = field(default_factory=dict)
    roots: list[str] = field(default_factory=list)
    relocated: list[str] = field(default_factory=list)
    max_level: int = 0
    max_lane: int = 0

    def cell(self, node_id: str) -> tuple[int, int]:
        return self.levels[node_id], self.lanes[node_id]


def compute_grid(nodes: Sequence[Node], edges: Iterable[Edge]) -> GridAssignment:
    """Run graph building, levelling, lane assignment and stray placement."""
    graph = build_graph(nodes, edges)
    if not graph:
        return GridAssignment()

    roots = find_roots(graph)
    max_level = assign_levels(graph, roots)
    max_lane, placed = assign_lanes(graph, roots)
    max_lane, relocated = place_disconnected_nodes(graph, placed, max_level, max_lane)
    if relocated:
        max_level += 1

    return GridAssignment(
        levels={rid: rec.level for rid, rec in graph.items()},
        lanes={rid: rec.lane for rid, rec in graph.items()},
        roots=roots,
        relocated=relocated,
        max_level=max_level,
        max_lane=max_lane,
    )


def auto_arrange_nodes(
    nodes: Sequence[Node],
    edges: Iterable[Edge],
    direction: Direction | str = Direction.HORIZONTAL,
    config: Optional[LayoutEngineConfig] = None,
) -> list[Node]:
    """Lay out a routing diagram from scratch.

    Args:
        nodes: Workstation nodes; any incoming position is ignored.
        edges: Directed connections; unknown endpoints are dropped.
        direction: ``"horizontal"`` or ``"vertical"``; anything else is
            treated as horizontal.
        config: Spacing constants.

    Returns:
        New nodes in input order, identical except for ``position``.
    """
    if not nodes:
        return []

    cfg = config or LayoutEngineConfig()
    flow = Direction.parse(direction)
    grid = compute_grid(nodes, edges)
    logger.debug(
        "Arranged %d node(s) %s: %d level(s), %d lane(s), %d relocated",
        len(grid.levels), flow.value, grid.max_level + 1, grid.max_lane + 1,
        len(grid.relocated),
    )

    return [
        replace(
            node,
            position=map_position(*grid.cell(node.id), flow, cfg),
            extra=dict(node.extra),
        )
        for node in nodes
    ]
