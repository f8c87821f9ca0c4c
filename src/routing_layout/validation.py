"""
Input validation for routing-layout MCP tool parameters.

The layout engine accepts anything structurally sound and never raises;
these validators sit at the tool boundary and turn malformed payloads into
clear error messages for the caller.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from routing_layout.models import Direction

logger = logging.getLogger("routing-layout")


# ---------------------------------------------------------------------------
# Validation result
# ---------------------------------------------------------------------------

class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# ---------------------------------------------------------------------------
# Primitive validators
# ---------------------------------------------------------------------------

def validate_non_empty_string(value: Any, field_name: str) -> str:
    """Ensure *value* is a non-empty string after stripping whitespace."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{field_name}' must be a non-empty string.")
    return value.strip()


def validate_number(
    value: Any,
    field_name: str,
    *,
    min_val: float | None = None,
) -> int | float:
    """Validate a numeric value with an optional lower bound.

    Integers are returned unchanged so integral spacing gives integral positions.
    """
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ValidationError(
            f"'{field_name}' must be a number, got {type(value).__name__}."
        )
    if min_val is not None and value < min_val:
        raise ValidationError(
            f"'{field_name}' must be >= {min_val}, got {value}."
        )
    return value


def validate_list(value: Any, field_name: str) -> list:
    """Ensure *value* is a list."""
    if not isinstance(value, list):
        raise ValidationError(
            f"'{field_name}' must be a list, got {type(value).__name__}."
        )
    return value


def validate_color(value: Any, field_name: str) -> str:
    """Validate a CSS-style hex color (#RGB, #RRGGBB, #RRGGBBAA)."""
    if not isinstance(value, str):
        raise ValidationError(f"'{field_name}' must be a color string, got {type(value).__name__}.")
    value = value.strip()
    if not re.match(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$", value):
        raise ValidationError(
            f"'{field_name}' must be a valid hex color (#RGB, #RRGGBB, or #RRGGBBAA), got '{value}'."
        )
    return value


# ---------------------------------------------------------------------------
# Composite / domain validators
# ---------------------------------------------------------------------------

_LAYOUT_ACTIONS = {"ARRANGE", "GRID"}
_ROUTING_ACTIONS = {"EXPORT", "CATALOG"}


def validate_action(value: Any, tool_name: str, allowed: set[str]) -> str:
    """Validate the action parameter for a tool."""
    if not isinstance(value, str) or not value.strip():
        choices = ", ".join(sorted(a.lower() for a in allowed))
        raise ValidationError(
            f"'{tool_name}' requires an 'action' parameter. Valid actions: {choices}."
        )
    normalized = value.strip().upper()
    if normalized not in allowed:
        choices = ", ".join(sorted(a.lower() for a in allowed))
        raise ValidationError(
            f"Unknown {tool_name} action '{value}'. Valid actions: {choices}."
        )
    return value.strip().lower()


def validate_direction(value: Any) -> Direction:
    """Resolve a flow direction; unknown values fall back to horizontal."""
    direction = Direction.parse(value)
    if not (isinstance(value, str) and value.strip().lower() == direction.value):
        logger.warning("Unknown direction %r, using '%s'", value, direction.value)
    return direction


def _validate_entry_string(entry: dict, key: str, kind: str, index: int) -> None:
    """Run validate_non_empty_string on entry[key], prefixing the entry position."""
    try:
        validate_non_empty_string(entry.get(key), key)
    except ValidationError as exc:
        raise ValidationError(f"{kind} at index {index}: {exc.message}") from exc


def validate_node_dict(n: Any, index: int) -> None:
    """Validate a single node dict from the nodes list."""
    if not isinstance(n, dict):
        raise ValidationError(f"Node at index {index} must be a dict/object.")
    if "id" not in n:
        raise ValidationError(f"Node at index {index} missing required key 'id'.")
    _validate_entry_string(n, "id", "Node", index)
    for key in ("type", "name", "color"):
        if key in n and not isinstance(n[key], str):
            raise ValidationError(f"Node at index {index}: '{key}' must be a string.")
    if "position" in n and n["position"] is not None and not isinstance(n["position"], dict):
        raise ValidationError(f"Node at index {index}: 'position' must be an object with x/y.")


def validate_edge_dict(e: Any, index: int) -> None:
    """Validate a single edge dict.

    Endpoints are only checked for shape; an endpoint that names no node is
    allowed and the layout simply ignores that edge.
    """
    if not isinstance(e, dict):
        raise ValidationError(f"Edge at index {index} must be a dict/object.")
    if "source" not in e:
        raise ValidationError(f"Edge at index {index} missing required key 'source'.")
    if "target" not in e:
        raise ValidationError(f"Edge at index {index} missing required key 'target'.")
    _validate_entry_string(e, "source", "Edge", index)
    _validate_entry_string(e, "target", "Edge", index)
    if "id" in e and not isinstance(e["id"], str):
        raise ValidationError(f"Edge at index {index}: 'id' must be a string.")


def validate_workcell_dict(w: Any, index: int) -> None:
    """Validate a single custom workcell type dict."""
    if not isinstance(w, dict):
        raise ValidationError(f"Workcell at index {index} must be a dict/object.")
    _validate_entry_string(w, "id", "Workcell", index)
    if "name" in w and not isinstance(w["name"], str):
        raise ValidationError(f"Workcell at index {index}: 'name' must be a string.")
    if "color" in w:
        validate_color(w["color"], f"workcells[{index}].color")


def validate_nodes(value: Any) -> list[dict]:
    """Validate the nodes list and reject duplicate ids."""
    nodes = validate_list(value, "nodes")
    seen: set[str] = set()
    for i, n in enumerate(nodes):
        validate_node_dict(n, i)
        if n["id"] in seen:
            raise ValidationError(f"Node at index {i}: duplicate id '{n['id']}'.")
        seen.add(n["id"])
    return nodes


def validate_edges(value: Any) -> list[dict]:
    """Validate the edges list (``None`` means no edges)."""
    if value is None:
        return []
    edges = validate_list(value, "edges")
    for i, e in enumerate(edges):
        validate_edge_dict(e, i)
    return edges


def validate_spacing(value: Any, field_name: str) -> int | float:
    """Validate spacing parameters (must be > 0)."""
    return validate_number(value, field_name, min_val=1)


def validate_margin(value: Any) -> int | float:
    """Validate the canvas margin (>= 0)."""
    return validate_number(value, "margin", min_val=0)
