"""
Core record types for production-routing diagrams.

A routing diagram is a flat list of workstation nodes and the directed
connections between them.  The layout engine only ever reads ``id`` and
writes ``position``; everything else on a node is display payload that is
carried through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Direction(Enum):
    """Flow direction of an arranged routing."""
    HORIZONTAL = "horizontal"  # level -> x, lane -> y
    VERTICAL = "vertical"      # lane -> x, level -> y

    @classmethod
    def parse(cls, value: Any) -> "Direction":
        """Return the matching direction, falling back to HORIZONTAL."""
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.HORIZONTAL


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass
class Point:
    """A 2-D canvas coordinate."""
    x: float = 0
    y: float = 0

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


_NODE_KEYS = {"id", "type", "name", "color", "position"}


@dataclass
class Node:
    """A workstation placed on the routing canvas."""
    id: str
    type: str = ""
    name: str = ""
    color: str = ""
    position: Point = field(default_factory=Point)
    # Any other keys the caller sent along; returned as-is.
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Node":
        pos = data.get("position") or {}
        return cls(
            id=data["id"],
            type=data.get("type", ""),
            name=data.get("name", ""),
            color=data.get("color", ""),
            position=Point(x=pos.get("x", 0), y=pos.get("y", 0)),
            extra={k: v for k, v in data.items() if k not in _NODE_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self.extra)
        out.update({
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "color": self.color,
            "position": self.position.to_dict(),
        })
        return out


@dataclass
class Edge:
    """A directed connection between two workstations."""
    id: str
    source: str
    target: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Edge":
        source = data["source"]
        target = data["target"]
        return cls(
            id=data.get("id") or f"{source}->{target}",
            source=source,
            target=target,
        )

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "source": self.source, "target": self.target}


@dataclass
class WorkcellType:
    """Catalog entry describing a kind of workstation."""
    id: str
    name: str
    color: str
    custom: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, custom: bool = False) -> "WorkcellType":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            color=data.get("color", ""),
            custom=bool(data.get("custom", custom)),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "color": self.color}
        if self.custom:
            out["custom"] = True
        return out
