"""
node.py - Graph Node
====================
Immutable vertex of the canonical graph.

Design decisions:
  - Frozen dataclass: a Node never changes once built.  "Moving" a node
    produces a new Node, so snapshots held by the edit history can never
    be altered behind its back.
  - Position is optional and purely presentational.  Algorithms never
    read it; generators fill it in so the renderer has a starting layout.
"""

from dataclasses import dataclass, replace
from typing import Optional, Dict, Any, Tuple


@dataclass(frozen=True)
class Node:
    """
    Attributes:
        id    : Unique identifier (string, e.g. "1" or "a").
        label : Human-readable name shown on the canvas (defaults to id).
        x, y  : Optional canvas coordinates.
    """

    id:    str
    label: str             = ""
    x:     Optional[float] = None
    y:     Optional[float] = None

    def __post_init__(self):
        if not self.label:
            object.__setattr__(self, "label", self.id)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def position(self) -> Optional[Tuple[float, float]]:
        if self.x is None or self.y is None:
            return None
        return (self.x, self.y)

    def moved_to(self, x: float, y: float) -> "Node":
        return replace(self, x=float(x), y=float(y))

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "label": self.label}
        if self.position is not None:
            data["position"] = {"x": self.x, "y": self.y}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        pos = data.get("position") or {}
        x = pos.get("x", data.get("x"))
        y = pos.get("y", data.get("y"))
        return cls(
            id=str(data["id"]),
            label=str(data.get("label") or data["id"]),
            x=float(x) if x is not None else None,
            y=float(y) if y is not None else None,
        )

    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label})"
