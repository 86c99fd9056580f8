"""
edge.py - Graph Edge
====================
Undirected connection between two nodes, with an optional weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight defaults to 1 for unweighted graphs; algorithms that ignore
    weights simply never read it.
  - The graph is undirected, so `pair` (the unordered endpoint set) is
    what identifies a connection.  Two edges with the same pair are
    duplicates even when their ids differ.
"""

import math
from dataclasses import dataclass
from typing import Optional, Dict, Any, FrozenSet


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        id     : Unique identifier.
        source : ID of one endpoint.
        target : ID of the other endpoint.
        weight : Numeric cost (default 1).
    """

    id:     str
    source: str
    target: str
    weight: float = 1.0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def pair(self) -> FrozenSet[str]:
        return frozenset((self.source, self.target))

    def connects(self, node_a: str, node_b: str) -> bool:
        """True if this edge links node_a and node_b (either direction)."""
        return self.pair == frozenset((node_a, node_b))

    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other. None if node_id isn't an endpoint."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Edge":
        source = str(data["source"])
        target = str(data["target"])
        weight = float(data["weight"]) if data.get("weight") is not None else 1.0
        if not math.isfinite(weight):
            raise ValueError(f"Edge weight must be a finite number, got {data['weight']!r}")
        return cls(
            id=str(data.get("id") or f"e{source}-{target}"),
            source=source,
            target=target,
            weight=weight,
        )

    def __repr__(self) -> str:
        return f"Edge({self.source} - {self.target}, w={self.weight})"
