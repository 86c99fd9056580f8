"""
step.py - Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of one decision the algorithm made:

    - Which nodes are visited so far, and which one is current
    - Which edges are highlighted (the one being examined / relaxed)
    - Family-specific data (distances for shortest paths, the queue for
      traversals, the tree for spanning trees, ...)
    - A plain-English description of the decision
    - Which line of pseudocode is executing right now

Design decisions:
  - Step is a frozen dataclass.  The algorithm generator is the only
    writer; the playback controller and renderer are pure readers.
  - `data` is a tagged variant (StepData subclass per algorithm family)
    rather than a free-form dict, but every variant offers `items()` so
    the renderer can still list it as key/value pairs without knowing
    which family it is.
  - Infinite distances stay `float("inf")` in memory and become `null`
    in `to_dict()` so the JSON stays valid.
"""

import math
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from graph.errors import ErrorKind


def jsonable(value: Any) -> Any:
    """Recursively convert step payloads into JSON-safe values."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Mapping):
        return {str(k): jsonable(v) for k, v in value.items()}
    if isinstance(value, (frozenset, set)):
        return [jsonable(v) for v in sorted(value, key=natural_key)]
    if isinstance(value, (list, tuple)):
        return [jsonable(v) for v in value]
    return value


def natural_key(value: Any) -> Tuple[int, Any]:
    """Sort "2" before "10"; non-numeric ids after numeric ones."""
    s = str(value)
    return (0, int(s), "") if s.isdigit() else (1, 0, s)


# ---------------------------------------------------------------------------
# Step data variants
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class StepData:
    family: ClassVar[str] = "generic"

    def items(self) -> List[Tuple[str, Any]]:
        """(key, value) pairs for generic display; unset optionals are skipped."""
        return [
            (f.name, getattr(self, f.name))
            for f in fields(self)
            if getattr(self, f.name) is not None
        ]

    def to_dict(self) -> Dict[str, Any]:
        data = {k: jsonable(v) for k, v in self.items()}
        data["family"] = self.family
        return data


@dataclass(frozen=True)
class ShortestPathData(StepData):
    family: ClassVar[str] = "shortest-path"

    distances:        Mapping[str, float]          = field(default_factory=dict)
    previous:         Mapping[str, Optional[str]]  = field(default_factory=dict)
    visited:          Tuple[str, ...]              = ()
    current_distance: Optional[float]              = None
    examining:        Optional[str]                = None
    new_distance:     Optional[float]              = None
    old_distance:     Optional[float]              = None
    updated:          Optional[str]                = None


@dataclass(frozen=True)
class TraversalData(StepData):
    family: ClassVar[str] = "traversal"

    order:     Tuple[str, ...]              = ()
    frontier:  Tuple[str, ...]              = ()
    parent:    Mapping[str, Optional[str]]  = field(default_factory=dict)
    examining: Optional[str]                = None


@dataclass(frozen=True)
class SpanningTreeData(StepData):
    family: ClassVar[str] = "spanning-tree"

    tree_edges:   Tuple[str, ...]       = ()
    total_weight: float                 = 0.0
    key:          Mapping[str, float]   = field(default_factory=dict)
    examining:    Optional[str]         = None


# ---------------------------------------------------------------------------
# Step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number       : 0-based index of this step in the run.
        visited_nodes     : Node ids fully processed so far.
        current_node      : ID of the node being processed right now (or None).
        highlighted_edges : Edge ids drawn highlighted in this step.
        data              : Family-specific StepData.
        description       : Human-readable explanation of the decision.
        source_line       : 0-based index into the algorithm's pseudocode.
        is_final          : True on the completion step.
    """

    step_number:       int
    visited_nodes:     FrozenSet[str]
    current_node:      Optional[str]
    highlighted_edges: FrozenSet[str]
    data:              StepData
    description:       str
    source_line:       int
    is_final:          bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number":       self.step_number,
            "visited_nodes":     jsonable(self.visited_nodes),
            "current_node":      self.current_node,
            "highlighted_edges": jsonable(self.highlighted_edges),
            "data":              self.data.to_dict(),
            "description":       self.description,
            "source_line":       self.source_line,
            "is_final":          self.is_final,
        }


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad an algorithm keeps for the whole run.  It numbers
    the steps and remembers the visited set in visit order.

    Usage inside an algorithm generator:
        sb = StepBuilder()
        sb.visit("A")
        yield sb.build(current="A", data=..., description="Visit A", line=6)
    """

    def __init__(self):
        self.step_no: int       = 0
        self.visited: List[str] = []

    def visit(self, node_id: str) -> None:
        if node_id not in self.visited:
            self.visited.append(node_id)

    def build(
        self,
        data: StepData,
        description: str,
        line: int,
        current: Optional[str] = None,
        edges: Iterable[str] = (),
        is_final: bool = False,
    ) -> Step:
        step = Step(
            step_number=self.step_no,
            visited_nodes=frozenset(self.visited),
            current_node=current,
            highlighted_edges=frozenset(edges),
            data=data,
            description=description,
            source_line=line,
            is_final=is_final,
        )
        self.step_no += 1
        return step


# ---------------------------------------------------------------------------
# Run configuration & result
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgorithmConfig:
    start_node:  Optional[str] = None
    end_node:    Optional[str] = None
    use_weights: bool          = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AlgorithmConfig":
        start = data.get("start_node")
        end = data.get("end_node")
        return cls(
            start_node=str(start) if start not in (None, "") else None,
            end_node=str(end) if end not in (None, "") else None,
            use_weights=bool(data.get("use_weights", True)),
        )


@dataclass(frozen=True)
class AlgorithmResult:
    steps:      Tuple[Step, ...]          = ()
    success:    bool                      = True
    error:      Optional[str]             = None
    error_kind: Optional[ErrorKind]       = None
    final_data: Optional[Mapping[str, Any]] = None

    @classmethod
    def failure(
        cls,
        error: str,
        kind: ErrorKind,
        steps: Iterable[Step] = (),
    ) -> "AlgorithmResult":
        return cls(steps=tuple(steps), success=False, error=error, error_kind=kind)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "success":     self.success,
            "total_steps": len(self.steps),
            "steps":       [s.to_dict() for s in self.steps],
        }
        if self.error:
            data["error"] = self.error
            data["kind"] = self.error_kind.value if self.error_kind else None
        if self.final_data is not None:
            data["final_data"] = jsonable(self.final_data)
        return data
