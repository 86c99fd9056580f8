"""
algorithms/__init__.py - Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is an ordered list of Algorithm cards:
    [
        Algorithm(id="dijkstra", name=..., category=..., fn=..., pseudocode=..., ...),
        ...
    ]

Algorithm is a lightweight dataclass.  The engine and UI both consume it
so adding a new algorithm is: write the generator, add one entry here.

Design decisions:
  - `execute` is the only way the engine runs an algorithm.  It validates
    the configuration up front, drains the generator into a tuple of
    steps, and turns every problem into a failed AlgorithmResult instead
    of an exception.
  - The generator's `return` value (StopIteration.value) becomes
    `final_data`.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Generator, List, Optional

from graph import Graph
from graph.errors import ErrorKind
from algorithms.step import AlgorithmConfig, AlgorithmResult, Step

from algorithms.dijkstra import dijkstra as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.bfs      import bfs      as _bfs,      PSEUDOCODE as _bfs_pc
from algorithms.dfs      import dfs      as _dfs,      PSEUDOCODE as _dfs_pc
from algorithms.prim     import prim     as _prim,     PSEUDOCODE as _prim_pc

logger = logging.getLogger(__name__)

StepGenerator = Callable[[Graph, AlgorithmConfig], Generator[Step, None, Dict]]


# ---------------------------------------------------------------------------
# Algorithm - metadata card + runner
# ---------------------------------------------------------------------------
@dataclass
class Algorithm:
    id:                  str                 # registry key, e.g. "bfs"
    name:                str                 # human label, e.g. "Breadth-First Search"
    category:            str                 # "shortest-path" | "traversal" | "mst"
    fn:                  StepGenerator
    pseudocode:          List[str] = field(default_factory=list)
    description:         str  = ""
    requires_start_node: bool = True
    requires_end_node:   bool = False
    requires_weights:    bool = False        # do edge weights change the outcome?
    supports_negative:   bool = True         # can handle negative edges?
    complexity_time:     str  = ""
    complexity_space:    str  = ""

    # ------------------------------------------------------------------
    def validate(self, graph: Graph, config: AlgorithmConfig) -> Optional[AlgorithmResult]:
        """Return a failed result if the run cannot start, else None."""
        if self.requires_start_node and config.start_node is None:
            return AlgorithmResult.failure("Please select a start node", ErrorKind.CONFIG)
        if config.start_node is not None and not graph.has_node(config.start_node):
            return AlgorithmResult.failure(
                f"Start node '{config.start_node}' not found in graph", ErrorKind.CONFIG
            )
        if self.requires_end_node and config.end_node is None:
            return AlgorithmResult.failure("Please select an end node", ErrorKind.CONFIG)
        if config.end_node is not None and not graph.has_node(config.end_node):
            return AlgorithmResult.failure(
                f"End node '{config.end_node}' not found in graph", ErrorKind.CONFIG
            )
        if not self.supports_negative and config.use_weights and graph.has_negative_edges():
            return AlgorithmResult.failure(
                f"{self.name} requires non-negative edge weights", ErrorKind.DOMAIN
            )
        return None

    def execute(self, graph: Graph, config: AlgorithmConfig) -> AlgorithmResult:
        """
        Run the algorithm to completion.  Never raises; the graph is never
        touched beyond read access.
        """
        rejected = self.validate(graph, config)
        if rejected is not None:
            logger.info("%s rejected: %s", self.id, rejected.error)
            return rejected

        steps: List[Step] = []
        gen = self.fn(graph, config)
        try:
            while True:
                steps.append(next(gen))
        except StopIteration as stop:
            final_data = stop.value
        except Exception as exc:  # noqa: BLE001 - reported as a failed run
            logger.exception("%s failed after %d steps", self.id, len(steps))
            return AlgorithmResult.failure(
                f"{self.name} failed: {exc}", ErrorKind.DOMAIN, steps=steps
            )

        logger.debug("%s produced %d steps", self.id, len(steps))
        return AlgorithmResult(steps=tuple(steps), success=True, final_data=final_data)

    def to_dict(self) -> Dict:
        return {
            "id":                  self.id,
            "name":                self.name,
            "category":            self.category,
            "description":         self.description,
            "requires_start_node": self.requires_start_node,
            "requires_end_node":   self.requires_end_node,
            "requires_weights":    self.requires_weights,
            "supports_negative":   self.supports_negative,
            "complexity_time":     self.complexity_time,
            "complexity_space":    self.complexity_space,
            "pseudocode":          list(self.pseudocode),
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: List[Algorithm] = [

    Algorithm(
        id="dijkstra", name="Dijkstra's Algorithm", category="shortest-path",
        fn=_dijkstra, pseudocode=_dij_pc,
        requires_weights=True, supports_negative=False,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Greedily expands the closest node. Optimal for non-negative weights.",
    ),

    Algorithm(
        id="bfs", name="Breadth-First Search", category="traversal",
        fn=_bfs, pseudocode=_bfs_pc,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer. Finds shortest path by hop count.",
    ),

    Algorithm(
        id="dfs", name="Depth-First Search", category="traversal",
        fn=_dfs, pseudocode=_dfs_pc,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),

    Algorithm(
        id="prim", name="Prim's Algorithm", category="mst",
        fn=_prim, pseudocode=_prim_pc,
        requires_start_node=False, requires_weights=True,
        complexity_time="O(E log V)", complexity_space="O(V)",
        description="Grows a minimum spanning tree one cheapest edge at a time.",
    ),
]


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(algorithm_id: str) -> Optional[Algorithm]:
    """Return the Algorithm with this id, or None."""
    for algo in REGISTRY:
        if algo.id == algorithm_id:
            return algo
    return None


def list_algorithms() -> List[Algorithm]:
    """Return all registered algorithms in registry order."""
    return list(REGISTRY)


def algorithms_by_category(category: str) -> List[Algorithm]:
    return [a for a in REGISTRY if a.category == category]


__all__ = [
    "Algorithm",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_category",
]
