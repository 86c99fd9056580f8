"""
recorder.py - Run Recorder & Analytics
========================================
Runs an algorithm by registry id, keeps the complete result, and computes
the metrics the analytics panel shows.

Usage:
    rec = Recorder()
    result = rec.run("dijkstra", graph, AlgorithmConfig(start_node="1"))
    rec.metrics          # RunMetrics for the last run
    rec.export()         # JSON-safe snapshot for save/replay
"""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from graph import Graph
from graph.errors import ErrorKind
from algorithms import Algorithm, get_algorithm
from algorithms.step import AlgorithmConfig, AlgorithmResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass - what the analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algorithm_id:   str   = ""
    algorithm_name: str   = ""
    nodes_visited:  int   = 0
    edges_examined: int   = 0          # steps that looked at an edge
    total_steps:    int   = 0
    wall_time_ms:   float = 0.0        # wall-clock time to run to completion
    success:        bool  = False


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        result  : AlgorithmResult of the last run (or None).
        metrics : RunMetrics of the last run (or None).
    """

    def __init__(self):
        self.result:  Optional[AlgorithmResult] = None
        self.metrics: Optional[RunMetrics]      = None

        self._algorithm: Optional[Algorithm]       = None
        self._graph:     Optional[Graph]           = None
        self._config:    Optional[AlgorithmConfig] = None

    # ------------------------------------------------------------------
    def run(self, algorithm_id: str, graph: Graph, config: AlgorithmConfig) -> AlgorithmResult:
        """Execute to completion, record the result and compute metrics."""
        algo = get_algorithm(algorithm_id)
        self._algorithm = algo
        self._graph     = graph
        self._config    = config

        if algo is None:
            self.result = AlgorithmResult.failure(
                f"Unknown algorithm: {algorithm_id}", ErrorKind.CONFIG
            )
            self.metrics = RunMetrics(algorithm_id=algorithm_id)
            return self.result

        started = time.monotonic()
        self.result = algo.execute(graph, config)
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(algo, self.result, wall_ms)
        logger.info(
            "ran %s: success=%s steps=%d visited=%d in %.2f ms",
            algo.id, self.metrics.success, self.metrics.total_steps,
            self.metrics.nodes_visited, self.metrics.wall_time_ms,
        )
        return self.result

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        if self.result is None:
            return {}
        config = self._config
        return {
            "algorithm_id": self.metrics.algorithm_id if self.metrics else "",
            "config": {
                "start_node":  config.start_node if config else None,
                "end_node":    config.end_node if config else None,
                "use_weights": config.use_weights if config else True,
            },
            "graph":   self._graph.to_dict() if self._graph is not None else {},
            "metrics": asdict(self.metrics) if self.metrics else {},
            "result":  self.result.to_dict(),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @staticmethod
    def _compute_metrics(algo: Algorithm, result: AlgorithmResult, wall_ms: float) -> RunMetrics:
        last = result.steps[-1] if result.steps else None
        examined = sum(
            1 for s in result.steps if getattr(s.data, "examining", None) is not None
        )
        return RunMetrics(
            algorithm_id=algo.id,
            algorithm_name=algo.name,
            nodes_visited=len(last.visited_nodes) if last else 0,
            edges_examined=examined,
            total_steps=len(result.steps),
            wall_time_ms=round(wall_ms, 2),
            success=result.success,
        )
