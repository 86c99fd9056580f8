"""
session.py - Editor Session
=============================
Everything one learner is looking at, owned explicitly by one object:

    history     : committed Graph snapshots (the displayed graph is
                  history.current)
    algorithm   : the selected registry entry
    start / end : run configuration
    result      : the last successful AlgorithmResult (or None)
    controller  : PlaybackController walking that result

Rules:
  - Every graph change goes through History.commit.  Runs never commit.
  - Any graph change or algorithm switch discards the current result and
    reloads the controller with nothing, so stale steps are never shown
    over a different graph.
  - Configured start/end nodes that vanish from the graph are dropped;
    the start node then falls back to the graph's first node.
"""

import logging
from typing import Any, Dict, Optional

from config import Config
from graph import Edge, Graph, Node, ParseResult, generators, parse
from graph.errors import ConfigError, DomainError, ErrorKind
from algorithms import Algorithm, get_algorithm, list_algorithms
from algorithms.step import AlgorithmConfig, AlgorithmResult
from engine.history import History
from engine.playback import PlaybackController
from engine.recorder import Recorder
from engine.timer import TickScheduler
from ui import algorithm_cards, annotate_graph, code_panel, empty_state, playback_panel, step_panel

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "dijkstra"
DEFAULT_NAME = "Sample Graph"
CUSTOM_NAME = "Custom Graph"
EMPTY_NAME = "Empty Graph"


class EditorSession:

    def __init__(self, config: Optional[Config] = None, scheduler: Optional[TickScheduler] = None):
        self.config = config or Config()
        self.scheduler = scheduler or TickScheduler()

        initial = generators.default_graph()
        self.history = History(initial, capacity=self.config.editor.history_capacity)
        self._names: Dict[int, str] = {id(initial): DEFAULT_NAME}

        self.algorithm: Algorithm = get_algorithm(DEFAULT_ALGORITHM)
        self.start_node: Optional[str] = initial.node_ids()[0]
        self.end_node: Optional[str] = None

        self.recorder = Recorder()
        self.result: Optional[AlgorithmResult] = None
        self.last_error: Optional[AlgorithmResult] = None

        pb = self.config.playback
        self.controller = PlaybackController(
            self.scheduler,
            default_speed=pb.default_speed,
            min_speed=pb.min_speed,
            max_speed=pb.max_speed,
        )

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def graph(self) -> Graph:
        return self.history.current

    @property
    def graph_name(self) -> str:
        return self._names.get(id(self.graph), CUSTOM_NAME)

    # ==================================================================
    # GRAPH CHANGES - all of them commit
    # ==================================================================
    def load_text(self, text: str) -> ParseResult:
        """Parse `text`; only a successful parse replaces the graph."""
        result = parse(text, max_nodes=self.config.editor.max_nodes)
        if result.success:
            self._commit(result.graph, text.strip())
        else:
            logger.info("parse failed (%s): %s", result.error_kind.value, result.error)
        return result

    def load_sample(self, key: str) -> Graph:
        entry = generators.SAMPLE_GRAPHS.get(key)
        if entry is None:
            raise DomainError(f"Unknown sample graph '{key}'")
        name, _description, factory = entry
        return self._commit(factory(), name)

    def generate(self, kind: str, n: int = 0, m: Optional[int] = None) -> Graph:
        graph = generators.generate(kind, n, m, max_nodes=self.config.editor.max_nodes)
        if kind.lower() == "bipartite":
            name = f"Bipartite K{n},{m}"
        elif kind.lower() == "petersen":
            name = "Petersen Graph"
        else:
            name = f"{kind.title()} graph ({n} nodes)"
        return self._commit(graph, name)

    def clear(self) -> Graph:
        return self._commit(Graph(), EMPTY_NAME)

    def apply_change(self, graph: Graph) -> Graph:
        """A graph manipulated by the canvas (drag, add, delete, ...)."""
        return self._commit(graph, EMPTY_NAME if graph.is_empty() else CUSTOM_NAME)

    # -- convenience edits ------------------------------------------------
    def add_node(self, x: Optional[float] = None, y: Optional[float] = None,
                 label: Optional[str] = None) -> Node:
        node_id = self.graph.next_node_id()
        node = Node(node_id, label or node_id, x, y)
        self.apply_change(self.graph.with_node(node))
        return node

    def remove_node(self, node_id: str) -> Graph:
        return self.apply_change(self.graph.without_node(node_id))

    def add_edge(self, source: str, target: str, weight: float = 1.0) -> Edge:
        edge = Edge(f"e{source}-{target}", source, target, weight)
        self.apply_change(self.graph.with_edge(edge))
        return edge

    def remove_edge(self, edge_id: str) -> Graph:
        return self.apply_change(self.graph.without_edge(edge_id))

    def move_node(self, node_id: str, x: float, y: float) -> Graph:
        return self.apply_change(self.graph.with_node_moved(node_id, x, y))

    # -- history ------------------------------------------------------------
    def undo(self) -> Optional[Graph]:
        graph = self.history.undo()
        if graph is not None:
            self._graph_changed()
        return graph

    def redo(self) -> Optional[Graph]:
        graph = self.history.redo()
        if graph is not None:
            self._graph_changed()
        return graph

    # ==================================================================
    # RUN CONFIGURATION
    # ==================================================================
    def select_algorithm(self, algorithm_id: str) -> Algorithm:
        algo = get_algorithm(algorithm_id)
        if algo is None:
            raise ConfigError(f"Unknown algorithm '{algorithm_id}'")
        if algo is not self.algorithm:
            self.algorithm = algo
            self._discard_result()
        return algo

    def configure(self, start_node: Optional[str] = None, end_node: Optional[str] = None) -> None:
        for label, node_id in (("Start", start_node), ("End", end_node)):
            if node_id is not None and not self.graph.has_node(node_id):
                raise ConfigError(f"{label} node '{node_id}' not found in graph")
        self.start_node = start_node
        self.end_node = end_node
        self._discard_result()

    def set_speed(self, speed) -> float:
        return self.controller.set_speed(speed)

    def run(self) -> AlgorithmResult:
        """Execute the selected algorithm on the displayed graph."""
        self._discard_result()
        if self.graph.is_empty():
            result = AlgorithmResult.failure("The graph is empty", ErrorKind.DOMAIN)
        else:
            config = AlgorithmConfig(start_node=self.start_node, end_node=self.end_node)
            result = self.recorder.run(self.algorithm.id, self.graph, config)

        if result.success:
            self.result = result
            self.controller.load(result)
        else:
            self.last_error = result
        return result

    def export(self) -> Dict[str, Any]:
        """JSON-safe snapshot of the last successful run, for save and replay."""
        if self.result is None:
            raise DomainError("Nothing to export; run an algorithm first")
        return self.recorder.export()

    # ==================================================================
    # VIEW
    # ==================================================================
    def view(self) -> Dict[str, Any]:
        """Everything the page needs to draw the current state."""
        base: Dict[str, Any] = {
            "graph_name":   self.graph_name,
            "history":      self.history.to_dict(),
            "algorithm_id": self.algorithm.id,
            "algorithms":   algorithm_cards(list_algorithms(), self.algorithm.id),
            "start_node":   self.start_node,
            "end_node":     self.end_node,
        }
        if self.last_error is not None:
            base["error"] = {
                "error": self.last_error.error,
                "kind":  self.last_error.error_kind.value,
            }

        if self.graph.is_empty():
            base.update({"empty": True, "empty_state": empty_state()})
            return base

        step = self.controller.current_step
        base.update({
            "empty":       False,
            "graph":       annotate_graph(self.graph, step),
            "description": step.description if step else None,
            "source_line": step.source_line if step else None,
            "code":        code_panel(self.algorithm, step),
            "step":        step_panel(step, self.controller.index, self.controller.total_steps),
            "playback":    playback_panel(self.controller),
            "metrics":     self._metrics(),
        })
        return base

    def close(self) -> None:
        self.controller.close()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _commit(self, graph: Graph, name: str) -> Graph:
        self.history.commit(graph)
        self._names[id(graph)] = name
        live = {id(g) for g in self.history.entries}
        self._names = {k: v for k, v in self._names.items() if k in live}
        logger.info("graph committed: %s (%d nodes, %d edges)",
                    name, graph.node_count(), graph.edge_count())
        self._graph_changed()
        return graph

    def _graph_changed(self) -> None:
        graph = self.graph
        if self.end_node is not None and not graph.has_node(self.end_node):
            self.end_node = None
        if self.start_node is None or not graph.has_node(self.start_node):
            ids = graph.node_ids()
            self.start_node = ids[0] if ids else None
        self._discard_result()

    def _discard_result(self) -> None:
        self.result = None
        self.last_error = None
        self.controller.load(None)

    def _metrics(self) -> Optional[Dict[str, Any]]:
        if self.result is None or self.recorder.metrics is None:
            return None
        m = self.recorder.metrics
        return {
            "algorithm_name": m.algorithm_name,
            "nodes_visited":  m.nodes_visited,
            "edges_examined": m.edges_examined,
            "total_steps":    m.total_steps,
            "wall_time_ms":   m.wall_time_ms,
        }
