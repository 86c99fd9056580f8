"""
graph.py - Canonical Graph Container
=====================================
Single source of truth for the graph.  The parser, the generators, the
algorithms, the edit history and the renderer all talk to this object.

Responsibilities:
  1. Validated construction from nodes + edges  (ids unique, refs exist)
  2. Adjacency queries                          (neighbours, degree, ...)
  3. Non-mutating edits                         (with_node / without_edge / ...)
  4. Serialisation round-trip                   (to_dict / from_dict)

Design decisions:
  - A Graph is an immutable value.  Every edit returns a NEW Graph, so
    the snapshots kept by the edit history are safe to share.
  - Nodes & edges are stored in plain dicts keyed by id for O(1) lookup.
    Dict order is insertion order; it is irrelevant to identity but it
    fixes the neighbour order algorithms see, which keeps their step
    sequences deterministic.
  - Undirected only.  Duplicate edges (same unordered endpoint pair) are
    dropped at construction, first one wins.
  - A separate adjacency dict `_adj[node_id] -> [(neighbour_id, edge)]`
    is built once so neighbour queries are O(degree), not O(E).
"""

import logging
from types import MappingProxyType
from typing import (
    Dict, List, Tuple, Optional, Set, Iterable, Mapping, FrozenSet, Any
)

from graph.node import Node
from graph.edge import Edge
from graph.errors import DomainError

logger = logging.getLogger(__name__)


class Graph:
    """
    Attributes:
        nodes : read-only {node_id: Node}
        edges : read-only {edge_id: Edge}
        _adj  : {node_id: [(neighbour_id, Edge), ...]}
    """

    __slots__ = ("_nodes", "_edges", "_adj")

    def __init__(self, nodes: Iterable[Node] = (), edges: Iterable[Edge] = ()):
        self._nodes: Dict[str, Node] = {}
        self._edges: Dict[str, Edge] = {}
        self._adj:   Dict[str, List[Tuple[str, Edge]]] = {}

        for node in nodes:
            if node.id in self._nodes:
                raise DomainError(f"Duplicate node id '{node.id}'")
            self._nodes[node.id] = node
            self._adj[node.id] = []

        seen_pairs: Set[FrozenSet[str]] = set()
        for edge in edges:
            for end in (edge.source, edge.target):
                if end not in self._nodes:
                    raise DomainError(
                        f"Edge '{edge.id}' references missing node '{end}'"
                    )
            if edge.id in self._edges:
                raise DomainError(f"Duplicate edge id '{edge.id}'")
            if edge.pair in seen_pairs:
                logger.debug("Dropping duplicate edge %s (%s-%s)", edge.id, edge.source, edge.target)
                continue
            seen_pairs.add(edge.pair)
            self._edges[edge.id] = edge
            self._adj[edge.source].append((edge.target, edge))
            if edge.target != edge.source:
                self._adj[edge.target].append((edge.source, edge))

    # ==================================================================
    # NODE / EDGE ACCESS
    # ==================================================================
    @property
    def nodes(self) -> Mapping[str, Node]:
        return MappingProxyType(self._nodes)

    @property
    def edges(self) -> Mapping[str, Edge]:
        return MappingProxyType(self._edges)

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def get_edge_between(self, a: str, b: str) -> Optional[Edge]:
        """The edge connecting a and b, if any."""
        for nbr, edge in self._adj.get(a, []):
            if nbr == b:
                return edge
        return None

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] in edge insertion order."""
        return list(self._adj.get(node_id, []))

    def degree(self, node_id: str) -> int:
        return len(self._adj.get(node_id, []))

    # ==================================================================
    # EDITING - every method returns a new Graph
    # ==================================================================
    def with_node(self, node: Node) -> "Graph":
        return Graph(list(self._nodes.values()) + [node], self._edges.values())

    def without_node(self, node_id: str) -> "Graph":
        """Drop a node and every edge touching it."""
        if node_id not in self._nodes:
            raise DomainError(f"Node '{node_id}' does not exist")
        return Graph(
            [n for n in self._nodes.values() if n.id != node_id],
            [e for e in self._edges.values() if node_id not in (e.source, e.target)],
        )

    def with_node_moved(self, node_id: str, x: float, y: float) -> "Graph":
        if node_id not in self._nodes:
            raise DomainError(f"Node '{node_id}' does not exist")
        return Graph(
            [n.moved_to(x, y) if n.id == node_id else n for n in self._nodes.values()],
            self._edges.values(),
        )

    def with_edge(self, edge: Edge) -> "Graph":
        """Add an edge; an existing connection between the endpoints is an error."""
        if self.get_edge_between(edge.source, edge.target) is not None:
            raise DomainError(f"Edge between '{edge.source}' and '{edge.target}' already exists")
        return Graph(self._nodes.values(), list(self._edges.values()) + [edge])

    def without_edge(self, edge_id: str) -> "Graph":
        if edge_id not in self._edges:
            raise DomainError(f"Edge '{edge_id}' does not exist")
        return Graph(self._nodes.values(), [e for e in self._edges.values() if e.id != edge_id])

    def next_node_id(self) -> str:
        """Smallest positive integer id not yet taken."""
        i = 1
        while str(i) in self._nodes:
            i += 1
        return str(i)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self._nodes.values()],
            "edges": [e.to_dict() for e in self._edges.values()],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Graph":
        """Rebuild a graph from client JSON; any malformed shape is a DomainError."""
        if not isinstance(data, Mapping):
            raise DomainError("Malformed graph data: expected an object with 'nodes' and 'edges'")
        try:
            nodes = [Node.from_dict(nd) for nd in _records(data, "nodes")]
            edges = [Edge.from_dict(ed) for ed in _records(data, "edges")]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise DomainError(f"Malformed graph data: {exc}") from exc
        return cls(nodes, edges)

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def is_empty(self) -> bool:
        return not self._nodes

    def node_ids(self) -> List[str]:
        return list(self._nodes.keys())

    def edge_pairs(self) -> Set[FrozenSet[str]]:
        """Unordered endpoint pairs; compares graphs combinatorially."""
        return {e.pair for e in self._edges.values()}

    def identity(self) -> Tuple[FrozenSet[str], FrozenSet[str]]:
        return frozenset(self._nodes), frozenset(self._edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self._edges.values())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return (
            set(self._nodes.values()) == set(other._nodes.values())
            and set(self._edges.values()) == set(other._edges.values())
        )

    def __hash__(self) -> int:
        return hash((frozenset(self._nodes.values()), frozenset(self._edges.values())))

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"


def _records(data: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    records = data.get(key) or []
    if not isinstance(records, list):
        raise DomainError(f"Malformed graph data: '{key}' must be a list")
    for record in records:
        if not isinstance(record, Mapping):
            raise DomainError(f"Malformed graph data: every entry in '{key}' must be an object")
    return records
