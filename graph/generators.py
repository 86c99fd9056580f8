"""
generators.py - Canonical Graph Generators
===========================================
Factory functions for the named graph families the parser understands,
plus the sample-graph presets offered in the sidebar.

Every generator numbers its nodes "1".."n" and names edges
"e{source}-{target}".  The combinatorial structure is the contract:

    complete(n)      every unordered pair
    cycle(n)         i - (i mod n + 1)
    path(n)          i - (i+1) for i < n
    star(n)          1 - i for i = 2..n
    wheel(n)         cycle(n-1) + hub n joined to every cycle node
    bipartite(m, n)  left 1..m, right m+1..m+n, every cross pair
    petersen()       outer 5-cycle, spokes i-(i+5), inner pentagram

Positions are presentational only (circle / line / two columns), sized
for a canvas centred on the origin.

tree(n) and empty(n) are deliberate simplifications: tree(n) has the
edges of path(n) laid out on a circle, empty(n) has no edges.
"""

import math
from collections import OrderedDict
from typing import Callable, Dict, List, Optional, Tuple

from graph.node import Node
from graph.edge import Edge
from graph.graph import Graph
from graph.errors import DomainError

MAX_NODES = 20

RADIUS       = 120
PATH_SPACING = 100
COL_SPACING  = 80
COL_OFFSET   = 100
PETERSEN_OUTER = 150
PETERSEN_INNER = 75
PETERSEN_NODES = 10


# ---------------------------------------------------------------------------
# Layout helpers
# ---------------------------------------------------------------------------
def _circle(ids: List[int], radius: float = RADIUS, phase: float = 0.0) -> List[Node]:
    n = len(ids)
    nodes = []
    for k, i in enumerate(ids):
        angle = 2 * math.pi * k / n + phase
        nodes.append(Node(str(i), str(i), radius * math.cos(angle), radius * math.sin(angle)))
    return nodes


def _column(ids: List[int], x: float) -> List[Node]:
    n = len(ids)
    return [
        Node(str(i), str(i), x, k * COL_SPACING - (n - 1) * COL_SPACING / 2)
        for k, i in enumerate(ids)
    ]


def _edge(a: int, b: int) -> Edge:
    return Edge(f"e{a}-{b}", str(a), str(b))


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------
def complete(n: int) -> Graph:
    ids = list(range(1, n + 1))
    edges = [_edge(i, j) for i in ids for j in range(i + 1, n + 1)]
    return Graph(_circle(ids), edges)


def cycle(n: int) -> Graph:
    ids = list(range(1, n + 1))
    return Graph(_circle(ids), [_edge(i, i % n + 1) for i in ids])


def path(n: int) -> Graph:
    nodes = [
        Node(str(i), str(i), (i - 1) * PATH_SPACING - (n - 1) * PATH_SPACING / 2, 0.0)
        for i in range(1, n + 1)
    ]
    return Graph(nodes, [_edge(i, i + 1) for i in range(1, n)])


def star(n: int) -> Graph:
    nodes = [Node("1", "1", 0.0, 0.0)]
    if n > 1:
        outer = _circle(list(range(2, n + 1)))
        nodes.extend(outer)
    return Graph(nodes, [_edge(1, i) for i in range(2, n + 1)])


def wheel(n: int) -> Graph:
    rim = cycle(n - 1) if n > 1 else Graph()
    hub = Node(str(n), str(n), 0.0, 0.0)
    spokes = [_edge(n, i) for i in range(1, n)]
    return Graph(list(rim.nodes.values()) + [hub], list(rim.edges.values()) + spokes)


def bipartite(m: int, n: int) -> Graph:
    left = list(range(1, m + 1))
    right = list(range(m + 1, m + n + 1))
    nodes = _column(left, -COL_OFFSET) + _column(right, COL_OFFSET)
    return Graph(nodes, [_edge(i, j) for i in left for j in right])


def petersen() -> Graph:
    top = -math.pi / 2
    nodes = _circle([1, 2, 3, 4, 5], PETERSEN_OUTER, top) + _circle([6, 7, 8, 9, 10], PETERSEN_INNER, top)
    edges = [_edge(i, i % 5 + 1) for i in range(1, 6)]
    edges += [_edge(i, i + 5) for i in range(1, 6)]
    edges += [_edge(i, (i - 6 + 2) % 5 + 6) for i in range(6, 11)]
    return Graph(nodes, edges)


def tree(n: int) -> Graph:
    ids = list(range(1, n + 1))
    return Graph(_circle(ids), [_edge(i, i + 1) for i in range(1, n)])


def empty(n: int) -> Graph:
    return Graph(_circle(list(range(1, n + 1))))


# ---------------------------------------------------------------------------
# Dispatch by name
# ---------------------------------------------------------------------------
SINGLE_SIZE: Dict[str, Callable[[int], Graph]] = {
    "complete": complete,
    "cycle":    cycle,
    "path":     path,
    "star":     star,
    "wheel":    wheel,
    "tree":     tree,
    "empty":    empty,
}


def size_error(n: int, max_nodes: int = MAX_NODES) -> Optional[str]:
    """Message for an out-of-range size, or None when n is acceptable."""
    if 1 <= n <= max_nodes:
        return None
    return f"Invalid size: {n}. Use 1-{max_nodes} nodes."


def petersen_size_error(max_nodes: int) -> str:
    return f"The Petersen graph has {PETERSEN_NODES} nodes; the limit is {max_nodes}."


def generate(kind: str, n: int = 0, m: Optional[int] = None, max_nodes: int = MAX_NODES) -> Graph:
    """
    Build a named graph.  Raises DomainError for an unknown kind or an
    out-of-range size.
    """
    kind = kind.lower()
    if kind == "petersen":
        if PETERSEN_NODES > max_nodes:
            raise DomainError(petersen_size_error(max_nodes))
        return petersen()
    if kind == "bipartite":
        if m is None or n <= 0 or m <= 0:
            raise DomainError("Bipartite graphs need two sizes greater than 0")
        if n + m > max_nodes:
            raise DomainError(f"Invalid size: {n}+{m}. Use at most {max_nodes} nodes in total.")
        return bipartite(n, m)
    factory = SINGLE_SIZE.get(kind)
    if factory is None:
        raise DomainError(f"Unknown graph type '{kind}'")
    err = size_error(n, max_nodes)
    if err:
        raise DomainError(err)
    return factory(n)


# ---------------------------------------------------------------------------
# Sample graphs (sidebar presets)
# ---------------------------------------------------------------------------
SAMPLE_GRAPHS: "OrderedDict[str, Tuple[str, str, Callable[[], Graph]]]" = OrderedDict([
    ("complete4", ("Complete K₄", "4 nodes, all connected",     lambda: complete(4))),
    ("complete5", ("Complete K₅", "5 nodes, all connected",     lambda: complete(5))),
    ("cycle5",    ("Cycle C₅",    "5 nodes in a cycle",         lambda: cycle(5))),
    ("path5",     ("Path P₅",     "5 nodes in a line",          lambda: path(5))),
    ("star5",     ("Star S₅",     "1 center + 4 outer nodes",   lambda: star(5))),
    ("wheel5",    ("Wheel W₅",    "Cycle + center node",        lambda: wheel(5))),
    ("bipartite", ("Bipartite K₂,₃", "2 groups of nodes",  lambda: bipartite(2, 3))),
    ("petersen",  ("Petersen Graph",   "Famous example graph",       petersen)),
])


def default_graph() -> Graph:
    """The 5-node sample the editor opens with."""
    nodes = [
        Node("1", "1", 0.0, -120.0),
        Node("2", "2", 114.0, -37.0),
        Node("3", "3", 71.0, 97.0),
        Node("4", "4", -71.0, 97.0),
        Node("5", "5", -114.0, -37.0),
    ]
    edges = [
        Edge("e1", "1", "2"),
        Edge("e2", "2", "3"),
        Edge("e3", "3", "4"),
        Edge("e4", "4", "1"),
        Edge("e5", "1", "5"),
        Edge("e6", "3", "5"),
    ]
    return Graph(nodes, edges)


def sample_graph(key: str) -> Graph:
    entry = SAMPLE_GRAPHS.get(key)
    if entry is None:
        return default_graph()
    return entry[2]()
