"""
parser.py - Text to Graph
==========================
Turns free-form text into a canonical Graph by trying an ordered list
of strategies, most specific first:

    1. named graph          "complete 5", "k4", "k(2,3)", "petersen"
    2. natural language     "5 nodes in a circle", "star with 6 points"
    3. adjacency list       "1: 2,3; 2: 1,4"
    4. edge list            "1-2, 2-3, 3-1"   /   "a b; b c"
    5. adjacency matrix     "[[0,1,0],[1,0,1],[0,1,0]]"

Each strategy is a pure function  (text, max_nodes) -> Optional[ParseResult].
Returning None means "this isn't my format, ask the next one".  Returning
a result, successful or not, ends the cascade: "complete 25" is a named
graph with a bad size, not an edge between nodes "complete" and "25".

Failures are values, never exceptions.  A failed result never carries a
partial graph.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from graph.node import Node
from graph.edge import Edge
from graph.graph import Graph
from graph.errors import ErrorKind
from graph import generators
from graph.generators import MAX_NODES, size_error

logger = logging.getLogger(__name__)

SUGGESTION = (
    'Try: "complete graph 5", "cycle 4", "1-2, 2-3, 3-1", '
    'or "[[0,1,0],[1,0,1],[0,1,0]]"'
)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ParseResult:
    success:    bool
    graph:      Optional[Graph]     = None
    error:      Optional[str]       = None
    error_kind: Optional[ErrorKind] = None
    suggestion: Optional[str]       = None
    strategy:   Optional[str]       = None

    @classmethod
    def ok(cls, graph: Graph, strategy: str) -> "ParseResult":
        return cls(success=True, graph=graph, strategy=strategy)

    @classmethod
    def fail(
        cls,
        error: str,
        kind: ErrorKind,
        strategy: Optional[str] = None,
        suggestion: Optional[str] = None,
    ) -> "ParseResult":
        return cls(success=False, error=error, error_kind=kind, strategy=strategy, suggestion=suggestion)

    def to_dict(self) -> dict:
        data: dict = {"success": self.success}
        if self.graph is not None:
            data["graph"] = self.graph.to_dict()
        if self.error:
            data["error"] = self.error
            data["kind"] = self.error_kind.value if self.error_kind else None
        if self.suggestion:
            data["suggestion"] = self.suggestion
        if self.strategy:
            data["strategy"] = self.strategy
        return data


Strategy = Callable[[str, int], Optional[ParseResult]]


# ---------------------------------------------------------------------------
# 1. Named graphs
# ---------------------------------------------------------------------------
# The one-letter forms ("k5", "c 4", "k(2,3)") take only a space or an
# underscore before the size and must not touch an edge connector, so
# "c-1" and "k5-d" stay edge lists.
_NOT_AFTER_LINK = r"(?<![-–—>])(?<![-–—>]\s)"
_NOT_BEFORE_LINK = r"(?!\s*(?:->|[-–—]))"


def _named(words: str, letter: str) -> "re.Pattern[str]":
    return re.compile(
        rf"{_NOT_AFTER_LINK}\b(?:(?:{words})(?:\s+graph)?[\s_-]*|{letter}[\s_]*)(\d+)\b{_NOT_BEFORE_LINK}"
    )


# bipartite is listed before complete so "k(2,3)" / "k 2 3" isn't read as K2
NAMED_PATTERNS: List[Tuple[str, "re.Pattern[str]"]] = [
    ("bipartite", re.compile(r"\bbipartite\s*\(?\s*(\d+)\s*[\s,x_-]\s*(\d+)\s*\)?")),
    ("bipartite", re.compile(
        rf"{_NOT_AFTER_LINK}\bk\s*\(?\s*(\d+)\s*[\s,x_]\s*(\d+)\b\s*\)?{_NOT_BEFORE_LINK}"
    )),
    ("complete",  _named("complete", "k")),
    ("cycle",     _named("cycle", "c")),
    ("path",      _named("path", "p")),
    ("star",      _named("star", "s")),
    ("wheel",     _named("wheel", "w")),
    ("petersen",  re.compile(r"\bpetersen\b")),
]


def parse_named(text: str, max_nodes: int = MAX_NODES) -> Optional[ParseResult]:
    for kind, regex in NAMED_PATTERNS:
        match = regex.search(text)
        if not match:
            continue
        if kind == "petersen":
            if generators.PETERSEN_NODES > max_nodes:
                return ParseResult.fail(
                    generators.petersen_size_error(max_nodes),
                    ErrorKind.DOMAIN, "named",
                )
            return ParseResult.ok(generators.petersen(), "named")
        if kind == "bipartite":
            m, n = int(match.group(1)), int(match.group(2))
            if m <= 0 or n <= 0:
                return ParseResult.fail(
                    f"Invalid bipartite sizes: {m},{n}. Both parts need at least 1 node.",
                    ErrorKind.DOMAIN, "named",
                )
            if m + n > max_nodes:
                return ParseResult.fail(
                    f"Invalid size: {m}+{n}. Use at most {max_nodes} nodes in total.",
                    ErrorKind.DOMAIN, "named",
                )
            return ParseResult.ok(generators.bipartite(m, n), "named")
        return _sized(kind, int(match.group(1)), max_nodes, "named")
    return None


# ---------------------------------------------------------------------------
# 2. Natural language
# ---------------------------------------------------------------------------
NATURAL_PATTERNS: List[Tuple[str, "re.Pattern[str]"]] = [
    ("cycle",    re.compile(r"(\d+)\s+nodes?\s+in\s+a\s+(?:circle|cycle|ring)")),
    ("complete", re.compile(r"(\d+)\s+nodes?\s+(?:all\s+)?connected")),
    ("path",     re.compile(r"(\d+)\s+nodes?\s+in\s+a\s+(?:line|path|row)")),
    ("star",     re.compile(r"star\s+with\s+(\d+)\s+(?:points?|nodes?)")),
    ("tree",     re.compile(r"tree\s+with\s+(\d+)\s+nodes?")),
    ("empty",    re.compile(r"empty\s+(?:graph\s+)?(?:with\s+)?(\d+)")),
]


def parse_natural_language(text: str, max_nodes: int = MAX_NODES) -> Optional[ParseResult]:
    for kind, regex in NATURAL_PATTERNS:
        match = regex.search(text)
        if match:
            return _sized(kind, int(match.group(1)), max_nodes, "natural")
    return None


def _sized(kind: str, n: int, max_nodes: int, strategy: str) -> ParseResult:
    err = size_error(n, max_nodes)
    if err:
        return ParseResult.fail(err, ErrorKind.DOMAIN, strategy)
    return ParseResult.ok(generators.SINGLE_SIZE[kind](n), strategy)


# ---------------------------------------------------------------------------
# 3. Adjacency list
# ---------------------------------------------------------------------------
_ADJ_ENTRY = re.compile(r"^(\w+)\s*:\s*(.*)$")
_ADJ_TARGET = re.compile(r"^\w+$")


def parse_adjacency_list(text: str, max_nodes: int = MAX_NODES) -> Optional[ParseResult]:
    entries = [e.strip() for e in re.split(r"[;\n]", text) if e.strip()]
    if not any(":" in e for e in entries):
        return None

    adjacency: Dict[str, List[str]] = {}
    for entry in entries:
        match = _ADJ_ENTRY.match(entry)
        if not match:
            return ParseResult.fail(
                f"Invalid adjacency entry '{entry}'. Expected 'node: n1, n2'.",
                ErrorKind.FORMAT, "adjacency-list",
            )
        node, rest = match.group(1), match.group(2)
        targets = [t for t in re.split(r"[,\s]+", rest) if t]
        for t in targets:
            if not _ADJ_TARGET.match(t):
                return ParseResult.fail(
                    f"Invalid neighbour '{t}' for node '{node}'.",
                    ErrorKind.FORMAT, "adjacency-list",
                )
        adjacency.setdefault(node, []).extend(targets)

    # neighbours that never got their own entry still become nodes
    order: List[str] = list(adjacency)
    for targets in adjacency.values():
        for t in targets:
            if t not in adjacency and t not in order:
                order.append(t)

    edges = [
        Edge(f"e{node}-{nbr}", node, nbr)
        for node, targets in adjacency.items()
        for nbr in targets
    ]
    return _build(order, edges, max_nodes, "adjacency-list")


# ---------------------------------------------------------------------------
# 4. Edge list
# ---------------------------------------------------------------------------
_EDGE_TOKEN = re.compile(r"^(\w+)\s*(?:->|[\s\-‐-―−])\s*(\w+)$")


def parse_edge_list(text: str, max_nodes: int = MAX_NODES) -> Optional[ParseResult]:
    tokens = [t.strip() for t in re.split(r"[,;\n]", text) if t.strip()]
    matches = [(t, _EDGE_TOKEN.match(t)) for t in tokens]
    if not any(m for _, m in matches):
        return None

    bad = [t for t, m in matches if not m]
    if bad:
        return ParseResult.fail(
            f"Invalid edge '{bad[0]}'. Expected 'a-b' or 'a b'.",
            ErrorKind.FORMAT, "edge-list",
        )

    order: List[str] = []
    edges: List[Edge] = []
    for _, m in matches:
        a, b = m.group(1), m.group(2)
        for nid in (a, b):
            if nid not in order:
                order.append(nid)
        edges.append(Edge(f"e{a}-{b}", a, b))
    return _build(order, edges, max_nodes, "edge-list")


# ---------------------------------------------------------------------------
# 5. Adjacency matrix
# ---------------------------------------------------------------------------
_MATRIX_ROW = re.compile(r"\[([^\[\]]*)\]")


def parse_adjacency_matrix(text: str, max_nodes: int = MAX_NODES) -> Optional[ParseResult]:
    raw_rows = _MATRIX_ROW.findall(text)
    if not raw_rows:
        return None

    matrix: List[List[float]] = []
    for raw in raw_rows:
        cells = [c for c in re.split(r"[,\s]+", raw.strip()) if c]
        try:
            matrix.append([float(c) for c in cells])
        except ValueError:
            return ParseResult.fail(
                f"Invalid matrix row [{raw.strip()}]: values must be numbers.",
                ErrorKind.FORMAT, "matrix",
            )

    n = len(matrix)
    if any(not row for row in matrix) or any(len(row) != len(matrix[0]) for row in matrix):
        return ParseResult.fail("Invalid matrix format: rows have different lengths.", ErrorKind.FORMAT, "matrix")
    if len(matrix[0]) != n:
        return ParseResult.fail(
            f"Matrix must be square (got {n} rows of {len(matrix[0])} values).",
            ErrorKind.FORMAT, "matrix",
        )

    ids = [str(i + 1) for i in range(n)]
    edges = [
        Edge(f"e{i + 1}-{j + 1}", ids[i], ids[j])
        for i in range(n)
        for j in range(i + 1, n)
        if matrix[i][j] == 1
    ]
    return _build(ids, edges, max_nodes, "matrix")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------
def _build(order: List[str], edges: List[Edge], max_nodes: int, strategy: str) -> ParseResult:
    """Lay the nodes out on a circle and assemble the graph."""
    if len(order) > max_nodes:
        return ParseResult.fail(
            f"Too many nodes: {len(order)}. Use 1-{max_nodes} nodes.",
            ErrorKind.DOMAIN, strategy,
        )
    circle = generators.empty(len(order)).nodes.values()
    nodes = [Node(nid, nid, pos.x, pos.y) for nid, pos in zip(order, circle)]
    # duplicate edge ids ("1-2, 1-2") collapse here; reciprocal pairs in Graph
    unique: Dict[str, Edge] = {}
    for e in edges:
        unique.setdefault(e.id, e)
    return ParseResult.ok(Graph(nodes, unique.values()), strategy)


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("named",          parse_named),
    ("natural",        parse_natural_language),
    ("adjacency-list", parse_adjacency_list),
    ("edge-list",      parse_edge_list),
    ("matrix",         parse_adjacency_matrix),
)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def parse(text: str, max_nodes: int = MAX_NODES) -> ParseResult:
    """
    Parse a textual graph description.

    Returns a ParseResult; `graph` is set only when `success` is True.
    """
    trimmed = (text or "").strip().lower()
    if not trimmed:
        return ParseResult.fail("Please enter a graph description", ErrorKind.FORMAT)

    for name, strategy in STRATEGIES:
        result = strategy(trimmed, max_nodes)
        if result is None:
            continue
        if result.success:
            logger.debug("Parsed %r with %s strategy: %r", trimmed, name, result.graph)
        else:
            logger.debug("%s strategy rejected %r: %s", name, trimmed, result.error)
        return result

    logger.debug("No strategy understood %r", trimmed)
    return ParseResult.fail("Could not parse input", ErrorKind.FORMAT, suggestion=SUGGESTION)
