"""
dfs.py - Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit issues).

Yields a Step at:
  1. Push start node onto stack
  2. Pop an unvisited node     ->  CURRENT, VISITED
  3. Examine each neighbour    ->  edge highlighted
  4. Push unvisited neighbour
  5. Stack empty               ->  completion (order, parents)

Stack entries carry the node that pushed them, so the parent recorded on
pop is the edge DFS actually descended.  A node can sit on the stack
several times ("mark on pop"); popping an already-visited copy is skipped
without a step, like stale frontier entries in Dijkstra.
"""

from typing import Any, Dict, Generator, List, Optional, Tuple

from graph import Graph
from algorithms.step import AlgorithmConfig, Step, StepBuilder, TraversalData


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, source):",                        # 0
    "    stack ← [(source, None)]",                   # 1
    "    while stack is not empty:",                  # 2
    "        (node, via) ← stack.pop()",              # 3
    "        if node in visited: continue",           # 4
    "        visited.add(node); parent[node] ← via",  # 5
    "        for neighbour in adj(node):",            # 6
    "            if neighbour not in visited:",       # 7
    "                stack.push((neighbour, node))",  # 8
    "    return order, parent",                       # 9
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dfs(graph: Graph, config: AlgorithmConfig) -> Generator[Step, None, Dict[str, Any]]:
    source = config.start_node
    sb = StepBuilder()
    stack: List[Tuple[str, Optional[str]]] = [(source, None)]
    visited: set = set()
    parent: Dict[str, Optional[str]] = {}

    def snapshot(examining: Optional[str] = None) -> TraversalData:
        return TraversalData(
            order=tuple(sb.visited),
            frontier=tuple(n for n, _ in stack),
            parent=dict(parent),
            examining=examining,
        )

    # --- init step ---
    yield sb.build(
        data=snapshot(),
        description=(
            f"Initialise: push start node {source} onto the stack. "
            f"DFS dives as deep as possible before backtracking."
        ),
        line=1,
    )

    # --- main loop ---
    while stack:
        node, via = stack.pop()
        if node in visited:
            continue

        visited.add(node)
        parent[node] = via
        sb.visit(node)
        via_edge = graph.get_edge_between(via, node) if via is not None else None
        yield sb.build(
            current=node,
            edges=[via_edge.id] if via_edge else [],
            data=snapshot(),
            description=(
                f"Pop {node} from the stack and mark it VISITED"
                + (f" (reached from {via})." if via is not None else ".")
            ),
            line=5,
        )

        # -- explore neighbours --
        for nbr, edge in graph.neighbours(node):
            examining = f"{node} → {nbr}"
            if nbr in visited:
                description = f"Examine edge {examining}: {nbr} already visited, ignore."
            else:
                description = f"Examine edge {examining}: {nbr} not visited yet."
            yield sb.build(
                current=node,
                edges=[edge.id],
                data=snapshot(examining),
                description=description,
                line=7,
            )

            if nbr not in visited:
                stack.append((nbr, node))
                yield sb.build(
                    current=node,
                    edges=[edge.id],
                    data=snapshot(),
                    description=f"Push {nbr} onto the stack (via {node}).",
                    line=8,
                )

    # --- completion ---
    yield sb.build(
        data=snapshot(),
        description=f"Stack empty. DFS visited {len(sb.visited)} node(s): {', '.join(sb.visited)}.",
        line=9,
        is_final=True,
    )
    return {"order": list(sb.visited), "parent": dict(parent)}
