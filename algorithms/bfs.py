"""
bfs.py - Breadth-First Search
==============================
Generator-based BFS from a start node over the whole reachable component.
Yields a Step at every meaningful event:
  1. Initialise queue with the start node
  2. Dequeue a node            ->  CURRENT, VISITED
  3. Examine each neighbour    ->  edge highlighted
  4. Enqueue unseen neighbour  ->  discovered, parent recorded
  5. Queue empty               ->  completion (order, parents, levels)

If an end node is configured the completion step also reports the
(hop-count) shortest path to it.
"""

from collections import deque
from typing import Any, Dict, Generator, List, Optional

from graph import Graph
from algorithms.step import AlgorithmConfig, Step, StepBuilder, TraversalData


# ---------------------------------------------------------------------------
# Pseudocode - each string is one displayed line; index = source_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, source):",                        # 0
    "    queue ← [source]; discovered ← {source}",    # 1
    "    parent ← {source: None}",                    # 2
    "    while queue is not empty:",                  # 3
    "        node ← queue.dequeue()",                 # 4
    "        visit(node)",                            # 5
    "        for neighbour in adj(node):",            # 6
    "            if neighbour not in discovered:",    # 7
    "                discovered.add(neighbour)",      # 8
    "                parent[neighbour] ← node",       # 9
    "                queue.enqueue(neighbour)",       # 10
    "    return order, parent",                       # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bfs(graph: Graph, config: AlgorithmConfig) -> Generator[Step, None, Dict[str, Any]]:
    """
    Yields Step snapshots for every event during BFS execution.

    Args:
        graph  : The graph to search.
        config : start_node is required; end_node is optional.

    Returns (as the generator's return value) the final order, parent and
    level maps.
    """
    source = config.start_node
    sb = StepBuilder()
    queue = deque([source])
    discovered = {source}
    parent: Dict[str, Optional[str]] = {source: None}
    level: Dict[str, int] = {source: 0}

    def snapshot(examining: Optional[str] = None) -> TraversalData:
        return TraversalData(
            order=tuple(sb.visited),
            frontier=tuple(queue),
            parent=dict(parent),
            examining=examining,
        )

    # --- initialisation step ---
    yield sb.build(
        data=snapshot(),
        description=(
            f"Initialise: start node {source} is placed into the queue "
            f"and marked as discovered. BFS explores layer by layer from here."
        ),
        line=1,
    )

    # --- main loop ---
    while queue:
        node = queue.popleft()
        sb.visit(node)

        # -- dequeue event --
        yield sb.build(
            current=node,
            data=snapshot(),
            description=(
                f"Dequeue node {node} (level {level[node]}). BFS always expands "
                f"the node that was discovered earliest (FIFO)."
            ),
            line=5,
        )

        # -- explore neighbours --
        for nbr, edge in graph.neighbours(node):
            examining = f"{node} → {nbr}"
            if nbr in discovered:
                description = f"Examine edge {examining}: {nbr} already discovered, skip."
            else:
                description = f"Examine edge {examining}: {nbr} is new."
            yield sb.build(
                current=node,
                edges=[edge.id],
                data=snapshot(examining),
                description=description,
                line=7,
            )

            if nbr not in discovered:
                discovered.add(nbr)
                parent[nbr] = node
                level[nbr] = level[node] + 1
                queue.append(nbr)

                # -- enqueue event --
                yield sb.build(
                    current=node,
                    edges=[edge.id],
                    data=snapshot(),
                    description=(
                        f"Enqueue {nbr} (parent = {node}, level {level[nbr]}). "
                        f"It will be expanded after every node already queued."
                    ),
                    line=10,
                )

    # --- completion ---
    final: Dict[str, Any] = {"order": list(sb.visited), "parent": dict(parent), "levels": dict(level)}
    description = f"Queue is empty. BFS reached {len(sb.visited)} node(s) from {source}."
    edges: List[str] = []
    target = config.end_node
    if target is not None:
        path = _reconstruct(parent, target)
        final["end_node"] = target
        final["path"] = path
        if path:
            description += f" Shortest path (by hop count) to {target}: {' → '.join(path)}."
            edges = [graph.get_edge_between(a, b).id for a, b in zip(path, path[1:])]
        else:
            description += f" {target} is NOT reachable from {source}."
    yield sb.build(data=snapshot(), edges=edges, description=description, line=11, is_final=True)
    return final


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------
def _reconstruct(parent: Dict[str, Optional[str]], target: str) -> List[str]:
    if target not in parent:
        return []
    path = []
    cur: Optional[str] = target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
