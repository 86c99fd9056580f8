"""
prim.py - Prim's Minimum Spanning Tree
=======================================
Grows a spanning tree one cheapest edge at a time.  On a disconnected
graph it restarts from the first node not yet in the tree, producing a
minimum spanning forest.

Yields a Step at:
  1. Initialise keys (everything = inf)
  2. A node joins the tree        ->  CURRENT, VISITED, joining edge lit
  3. Each edge examined from it   ->  "w vs key[neighbour]"
  4. Each key improvement         ->  neighbour re-queued with the edge
  5. Done                         ->  all tree edges lit, total weight

The frontier is handled like Dijkstra's: a list re-sorted by key every
iteration, ties by queue order, stale entries dropped silently.
Negative weights are fine for a spanning tree.
"""

from typing import Any, Dict, Generator, List, Optional, Tuple

from graph import Graph
from algorithms.step import AlgorithmConfig, SpanningTreeData, Step, StepBuilder
from algorithms.dijkstra import fmt


PSEUDOCODE: List[str] = [
    "def Prim(graph):",                                 # 0
    "    key ← {v: ∞ for v in V}; tree ← []",           # 1
    "    for root in V not yet in tree:",               # 2
    "        key[root] ← 0; frontier ← [(root, None)]", # 3
    "        while frontier is not empty:",             # 4
    "            sort frontier by key",                 # 5
    "            (node, via) ← frontier.pop_front()",   # 6
    "            if node in tree: continue",            # 7
    "            add node (and via) to tree",           # 8
    "            for (neighbour, w) in adj(node):",     # 9
    "                if neighbour in tree: continue",   # 10
    "                if w < key[neighbour]:",           # 11
    "                    key[neighbour] ← w",           # 12
    "                    frontier.push((neighbour, edge))",  # 13
    "    return tree",                                  # 14
]


def prim(graph: Graph, config: AlgorithmConfig) -> Generator[Step, None, Dict[str, Any]]:
    INF = float("inf")
    sb = StepBuilder()
    key: Dict[str, float] = {nid: INF for nid in graph.nodes}
    in_tree: set = set()
    tree_edges: List[str] = []
    total = 0.0

    def snapshot(examining: Optional[str] = None) -> SpanningTreeData:
        return SpanningTreeData(
            tree_edges=tuple(tree_edges),
            total_weight=total,
            key=dict(key),
            examining=examining,
        )

    def weight_of(edge) -> float:
        return edge.weight if config.use_weights else 1.0

    yield sb.build(
        data=snapshot(),
        description="Initialize keys: every node = ∞, the tree is empty.",
        line=1,
    )

    roots = graph.node_ids()
    if config.start_node is not None:
        roots.remove(config.start_node)
        roots.insert(0, config.start_node)

    for root in roots:
        if root in in_tree:
            continue
        key[root] = 0.0
        # (node, key, joining edge id)
        frontier: List[Tuple[str, float, Optional[str]]] = [(root, 0.0, None)]

        while frontier:
            frontier.sort(key=lambda entry: entry[1])
            node, k, via = frontier.pop(0)
            if node in in_tree:
                continue

            in_tree.add(node)
            sb.visit(node)
            if via is not None:
                tree_edges.append(via)
                total += k
                description = f"Add {node} to the tree via edge {via} (weight {fmt(k)})."
            else:
                description = f"Start a new tree at {node}."
            yield sb.build(
                current=node,
                edges=[via] if via else [],
                data=snapshot(),
                description=description,
                line=8,
            )

            for nbr, edge in graph.neighbours(node):
                if nbr in in_tree:
                    continue
                w = weight_of(edge)
                improves = w < key[nbr]
                verdict = "✓ cheaper, update" if improves else "✗ keep"
                yield sb.build(
                    current=node,
                    edges=[edge.id],
                    data=snapshot(f"{node} → {nbr} (weight: {fmt(w)})"),
                    description=f"Examine edge {node} → {nbr}: {fmt(w)} vs key[{nbr}] = {fmt(key[nbr])} {verdict}",
                    line=11,
                )
                if improves:
                    key[nbr] = w
                    frontier.append((nbr, w, edge.id))
                    yield sb.build(
                        current=node,
                        edges=[edge.id],
                        data=snapshot(),
                        description=f"Update: key[{nbr}] = {fmt(w)} via {node}",
                        line=12,
                    )

    # a forest over n nodes with k trees has n - k edges
    components = graph.node_count() - len(tree_edges)
    if components > 1:
        description = (
            f"Spanning forest complete: {components} trees, {len(tree_edges)} edge(s), "
            f"total weight {fmt(total)}."
        )
    else:
        description = f"Spanning tree complete: {len(tree_edges)} edge(s), total weight {fmt(total)}."
    yield sb.build(
        edges=tree_edges,
        data=snapshot(),
        description=description,
        line=14,
        is_final=True,
    )
    return {"tree_edges": list(tree_edges), "total_weight": total, "components": components}
