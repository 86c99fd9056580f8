"""
dijkstra.py - Dijkstra's Shortest-Path Algorithm
==================================================
Single-source shortest paths over the undirected graph.

Yields a Step at:
  1. Initialise distances (source = 0, everything else = inf)
  2. Each node taken off the frontier  ->  CURRENT, VISITED
  3. Each edge examined from it        ->  "d + w vs stored distance"
  4. Each successful relaxation        ->  distance / predecessor updated
  5. Frontier empty                    ->  completion, final distances

The frontier is a plain list re-sorted by distance on every iteration.
Python's sort is stable, so ties go to whichever entry was queued first.
That is slower than a heap, but the extraction order is what the learner
watches, so it is kept exactly this way.  A node can be queued several
times; only its first extraction is processed, later (stale) entries are
dropped silently.

Correctness note: requires non-negative weights.  The registry refuses
to run it on a graph with negative edges.
"""

import math
from typing import Any, Dict, Generator, List, Optional, Tuple

from graph import Graph
from algorithms.step import AlgorithmConfig, ShortestPathData, Step, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",                    # 0
    "    dist ← {v: ∞ for v in V}; prev ← {v: None}",  # 1
    "    dist[source] ← 0",                            # 2
    "    frontier ← [(source, 0)]",                    # 3
    "    while frontier is not empty:",                # 4
    "        sort frontier by distance",               # 5
    "        (node, d) ← frontier.pop_front()",        # 6
    "        if node in visited: continue",            # 7
    "        visited.add(node)",                       # 8
    "        for (neighbour, w) in adj(node):",        # 9
    "            if neighbour in visited: continue",   # 10
    "            new_dist ← d + w",                    # 11
    "            if new_dist < dist[neighbour]:",      # 12
    "                dist[neighbour] ← new_dist",      # 13
    "                prev[neighbour] ← node",          # 14
    "                frontier.push((neighbour, new_dist))",  # 15
    "    return dist, prev",                           # 16
]

LINE_INIT     = 2
LINE_VISIT    = 8
LINE_EXAMINE  = 12
LINE_UPDATE   = 13
LINE_COMPLETE = 16


def fmt(value: float) -> str:
    if math.isinf(value):
        return "∞"
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph, config: AlgorithmConfig) -> Generator[Step, None, Dict[str, Any]]:
    """
    Yields one Step per decision; returns the final distance / predecessor
    maps (the generator's return value becomes AlgorithmResult.final_data).
    """
    source = config.start_node
    INF = float("inf")

    dist: Dict[str, float]          = {nid: INF for nid in graph.nodes}
    prev: Dict[str, Optional[str]]  = {nid: None for nid in graph.nodes}
    dist[source] = 0.0
    visited: set = set()
    sb = StepBuilder()

    def snapshot(**extra) -> ShortestPathData:
        return ShortestPathData(
            distances=dict(dist),
            previous=dict(prev),
            visited=tuple(sb.visited),
            **extra,
        )

    # --- init step ---
    yield sb.build(
        data=snapshot(),
        description=f"Initialize distances: {source} = 0, all others = ∞",
        line=LINE_INIT,
    )

    frontier: List[Tuple[str, float]] = [(source, 0.0)]

    # --- main loop ---
    while frontier:
        frontier.sort(key=lambda entry: entry[1])
        node, d = frontier.pop(0)

        # stale entry
        if node in visited:
            continue

        visited.add(node)
        sb.visit(node)
        yield sb.build(
            current=node,
            data=snapshot(current_distance=d),
            description=f"Visit node {node} with distance {fmt(d)}",
            line=LINE_VISIT,
        )

        # -- examine neighbours --
        for nbr, edge in graph.neighbours(node):
            if nbr in visited:
                continue

            weight = edge.weight if config.use_weights else 1.0
            new_dist = d + weight
            old_dist = dist[nbr]
            improves = new_dist < old_dist

            if improves:
                verdict = f"< {fmt(old_dist)} ✓ Update!"
            else:
                verdict = f">= {fmt(old_dist)} ✗ Skip"
            yield sb.build(
                current=node,
                edges=[edge.id],
                data=snapshot(
                    examining=f"{node} → {nbr} (weight: {fmt(weight)})",
                    new_distance=new_dist,
                    old_distance=old_dist,
                ),
                description=(
                    f"Examine edge {node} → {nbr}: {fmt(d)} + {fmt(weight)} = {fmt(new_dist)} {verdict}"
                ),
                line=LINE_EXAMINE,
            )

            if improves:
                dist[nbr] = new_dist
                prev[nbr] = node
                frontier.append((nbr, new_dist))
                yield sb.build(
                    current=node,
                    edges=[edge.id],
                    data=snapshot(updated=nbr),
                    description=(
                        f"Update: distance[{nbr}] = {fmt(new_dist)}, previous[{nbr}] = {node}"
                    ),
                    line=LINE_UPDATE,
                )

    # --- completion ---
    final: Dict[str, Any] = {"distances": dict(dist), "previous": dict(prev), "start_node": source}
    description = "Algorithm complete! All shortest paths from source have been found."
    edges: List[str] = []
    target = config.end_node
    if target is not None:
        path = reconstruct_path(prev, dist, target)
        final["end_node"] = target
        final["path"] = path
        if path:
            description += f" Shortest path to {target}: {' → '.join(path)} (cost {fmt(dist[target])})."
            edges = [graph.get_edge_between(a, b).id for a, b in zip(path, path[1:])]
        else:
            description += f" {target} is not reachable from {source}."

    yield sb.build(
        data=snapshot(),
        edges=edges,
        description=description,
        line=LINE_COMPLETE,
        is_final=True,
    )
    return final


# ---------------------------------------------------------------------------
def reconstruct_path(
    previous: Dict[str, Optional[str]],
    distances: Dict[str, float],
    target: str,
) -> List[str]:
    """Walk predecessors back from target; [] when target was never reached."""
    if math.isinf(distances.get(target, float("inf"))):
        return []
    path: List[str] = []
    cur: Optional[str] = target
    while cur is not None:
        path.append(cur)
        cur = previous.get(cur)
    path.reverse()
    return path
