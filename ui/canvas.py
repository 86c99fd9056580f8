"""
canvas.py - Highlight Annotation
=================================
Pure function: Graph + Step -> plain dicts the rendering collaborator
draws.  Drawing itself (SVG, canvas, pointer handling) happens elsewhere;
this module only decides which element looks how.

Design decisions:
  - NO mutation and NO caching.  The caller passes in everything it needs
    and gets back fresh dicts, recomputed on every call.
  - A node is "current" if it is the step's current node, else "visited"
    if it is in the step's visited set, else unhighlighted (None).
    Current wins over visited.
  - An edge is "highlighted" if its id is in the step's highlighted set.
"""

from typing import Any, Dict, List, Optional

from graph import Graph
from algorithms.step import Step

CURRENT     = "current"
VISITED     = "visited"
HIGHLIGHTED = "highlighted"


def node_highlight(node_id: str, step: Optional[Step]) -> Optional[str]:
    if step is None:
        return None
    if node_id == step.current_node:
        return CURRENT
    if node_id in step.visited_nodes:
        return VISITED
    return None


def edge_highlight(edge_id: str, step: Optional[Step]) -> Optional[str]:
    if step is not None and edge_id in step.highlighted_edges:
        return HIGHLIGHTED
    return None


def annotate_graph(graph: Graph, step: Optional[Step] = None) -> Dict[str, List[Dict[str, Any]]]:
    """
    Every node and edge of `graph` as a dict with an extra "highlight"
    key.  With no step everything is unhighlighted.
    """
    nodes = []
    for node in graph.nodes.values():
        entry = node.to_dict()
        entry["highlight"] = node_highlight(node.id, step)
        nodes.append(entry)

    edges = []
    for edge in graph.edges.values():
        entry = edge.to_dict()
        entry["highlight"] = edge_highlight(edge.id, step)
        edges.append(entry)

    return {"nodes": nodes, "edges": edges}
