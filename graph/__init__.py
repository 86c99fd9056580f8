"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge
    from graph import parse, ParseResult
    from graph import ErrorKind, GraphError, DomainError, FormatError, ConfigError
"""

from graph.errors import ErrorKind, GraphError, FormatError, DomainError, ConfigError
from graph.node   import Node
from graph.edge   import Edge
from graph.graph  import Graph
from graph        import generators
from graph.parser import parse, ParseResult, SUGGESTION

__all__ = [
    "Node",       "Edge",        "Graph",
    "ErrorKind",  "GraphError",  "FormatError", "DomainError", "ConfigError",
    "generators", "parse",       "ParseResult", "SUGGESTION",
]
