"""
errors.py - Error Taxonomy
===========================
Three kinds of failure the visualizer knows about:

    FORMAT  - text that no parsing strategy understands
    DOMAIN  - a well-formed request for an impossible graph
              (size out of range, non-square matrix, missing node)
    CONFIG  - an algorithm run without the node(s) it needs

Parser and algorithm failures travel as VALUES (ParseResult /
AlgorithmResult carry an ErrorKind + message).  The exception classes
below are only raised where a caller hands us something we refuse to
build: Graph construction & editing, generator sizes, and editor
session settings.  The Flask layer turns them into 400 responses.
"""

from enum import Enum


class ErrorKind(Enum):
    FORMAT = "format"
    DOMAIN = "domain"
    CONFIG = "config"


class GraphError(Exception):
    """Base class; `kind` mirrors the ErrorKind carried by result values."""

    kind: ErrorKind = ErrorKind.DOMAIN

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FormatError(GraphError):
    kind = ErrorKind.FORMAT


class DomainError(GraphError):
    kind = ErrorKind.DOMAIN


class ConfigError(GraphError):
    kind = ErrorKind.CONFIG
