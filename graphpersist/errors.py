"""Exceptions raised by graphpersist readers and writers.

Format errors derive from both `GraphPersistError` and `ValueError`, so code
that catches the builtin keeps working. I/O errors derive from `OSError`.
"""

from __future__ import annotations


class GraphPersistError(Exception):
    """Base class for all graphpersist errors."""


class GraphFormatError(GraphPersistError, ValueError):
    """Input does not follow the expected file format."""


class MalformedHeader(GraphFormatError):
    """Simple-format header is not ``<count>,<flag>`` with a valid count."""


class MalformedEdge(GraphFormatError):
    """Simple-format edge line is not two comma-separated integers."""


class EdgeOutOfBounds(GraphFormatError):
    """Edge endpoint lies outside ``[1, vertex_count]``."""


class NotGraphML(GraphFormatError):
    """XML root element is not ``graphml``."""


class MalformedGraphML(GraphFormatError):
    """GraphML document is not well-formed or lacks a required attribute."""


class UnknownEdgeDefault(GraphFormatError):
    """``edgedefault`` is neither ``directed`` nor ``undirected``."""


class UnknownGraphMLElement(GraphFormatError):
    """Element inside a ``graph`` is neither ``node`` nor ``edge``."""


class MalformedGML(GraphFormatError):
    """GML text cannot be tokenized or lacks the expected structure."""


class DuplicateAssignment(GraphFormatError):
    """The same node identifier was declared twice."""


class UnknownNodeReference(GraphFormatError):
    """Edge references a node identifier that was never declared."""


class IOFailure(GraphPersistError, OSError):
    """File could not be opened, read, written or decompressed."""
