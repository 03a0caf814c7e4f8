"""graphpersist: graph file readers and writers.

Reads and writes graphs in a simple edge-list format (optionally gzip
compressed) and reads GraphML and GML. Graphs are NetworkX ``Graph`` or
``DiGraph`` objects over vertices ``1..N``; node identifiers found in GraphML
and GML files are remapped to that range in declaration order.

Primary API:
    load(), save() - Read or write a file, format chosen by suffix or argument
    read_simple(), write_simple() - Simple format on open streams
    read_graphml(), read_gml() - GraphML and GML readers (path or stream)
    parse_gml() - GML reader for in-memory text
    new_graph(), add_edge() - Build graphs over vertices 1..N

Example:
    from graphpersist import add_edge, load, new_graph, save

    g = new_graph(3, directed=True)
    add_edge(g, 1, 2)
    add_edge(g, 2, 3)
    save(g, "path.sg")
    assert sorted(load("path.sg").edges()) == [(1, 2), (2, 3)]
"""

from __future__ import annotations

from graphpersist import logging
from graphpersist._version import __version__
from graphpersist.config import PERSISTENCE_CONFIG, PersistenceConfig
from graphpersist.errors import (
    DuplicateAssignment,
    EdgeOutOfBounds,
    GraphFormatError,
    GraphPersistError,
    IOFailure,
    MalformedEdge,
    MalformedGML,
    MalformedGraphML,
    MalformedHeader,
    NotGraphML,
    UnknownEdgeDefault,
    UnknownGraphMLElement,
    UnknownNodeReference,
)
from graphpersist.formats.gml import (
    GMLNode,
    load_gml,
    parse_gml,
    parse_gml_tree,
    read_gml,
)
from graphpersist.formats.graphml import load_graphml, read_graphml
from graphpersist.formats.simple import (
    load_simple,
    read_simple,
    save_simple,
    write_simple,
)
from graphpersist.graph.facade import (
    add_edge,
    check_vertex_range,
    edge_count,
    edge_multiset,
    is_directed,
    iterate_edges,
    new_graph,
    vertex_count,
)
from graphpersist.persistence import load, save
from graphpersist.remap import IdentifierRemapper

__all__ = [
    # Version
    "__version__",
    # Persistence (primary API)
    "load",
    "save",
    # Formats
    "read_simple",
    "write_simple",
    "load_simple",
    "save_simple",
    "read_graphml",
    "load_graphml",
    "read_gml",
    "load_gml",
    "parse_gml",
    "parse_gml_tree",
    "GMLNode",
    # Graph construction
    "new_graph",
    "add_edge",
    "check_vertex_range",
    "is_directed",
    "vertex_count",
    "edge_count",
    "iterate_edges",
    "edge_multiset",
    "IdentifierRemapper",
    # Configuration
    "PersistenceConfig",
    "PERSISTENCE_CONFIG",
    # Errors
    "GraphPersistError",
    "GraphFormatError",
    "MalformedHeader",
    "MalformedEdge",
    "EdgeOutOfBounds",
    "NotGraphML",
    "MalformedGraphML",
    "UnknownEdgeDefault",
    "UnknownGraphMLElement",
    "MalformedGML",
    "DuplicateAssignment",
    "UnknownNodeReference",
    "IOFailure",
    # Utilities
    "logging",
]
