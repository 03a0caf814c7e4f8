"""Graph construction helpers over NetworkX.

Graphs handled by graphpersist are plain ``networkx.Graph`` (undirected) or
``networkx.DiGraph`` (directed) instances whose nodes are exactly the
integers ``1..N``. The readers only talk to the graph through the functions
in this module, which keeps the vertex range invariant in one place.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterator, Tuple, Union

import networkx as nx

from graphpersist.errors import EdgeOutOfBounds, GraphFormatError

SimpleGraph = Union[nx.Graph, nx.DiGraph]
Edge = Tuple[int, int]


def new_graph(vertex_count: int, directed: bool) -> SimpleGraph:
    """Create a graph with vertices ``1..vertex_count`` and no edges.

    Args:
        vertex_count: Number of vertices; must be non-negative.
        directed: Build a ``DiGraph`` if True, otherwise a ``Graph``.

    Returns:
        The empty graph.

    Raises:
        ValueError: If `vertex_count` is negative.
    """
    if vertex_count < 0:
        raise ValueError(f"Vertex count must be non-negative, got {vertex_count}.")
    graph = nx.DiGraph() if directed else nx.Graph()
    graph.add_nodes_from(range(1, vertex_count + 1))
    return graph


def add_edge(graph: SimpleGraph, src: int, dst: int) -> bool:
    """Insert edge ``src -> dst`` (or ``src - dst`` for undirected graphs).

    Returns:
        True if the edge was inserted, False if it already existed.

    Raises:
        EdgeOutOfBounds: If either endpoint is not a vertex of `graph`.
    """
    n = graph.number_of_nodes()
    for endpoint in (src, dst):
        if not 1 <= endpoint <= n:
            raise EdgeOutOfBounds(
                f"Edge ({src}, {dst}) has endpoint {endpoint} outside [1, {n}]."
            )
    if graph.has_edge(src, dst):
        return False
    graph.add_edge(src, dst)
    return True


def check_vertex_range(graph: SimpleGraph) -> None:
    """Check that the vertices of `graph` are exactly ``1..N``.

    Raises:
        GraphFormatError: If any vertex is not an integer in ``1..N``.
    """
    n = graph.number_of_nodes()
    # N distinct integers inside 1..N are exactly 1..N
    stray = [
        v
        for v in graph.nodes()
        if isinstance(v, bool) or not isinstance(v, int) or not 1 <= v <= n
    ]
    if stray:
        raise GraphFormatError(
            f"Graph vertices must be the integers 1..{n}; found {stray[:5]!r}."
        )


def is_directed(graph: SimpleGraph) -> bool:
    return graph.is_directed()


def vertex_count(graph: SimpleGraph) -> int:
    return graph.number_of_nodes()


def edge_count(graph: SimpleGraph) -> int:
    return graph.number_of_edges()


def iterate_edges(graph: SimpleGraph) -> Iterator[Edge]:
    """Yield every stored edge once.

    Undirected edges are yielded with the smaller endpoint first.
    """
    directed = graph.is_directed()
    for src, dst in graph.edges():
        if not directed and src > dst:
            src, dst = dst, src
        yield src, dst


def edge_multiset(graph: SimpleGraph) -> Counter:
    """Return the edges of `graph` as a multiset, for order-free comparison."""
    return Counter(iterate_edges(graph))
