from collections import Counter

import networkx as nx
import pytest

from graphpersist.errors import EdgeOutOfBounds, GraphFormatError
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


def test_new_graph_directed_and_undirected():
    g = new_graph(4, directed=True)
    assert isinstance(g, nx.DiGraph)
    assert is_directed(g)
    assert list(g.nodes()) == [1, 2, 3, 4]

    u = new_graph(2, directed=False)
    assert not is_directed(u)
    assert vertex_count(u) == 2
    assert edge_count(u) == 0


def test_new_graph_empty_and_negative():
    assert vertex_count(new_graph(0, directed=False)) == 0
    with pytest.raises(ValueError):
        new_graph(-1, directed=True)


def test_add_edge_reports_existing_edges():
    g = new_graph(3, directed=True)
    assert add_edge(g, 1, 2) is True
    assert add_edge(g, 1, 2) is False
    assert add_edge(g, 2, 1) is True
    assert edge_count(g) == 2

    u = new_graph(3, directed=False)
    assert add_edge(u, 2, 1) is True
    assert add_edge(u, 1, 2) is False
    assert edge_count(u) == 1


@pytest.mark.parametrize("src,dst", [(0, 1), (1, 4), (5, 2), (-1, 2)])
def test_add_edge_out_of_bounds(src, dst):
    g = new_graph(3, directed=True)
    with pytest.raises(EdgeOutOfBounds):
        add_edge(g, src, dst)
    assert edge_count(g) == 0


def test_iterate_edges_orders_undirected_endpoints():
    u = new_graph(3, directed=False)
    add_edge(u, 3, 1)
    add_edge(u, 2, 2)
    assert sorted(iterate_edges(u)) == [(1, 3), (2, 2)]
    assert all(src <= dst for src, dst in iterate_edges(u))


def test_edge_multiset():
    g = new_graph(3, directed=True)
    add_edge(g, 1, 2)
    add_edge(g, 3, 1)
    assert edge_multiset(g) == Counter({(1, 2): 1, (3, 1): 1})


def test_check_vertex_range():
    check_vertex_range(new_graph(3, directed=False))
    check_vertex_range(nx.DiGraph())

    g = new_graph(3, directed=True)
    g.remove_node(1)
    with pytest.raises(GraphFormatError, match=r"\[3\]"):
        check_vertex_range(g)

    with pytest.raises(GraphFormatError):
        check_vertex_range(nx.Graph([("a", "b")]))
    with pytest.raises(GraphFormatError):
        check_vertex_range(nx.Graph([(True, 2)]))
