import gzip
import io
from collections import Counter

import networkx as nx
import pytest

from graphpersist.errors import (
    EdgeOutOfBounds,
    GraphFormatError,
    MalformedEdge,
    MalformedHeader,
)
from graphpersist.formats.simple import (
    load_simple,
    parse_header,
    read_simple,
    save_simple,
    write_simple,
)
from graphpersist.graph.facade import (
    add_edge,
    edge_multiset,
    is_directed,
    iterate_edges,
    new_graph,
    vertex_count,
)


def build_graph(n, directed, edges):
    g = new_graph(n, directed)
    for src, dst in edges:
        add_edge(g, src, dst)
    return g


def test_read_directed_example():
    g = read_simple(io.StringIO("3,d\n1,2\n2,3\n"))
    assert is_directed(g)
    assert vertex_count(g) == 3
    assert list(iterate_edges(g)) == [(1, 2), (2, 3)]


def test_read_undirected_and_other_flags():
    assert not is_directed(read_simple(io.StringIO("2,u\n1,2\n")))
    assert not is_directed(read_simple(io.StringIO("2,x\n")))


def test_read_tolerates_whitespace_and_blank_lines():
    text = "\n  4 ,  d \n\n1 ,2\n  3,   4\n\n2, 3\n"
    g = read_simple(io.StringIO(text))
    assert vertex_count(g) == 4
    assert edge_multiset(g) == Counter({(1, 2): 1, (3, 4): 1, (2, 3): 1})


def test_read_binary_stream():
    g = read_simple(io.BytesIO(b"2,d\n2, 1\n"))
    assert list(iterate_edges(g)) == [(2, 1)]


def test_read_header_only():
    g = read_simple(io.StringIO("5,u\n"))
    assert vertex_count(g) == 5
    assert list(iterate_edges(g)) == []


@pytest.mark.parametrize(
    "header",
    ["3", "3,d,x", "three,d", "-1,u", "3.5,d", ""],
)
def test_malformed_header(header):
    with pytest.raises(MalformedHeader):
        parse_header(header)


def test_empty_input_has_no_header():
    with pytest.raises(MalformedHeader, match="empty"):
        read_simple(io.StringIO("\n\n"))


def test_malformed_header_reports_line():
    with pytest.raises(MalformedHeader, match="Line 2"):
        read_simple(io.StringIO("\nfoo\n1, 2\n"))


@pytest.mark.parametrize("line", ["1", "1,2,3", "a, 2", "1, b"])
def test_malformed_edge(line):
    with pytest.raises(MalformedEdge, match="Line 2"):
        read_simple(io.StringIO(f"3,d\n{line}\n"))


def test_out_of_bounds_edge_is_rejected():
    with pytest.raises(EdgeOutOfBounds, match="Line 3"):
        read_simple(io.StringIO("3,d\n1, 2\n5, 2\n"))


def test_out_of_bounds_edge_is_rejected_without_strict_check():
    # The graph facade rejects the edge even when the reader skips its check
    with pytest.raises(EdgeOutOfBounds):
        read_simple(io.StringIO("3,d\n5, 2\n"), strict=False)


def test_out_of_bounds_zero_index():
    with pytest.raises(EdgeOutOfBounds):
        read_simple(io.StringIO("3,u\n0, 1\n"))


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        read_simple(io.StringIO("x,d\n"))


def test_write_format_is_exact():
    g = build_graph(3, True, [(1, 2), (2, 3)])
    out = io.StringIO()
    assert write_simple(g, out) == (3, 2)
    assert out.getvalue() == "3,d\n1, 2\n2, 3\n"


def test_write_undirected():
    g = build_graph(3, False, [(3, 1)])
    out = io.StringIO()
    assert write_simple(g, out) == (3, 1)
    assert out.getvalue() == "3,u\n1, 3\n"


def test_write_defaults_to_stdout(capsys):
    g = build_graph(2, True, [(2, 1)])
    assert write_simple(g) == (2, 1)
    assert capsys.readouterr().out == "2,d\n2, 1\n"


@pytest.mark.parametrize("directed", [True, False])
def test_stream_roundtrip(directed):
    edges = [(1, 2), (2, 3), (3, 1), (4, 4), (5, 1)]
    g = build_graph(6, directed, edges)

    buf = io.StringIO()
    write_simple(g, buf)
    buf.seek(0)
    g2 = read_simple(buf)

    assert vertex_count(g2) == vertex_count(g)
    assert is_directed(g2) == is_directed(g)
    assert edge_multiset(g2) == edge_multiset(g)


def test_save_compressed_by_default(tmp_path):
    g = build_graph(3, True, [(1, 2), (2, 3)])
    path = tmp_path / "graph.sg"

    assert save_simple(g, path) == (3, 2)
    assert path.read_bytes()[:2] == b"\x1f\x8b"
    with gzip.open(path, "rt") as fh:
        assert fh.read() == "3,d\n1, 2\n2, 3\n"

    g2 = load_simple(path)
    assert edge_multiset(g2) == edge_multiset(g)
    assert is_directed(g2)


def test_save_uncompressed(tmp_path):
    g = build_graph(3, False, [(1, 2), (2, 3)])
    path = tmp_path / "graph.sg"

    assert save_simple(g, path, compress=False) == (3, 2)
    assert path.read_text() == "3,u\n1, 2\n2, 3\n"

    g2 = load_simple(path)
    assert vertex_count(g2) == 3
    assert not is_directed(g2)
    assert edge_multiset(g2) == edge_multiset(g)


def test_load_reports_format_errors(tmp_path):
    path = tmp_path / "bad.sg"
    path.write_text("3,d\n1, 9\n")
    with pytest.raises(EdgeOutOfBounds):
        load_simple(path)


@pytest.mark.parametrize(
    "graph",
    [
        nx.Graph([("a", "b")]),
        nx.DiGraph([(1, 3)]),
        nx.Graph([(0, 1)]),
    ],
)
def test_write_rejects_vertices_outside_dense_range(graph):
    out = io.StringIO()
    with pytest.raises(GraphFormatError, match="must be the integers"):
        write_simple(graph, out)
    assert out.getvalue() == ""


def test_write_after_vertex_removal_is_rejected(tmp_path):
    g = build_graph(3, False, [(1, 3)])
    g.remove_node(2)
    path = tmp_path / "g.sg"
    with pytest.raises(GraphFormatError):
        save_simple(g, path)
    assert not path.exists()


def test_invalid_utf8_reports_edge_line(tmp_path):
    path = tmp_path / "bad.sg"
    path.write_bytes(b"3,d\n1, 2\n\xff\xfe\n")
    with pytest.raises(MalformedEdge, match="Line 3") as exc_info:
        load_simple(path)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_invalid_utf8_in_compressed_header(tmp_path):
    path = tmp_path / "bad.sg.gz"
    with gzip.open(path, "wb") as fh:
        fh.write(b"\n3\xff,d\n1, 2\n")
    with pytest.raises(MalformedHeader, match="Line 2"):
        load_simple(path)


def test_binary_stream_with_other_encoding():
    # Non-breaking space around the comma is whitespace once decoded
    g = read_simple(io.BytesIO(b"2,d\n1\xa0, 2\n"), encoding="latin-1")
    assert list(iterate_edges(g)) == [(1, 2)]
