"""Reader and writer for the simple edge-list graph format.

The format is a one-line header followed by one edge per line::

    <vertex_count>,<d|u>
    <src>, <dst>
    <src>, <dst>
    ...

``d`` marks a directed graph; any other flag (canonically ``u``) means
undirected. Vertices are the integers ``1..vertex_count`` so no remapping is
involved. Whitespace around the comma is accepted on read; the writer always
emits ``"<src>, <dst>"``. Files may be gzip-compressed.
"""

from __future__ import annotations

import io
import re
import sys
from pathlib import Path
from typing import IO, Optional, Tuple, Type, Union

from graphpersist.compression import open_read, open_write
from graphpersist.config import PERSISTENCE_CONFIG
from graphpersist.errors import (
    EdgeOutOfBounds,
    GraphFormatError,
    IOFailure,
    MalformedEdge,
    MalformedHeader,
)
from graphpersist.graph.facade import (
    SimpleGraph,
    add_edge,
    check_vertex_range,
    edge_count,
    is_directed,
    iterate_edges,
    new_graph,
    vertex_count,
)
from graphpersist.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

_FIELD_SEPARATOR = re.compile(r"\s*,\s*")

DIRECTED_FLAG = "d"
UNDIRECTED_FLAG = "u"


def _decode_line(
    line: Union[str, bytes], lineno: int, encoding: str, error: Type[GraphFormatError]
) -> str:
    """Decode a line read from a binary stream; text lines pass through."""
    if isinstance(line, str):
        return line
    try:
        return line.decode(encoding)
    except UnicodeDecodeError as e:
        raise error(f"Line {lineno}: cannot decode as {encoding}: {e.reason}.") from e


def parse_header(line: str, lineno: int = 1) -> Tuple[int, bool]:
    """Parse a header line into ``(vertex_count, directed)``.

    Raises:
        MalformedHeader: If the line is not two comma-separated fields or the
            count is not a non-negative integer.
    """
    fields = _FIELD_SEPARATOR.split(line.strip())
    if len(fields) != 2:
        raise MalformedHeader(
            f"Line {lineno}: expected header '<vertex_count>,<d|u>', got {line.strip()!r}."
        )
    count_str, flag = fields
    try:
        count = int(count_str)
    except ValueError:
        raise MalformedHeader(
            f"Line {lineno}: vertex count {count_str!r} is not an integer."
        ) from None
    if count < 0:
        raise MalformedHeader(f"Line {lineno}: vertex count {count} is negative.")
    return count, flag == DIRECTED_FLAG


def parse_edge(line: str, lineno: int) -> Tuple[int, int]:
    """Parse an edge line into ``(src, dst)``.

    Raises:
        MalformedEdge: If the line is not two comma-separated integers.
    """
    fields = _FIELD_SEPARATOR.split(line.strip())
    if len(fields) != 2:
        raise MalformedEdge(
            f"Line {lineno}: expected edge '<src>, <dst>', got {line.strip()!r}."
        )
    try:
        return int(fields[0]), int(fields[1])
    except ValueError:
        raise MalformedEdge(
            f"Line {lineno}: edge endpoints must be integers, got {line.strip()!r}."
        ) from None


def read_simple(
    stream: IO, strict: Optional[bool] = None, encoding: Optional[str] = None
) -> SimpleGraph:
    """Read a graph in the simple format from an open stream.

    Args:
        stream: Text or binary stream positioned at the header. Lines of a
            binary stream are decoded one at a time, so decoding errors
            report their line.
        strict: Check edge endpoints against the vertex count while reading,
            reporting the offending line. Defaults to
            ``PERSISTENCE_CONFIG.strict_bounds``. With ``strict=False`` the
            graph facade still rejects out-of-range endpoints.
        encoding: Used to decode binary streams.

    Returns:
        A ``networkx.Graph`` or ``networkx.DiGraph`` over vertices ``1..N``.

    Raises:
        MalformedHeader: Missing, invalid or undecodable header.
        MalformedEdge: Edge line that is not two integers or cannot be decoded.
        EdgeOutOfBounds: Endpoint outside ``[1, N]``.
    """
    strict = PERSISTENCE_CONFIG.strict_bounds if strict is None else strict
    encoding = encoding or PERSISTENCE_CONFIG.encoding

    graph: Optional[SimpleGraph] = None
    n = 0
    for lineno, raw in enumerate(stream, start=1):
        line = _decode_line(
            raw, lineno, encoding, MalformedHeader if graph is None else MalformedEdge
        )
        if not line.strip():
            continue
        if graph is None:
            n, directed = parse_header(line, lineno)
            graph = new_graph(n, directed)
            continue

        src, dst = parse_edge(line, lineno)
        if strict and not (1 <= src <= n and 1 <= dst <= n):
            raise EdgeOutOfBounds(
                f"Line {lineno}: edge ({src}, {dst}) is outside [1, {n}]."
            )
        add_edge(graph, src, dst)

    if graph is None:
        raise MalformedHeader("Missing header line: input is empty.")

    logger.debug(
        "Read simple graph: %d vertices, %d edges, directed=%s",
        vertex_count(graph),
        edge_count(graph),
        is_directed(graph),
    )
    return graph


def load_simple(
    path: PathLike, strict: Optional[bool] = None, encoding: Optional[str] = None
) -> SimpleGraph:
    """Read a simple-format graph from `path`, compressed or not.

    Raises:
        IOFailure: If the file cannot be opened, read or decompressed.
    """
    with open_read(path) as fh:
        try:
            return read_simple(fh, strict=strict, encoding=encoding)
        except (OSError, EOFError) as e:
            raise IOFailure(f"Cannot read '{path}': {e}") from e


def write_simple(graph: SimpleGraph, stream: Optional[IO] = None) -> Tuple[int, int]:
    """Write `graph` to `stream` in the simple format.

    Args:
        graph: Graph over vertices ``1..N``.
        stream: Text stream; defaults to ``sys.stdout``.

    Returns:
        ``(vertex_count, edge_count)`` written.

    Raises:
        GraphFormatError: If the vertices of `graph` are not ``1..N``; nothing
            is written in that case.
    """
    if stream is None:
        stream = sys.stdout

    check_vertex_range(graph)
    n = vertex_count(graph)
    flag = DIRECTED_FLAG if is_directed(graph) else UNDIRECTED_FLAG
    stream.write(f"{n},{flag}\n")

    written = 0
    for src, dst in iterate_edges(graph):
        stream.write(f"{src}, {dst}\n")
        written += 1

    logger.debug("Wrote simple graph: %d vertices, %d edges", n, written)
    return n, written


def save_simple(
    graph: SimpleGraph,
    path: PathLike,
    compress: Optional[bool] = None,
    encoding: Optional[str] = None,
) -> Tuple[int, int]:
    """Write `graph` to the file at `path`, gzip-compressed by default.

    Args:
        graph: Graph to write.
        path: Destination file.
        compress: Defaults to ``PERSISTENCE_CONFIG.compress``.
        encoding: Defaults to ``PERSISTENCE_CONFIG.encoding``.

    Returns:
        ``(vertex_count, edge_count)`` written.

    Raises:
        GraphFormatError: If the vertices of `graph` are not ``1..N``; the
            file is not created in that case.
        IOFailure: If the file cannot be created or written.
    """
    check_vertex_range(graph)
    encoding = encoding or PERSISTENCE_CONFIG.encoding
    with open_write(path, compress=compress) as fh:
        text = io.TextIOWrapper(fh, encoding=encoding, newline="\n")
        try:
            result = write_simple(graph, text)
            text.flush()
        except OSError as e:
            raise IOFailure(f"Cannot write '{path}': {e}") from e
        finally:
            # Leave closing the underlying file to the context manager
            text.detach()
    return result
