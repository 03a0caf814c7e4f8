"""GML reader.

GML text is a list of ``key value`` pairs where a value is an integer, a
real, a quoted string or a bracketed list of further pairs::

    graph [
      directed 1
      node [ id 10 label "a" ]
      node [ id 20 label "b" ]
      edge [ source 10 target 20 ]
    ]

`parse_gml_tree` turns the text into a tree of `GMLNode` objects. `parse_gml`
(text), `read_gml` (path or stream) and `load_gml` (path) then pick the first
``graph`` block, remap the integer node ids to vertices ``1..N`` in node-list
order and build the graph.
"""

from __future__ import annotations

import html
import re
from enum import Enum
from pathlib import Path
from typing import IO, Any, Dict, Iterator, List, NamedTuple, Optional, Union

from graphpersist.compression import read_bytes
from graphpersist.config import PERSISTENCE_CONFIG
from graphpersist.errors import MalformedGML
from graphpersist.graph.facade import SimpleGraph, add_edge, new_graph
from graphpersist.logging import get_logger
from graphpersist.remap import IdentifierRemapper

logger = get_logger(__name__)

PathLike = Union[str, Path]
GMLValue = Union[int, float, str, "GMLNode"]

_MISSING = object()


class TokenKind(Enum):
    KEY = 0
    REAL = 1
    INT = 2
    STRING = 3
    LIST_START = 4
    LIST_END = 5
    SKIP = 6


_PATTERNS = [
    r"[A-Za-z_][0-9A-Za-z_]*\b",
    r"[+-]?(?:[0-9]*\.[0-9]+|[0-9]+\.[0-9]*|INF)(?:[Ee][+-]?[0-9]+)?",
    r"[+-]?[0-9]+",
    r'"[^"]*"',
    r"\[",
    r"\]",
    r"#[^\n]*|\s+",
]
_TOKEN_RE = re.compile("|".join(f"({pattern})" for pattern in _PATTERNS))


class Token(NamedTuple):
    kind: Optional[TokenKind]
    value: Any
    line: int
    column: int


class GMLNode:
    """One bracketed GML block.

    Every key maps to the list of its values in document order, since GML
    repeats keys (``node``, ``edge``) instead of using arrays.
    """

    def __init__(self) -> None:
        self._items: Dict[str, List[GMLValue]] = {}

    def add(self, key: str, value: GMLValue) -> None:
        self._items.setdefault(key, []).append(value)

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def keys(self) -> List[str]:
        return list(self._items)

    def values(self, key: str) -> List[GMLValue]:
        """Return all values stored under `key` (empty if absent)."""
        return list(self._items.get(key, []))

    def first(self, key: str, default: Any = _MISSING) -> Any:
        """Return the first value stored under `key`.

        Raises:
            MalformedGML: If `key` is absent and no default is given.
        """
        values = self._items.get(key)
        if not values:
            if default is _MISSING:
                raise MalformedGML(f"Missing required key '{key}'.")
            return default
        return values[0]

    def get_int(self, key: str, default: Any = _MISSING) -> int:
        """Return the first value under `key`, which must be an integer.

        Raises:
            MalformedGML: If `key` is absent without a default, or not an int.
        """
        if key not in self and default is not _MISSING:
            return default
        value = self.first(key)
        if not isinstance(value, int):
            raise MalformedGML(
                f"Key '{key}' must be an integer, got {type(value).__name__} {value!r}."
            )
        return value

    def get_list(self, key: str) -> List["GMLNode"]:
        """Return every block stored under `key`.

        Raises:
            MalformedGML: If any value under `key` is not a bracketed block.
        """
        blocks = self.values(key)
        for value in blocks:
            if not isinstance(value, GMLNode):
                raise MalformedGML(
                    f"Key '{key}' must be a bracketed block, got {value!r}."
                )
        return blocks  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"GMLNode(keys={self.keys()})"


def tokenize(text: str) -> Iterator[Token]:
    """Yield GML tokens from `text`, followed by an end-of-input token.

    Quoted strings may span lines. Positions are 1-based ``(line, column)``.

    Raises:
        MalformedGML: On characters that start no valid token.
    """
    pos = 0
    line = 1
    line_start = 0
    length = len(text)
    while pos < length:
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            snippet = text[pos:].split("\n", 1)[0]
            raise MalformedGML(
                f"Cannot tokenize {snippet!r} at ({line}, {pos - line_start + 1})."
            )
        kind = TokenKind(match.lastindex - 1)
        group = match.group(match.lastindex)
        if kind is not TokenKind.SKIP:
            if kind is TokenKind.REAL:
                value: Any = float(group)
            elif kind is TokenKind.INT:
                value = int(group)
            elif kind is TokenKind.STRING:
                value = html.unescape(group[1:-1])
            else:
                value = group
            yield Token(kind, value, line, pos - line_start + 1)
        newlines = group.count("\n")
        if newlines:
            line += newlines
            line_start = pos + group.rfind("\n") + 1
        pos = match.end()
    yield Token(None, None, line, pos - line_start + 1)


class _Parser:
    def __init__(self, text: str) -> None:
        self._tokens = tokenize(text)
        self._current = next(self._tokens)

    def _advance(self) -> Token:
        token = self._current
        self._current = next(self._tokens)
        return token

    def _unexpected(self, expected: str) -> MalformedGML:
        token = self._current
        found = "end of input" if token.kind is None else repr(token.value)
        return MalformedGML(
            f"Expected {expected}, found {found} at ({token.line}, {token.column})."
        )

    def parse_document(self) -> GMLNode:
        node = self._parse_pairs()
        if self._current.kind is not None:
            raise self._unexpected("a key or end of input")
        return node

    def _parse_pairs(self) -> GMLNode:
        node = GMLNode()
        while self._current.kind is TokenKind.KEY:
            key = self._advance().value
            kind = self._current.kind
            if kind in (TokenKind.INT, TokenKind.REAL, TokenKind.STRING):
                node.add(key, self._advance().value)
            elif kind is TokenKind.LIST_START:
                self._advance()
                node.add(key, self._parse_pairs())
                if self._current.kind is not TokenKind.LIST_END:
                    raise self._unexpected("']'")
                self._advance()
            else:
                raise self._unexpected(f"a value for key '{key}'")
        return node


def parse_gml_tree(text: str) -> GMLNode:
    """Parse GML `text` into its top-level `GMLNode`.

    Raises:
        MalformedGML: On tokenization errors or unbalanced brackets.
    """
    return _Parser(text).parse_document()


def graph_from_tree(tree: GMLNode) -> SimpleGraph:
    """Build a graph from the first ``graph`` block of a parsed GML document.

    Raises:
        MalformedGML: If the ``graph``/``node``/``edge`` structure is missing
            or a key has an unexpected type.
        UnknownNodeReference: If an edge references an unlisted node id.
    """
    blocks = tree.get_list("graph")
    if not blocks:
        raise MalformedGML("Input contains no 'graph' block.")
    if len(blocks) > 1:
        logger.debug("Ignoring %d graph blocks after the first", len(blocks) - 1)
    block = blocks[0]

    directed = block.get_int("directed", 0) != 0

    nodes: IdentifierRemapper[int] = IdentifierRemapper()
    for node in block.get_list("node"):
        nodes.assign(node.get_int("id"))

    edges = [
        (nodes.lookup(edge.get_int("source")), nodes.lookup(edge.get_int("target")))
        for edge in block.get_list("edge")
    ]

    graph = new_graph(len(nodes), directed)
    for src, dst in edges:
        add_edge(graph, src, dst)

    logger.debug(
        "Read GML graph: %d vertices, %d edges, directed=%s",
        graph.number_of_nodes(),
        graph.number_of_edges(),
        directed,
    )
    return graph


def _decode(data: bytes, encoding: str) -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        line = data.count(b"\n", 0, e.start) + 1
        raise MalformedGML(
            f"Cannot decode as {encoding} at line {line}: {e.reason}."
        ) from e


def parse_gml(text: str) -> SimpleGraph:
    """Read the first graph from a string of GML text."""
    return graph_from_tree(parse_gml_tree(text))


def read_gml(
    source: Union[PathLike, IO], encoding: Optional[str] = None
) -> SimpleGraph:
    """Read the first graph from a GML file or an open stream.

    Like `read_graphml`, a ``str`` or ``Path`` is a file name; use
    `parse_gml` for GML text held in memory.

    Args:
        source: File path, or a text or binary file object.
        encoding: Used for paths and binary streams; defaults to
            ``PERSISTENCE_CONFIG.encoding``.

    Raises:
        MalformedGML: Undecodable input or malformed GML structure.
        UnknownNodeReference: An edge references an unlisted node id.
        IOFailure: If a file cannot be opened, read or decompressed.
    """
    if isinstance(source, (str, Path)):
        return load_gml(source, encoding)
    encoding = encoding or PERSISTENCE_CONFIG.encoding
    try:
        data = source.read()
    except UnicodeDecodeError as e:
        raise MalformedGML(f"Cannot decode as {encoding}: {e.reason}.") from e
    if isinstance(data, bytes):
        data = _decode(data, encoding)
    return parse_gml(data)


def load_gml(path: PathLike, encoding: Optional[str] = None) -> SimpleGraph:
    """Read the first graph from a GML file, compressed or not.

    Raises:
        MalformedGML: Undecodable input or malformed GML structure.
        IOFailure: If the file cannot be opened, read or decompressed.
    """
    encoding = encoding or PERSISTENCE_CONFIG.encoding
    return parse_gml(_decode(read_bytes(path), encoding))
