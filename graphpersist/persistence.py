"""Format dispatch for loading and saving graph files."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple, Union

from graphpersist.formats.gml import load_gml
from graphpersist.formats.graphml import NamedGraph, load_graphml
from graphpersist.formats.simple import load_simple, save_simple
from graphpersist.graph.facade import SimpleGraph

PathLike = Union[str, Path]

SIMPLE = "simple"
GRAPHML = "graphml"
GML = "gml"
FORMATS = (SIMPLE, GRAPHML, GML)


def infer_format(path: PathLike) -> str:
    """Guess the format of `path` from its suffix.

    A trailing ``.gz`` is ignored; ``.graphml`` and ``.gml`` select those
    formats and anything else is treated as the simple format.
    """
    suffixes = [s.lower() for s in Path(path).suffixes]
    if suffixes and suffixes[-1] == ".gz":
        suffixes.pop()
    if suffixes:
        ext = suffixes[-1].lstrip(".")
        if ext in (GRAPHML, GML):
            return ext
    return SIMPLE


def _check_format(fmt: str) -> str:
    fmt = fmt.lower()
    if fmt not in FORMATS:
        raise ValueError(f"Unknown graph format '{fmt}'. Available: {list(FORMATS)}")
    return fmt


def load(
    path: PathLike, fmt: Optional[str] = None
) -> Union[SimpleGraph, List[NamedGraph]]:
    """Load a graph file.

    Args:
        path: File to read; may be gzip-compressed.
        fmt: ``"simple"``, ``"graphml"`` or ``"gml"``; inferred from the
            suffix when omitted.

    Returns:
        A single graph for the simple and GML formats, or the list of
        ``(name, graph)`` pairs for GraphML.
    """
    fmt = infer_format(path) if fmt is None else _check_format(fmt)
    if fmt == GRAPHML:
        return load_graphml(path)
    if fmt == GML:
        return load_gml(path)
    return load_simple(path)


def save(
    graph: SimpleGraph,
    path: PathLike,
    fmt: str = SIMPLE,
    compress: Optional[bool] = None,
) -> Tuple[int, int]:
    """Save `graph` to `path`.

    Only the simple format can be written.

    Returns:
        ``(vertex_count, edge_count)`` written.

    Raises:
        NotImplementedError: For GraphML and GML.
    """
    fmt = _check_format(fmt)
    if fmt != SIMPLE:
        raise NotImplementedError(f"Writing the '{fmt}' format is not supported.")
    return save_simple(graph, path, compress=compress)
