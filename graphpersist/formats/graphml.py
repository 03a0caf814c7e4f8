"""GraphML reader.

Only the topology is read: ``<node id=...>`` and
``<edge source=... target=...>`` inside each ``<graph>`` element. Node ids are
remapped to vertices ``1..N`` in declaration order. A document may hold several
graphs; all are returned, in document order, paired with their ``id``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import IO, List, Optional, Tuple, Union

from graphpersist.compression import open_read
from graphpersist.errors import (
    IOFailure,
    MalformedGraphML,
    NotGraphML,
    UnknownEdgeDefault,
    UnknownGraphMLElement,
)
from graphpersist.graph.facade import SimpleGraph, add_edge, new_graph
from graphpersist.logging import get_logger
from graphpersist.remap import IdentifierRemapper

logger = get_logger(__name__)

PathLike = Union[str, Path]
NamedGraph = Tuple[Optional[str], SimpleGraph]

EDGEDEFAULTS = {"directed": True, "undirected": False}

# Top-level GraphML elements that carry no topology and are skipped quietly
DOCUMENT_ELEMENTS = frozenset({"key", "desc", "data"})


def local_name(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix from `tag`."""
    return tag.rsplit("}", 1)[-1]


def _required_attr(element: ET.Element, attr: str) -> str:
    value = element.get(attr)
    if value is None:
        raise MalformedGraphML(
            f"<{local_name(element.tag)}> element is missing the '{attr}' attribute."
        )
    return value


def _process_graph(element: ET.Element, directed: bool) -> SimpleGraph:
    """Build a graph from the ``node`` and ``edge`` children of `element`."""
    nodes: IdentifierRemapper[str] = IdentifierRemapper()
    edges: List[Tuple[int, int]] = []

    for child in element:
        if not isinstance(child.tag, str):
            # Comments and processing instructions
            continue
        name = local_name(child.tag)
        if name == "node":
            nodes.declare(_required_attr(child, "id"))
        elif name == "edge":
            src = nodes.lookup(_required_attr(child, "source"))
            dst = nodes.lookup(_required_attr(child, "target"))
            edges.append((src, dst))
        else:
            raise UnknownGraphMLElement(f"Unknown element <{name}> inside <graph>.")

    graph = new_graph(len(nodes), directed)
    for src, dst in edges:
        add_edge(graph, src, dst)
    return graph


def read_graphml(source: Union[PathLike, IO]) -> List[NamedGraph]:
    """Read every graph in a GraphML document.

    Args:
        source: File path (a ``str`` is always a path, as in `read_gml`)
            or binary/text file object.

    Returns:
        ``[(name, graph), ...]`` in document order; ``name`` is the graph's
        ``id`` attribute or None. Empty if the document has no graphs.

    Raises:
        MalformedGraphML: Not well-formed XML or a required attribute is missing.
        NotGraphML: Root element is not ``graphml``.
        UnknownEdgeDefault: ``edgedefault`` is not directed/undirected.
        UnknownGraphMLElement: A ``graph`` contains something besides nodes and edges.
        DuplicateAssignment: A node id is declared twice in one graph.
        UnknownNodeReference: An edge references an undeclared node.
    """
    try:
        root = ET.parse(source).getroot()
    except ET.ParseError as e:
        raise MalformedGraphML(f"Cannot parse GraphML document: {e}") from e
    except (OSError, EOFError) as e:
        raise IOFailure(f"Cannot read GraphML document: {e}") from e

    if local_name(root.tag) != "graphml":
        raise NotGraphML(
            f"Root element is <{local_name(root.tag)}>, expected <graphml>."
        )

    graphs: List[NamedGraph] = []
    for child in root:
        if not isinstance(child.tag, str):
            continue
        name = local_name(child.tag)
        if name == "graph":
            edgedefault = child.get("edgedefault")
            if edgedefault not in EDGEDEFAULTS:
                raise UnknownEdgeDefault(
                    f"Unknown value of edgedefault: {edgedefault!r}."
                )
            graph_name = child.get("id")
            graph = _process_graph(child, EDGEDEFAULTS[edgedefault])
            logger.debug(
                "Read GraphML graph %r: %d vertices, %d edges",
                graph_name,
                graph.number_of_nodes(),
                graph.number_of_edges(),
            )
            graphs.append((graph_name, graph))
        elif name not in DOCUMENT_ELEMENTS:
            logger.warning("Skipping unknown XML element %s", name)

    return graphs


def load_graphml(path: PathLike) -> List[NamedGraph]:
    """Read a GraphML file, compressed or not.

    Raises:
        IOFailure: If the file cannot be opened, read or decompressed.
    """
    with open_read(path) as fh:
        return read_graphml(fh)
