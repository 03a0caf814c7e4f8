"""Transparent gzip handling for graph files.

`open_read` works whether or not the file is compressed; `open_write`
produces gzip output unless told otherwise. Both yield binary file objects
and are used as context managers.
"""

from __future__ import annotations

import gzip
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from graphpersist.config import PERSISTENCE_CONFIG
from graphpersist.errors import IOFailure
from graphpersist.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

GZIP_MAGIC = b"\x1f\x8b"


@contextmanager
def open_read(path: PathLike) -> Iterator[BinaryIO]:
    """Open `path` for binary reading, decompressing gzip content on the fly.

    The file is opened once; its first bytes are peeked to detect gzip, and
    the same handle is wrapped in a ``GzipFile`` when they match. The file is
    closed when the block exits.

    Raises:
        IOFailure: If the file cannot be opened.
    """
    try:
        fh = open(path, "rb")
    except OSError as e:
        raise IOFailure(f"Cannot open '{path}' for reading: {e}") from e

    with fh:
        compressed = fh.peek(len(GZIP_MAGIC))[: len(GZIP_MAGIC)] == GZIP_MAGIC
        logger.debug("Opening %s for reading (gzip=%s)", path, compressed)
        if compressed:
            with gzip.GzipFile(fileobj=fh, mode="rb") as gz:
                yield gz  # type: ignore[misc]
        else:
            yield fh


def open_write(
    path: PathLike, compress: Optional[bool] = None, compresslevel: Optional[int] = None
) -> BinaryIO:
    """Open `path` for binary writing.

    Args:
        path: Destination file.
        compress: Write gzip output; defaults to ``PERSISTENCE_CONFIG.compress``.
        compresslevel: gzip level; defaults to ``PERSISTENCE_CONFIG.compresslevel``.

    Raises:
        IOFailure: If the file cannot be created.
    """
    compress = PERSISTENCE_CONFIG.resolve_compress(compress)
    if compresslevel is None:
        compresslevel = PERSISTENCE_CONFIG.compresslevel
    logger.debug("Opening %s for writing (gzip=%s)", path, compress)
    try:
        if compress:
            return gzip.open(path, "wb", compresslevel=compresslevel)  # type: ignore[return-value]
        return open(path, "wb")
    except OSError as e:
        raise IOFailure(f"Cannot open '{path}' for writing: {e}") from e


def read_bytes(path: PathLike) -> bytes:
    """Read the whole (possibly compressed) file at `path`.

    Raises:
        IOFailure: If the file cannot be read or decompressed.
    """
    with open_read(path) as fh:
        try:
            return fh.read()
        except (OSError, EOFError) as e:
            raise IOFailure(f"Cannot read '{path}': {e}") from e
