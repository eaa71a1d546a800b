"""File I/O for reading source files and writing rendered ones."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path

from mustache_pipe.models import SourceFile


logger = logging.getLogger(__name__)


def read_sources(
    paths: Iterable[Path], base: Path | None = None
) -> Iterator[SourceFile]:
    """Yield a buffered ``SourceFile`` for each path, lazily."""
    for path in paths:
        logger.debug("Reading %s", path)
        yield SourceFile.from_path(path, base=base)


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """
    Write bytes to a file atomically using a temporary file.

    Parameters
    ----------
    path : Path
        Destination file path. Missing parent directories are created.

    data : bytes
        Content to write.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def write_file(file: SourceFile, dest: Path) -> Path | None:
    """
    Write ``file`` under ``dest`` at its path relative to its base.

    Returns
    -------
    Path | None
        The written path, or None for a null file, which is skipped.
    """
    if file.is_null():
        return None

    output_path = dest / file.relative

    atomic_write_bytes(output_path, file.contents)
    logger.debug("Wrote %s", output_path)
    return output_path
