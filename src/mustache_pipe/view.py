"""
mustache_pipe.view - View Resolution
====================================

A view is either handed to the stage as a mapping or named by the path
of a JSON file. The file is read once, when the stage is built, and a
failure is kept rather than raised so the stage can report it against
every file it is asked to render.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mustache_pipe.errors import ViewLoadError


logger = logging.getLogger(__name__)

ViewSource = Mapping[str, Any] | str | os.PathLike[str]


@dataclass(frozen=True)
class ResolvedView:
    """Outcome of resolving a view: the data, or the error to report."""

    data: Mapping[str, Any]
    error: ViewLoadError | None = None

    def require(self, file_path: Path | None = None) -> Mapping[str, Any]:
        """Return the view data, raising the captured error if there is one."""
        if self.error is not None:
            raise ViewLoadError(self.error.message, file_path)
        return self.data


def load_view_file(path: Path | str) -> dict[str, Any]:
    """
    Read and parse a JSON view file.

    Parameters
    ----------
    path : Path | str
        JSON file path, relative paths resolve against the working directory.

    Returns
    -------
    dict[str, Any]
        The parsed JSON object.

    Raises
    ------
    ViewLoadError
        If the file cannot be read, is not valid JSON, or does not hold
        an object at the top level.
    """
    path = Path(path)
    logger.debug("Loading view from %s", path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ViewLoadError(str(e)) from e

    if not isinstance(data, dict):
        msg = f"View file {path} must contain a JSON object, got {type(data).__name__}"
        raise ViewLoadError(msg)

    return data


def resolve_view(view: ViewSource | None) -> ResolvedView:
    """Resolve inline or on-disk view data without raising."""
    if view is None:
        return ResolvedView(data={})

    if isinstance(view, (str, os.PathLike)):
        try:
            return ResolvedView(data=load_view_file(view))
        except ViewLoadError as e:
            logger.warning("Could not load view %s: %s", view, e)
            return ResolvedView(data={}, error=e)

    if not isinstance(view, Mapping):
        msg = f"View must be a mapping or a JSON file path, got {type(view).__name__}"
        raise TypeError(msg)

    return ResolvedView(data=view)
