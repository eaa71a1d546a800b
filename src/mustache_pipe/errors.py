"""
mustache_pipe.errors - Per-File Error Types
===========================================

Every failure the transform stage reports for a single file is one of the
exceptions below. They are raised from ``render_file`` and routed to the
stage's error handler, so a failing file is dropped while the rest of the
stream keeps flowing.

Hierarchy
---------
    MustachePipeError
    ├── ViewLoadError               - JSON view unreadable or malformed
    ├── RenderError                 - template syntax error, missing partial
    └── StreamingNotSupportedError  - file contents is a stream
"""

from __future__ import annotations

from pathlib import Path


PLUGIN_NAME = "mustache-pipe"


class MustachePipeError(Exception):
    """
    Base class for errors raised while transforming a file.

    Attributes
    ----------
    plugin : str
        Name of the plugin that raised the error.

    file_path : Path | None
        Path of the file being processed, when known.
    """

    def __init__(self, message: str, file_path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.plugin = PLUGIN_NAME
        self.file_path = file_path

    def __str__(self) -> str:
        return self.message


class ViewLoadError(MustachePipeError):
    """The view file could not be read or is not a JSON object."""


class RenderError(MustachePipeError):
    """The template engine failed, or a partial could not be loaded."""


class StreamingNotSupportedError(MustachePipeError):
    """Raised for files whose contents is a stream instead of a buffer."""

    def __init__(self, file_path: Path | None = None) -> None:
        super().__init__("Streaming not supported", file_path)
