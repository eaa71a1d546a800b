"""
mustache-pipe - Mustache Rendering for File Pipelines
=====================================================

A small adapter that renders files flowing through a build pipeline with
Mustache templates (via chevron) and forwards them with a new extension.

Quick Start
-----------
>>> from mustache_pipe import SourceFile, mustache
>>> stage = mustache("data.json", {"extension": ".html"})
>>> for file in stage(SourceFile.from_path(p) for p in paths):
...     print(file.path, file.contents)

Architecture
------------
- ``stage``: ``mustache()`` factory and the ``MustacheStage`` transform
- ``renderer``: ``render_file``, the per-file rendering function
- ``partials``: partial discovery and on-disk loading
- ``view``: inline or JSON-file view resolution
- ``models``: ``SourceFile`` and the ``RenderOptions`` Pydantic model
- ``errors``: per-file error types
- ``io``: reading source files and writing rendered ones
- ``cli``: Typer command line interface
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# =============================================================================
# Public API Exports
# =============================================================================

from mustache_pipe.errors import (
    MustachePipeError,
    RenderError,
    StreamingNotSupportedError,
    ViewLoadError,
)
from mustache_pipe.models import RenderOptions, SourceFile
from mustache_pipe.renderer import render_file
from mustache_pipe.stage import MustacheStage, mustache


__all__ = [
    "MustachePipeError",
    "MustacheStage",
    "RenderError",
    "RenderOptions",
    "SourceFile",
    "StreamingNotSupportedError",
    "ViewLoadError",
    "__version__",
    "mustache",
    "render_file",
]
