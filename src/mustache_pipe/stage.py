"""
mustache_pipe.stage - Transform Stage
=====================================

The stage wraps ``render_file`` for use inside a pipeline of files. It is
built once with the view, options and partials, then applied to any
iterable of ``SourceFile`` objects:

>>> from mustache_pipe import mustache, SourceFile
>>> stage = mustache({"title": "Hello"}, {"extension": ".txt"})
>>> [f.path.name for f in stage([SourceFile(Path("a.mustache"), b"{{title}}")])]
['a.txt']

Error Handling
--------------
A file that fails is never yielded. Its error goes to the ``on_error``
callback and the next file is processed. Without a callback the error
propagates out of the generator and ends the iteration, like an unhandled
error event on a stream.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from mustache_pipe.errors import MustachePipeError
from mustache_pipe.models import RenderOptions, SourceFile
from mustache_pipe.renderer import render_file
from mustache_pipe.view import ViewSource, resolve_view


logger = logging.getLogger(__name__)

ErrorHandler = Callable[[MustachePipeError, SourceFile], None]


class MustacheStage:
    """
    Render every file passing through with one view and one set of options.

    Parameters
    ----------
    view : Mapping | str | PathLike | None
        Inline view data, or the path of a JSON file holding it. The file
        is read here; a failure is reported for each file transformed.

    options : RenderOptions | Mapping | None
        Stage options. Mappings are validated into ``RenderOptions``.

    partials : Mapping[str, str] | None
        Partial templates by name.
    """

    def __init__(
        self,
        view: ViewSource | None = None,
        options: RenderOptions | Mapping[str, Any] | None = None,
        partials: Mapping[str, str] | None = None,
    ) -> None:
        if options is None:
            options = RenderOptions()
        elif not isinstance(options, RenderOptions):
            options = RenderOptions.model_validate(dict(options))

        self.options = options
        self.partials: dict[str, str] = dict(partials or {})
        self._view = resolve_view(view)

    @property
    def view(self) -> Mapping[str, Any]:
        return self._view.data

    def transform(self, file: SourceFile) -> SourceFile:
        """Render one file, raising on failure."""
        if not file.is_null() and not file.is_stream():
            view = self._view.require(file.path)
        else:
            view = self._view.data
        return render_file(file, view, self.options, self.partials)

    def __call__(
        self,
        files: Iterable[SourceFile],
        on_error: ErrorHandler | None = None,
    ) -> Iterator[SourceFile]:
        for file in files:
            try:
                result = self.transform(file)
            except MustachePipeError as e:
                logger.warning("Failed to render %s: %s", file.path, e)
                if on_error is None:
                    raise
                on_error(e, file)
                continue
            yield result


def mustache(
    view: ViewSource | None = None,
    options: RenderOptions | Mapping[str, Any] | None = None,
    partials: Mapping[str, str] | None = None,
) -> MustacheStage:
    """Build a transform stage; see ``MustacheStage``."""
    return MustacheStage(view, options, partials)
