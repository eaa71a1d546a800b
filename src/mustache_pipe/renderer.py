"""
mustache_pipe.renderer - Single-File Rendering
==============================================

``render_file`` is the whole transformation as a plain function:

    (file, view, options, partials) -> file | error

It delegates parsing and rendering to chevron and only normalizes inputs
and errors around the call. The stage in ``mustache_pipe.stage`` wraps it
for iterables of files.

Steps
-----
1. Null files are returned untouched.
2. Stream contents are rejected.
3. Contents are decoded as UTF-8 and scanned for partials.
4. chevron renders the template with the view, partials and delimiters.
5. Contents and extension of the file are replaced in place.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import chevron

from mustache_pipe.errors import MustachePipeError, RenderError, StreamingNotSupportedError
from mustache_pipe.models import RenderOptions, SourceFile
from mustache_pipe.partials import resolve_partials


logger = logging.getLogger(__name__)


def render_template(
    template: str,
    view: Mapping[str, Any],
    partials: Mapping[str, str],
    options: RenderOptions,
) -> str:
    """
    Render ``template`` with chevron.

    ``partials`` must already hold every partial the template uses; see
    ``resolve_partials``.
    """
    opening, closing = options.tags
    try:
        return chevron.render(
            template=template,
            data=view,
            partials_dict=dict(partials),
            def_ldel=opening,
            def_rdel=closing,
            warn=options.warn,
        )
    except Exception as e:
        raise RenderError(str(e) or type(e).__name__) from e


def render_file(
    file: SourceFile,
    view: Mapping[str, Any],
    options: RenderOptions | None = None,
    partials: Mapping[str, str] | None = None,
) -> SourceFile:
    """
    Render a file's contents as a Mustache template.

    Parameters
    ----------
    file : SourceFile
        File to render. Modified in place on success.

    view : Mapping[str, Any]
        Data context for the template.

    options : RenderOptions | None
        Extension, delimiters and engine options. Defaults apply when None.

    partials : Mapping[str, str] | None
        Named partial templates. Partials not listed here are loaded from
        the file's directory.

    Returns
    -------
    SourceFile
        The same file object, with rendered contents and new extension.

    Raises
    ------
    StreamingNotSupportedError
        If the file contents is a stream.
    RenderError
        If the contents is not UTF-8, the template is invalid, or a
        partial cannot be loaded.
    """
    options = options or RenderOptions()

    if file.is_null():
        logger.debug("Passing through null file %s", file.path)
        return file

    if file.is_stream():
        raise StreamingNotSupportedError(file.path)

    try:
        try:
            template = file.contents.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RenderError(f"{file.path} is not valid UTF-8: {e}") from e

        resolved_partials = resolve_partials(
            template,
            template_dir=file.dirname,
            tags=options.tags,
            partials=partials,
            partials_ext=options.partials_ext,
        )
        rendered = render_template(template, view, resolved_partials, options)
    except MustachePipeError as e:
        e.file_path = file.path
        raise

    logger.debug("Rendered %s", file.path)
    file.contents = rendered.encode("utf-8")
    file.replace_extension(options.extension)
    return file
