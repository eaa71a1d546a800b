"""
mustache_pipe.partials - Partial Discovery and Loading
======================================================

chevron renders a partial it cannot find as an empty string. To report
missing partials instead, every template is tokenized up front with the
engine's own tokenizer, and each ``partial`` token is resolved before the
render call:

    1. A name in the supplied partials mapping uses the supplied text.
    2. Otherwise ``<template dir>/<name>.<partials_ext>`` is read from disk
       (names that already carry an extension are used as-is).
    3. Partials read from disk are scanned the same way, relative to their
       own directory.

Tokenizing also surfaces template syntax errors before anything renders.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path

from chevron.tokenizer import ChevronError, tokenize

from mustache_pipe.errors import RenderError


logger = logging.getLogger(__name__)


def iter_partial_names(template: str, tags: tuple[str, str]) -> Iterator[str]:
    """
    Yield the name of every partial referenced by ``template``.

    Parameters
    ----------
    template : str
        Template source.

    tags : tuple[str, str]
        Delimiters the template starts out with. Set-delimiter tags inside
        the template are honoured by the tokenizer.

    Raises
    ------
    RenderError
        If the template has a syntax error. The engine's message is kept.
    """
    opening, closing = tags
    try:
        tokens = list(tokenize(template, def_ldel=opening, def_rdel=closing))
    except ChevronError as e:
        raise RenderError(str(e)) from e

    for tag_type, key in tokens:
        if tag_type == "partial":
            yield key


def partial_path(name: str, template_dir: Path, partials_ext: str) -> Path:
    """Location of partial ``name`` for a template living in ``template_dir``."""
    if Path(name).suffix:
        return template_dir / name
    return template_dir / f"{name}.{partials_ext}"


def resolve_partials(
    template: str,
    template_dir: Path,
    tags: tuple[str, str],
    partials: Mapping[str, str] | None = None,
    partials_ext: str = "mustache",
) -> dict[str, str]:
    """
    Collect every partial ``template`` needs, directly or transitively.

    Parameters
    ----------
    template : str
        Template source of the file being rendered.

    template_dir : Path
        Directory of the file being rendered; disk lookups start here.

    tags : tuple[str, str]
        Delimiters used by the template and its partials.

    partials : Mapping[str, str] | None
        Partials supplied by the caller. These take precedence over disk.

    partials_ext : str
        Extension appended to partial names without one.

    Returns
    -------
    dict[str, str]
        Mapping of partial name to template text, ready for ``chevron.render``.

    Raises
    ------
    RenderError
        If a referenced partial is neither supplied nor readable from disk,
        or if any template involved has a syntax error.
    """
    resolved: dict[str, str] = dict(partials or {})
    pending: list[tuple[str, Path]] = [(template, template_dir)]
    scanned: set[str] = set()

    while pending:
        source, source_dir = pending.pop()
        for name in iter_partial_names(source, tags):
            if name in scanned:
                continue
            scanned.add(name)

            if name in resolved:
                pending.append((resolved[name], source_dir))
                continue

            path = partial_path(name, source_dir, partials_ext)
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise RenderError(f"Unable to load partial file: {path}") from e

            logger.debug("Loaded partial %r from %s", name, path)
            resolved[name] = text
            pending.append((text, path.parent))

    return resolved
