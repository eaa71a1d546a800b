"""
mustache_pipe.models - File and Option Models
=============================================

This module defines the data passed through the transform stage:

- ``SourceFile``: a vinyl-style file object (path, base, cwd, contents)
  that the stage mutates in place.
- ``RenderOptions``: Pydantic model for the stage configuration. Using
  Pydantic gives us validation of the delimiter pair and normalization
  of the output extension at construction time.

Usage Example
-------------
>>> from mustache_pipe.models import RenderOptions, SourceFile
>>> options = RenderOptions(extension="txt", tags=["[[", "]]"])
>>> options.extension
'.txt'
>>> f = SourceFile(path=Path("site/index.mustache"), contents=b"[[title]]")
>>> f.relative
PosixPath('index.mustache')
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_EXTENSION = ".html"
DEFAULT_TAGS: tuple[str, str] = ("{{", "}}")
DEFAULT_PARTIALS_EXT = "mustache"


# =============================================================================
# File Model
# =============================================================================


@dataclass
class SourceFile:
    """
    A file travelling through the pipeline.

    The stage owns the file only while transforming it: contents and the
    path extension are replaced in place and the same object is forwarded.

    Attributes
    ----------
    path : Path
        Full path of the file.

    contents : bytes | BinaryIO | None
        File contents. ``None`` marks a null file (e.g. a directory entry)
        which is passed through untouched.

    base : Path | None
        Base directory used to compute ``relative``. Defaults to the
        directory of ``path``.

    cwd : Path
        Working directory the file was read from.
    """

    path: Path
    contents: bytes | BinaryIO | None = None
    base: Path | None = None
    cwd: Path = field(default_factory=Path.cwd)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.cwd = Path(self.cwd)
        self.base = Path(self.base) if self.base is not None else self.path.parent

    @classmethod
    def from_path(
        cls,
        path: Path | str,
        base: Path | str | None = None,
        cwd: Path | str | None = None,
    ) -> SourceFile:
        """Read ``path`` from disk into a buffered file."""
        path = Path(path)
        return cls(
            path=path,
            contents=path.read_bytes(),
            base=Path(base) if base is not None else None,
            cwd=Path(cwd) if cwd is not None else Path.cwd(),
        )

    # -------------------------------------------------------------------------
    # Predicates
    # -------------------------------------------------------------------------

    def is_null(self) -> bool:
        """True when there is nothing to render."""
        return self.contents is None or (
            isinstance(self.contents, bytes) and len(self.contents) == 0
        )

    def is_stream(self) -> bool:
        return not self.is_null() and not isinstance(self.contents, bytes)

    # -------------------------------------------------------------------------
    # Path Helpers
    # -------------------------------------------------------------------------

    @property
    def relative(self) -> Path:
        return self.path.relative_to(self.base)

    @property
    def dirname(self) -> Path:
        return self.path.parent

    @property
    def basename(self) -> str:
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def extname(self) -> str:
        return self.path.suffix

    def replace_extension(self, extension: str) -> None:
        """
        Swap the last suffix of ``path`` for ``extension``.

        An empty ``extension`` strips the suffix.
        """
        self.path = self.path.with_suffix(extension)


# =============================================================================
# Options Model
# =============================================================================


class RenderOptions(BaseModel):
    """
    Configuration for the transform stage.

    Attributes
    ----------
    extension : str
        Suffix given to rendered files. A missing leading dot is added;
        an empty string removes the extension.

    tags : tuple[str, str]
        Opening and closing delimiters, ``("{{", "}}")`` by default.

    partials_ext : str
        Extension appended to partial names when loading them from disk.

    warn : bool
        Have the engine report every key missing from the view on stderr.

    Unknown keys are accepted and ignored.

    Examples
    --------
    >>> RenderOptions().tags
    ('{{', '}}')
    >>> RenderOptions(tags=["{{m", "m}}"]).tags
    ('{{m', 'm}}')
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    extension: str = Field(
        default=DEFAULT_EXTENSION,
        description="Output file extension",
    )
    tags: tuple[str, str] = Field(
        default=DEFAULT_TAGS,
        description="Opening and closing tag delimiters",
    )
    partials_ext: str = Field(
        default=DEFAULT_PARTIALS_EXT,
        description="Extension of partial templates on disk",
    )
    warn: bool = Field(
        default=False,
        description="Warn on keys missing from the view",
    )

    @field_validator("extension")
    @classmethod
    def normalize_extension(cls, v: str) -> str:
        v = v.strip()
        if v and not v.startswith("."):
            v = f".{v}"
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: tuple[str, str]) -> tuple[str, str]:
        """
        Reject empty delimiters.

        The engine splits the template on these strings, so an empty
        delimiter can never match a tag.
        """
        opening, closing = v
        if not opening or not closing:
            msg = f"Tag delimiters must be non-empty strings, got {list(v)!r}"
            raise ValueError(msg)
        return v

    @field_validator("partials_ext")
    @classmethod
    def strip_partials_ext(cls, v: str) -> str:
        return v.strip().lstrip(".")
