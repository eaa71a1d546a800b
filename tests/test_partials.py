"""
Tests for mustache_pipe.partials
================================

Test Organization
-----------------
- TestIterPartialNames: Partial discovery through the tokenizer
- TestPartialPath: On-disk partial location
- TestResolvePartials: Supplied, on-disk, nested and missing partials
"""

from pathlib import Path

import pytest

from mustache_pipe.errors import RenderError
from mustache_pipe.partials import iter_partial_names, partial_path, resolve_partials


DEFAULT_TAGS = ("{{", "}}")


class TestIterPartialNames:
    """Tests for iter_partial_names."""

    def test_finds_partials(self) -> None:
        template = "{{> header}}<p>{{title}}</p>{{>footer}}"
        assert list(iter_partial_names(template, DEFAULT_TAGS)) == ["header", "footer"]

    def test_custom_tags(self) -> None:
        template = "[[> header]] {{> not_a_partial}}"
        assert list(iter_partial_names(template, ("[[", "]]"))) == ["header"]

    def test_set_delimiter_inside_template(self) -> None:
        template = "{{=<% %>=}}<%> header %>"
        assert list(iter_partial_names(template, DEFAULT_TAGS)) == ["header"]

    def test_no_partials(self) -> None:
        assert list(iter_partial_names("plain {{text}}", DEFAULT_TAGS)) == []

    def test_syntax_error(self) -> None:
        with pytest.raises(RenderError):
            list(iter_partial_names("{{#open}} never closed", DEFAULT_TAGS))


class TestPartialPath:
    """Tests for partial_path."""

    def test_appends_extension(self) -> None:
        assert partial_path("header", Path("site"), "mustache") == Path("site/header.mustache")

    def test_keeps_existing_extension(self) -> None:
        assert partial_path("header.hbs", Path("site"), "mustache") == Path("site/header.hbs")


class TestResolvePartials:
    """Tests for resolve_partials."""

    def test_supplied_partials_returned(self, tmp_path: Path) -> None:
        resolved = resolve_partials(
            "{{> a}}", tmp_path, DEFAULT_TAGS, partials={"a": "A", "unused": "U"}
        )
        assert resolved == {"a": "A", "unused": "U"}

    def test_loads_from_disk(self, tmp_path: Path) -> None:
        (tmp_path / "a.mustache").write_text("from disk")

        resolved = resolve_partials("{{> a}}", tmp_path, DEFAULT_TAGS)
        assert resolved == {"a": "from disk"}

    def test_custom_partials_ext(self, tmp_path: Path) -> None:
        (tmp_path / "a.hbs").write_text("hbs")

        resolved = resolve_partials("{{> a}}", tmp_path, DEFAULT_TAGS, partials_ext="hbs")
        assert resolved == {"a": "hbs"}

    def test_nested_relative_to_partial(self, tmp_path: Path) -> None:
        nested_dir = tmp_path / "parts"
        nested_dir.mkdir()
        (nested_dir / "outer.mustache").write_text("[{{> inner}}]")
        (nested_dir / "inner.mustache").write_text("inner")

        resolved = resolve_partials("{{> parts/outer.mustache}}", tmp_path, DEFAULT_TAGS)
        assert resolved == {"parts/outer.mustache": "[{{> inner}}]", "inner": "inner"}

    def test_nested_inside_supplied_partial(self, tmp_path: Path) -> None:
        (tmp_path / "inner.mustache").write_text("inner")

        resolved = resolve_partials(
            "{{> outer}}", tmp_path, DEFAULT_TAGS, partials={"outer": "{{> inner}}"}
        )
        assert resolved["inner"] == "inner"

    def test_recursive_partial_terminates(self, tmp_path: Path) -> None:
        (tmp_path / "tree.mustache").write_text("{{#kids}}{{> tree}}{{/kids}}")

        resolved = resolve_partials("{{> tree}}", tmp_path, DEFAULT_TAGS)
        assert list(resolved) == ["tree"]

    def test_missing_partial(self, tmp_path: Path) -> None:
        with pytest.raises(RenderError) as exc_info:
            resolve_partials("{{> missing}}", tmp_path, DEFAULT_TAGS)

        assert str(exc_info.value).startswith("Unable to load partial")
        assert str(tmp_path / "missing.mustache") in str(exc_info.value)
