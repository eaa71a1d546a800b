"""
Tests for mustache_pipe.view
============================

Test Organization
-----------------
- TestLoadViewFile: Reading JSON view files
- TestResolveView: Inline and deferred-error view resolution
"""

from pathlib import Path

import pytest

from mustache_pipe.errors import ViewLoadError
from mustache_pipe.view import load_view_file, resolve_view


class TestLoadViewFile:
    """Tests for load_view_file."""

    def test_loads_object(self, fixtures_dir: Path) -> None:
        assert load_view_file(fixtures_dir / "ok.json") == {"title": "mustache-pipe"}

    def test_malformed_json(self, fixtures_dir: Path) -> None:
        with pytest.raises(ViewLoadError):
            load_view_file(fixtures_dir / "nok.json")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ViewLoadError):
            load_view_file(tmp_path / "missing.json")

    def test_non_object_rejected(self, tmp_path: Path) -> None:
        view_file = tmp_path / "list.json"
        view_file.write_text("[1, 2, 3]")

        with pytest.raises(ViewLoadError, match="must contain a JSON object"):
            load_view_file(view_file)

    def test_relative_to_working_directory(
        self, fixtures_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(fixtures_dir)
        assert load_view_file("ok.json")["title"] == "mustache-pipe"


class TestResolveView:
    """Tests for resolve_view."""

    def test_inline_mapping(self) -> None:
        resolved = resolve_view({"a": 1})

        assert resolved.data == {"a": 1}
        assert resolved.error is None

    def test_none_is_empty_view(self) -> None:
        assert resolve_view(None).data == {}

    def test_error_is_captured(self, fixtures_dir: Path) -> None:
        resolved = resolve_view(str(fixtures_dir / "nok.json"))

        assert isinstance(resolved.error, ViewLoadError)
        with pytest.raises(ViewLoadError):
            resolved.require()

    def test_require_attaches_file_path(self, fixtures_dir: Path) -> None:
        resolved = resolve_view(str(fixtures_dir / "nok.json"))

        with pytest.raises(ViewLoadError) as exc_info:
            resolved.require(Path("page.mustache"))
        assert exc_info.value.file_path == Path("page.mustache")

    def test_invalid_type(self) -> None:
        with pytest.raises(TypeError):
            resolve_view(42)
