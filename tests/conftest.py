"""
pytest configuration and shared fixtures for mustache-pipe tests.

Fixtures
--------
fixtures_dir : Path
    Directory holding the template and view fixtures.

expected_dir : Path
    Directory holding the expected (golden) renderings.

make_fixture_file : Callable[[str], SourceFile]
    Build a ``SourceFile`` from a fixture, with ``fixtures_dir`` as base.

read_expected : Callable[[str], str]
    Read an expected rendering as text.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from mustache_pipe.models import SourceFile


TESTS_DIR = Path(__file__).parent


@pytest.fixture
def fixtures_dir() -> Path:
    return TESTS_DIR / "fixtures"


@pytest.fixture
def expected_dir() -> Path:
    return TESTS_DIR / "expected"


@pytest.fixture
def make_fixture_file(fixtures_dir: Path) -> Callable[[str], SourceFile]:
    """
    Factory for source files read from the fixtures directory.

    Returns
    -------
    Callable[[str], SourceFile]
        Takes a fixture file name and returns a fresh buffered file.
    """
    def _make(name: str) -> SourceFile:
        return SourceFile.from_path(fixtures_dir / name, base=fixtures_dir)

    return _make


@pytest.fixture
def read_expected(expected_dir: Path) -> Callable[[str], str]:
    def _read(name: str) -> str:
        return (expected_dir / name).read_text(encoding="utf-8")

    return _read

