"""Tests for locating JetBrains projects by name.

Verifies:
    - ``<root>/<name>/.idea`` is found directly.
    - The bounded search finds nested projects up to three levels deep,
      case-insensitively.
    - Hidden and build/dependency directories are not entered.
    - The earlier root wins when several contain the project.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from idefiles.evidence.project_locator import ProjectLocator, default_project_roots


def _project(path: Path) -> Path:
    (path / ".idea").mkdir(parents=True)
    return path


class TestExactMatch:
    """Direct ``<root>/<name>`` lookups."""

    def test_direct_child(self, tmp_path: Path) -> None:
        project = _project(tmp_path / "myapp")
        assert ProjectLocator([tmp_path]).locate("myapp") == str(project)

    def test_directory_without_idea_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "myapp").mkdir()
        assert ProjectLocator([tmp_path]).locate("myapp") is None

    def test_earlier_root_wins(self, tmp_path: Path) -> None:
        first = _project(tmp_path / "a" / "myapp")
        _project(tmp_path / "b" / "myapp")
        locator = ProjectLocator([tmp_path / "a", tmp_path / "b"])
        assert locator.locate("myapp") == str(first)

    @pytest.mark.parametrize("name", ["", "group/myapp"])
    def test_invalid_names(self, tmp_path: Path, name: str) -> None:
        assert ProjectLocator([tmp_path]).locate(name) is None


class TestBoundedSearch:
    """Recursive search under each root."""

    def test_nested_within_depth(self, tmp_path: Path) -> None:
        project = _project(tmp_path / "work" / "myapp")
        assert ProjectLocator([tmp_path]).locate("myapp") == str(project)

    def test_too_deep(self, tmp_path: Path) -> None:
        _project(tmp_path / "a" / "b" / "myapp")
        assert ProjectLocator([tmp_path]).locate("myapp") is None

    def test_case_insensitive(self, tmp_path: Path) -> None:
        project = _project(tmp_path / "work" / "MyApp")
        assert ProjectLocator([tmp_path]).locate("myapp") == str(project)

    @pytest.mark.parametrize("skipped", ["node_modules", "build", ".cache"])
    def test_skipped_directories(self, tmp_path: Path, skipped: str) -> None:
        _project(tmp_path / skipped / "myapp")
        assert ProjectLocator([tmp_path]).locate("myapp") is None

    def test_missing_root(self, tmp_path: Path) -> None:
        assert ProjectLocator([tmp_path / "nope"]).locate("myapp") is None


class TestDefaultRoots:
    """Built-in search roots."""

    def test_home_is_last(self, tmp_path: Path) -> None:
        roots = default_project_roots(tmp_path)
        assert roots[0] == tmp_path / "codes"
        assert roots[-1] == tmp_path
        assert tmp_path / "Dropbox" / "dev" in roots
