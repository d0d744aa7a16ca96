"""Tests for ``idefiles detect``.

Verifies:
    - JSON, plain, paths and table output of a detected editor.
    - ``--active`` reduces output to the active file.
    - Detection failures exit 1 with ``Error: ...``.
    - Unknown editor keys and bad configuration exit 2.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner

from idefiles import __version__
from idefiles.cli.main import cli
from idefiles.exceptions import SystemApiError


@pytest.fixture
def vim_files(tmp_path: Path, make_process: Callable[..., object], use_processes: Callable[..., None]) -> Path:
    """A running vim session editing two files in ``tmp_path/work``."""
    work = tmp_path / "work"
    work.mkdir()
    (work / "a.txt").write_text("")
    (work / "b.txt").write_text("")
    use_processes(make_process("vim", argv=["vim", "a.txt", "b.txt"], cwd=str(work)))
    return work


class TestFormats:
    """Output formats."""

    def test_json_default(self, runner: CliRunner, vim_files: Path) -> None:
        result = runner.invoke(cli, ["detect"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["editor"] == "Vim"
        assert data["active_file"] == str(vim_files / "a.txt")
        assert [f["name"] for f in data["open_files"]] == ["a.txt", "b.txt"]
        assert data["project_path"] is None

    def test_json_active(self, runner: CliRunner, vim_files: Path) -> None:
        result = runner.invoke(cli, ["detect", "--editor", "vim", "--active"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["path"] == str(vim_files / "a.txt")
        assert data["is_active"] is True

    def test_plain(self, runner: CliRunner, vim_files: Path) -> None:
        result = runner.invoke(cli, ["detect", "--format", "plain"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            f"* {vim_files / 'a.txt'}",
            f"  {vim_files / 'b.txt'}",
        ]

    def test_paths_active(self, runner: CliRunner, vim_files: Path) -> None:
        result = runner.invoke(cli, ["detect", "--format", "paths", "--active"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == str(vim_files / "a.txt")

    def test_table(self, runner: CliRunner, vim_files: Path) -> None:
        result = runner.invoke(cli, ["detect", "--format", "table"])
        assert result.exit_code == 0, result.output
        assert "Vim" in result.output
        assert "a.txt" in result.output


class TestFailures:
    """Exit codes."""

    def test_no_editor_running(self, runner: CliRunner, make_process, use_processes) -> None:
        use_processes(make_process("bash"))
        result = runner.invoke(cli, ["detect"])
        assert result.exit_code == 1
        assert "Error: No any supported editor processes found" in result.output

    def test_requested_editor_missing(self, runner: CliRunner, make_process, use_processes) -> None:
        use_processes(make_process("vim"))
        result = runner.invoke(cli, ["detect", "--editor", "goland"])
        assert result.exit_code == 1
        assert "No GoLand processes found" in result.output

    def test_unsupported_editor(self, runner: CliRunner, use_processes) -> None:
        use_processes()
        result = runner.invoke(cli, ["detect", "--editor", "vs"])
        assert result.exit_code == 1
        assert "Unsupported editor: Visual Studio" in result.output

    def test_no_files(self, runner: CliRunner, make_process, use_processes) -> None:
        use_processes(make_process("nano", argv=["nano"]))
        result = runner.invoke(cli, ["detect", "-e", "nano"])
        assert result.exit_code == 1
        assert "No files detected for Nano" in result.output

    def test_process_table_unreadable(self, runner: CliRunner, use_processes) -> None:
        use_processes(error=SystemApiError("denied"))
        result = runner.invoke(cli, ["detect"])
        assert result.exit_code == 1
        assert "System API error" in result.output

    def test_unknown_editor_key(self, runner: CliRunner, use_processes) -> None:
        use_processes()
        result = runner.invoke(cli, ["detect", "--editor", "emacs"])
        assert result.exit_code == 2
        assert "unknown editor" in result.output

    def test_editor_and_auto(self, runner: CliRunner, use_processes) -> None:
        use_processes()
        result = runner.invoke(cli, ["detect", "--editor", "vim", "--auto"])
        assert result.exit_code == 2

    def test_bad_config(self, runner: CliRunner, tmp_path: Path, use_processes) -> None:
        use_processes()
        bad = tmp_path / "bad.yaml"
        bad.write_text("project_roots: 42\n")
        result = runner.invoke(cli, ["--config", str(bad), "detect"])
        assert result.exit_code == 2
        assert "list of paths" in result.output


class TestGroup:
    """Top-level options."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("detect", "editors", "processes"):
            assert command in result.output
