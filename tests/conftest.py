"""Shared fixtures for idefiles tests."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Callable, Sequence

import pytest

from idefiles.evidence.vscode_session import EDITOR_STATE_KEY
from idefiles.models import ProcessSnapshot
from idefiles.processes import ProcessSource


class StaticProcessSource(ProcessSource):
    """Process source serving a fixed process list."""

    def __init__(self, processes: Sequence[ProcessSnapshot], error: Exception | None = None) -> None:
        self.processes = list(processes)
        self.error = error

    def list_processes(self) -> list[ProcessSnapshot]:
        if self.error is not None:
            raise self.error
        return list(self.processes)

    def get_cmdline(self, pid: int) -> list[str] | None:
        for process in self.processes:
            if process.pid == pid:
                return process.cmdline()
        return None

    def get_cwd(self, pid: int) -> str | None:
        for process in self.processes:
            if process.pid == pid:
                return process.cwd()
        return None


@pytest.fixture
def make_process() -> Callable[..., ProcessSnapshot]:
    """Factory for process snapshots with canned command line and cwd."""

    def _make(
        name: str = "goland",
        *,
        pid: int = 100,
        title: str = "",
        exe: str = "",
        argv: list[str] | None = None,
        cwd: str | None = None,
    ) -> ProcessSnapshot:
        return ProcessSnapshot(
            pid=pid,
            process_name=name,
            window_title=title,
            executable_path=exe,
            cmdline_fetcher=lambda _pid: argv,
            cwd_fetcher=lambda _pid: cwd,
        )

    return _make


@pytest.fixture
def process_source() -> Callable[..., StaticProcessSource]:
    """Factory for a static process source."""

    def _make(*processes: ProcessSnapshot, error: Exception | None = None) -> StaticProcessSource:
        return StaticProcessSource(processes, error)

    return _make


@pytest.fixture
def jetbrains_project(tmp_path: Path) -> Path:
    """A JetBrains project ``myapp`` with an empty ``.idea`` directory."""
    project = tmp_path / "projects" / "myapp"
    (project / ".idea").mkdir(parents=True)
    (project / "cmd").mkdir()
    (project / "cmd" / "main.go").write_text("package main\n")
    (project / "go.mod").write_text("module myapp\n")
    (project / "README.md").write_text("# myapp\n")
    return project


def editor_entry(path: str, scheme: str = "file") -> dict:
    """A serialized VS Code editor entry for ``path``."""
    return {
        "id": "workbench.editors.files.fileEditorInput",
        "value": json.dumps({"resourceJSON": {"fsPath": path, "path": path, "scheme": scheme}}),
    }


def editor_group(paths: Sequence[str], mru: Sequence[int] = (0,)) -> dict:
    """A serialized VS Code editor group (grid leaf)."""
    return {
        "type": "leaf",
        "data": {"editors": [editor_entry(p) for p in paths], "mru": list(mru)},
    }


def editor_state(*groups: dict) -> dict:
    """A VS Code editor-part state with ``groups`` side by side."""
    return {
        "editorpart.state": {
            "serializedGrid": {"root": {"type": "branch", "data": list(groups)}},
        },
    }


@pytest.fixture
def vscode_state() -> Callable[..., dict]:
    """Builder for editor-part state documents from ``(paths, mru)`` pairs."""

    def _make(*groups: tuple[Sequence[str], Sequence[int]]) -> dict:
        return editor_state(*(editor_group(paths, mru) for paths, mru in groups))

    return _make


@pytest.fixture
def make_vscode_store() -> Callable[..., Path]:
    """Factory writing a VS Code workspace store with a real ``state.vscdb``."""

    def _make(
        storage_dir: Path,
        name: str,
        folder: str | None,
        state: dict | None = None,
        raw_value: str | bytes | int | None = None,
    ) -> Path:
        store = storage_dir / name
        store.mkdir(parents=True)
        if folder is not None:
            (store / "workspace.json").write_text(json.dumps({"folder": f"file://{folder}"}))
        value = raw_value if raw_value is not None else (json.dumps(state) if state is not None else None)
        if value is not None:
            conn = sqlite3.connect(str(store / "state.vscdb"))
            try:
                conn.execute("CREATE TABLE ItemTable (key TEXT UNIQUE ON CONFLICT REPLACE, value BLOB)")
                conn.execute("INSERT INTO ItemTable (key, value) VALUES (?, ?)", (EDITOR_STATE_KEY, value))
                conn.commit()
            finally:
                conn.close()
        return store

    return _make
