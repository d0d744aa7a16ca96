"""Shared fixtures for CLI tests.

Every CLI test runs against an empty configuration file so the developer's
own ``~/.config/idefiles/config.yaml`` never leaks in, and against a
registry whose process source is replaced by a static one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner

from idefiles.config import CONFIG_ENV_VAR
from idefiles.registry import StrategyRegistry, build_strategies


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``$IDEFILES_CONFIG`` at an empty configuration file."""
    path = tmp_path / "idefiles.yaml"
    path.write_text("project_roots: []\nsession_storage_dirs: []\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    return path


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def use_processes(monkeypatch: pytest.MonkeyPatch, process_source: Callable[..., object]) -> Callable[..., None]:
    """Serve the given processes to every CLI command."""

    def _install(*processes, error: Exception | None = None) -> None:
        source = process_source(*processes, error=error)

        def _registry(config=None, process_source=None):
            return StrategyRegistry(build_strategies(config), source)

        monkeypatch.setattr("idefiles.cli.detect_cmd.default_registry", _registry)
        monkeypatch.setattr("idefiles.cli.processes_cmd.default_registry", _registry)

    return _install
