"""Tests for configuration loading.

Verifies:
    - Defaults apply when no file is configured.
    - Explicit path, ``$IDEFILES_CONFIG`` and the default file are honoured
      in that order.
    - A present key replaces the defaults; ``~`` is expanded.
    - Unusable files raise ``ConfigError``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from idefiles.config import CONFIG_ENV_VAR, DetectorConfig, load_config, parse_config
from idefiles.exceptions import ConfigError


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestDefaults:
    """No configuration file."""

    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(home=tmp_path)
        assert config == DetectorConfig.defaults(tmp_path)
        assert config.source is None

    def test_empty_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.yaml", "")
        config = load_config(path, home=tmp_path)
        assert config.project_roots == DetectorConfig.defaults(tmp_path).project_roots
        assert config.source == path


class TestLookup:
    """Where the file is found."""

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.yaml", "project_roots: [/srv/code]\n")
        assert load_config(path, home=tmp_path).project_roots == (Path("/srv/code").resolve(),)

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write(tmp_path / "env.yaml", "project_roots: [/srv/env]\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_config(home=tmp_path).project_roots == (Path("/srv/env").resolve(),)

    def test_default_file(self, tmp_path: Path) -> None:
        _write(tmp_path / ".config" / "idefiles" / "config.yaml", "project_roots: [/srv/home]\n")
        config = load_config(home=tmp_path)
        assert config.project_roots == (Path("/srv/home").resolve(),)

    def test_explicit_beats_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        explicit = _write(tmp_path / "a.yaml", "project_roots: [/a]\n")
        env = _write(tmp_path / "b.yaml", "project_roots: [/b]\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env))
        assert load_config(explicit, home=tmp_path).project_roots == (Path("/a").resolve(),)


class TestValues:
    """Key handling."""

    def test_tilde_expansion(self, tmp_path: Path) -> None:
        config = parse_config("project_roots: ['~/src', '~']\n", tmp_path / "c.yaml", home=tmp_path)
        assert config.project_roots == ((tmp_path / "src").resolve(), tmp_path.resolve())

    def test_partial_override(self, tmp_path: Path) -> None:
        config = parse_config("session_storage_dirs: [/s]\n", tmp_path / "c.yaml", home=tmp_path)
        assert config.session_storage_dirs == (Path("/s").resolve(),)
        assert config.project_roots == DetectorConfig.defaults(tmp_path).project_roots

    def test_empty_list_disables(self, tmp_path: Path) -> None:
        config = parse_config("project_roots: []\n", tmp_path / "c.yaml", home=tmp_path)
        assert config.project_roots == ()


class TestErrors:
    """Unusable configuration."""

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="cannot read"):
            load_config(tmp_path / "missing.yaml", home=tmp_path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.yaml", "project_roots: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(path, home=tmp_path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "c.yaml", "- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path, home=tmp_path)

    @pytest.mark.parametrize("value", ["/just/one/path", "[1, 2]", "{a: b}"])
    def test_wrong_shape(self, tmp_path: Path, value: str) -> None:
        path = _write(tmp_path / "c.yaml", f"project_roots: {value}\n")
        with pytest.raises(ConfigError, match="list of paths"):
            load_config(path, home=tmp_path)
