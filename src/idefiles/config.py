"""User configuration: which directories detection searches.

Configuration is a small YAML file:

.. code-block:: yaml

    project_roots:
      - ~/src
      - ~/work
    session_storage_dirs:
      - ~/.config/Code/User/workspaceStorage

Both keys are optional. A key that is present replaces the built-in
defaults for that setting; a key that is absent keeps them. Paths may
start with ``~``. The caps on how much is read (fallback files, search
depth, recent stores, scanned entries) are fixed and not configurable.

Lookup order:
    1. The path given explicitly (``idefiles --config``).
    2. The path in ``$IDEFILES_CONFIG``.
    3. ``~/.config/idefiles/config.yaml``, if it exists.

A file that is found but unreadable or malformed raises ``ConfigError``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from idefiles.evidence.project_locator import default_project_roots
from idefiles.evidence.vscode_session import default_storage_dirs
from idefiles.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "IDEFILES_CONFIG"
DEFAULT_CONFIG_RELPATH = Path(".config") / "idefiles" / "config.yaml"

_PATH_LIST_KEYS = ("project_roots", "session_storage_dirs")


@dataclass(frozen=True)
class DetectorConfig:
    """Directories searched during detection.

    Attributes:
        project_roots: Roots searched for JetBrains projects by name.
        session_storage_dirs: VS Code ``workspaceStorage`` directories.
        source: The file the configuration was read from, if any.
    """

    project_roots: tuple[Path, ...]
    session_storage_dirs: tuple[Path, ...]
    source: Path | None = None

    @classmethod
    def defaults(cls, home: Path | None = None) -> DetectorConfig:
        return cls(
            project_roots=default_project_roots(home),
            session_storage_dirs=default_storage_dirs(home),
        )


def _expand(raw: str, home: Path | None) -> Path:
    if home is not None and raw == "~":
        return home.resolve()
    if home is not None and raw.startswith("~/"):
        return (home / raw[2:]).resolve()
    return Path(raw).expanduser().resolve()


def _path_list(data: dict[str, Any], key: str, source: Path, home: Path | None) -> tuple[Path, ...] | None:
    if key not in data or data[key] is None:
        return None
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{source}: '{key}' must be a list of paths")
    return tuple(_expand(item, home) for item in value)


def parse_config(text: str, source: Path, home: Path | None = None) -> DetectorConfig:
    """Build a configuration from YAML text.

    Raises:
        ConfigError: If the YAML is malformed or has the wrong shape.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{source}: invalid YAML: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: top level must be a mapping")

    unknown = sorted(str(key) for key in data if key not in _PATH_LIST_KEYS)
    if unknown:
        logger.warning("%s: ignoring unknown keys: %s", source, ", ".join(unknown))

    defaults = DetectorConfig.defaults(home)
    roots = _path_list(data, "project_roots", source, home)
    storage = _path_list(data, "session_storage_dirs", source, home)
    return DetectorConfig(
        project_roots=roots if roots is not None else defaults.project_roots,
        session_storage_dirs=storage if storage is not None else defaults.session_storage_dirs,
        source=source,
    )


def _read(path: Path, home: Path | None) -> DetectorConfig:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    logger.debug("Loaded configuration from %s", path)
    return parse_config(text, path, home)


def load_config(path: str | Path | None = None, home: Path | None = None) -> DetectorConfig:
    """Load the detection configuration.

    Args:
        path: Explicit configuration file. Must exist.
        home: Home directory override (for testing).

    Returns:
        The configuration, or the defaults when no file applies.

    Raises:
        ConfigError: If an explicit or environment-named file is missing,
            or any file found is unreadable or malformed.
    """
    if path is not None:
        return _read(Path(path).expanduser(), home)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return _read(Path(env_path).expanduser(), home)

    home_dir = home if home is not None else Path.home()
    default_path = home_dir / DEFAULT_CONFIG_RELPATH
    if default_path.is_file():
        return _read(default_path, home)
    return DetectorConfig.defaults(home)
