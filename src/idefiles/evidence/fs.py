"""Thin filesystem source used by every evidence reader.

Evidence readers inspect directories and files that belong to other
programs: other users' homes, editor caches mid-write, projects on
unmounted drives. Any I/O failure here means "source unavailable" and
never aborts a detection, so each primitive converts ``OSError`` into a
neutral answer (False, None, or an empty list).
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def exists(path: str | Path) -> bool:
    """True when ``path`` exists and can be stat'ed."""
    try:
        return Path(path).exists()
    except OSError:
        return False


def is_dir(path: str | Path) -> bool:
    """True when ``path`` is a readable directory entry."""
    try:
        return Path(path).is_dir()
    except OSError:
        return False


def is_file(path: str | Path) -> bool:
    """True when ``path`` is a regular file."""
    try:
        return Path(path).is_file()
    except OSError:
        return False


def read_text(path: str | Path) -> str | None:
    """Read a text file as UTF-8, or return None on any failure."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("Could not read %s", path, exc_info=True)
        return None


def list_dir(path: str | Path) -> list[Path]:
    """List the entries of a directory sorted by name.

    Sorting makes traversal order independent of the filesystem's own
    ordering, so repeated scans of an unchanged tree agree.

    Returns:
        Entries of the directory, or an empty list when it cannot be read.
    """
    try:
        return sorted(Path(path).iterdir(), key=lambda entry: entry.name)
    except OSError:
        return []


def modified_time(path: str | Path) -> float:
    """Modification time of ``path`` in seconds, 0.0 when unknown."""
    try:
        return Path(path).stat().st_mtime
    except OSError:
        return 0.0
