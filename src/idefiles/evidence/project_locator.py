"""Find a JetBrains project directory from its name.

Short window titles name the project but not where it lives. A JetBrains
project is a directory holding an ``.idea`` metadata directory, so the
locator looks for a directory with the right name and an ``.idea`` child
under a list of common workspace roots.

Search Algorithm:
    1. Exact match: ``<root>/<name>/.idea`` for every root, in order.
    2. Bounded search: walk each root down to ``MAX_SEARCH_DEPTH`` levels
       (the root, its children, its grandchildren) looking for a directory
       whose name matches case-insensitively and holds ``.idea``. Hidden
       directories and build/dependency output are not entered.

The first directory found wins. There is no ranking between several
matching directories: when two roots both contain a ``myapp`` project the
one under the earlier root is returned. Entries are visited in sorted name
order so the answer is stable for an unchanged tree.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from idefiles.evidence import fs

logger = logging.getLogger(__name__)

METADATA_DIR = ".idea"

# The root itself counts as the first level.
MAX_SEARCH_DEPTH = 3

# Directory names never entered during the bounded search.
SKIPPED_DIR_NAMES: frozenset[str] = frozenset({
    "node_modules",
    "target",
    "build",
    "dist",
})


def default_project_roots(home: Path | None = None) -> tuple[Path, ...]:
    """Common places developers keep projects, most specific first."""
    home_dir = home if home is not None else Path.home()
    return (
        home_dir / "codes",
        home_dir / "projects",
        home_dir / "workspace",
        home_dir / "dev",
        home_dir / "Documents",
        home_dir / "Dropbox" / "dev",
        home_dir,
    )


class ProjectLocator:
    """Resolves project names to project directories.

    Usage::

        locator = ProjectLocator(default_project_roots())
        path = locator.locate("myapp")
    """

    def __init__(self, roots: Sequence[Path]) -> None:
        self.roots: tuple[Path, ...] = tuple(roots)

    def locate(self, project_name: str) -> str | None:
        """Return the directory of ``project_name``, or None if not found."""
        if not project_name or "/" in project_name:
            return None

        for root in self.roots:
            candidate = root / project_name
            if fs.is_dir(candidate / METADATA_DIR):
                return str(candidate)

        for root in self.roots:
            found = self._search(root, project_name.lower(), MAX_SEARCH_DEPTH)
            if found is not None:
                logger.debug("Located project %s at %s", project_name, found)
                return str(found)
        return None

    def _search(self, base: Path, wanted: str, depth: int) -> Path | None:
        """Depth-bounded search for a directory named ``wanted``."""
        if depth <= 0 or not fs.is_dir(base):
            return None

        if base.name.lower() == wanted and fs.is_dir(base / METADATA_DIR):
            return base

        for entry in fs.list_dir(base):
            name = entry.name
            if name.startswith(".") or name.lower() in SKIPPED_DIR_NAMES:
                continue
            if not fs.is_dir(entry):
                continue
            found = self._search(entry, wanted, depth - 1)
            if found is not None:
                return found
        return None
