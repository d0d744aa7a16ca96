"""Window-title grammar for JetBrains IDEs.

JetBrains IDEs put the focused file, the project and the IDE itself into
the window title, but the exact layout changed across releases:

.. code-block:: text

    main.go - myapp [/home/u/myapp] - GoLand 2024.1     full form
    main.go* - myapp [/home/u/myapp] - GoLand 2024.1    unsaved changes
    main.go - myapp - GoLand 2024.1                     no project path
    myapp - GoLand 2024.1                               no file open
    myapp – main.go                                     2025.x short form

``parse_window_title`` tries the grammars most specific first and returns
the first one that yields a filename distinct from the project name. A
title naming only the project and the IDE is recognised explicitly and
yields None, so it can never be misread as a file by the looser short form.

The parser is pure: it performs no I/O and depends on nothing but the
title string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Separator between title fields. Newer releases use an en-dash.
_SEP = r"\s+[-–]\s+"

# "IDE-name version", e.g. "GoLand 2024.1" or "IntelliJ IDEA 2023.3.2".
_IDE_SUFFIX = r"(\w+(?:\s+\w+)*)\s+([\d.]+)"

# 1. filename [*] - project [path] - IDE version
_FULL_WITH_PATH = re.compile(
    r"^(.+?)\s*(\*)?" + _SEP + r"([^\[]+?)\s*\[([^\]]+)\]" + _SEP + _IDE_SUFFIX
)

# 2. filename [*] - project - IDE version
_FULL_NO_PATH = re.compile(
    r"^(.+?)\s*(\*)?" + _SEP + r"(.+?)" + _SEP + _IDE_SUFFIX
)

# 3. project - IDE version (no file open)
_PROJECT_ONLY = re.compile(r"^(.+?)" + _SEP + _IDE_SUFFIX + r"\s*$")

# 4. project – filename (en-dash only, no IDE suffix)
_SHORT_FORM = re.compile(r"^([^–]+?)\s*–\s*(.+)$")


@dataclass(frozen=True)
class TitleMatch:
    """What a window title says about the focused file.

    Attributes:
        filename: File name (or project-relative path) shown in the title.
        project_name: Project name shown in the title.
        is_modified: True when the title marks unsaved changes with ``*``.
        project_path: Project directory, only present in the full form.
    """

    filename: str
    project_name: str
    is_modified: bool = False
    project_path: str | None = None


def join_title_path(project_path: str, filename: str) -> str:
    """Join a project directory and a title filename with a single ``/``."""
    return project_path.rstrip("/") + "/" + filename


def _accept(filename: str, project_name: str) -> bool:
    """A candidate must name a file, and not just repeat the project."""
    return bool(filename) and filename.lower() != project_name.lower()


def parse_window_title(title: str) -> TitleMatch | None:
    """Parse a JetBrains window title.

    Args:
        title: Raw window title. May be empty.

    Returns:
        A ``TitleMatch`` for the focused file, or None when the title shows
        no file (project-only title, empty title, unknown layout).
    """
    title = title.strip()
    if not title:
        return None

    match = _FULL_WITH_PATH.match(title)
    if match:
        filename = match.group(1).strip()
        project_name = match.group(3).strip()
        if _accept(filename, project_name):
            return TitleMatch(
                filename=filename,
                project_name=project_name,
                is_modified=match.group(2) is not None,
                project_path=match.group(4).strip(),
            )

    match = _FULL_NO_PATH.match(title)
    if match:
        filename = match.group(1).strip()
        project_name = match.group(3).strip()
        if _accept(filename, project_name):
            return TitleMatch(
                filename=filename,
                project_name=project_name,
                is_modified=match.group(2) is not None,
            )

    if _PROJECT_ONLY.match(title):
        return None

    match = _SHORT_FORM.match(title)
    if match:
        project_name = match.group(1).strip()
        filename = match.group(2).strip()
        if _accept(filename, project_name):
            return TitleMatch(filename=filename, project_name=project_name)

    return None
