"""Data model for editor detection.

Three value types flow through the engine:

- ``ProcessSnapshot`` -- one running process as seen by the process source,
  with on-demand accessors for details that are expensive or may be
  unavailable (command line, working directory).
- ``FileRecord`` -- one file an editor has open.
- ``DetectionOutcome`` -- the merged answer for one editor: its open files,
  the active file and the project path.

``FileRecord`` and ``DetectionOutcome`` are frozen; once returned to a
caller they share no mutable state with the engine.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

logger = logging.getLogger(__name__)

CmdlineFetcher = Callable[[int], "list[str] | None"]
CwdFetcher = Callable[[int], "str | None"]


@dataclass(frozen=True)
class ProcessSnapshot:
    """A running process, captured for the duration of one detection pass.

    Attributes:
        pid: Process identifier. Two snapshots with the same pid describe
            the same process.
        process_name: Short process name (``comm`` on Linux).
        window_title: Title of the process's top-level window, or ``""``
            when the process has none or titles are unavailable.
        executable_path: Absolute path of the executable, or ``""``.
        cmdline_fetcher: Callable returning the argument vector for a pid.
        cwd_fetcher: Callable returning the working directory for a pid.
    """

    pid: int
    process_name: str
    window_title: str = ""
    executable_path: str = ""
    cmdline_fetcher: CmdlineFetcher | None = field(
        default=None, repr=False, compare=False,
    )
    cwd_fetcher: CwdFetcher | None = field(
        default=None, repr=False, compare=False,
    )

    def cmdline(self) -> list[str] | None:
        """Fetch this process's argument vector.

        Returns:
            The argument list, or None when it cannot be read (permission
            denied, process already exited, no fetcher attached).
        """
        if self.cmdline_fetcher is None:
            return None
        try:
            return self.cmdline_fetcher(self.pid)
        except OSError:
            logger.debug("Command line unavailable for pid %d", self.pid)
            return None

    def cwd(self) -> str | None:
        """Fetch this process's working directory, or None."""
        if self.cwd_fetcher is None:
            return None
        try:
            return self.cwd_fetcher(self.pid)
        except OSError:
            logger.debug("Working directory unavailable for pid %d", self.pid)
            return None


def normalize_path(path: str) -> str:
    """Canonicalize ``path`` lexically where that is safe.

    Absolute paths are normalized (``/a/./b/../c`` -> ``/a/c``). Relative
    paths, which come from window titles with no known project, are left
    alone.
    """
    if os.path.isabs(path):
        return os.path.normpath(path)
    return path


@dataclass(frozen=True)
class FileRecord:
    """A file open in an editor.

    Attributes:
        path: Absolute, normalized path where possible. Never empty.
        display_name: Basename of the file.
        is_active: True for the file focused in the editor's foreground tab.
        is_modified: True when the editor shows unsaved changes. False when
            that cannot be determined.
        tab_index: Position of the file among the editor's tabs, if known.
        owning_project_name: Name of the project the file belongs to.
    """

    path: str
    display_name: str
    is_active: bool = False
    is_modified: bool = False
    tab_index: int | None = None
    owning_project_name: str | None = None

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("FileRecord.path must not be empty")

    @classmethod
    def for_path(
        cls,
        path: str,
        *,
        is_active: bool = False,
        is_modified: bool = False,
        tab_index: int | None = None,
        owning_project_name: str | None = None,
    ) -> FileRecord:
        """Build a record from a path, deriving the display name."""
        if not path:
            raise ValueError("FileRecord.path must not be empty")
        normalized = normalize_path(path)
        return cls(
            path=normalized,
            display_name=os.path.basename(normalized.rstrip("/\\")) or normalized,
            is_active=is_active,
            is_modified=is_modified,
            tab_index=tab_index,
            owning_project_name=owning_project_name,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.display_name,
            "is_active": self.is_active,
            "is_modified": self.is_modified,
            "tab_index": self.tab_index,
            "project_name": self.owning_project_name,
        }


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class DetectionOutcome:
    """The resolved file state of one editor.

    Attributes:
        timestamp: ISO-8601 UTC time the outcome was produced.
        editor_display_name: Human-readable editor name.
        editor_version: Editor version, usually unknown.
        active_file_path: Path of the focused file. When set, exactly one
            entry of ``open_files`` has this path, and it is the only entry
            marked active.
        open_files: Open files in discovery order. Never empty.
        project_path: Project or workspace directory, if known.
    """

    timestamp: str
    editor_display_name: str
    open_files: tuple[FileRecord, ...]
    active_file_path: str | None = None
    editor_version: str | None = None
    project_path: str | None = None

    @property
    def active_file(self) -> FileRecord | None:
        """The record for ``active_file_path``, or None."""
        if self.active_file_path is None:
            return None
        for record in self.open_files:
            if record.path == self.active_file_path:
                return record
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "editor": self.editor_display_name,
            "editor_version": self.editor_version,
            "active_file": self.active_file_path,
            "open_files": [record.to_dict() for record in self.open_files],
            "project_path": self.project_path,
        }
