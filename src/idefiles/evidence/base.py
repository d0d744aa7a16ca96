"""Evidence: the common currency of every reader.

Each reader (window title, command line, persisted session state, directory
scan) answers with an ``Evidence`` value. A reader with nothing to say
returns ``NO_EVIDENCE`` instead of raising, which keeps the precedence rules
in ``idefiles.resolution`` free of exception handling and testable without
touching the filesystem.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from idefiles.models import FileRecord


class EvidenceSource(str, Enum):
    """Where a piece of evidence came from."""

    NONE = "none"
    TITLE = "title"
    CMDLINE = "cmdline"
    SESSION = "session"
    HEURISTIC = "heuristic"


@dataclass(frozen=True)
class Evidence:
    """What one reader recovered.

    Attributes:
        source: The reader that produced this evidence.
        files: Recovered files, in the order the reader discovered them.
        project_path: Project or workspace directory, if the reader found one.
        authoritative: True when the source carries real focus information
            (a structured workspace section or a session database). Capped
            path-only fallbacks are not authoritative.
    """

    source: EvidenceSource
    files: tuple[FileRecord, ...] = ()
    project_path: str | None = None
    authoritative: bool = False

    @property
    def is_empty(self) -> bool:
        """True when the reader recovered neither files nor a project."""
        return not self.files and self.project_path is None


NO_EVIDENCE = Evidence(source=EvidenceSource.NONE)
