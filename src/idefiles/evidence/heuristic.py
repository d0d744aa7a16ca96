"""Last-resort evidence: guess open files from a project's top level.

Used only when no other source produced a file but a project directory is
known. The guess is deliberately shallow and small: a few source-like files
directly under the project, the first of them marked active.
"""

from __future__ import annotations

from idefiles.evidence import fs
from idefiles.evidence.base import NO_EVIDENCE, Evidence, EvidenceSource
from idefiles.models import FileRecord

# Extensions of files worth reporting.
SOURCE_EXTENSIONS: frozenset[str] = frozenset({
    ".js", ".ts", ".py", ".rs", ".go", ".java", ".cpp", ".c", ".json", ".md",
})

# Directory entries inspected, and files reported, at most.
MAX_ENTRIES_SCANNED = 10
MAX_FILES_REPORTED = 5


def scan_project_directory(project_path: str) -> Evidence:
    """Pick source-like files directly under ``project_path``.

    Never recurses. Entries are taken in name order.

    Returns:
        Heuristic evidence with up to ``MAX_FILES_REPORTED`` files, or
        ``NO_EVIDENCE`` when none qualify.
    """
    files: list[FileRecord] = []
    for entry in fs.list_dir(project_path)[:MAX_ENTRIES_SCANNED]:
        if len(files) >= MAX_FILES_REPORTED:
            break
        if entry.suffix.lower() not in SOURCE_EXTENSIONS or not fs.is_file(entry):
            continue
        files.append(FileRecord.for_path(str(entry), is_active=not files))

    if not files:
        return NO_EVIDENCE
    return Evidence(
        source=EvidenceSource.HEURISTIC,
        files=tuple(files),
        project_path=project_path,
    )
