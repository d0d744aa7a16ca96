"""Resolution engine: merge partial evidence into one detection outcome.

Every evidence source is unreliable on its own. A strategy feeds whatever
its readers recovered, from every matched process, into an
``OutcomeBuilder``, which applies the precedence rules and produces a single
``DetectionOutcome``.

Precedence Rules
----------------
- **First occurrence wins.** Files are keyed by path; a later record for a
  path already seen is dropped, together with its ``is_active`` flag. The
  project path is likewise the first one reported.
- **Session state overrides titles.** ``override_with`` replaces every
  title-derived record with the session evidence. The exception: when
  exactly one title-derived record exists and the session evidence is not
  authoritative (a capped path-only fallback from an older editor
  release), the session files only augment that single detection.
- **One active file.** ``build`` elects the first active record and clears
  the flag on every other record, so ``active_file_path`` always names the
  only active entry.
- **No empty success.** ``build`` raises ``WindowParseError`` when nothing
  was recovered.

The builder does no I/O. If evidence gathering is ever parallelised across
processes, the builder is the one shared mutation point and would need the
only lock.
"""

from __future__ import annotations

import dataclasses
from typing import Iterable

from idefiles.evidence.base import Evidence, EvidenceSource
from idefiles.exceptions import WindowParseError
from idefiles.models import DetectionOutcome, FileRecord, utc_timestamp


def merge_records(records: Iterable[FileRecord]) -> list[FileRecord]:
    """Deduplicate records by path, keeping the first occurrence of each.

    Args:
        records: Records in discovery order.

    Returns:
        The first record for every distinct path, in discovery order.
    """
    seen: set[str] = set()
    merged: list[FileRecord] = []
    for record in records:
        if record.path in seen:
            continue
        seen.add(record.path)
        merged.append(record)
    return merged


class OutcomeBuilder:
    """Accumulates evidence for one editor and builds its outcome.

    Usage::

        builder = OutcomeBuilder("GoLand")
        builder.absorb(title_evidence)
        builder.override_with(workspace_evidence)
        outcome = builder.build()
    """

    def __init__(self, editor_display_name: str) -> None:
        self.editor_display_name = editor_display_name
        self._entries: list[tuple[FileRecord, EvidenceSource]] = []
        self._paths: set[str] = set()
        self.project_path: str | None = None

    @property
    def files(self) -> list[FileRecord]:
        """Records gathered so far, in discovery order."""
        return [record for record, _ in self._entries]

    def has_files_from(self, source: EvidenceSource) -> bool:
        return any(origin is source for _, origin in self._entries)

    def note_project_path(self, path: str | None) -> None:
        """Record a project path unless one is already known."""
        if path and self.project_path is None:
            self.project_path = path

    def add(self, record: FileRecord, source: EvidenceSource) -> bool:
        """Add a record unless its path is already present.

        Returns:
            True when the record was added.
        """
        if record.path in self._paths:
            return False
        self._paths.add(record.path)
        self._entries.append((record, source))
        return True

    def absorb(self, evidence: Evidence) -> None:
        """Merge evidence without displacing anything already gathered."""
        self.note_project_path(evidence.project_path)
        for record in evidence.files:
            self.add(record, evidence.source)

    def override_with(self, evidence: Evidence) -> None:
        """Merge persisted session evidence, which outranks window titles.

        Session evidence with files replaces all title-derived records,
        except that non-authoritative evidence only augments a single
        title-derived record. Evidence without files contributes at most
        a project path.
        """
        self.note_project_path(evidence.project_path)
        if not evidence.files:
            return

        title_count = sum(1 for _, origin in self._entries if origin is EvidenceSource.TITLE)
        if not (title_count == 1 and not evidence.authoritative):
            self._entries = [
                (record, origin) for record, origin in self._entries
                if origin is not EvidenceSource.TITLE
            ]
            self._paths = {record.path for record, _ in self._entries}
        for record in evidence.files:
            self.add(record, evidence.source)

    def build(self) -> DetectionOutcome:
        """Produce the outcome.

        Raises:
            WindowParseError: If no file was recovered.
        """
        if not self._entries:
            raise WindowParseError(f"No files detected for {self.editor_display_name}")

        active_path: str | None = None
        open_files: list[FileRecord] = []
        for record, _ in self._entries:
            if record.is_active and active_path is None:
                active_path = record.path
            elif record.is_active:
                record = dataclasses.replace(record, is_active=False)
            open_files.append(record)

        return DetectionOutcome(
            timestamp=utc_timestamp(),
            editor_display_name=self.editor_display_name,
            open_files=tuple(open_files),
            active_file_path=active_path,
            project_path=self.project_path,
        )
