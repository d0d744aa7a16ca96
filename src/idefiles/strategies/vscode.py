"""Detection strategy for Visual Studio Code and its rebuilds.

VS Code's window title is configurable and unreliable, so it is ignored.
Evidence comes from the command line, then from the session database of
the workspace, then from a scan of the workspace directory.
"""

from __future__ import annotations

import logging
from typing import Sequence

from idefiles.editors import EditorProfile
from idefiles.evidence.base import EvidenceSource
from idefiles.evidence.cmdline import read_command_line
from idefiles.evidence.heuristic import scan_project_directory
from idefiles.evidence.vscode_session import VSCodeSessionReader
from idefiles.models import DetectionOutcome, ProcessSnapshot
from idefiles.resolution import OutcomeBuilder
from idefiles.strategies.base import EditorStrategy

logger = logging.getLogger(__name__)


class VSCodeStrategy(EditorStrategy):
    """Command-line, session-database and heuristic evidence for VS Code."""

    def __init__(self, profile: EditorProfile, session_reader: VSCodeSessionReader) -> None:
        super().__init__(profile)
        self.session_reader = session_reader

    def extract(self, processes: Sequence[ProcessSnapshot]) -> DetectionOutcome:
        builder = OutcomeBuilder(self.display_name)
        for process in processes:
            builder.absorb(read_command_line(process.cmdline()))

        if builder.has_files_from(EvidenceSource.CMDLINE):
            logger.debug("%s: command-line files found, skipping session", self.display_name)
            return builder.build()

        session = self.session_reader.read(builder.project_path)
        if session.files:
            builder.override_with(session)
        elif builder.project_path:
            logger.debug("%s: no session editors, scanning %s", self.display_name, builder.project_path)
            builder.absorb(scan_project_directory(builder.project_path))

        return builder.build()
