"""Detection strategy for the JetBrains IDE family.

GoLand, PyCharm, IntelliJ IDEA, WebStorm, PhpStorm, RubyMine and CLion
share one window-title grammar and one workspace format, so one strategy
class serves all of them, parameterised by the editor profile.

Evidence Order
--------------
For every matched process:

1. The window title names the focused file and project. When the title
   carries no project path, the project is located by name.
2. The command line may name a project directory or files.

After all processes, unless the command line named files, the project's
``.idea`` workspace is read and overrides the title-derived files.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from idefiles.editors import EditorProfile
from idefiles.evidence.base import NO_EVIDENCE, Evidence, EvidenceSource
from idefiles.evidence.cmdline import read_command_line
from idefiles.evidence.jetbrains_workspace import read_jetbrains_workspace
from idefiles.evidence.project_locator import ProjectLocator
from idefiles.evidence.title import join_title_path, parse_window_title
from idefiles.models import DetectionOutcome, FileRecord, ProcessSnapshot
from idefiles.resolution import OutcomeBuilder
from idefiles.strategies.base import EditorStrategy

logger = logging.getLogger(__name__)

WorkspaceReader = Callable[[str], Evidence]


class JetBrainsStrategy(EditorStrategy):
    """Title, command-line and workspace evidence for a JetBrains IDE.

    Args:
        profile: The IDE's profile.
        locator: Resolves project names from short titles to directories.
        workspace_reader: Reads ``.idea`` workspace state for a project
            directory.
    """

    def __init__(
        self,
        profile: EditorProfile,
        locator: ProjectLocator,
        workspace_reader: WorkspaceReader = read_jetbrains_workspace,
    ) -> None:
        super().__init__(profile)
        self.locator = locator
        self.workspace_reader = workspace_reader

    def title_evidence(self, process: ProcessSnapshot) -> Evidence:
        """Interpret one process's window title."""
        match = parse_window_title(process.window_title)
        if match is None:
            return NO_EVIDENCE

        project_path = match.project_path or self.locator.locate(match.project_name)
        path = join_title_path(project_path, match.filename) if project_path else match.filename
        record = FileRecord.for_path(
            path,
            is_active=True,
            is_modified=match.is_modified,
            owning_project_name=match.project_name,
        )
        return Evidence(
            source=EvidenceSource.TITLE,
            files=(record,),
            project_path=project_path,
        )

    def extract(self, processes: Sequence[ProcessSnapshot]) -> DetectionOutcome:
        builder = OutcomeBuilder(self.display_name)
        for process in processes:
            builder.absorb(self.title_evidence(process))
            builder.absorb(read_command_line(process.cmdline()))

        if builder.has_files_from(EvidenceSource.CMDLINE):
            logger.debug("%s: command-line files found, skipping workspace", self.display_name)
        elif builder.project_path:
            builder.override_with(self.workspace_reader(builder.project_path))

        return builder.build()
