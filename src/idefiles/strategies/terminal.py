"""Detection strategy for terminal editors (Vim, Nano).

Terminal editors have no window of their own and keep no project state, so
the only evidence is the file list on their command line. Relative
arguments are resolved against the editor's working directory.
"""

from __future__ import annotations

from typing import Sequence

from idefiles.editors import EditorKind, EditorProfile
from idefiles.evidence.cmdline import read_positional_files
from idefiles.models import DetectionOutcome, ProcessSnapshot
from idefiles.resolution import OutcomeBuilder
from idefiles.strategies.base import EditorStrategy

# Options that consume the following argument, per editor.
VALUE_FLAGS: dict[EditorKind, frozenset[str]] = {
    EditorKind.VIM: frozenset({
        "-c", "--cmd", "-S", "-u", "-U", "-i", "-T", "-W", "-s", "-t", "-q", "-w",
    }),
    EditorKind.NANO: frozenset({"-T", "-Y", "-o", "-Q", "-r", "-X"}),
}


class TerminalEditorStrategy(EditorStrategy):
    """Positional command-line files for a terminal editor."""

    def __init__(self, profile: EditorProfile) -> None:
        super().__init__(profile)
        self.value_flags = VALUE_FLAGS.get(profile.kind, frozenset())

    def extract(self, processes: Sequence[ProcessSnapshot]) -> DetectionOutcome:
        builder = OutcomeBuilder(self.display_name)
        for process in processes:
            builder.absorb(read_positional_files(
                process.cmdline(),
                cwd=process.cwd(),
                value_flags=self.value_flags,
            ))
        return builder.build()
