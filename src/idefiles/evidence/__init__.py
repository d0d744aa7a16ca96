"""Evidence readers: per-source extraction primitives.

Each reader inspects one kind of evidence and answers with an ``Evidence``
value, or ``NO_EVIDENCE`` when the source has nothing to say:

- ``title`` -- JetBrains window-title grammar (pure).
- ``cmdline`` -- editor argument vectors.
- ``jetbrains_workspace`` -- ``.idea/workspace.xml`` editor tabs.
- ``project_locator`` -- project directory lookup by name.
- ``vscode_session`` -- VS Code ``state.vscdb`` session databases.
- ``heuristic`` -- shallow project directory scan.
"""

from __future__ import annotations

from idefiles.evidence.base import NO_EVIDENCE, Evidence, EvidenceSource
from idefiles.evidence.cmdline import read_command_line, read_positional_files
from idefiles.evidence.heuristic import scan_project_directory
from idefiles.evidence.jetbrains_workspace import read_jetbrains_workspace
from idefiles.evidence.project_locator import ProjectLocator, default_project_roots
from idefiles.evidence.title import TitleMatch, parse_window_title
from idefiles.evidence.vscode_session import VSCodeSessionReader, default_storage_dirs

__all__ = [
    "Evidence",
    "EvidenceSource",
    "NO_EVIDENCE",
    "ProjectLocator",
    "TitleMatch",
    "VSCodeSessionReader",
    "default_project_roots",
    "default_storage_dirs",
    "parse_window_title",
    "read_command_line",
    "read_jetbrains_workspace",
    "read_positional_files",
    "scan_project_directory",
]
