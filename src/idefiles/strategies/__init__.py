"""Per-editor detection strategies.

- ``JetBrainsStrategy`` -- window title, command line, ``.idea`` workspace.
- ``VSCodeStrategy`` -- command line, session database, directory scan.
- ``TerminalEditorStrategy`` -- positional command-line files.
"""

from __future__ import annotations

from idefiles.strategies.base import EditorStrategy
from idefiles.strategies.jetbrains import JetBrainsStrategy
from idefiles.strategies.terminal import TerminalEditorStrategy
from idefiles.strategies.vscode import VSCodeStrategy

__all__ = [
    "EditorStrategy",
    "JetBrainsStrategy",
    "TerminalEditorStrategy",
    "VSCodeStrategy",
]
