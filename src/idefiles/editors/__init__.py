"""Editor identities and the static table of editor process profiles.

Public API::

    from idefiles.editors import EditorKind, EDITOR_PROFILES

    kind = EditorKind.from_key("goland")
    print(kind.display_name)
"""

from __future__ import annotations

from idefiles.editors.kinds import (
    EDITOR_PROFILES,
    FAMILY_JETBRAINS,
    FAMILY_NONE,
    FAMILY_TERMINAL,
    FAMILY_VSCODE,
    EditorKind,
    EditorProfile,
    profile_for,
)

__all__ = [
    "EDITOR_PROFILES",
    "EditorKind",
    "EditorProfile",
    "FAMILY_JETBRAINS",
    "FAMILY_NONE",
    "FAMILY_TERMINAL",
    "FAMILY_VSCODE",
    "profile_for",
]
