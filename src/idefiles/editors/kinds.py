"""Static registry of supported editors and their process identities.

``EditorKind`` is the closed set of editor identities idefiles knows about.
Each kind owns a stable key (used on the command line and in output) and a
human display name.

Each ``EditorProfile`` adds what the detection layer needs on top of the
identity: the strategy family that handles the editor and the binary names
its processes run under. A process matches a profile when its name equals
or starts with one of these names (case-insensitively) or when its
executable path contains one. Prefix matching covers the Windows launchers
(``goland64.exe``) and distribution renames (``vim.basic``).

Platform Notes:
    JetBrains IDEs on Linux often run as ``java`` with the IDE name only in
    the executable path, which is why the executable path is consulted too.
    Visual Studio is a known kind but has no detection profile family; asking
    for it raises ``UnsupportedEditor``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EditorKind(Enum):
    """Supported editor identities.

    Each member's value is its stable external key.
    """

    GOLAND = "goland"
    PYCHARM = "pycharm"
    INTELLIJ_IDEA = "idea"
    WEBSTORM = "webstorm"
    PHPSTORM = "phpstorm"
    RUBYMINE = "rubymine"
    CLION = "clion"
    VSCODE = "vscode"
    VISUAL_STUDIO = "vs"
    VIM = "vim"
    NANO = "nano"

    @property
    def key(self) -> str:
        """The stable key used on the command line (e.g. ``"idea"``)."""
        return self.value

    @property
    def display_name(self) -> str:
        """Human-readable editor name (e.g. ``"IntelliJ IDEA"``)."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_key(cls, key: str) -> EditorKind | None:
        """Look up a kind by key, case-insensitively.

        Returns:
            The matching kind, or None when the key is unknown.
        """
        wanted = key.strip().lower()
        for kind in cls:
            if kind.value == wanted:
                return kind
        return None


_DISPLAY_NAMES: dict[EditorKind, str] = {
    EditorKind.GOLAND: "GoLand",
    EditorKind.PYCHARM: "PyCharm",
    EditorKind.INTELLIJ_IDEA: "IntelliJ IDEA",
    EditorKind.WEBSTORM: "WebStorm",
    EditorKind.PHPSTORM: "PhpStorm",
    EditorKind.RUBYMINE: "RubyMine",
    EditorKind.CLION: "CLion",
    EditorKind.VSCODE: "Visual Studio Code",
    EditorKind.VISUAL_STUDIO: "Visual Studio",
    EditorKind.VIM: "Vim",
    EditorKind.NANO: "Nano",
}

# Strategy families. ``none`` marks kinds that are known but undetectable.
FAMILY_JETBRAINS = "jetbrains"
FAMILY_VSCODE = "vscode"
FAMILY_TERMINAL = "terminal"
FAMILY_NONE = "none"


@dataclass(frozen=True)
class EditorProfile:
    """Describes how to recognise an editor's processes.

    Attributes:
        kind: The editor identity this profile describes.
        family: Strategy family handling the editor (``jetbrains``,
            ``vscode``, ``terminal`` or ``none``).
        binary_names: Lowercase process/binary names the editor runs under.
    """

    kind: EditorKind
    family: str
    binary_names: tuple[str, ...] = ()

    @property
    def display_name(self) -> str:
        return self.kind.display_name


def _jetbrains(kind: EditorKind, binary: str) -> EditorProfile:
    return EditorProfile(
        kind=kind,
        family=FAMILY_JETBRAINS,
        binary_names=(binary, f"{binary}.exe", f"{binary}64.exe"),
    )


def _build_profiles() -> list[EditorProfile]:
    """Build the complete list of editor profiles.

    Returns:
        One profile per ``EditorKind``, in ``EditorKind`` order.
    """
    return [
        # -- JetBrains family --
        _jetbrains(EditorKind.GOLAND, "goland"),
        _jetbrains(EditorKind.PYCHARM, "pycharm"),
        _jetbrains(EditorKind.INTELLIJ_IDEA, "idea"),
        _jetbrains(EditorKind.WEBSTORM, "webstorm"),
        _jetbrains(EditorKind.PHPSTORM, "phpstorm"),
        _jetbrains(EditorKind.RUBYMINE, "rubymine"),
        _jetbrains(EditorKind.CLION, "clion"),
        # -- Session-database editor --
        EditorProfile(
            kind=EditorKind.VSCODE,
            family=FAMILY_VSCODE,
            binary_names=(
                "code",
                "code-oss",
                "codium",
                "code-insiders",
                "code.exe",
            ),
        ),
        # -- Known, no detection support --
        EditorProfile(kind=EditorKind.VISUAL_STUDIO, family=FAMILY_NONE),
        # -- Terminal editors --
        EditorProfile(
            kind=EditorKind.VIM,
            family=FAMILY_TERMINAL,
            binary_names=("vim", "nvim", "gvim"),
        ),
        EditorProfile(
            kind=EditorKind.NANO,
            family=FAMILY_TERMINAL,
            binary_names=("nano",),
        ),
    ]


# Module-level constant: the canonical list of all editor profiles.
EDITOR_PROFILES: list[EditorProfile] = _build_profiles()


def profile_for(kind: EditorKind) -> EditorProfile:
    """Return the profile for ``kind``."""
    for profile in EDITOR_PROFILES:
        if profile.kind is kind:
            return profile
    raise KeyError(kind)
