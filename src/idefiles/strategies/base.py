"""Base interface for editor detection strategies.

Every strategy implements the ``EditorStrategy`` abstract base class, which
provides two methods:

- ``matches(process)`` -- Decide from a process's identity alone whether it
  belongs to this strategy's editor. Cheap: no I/O.
- ``extract(processes)`` -- Run the editor's evidence readers over every
  matched process and resolve their output into one ``DetectionOutcome``.

The two-phase API (match then extract) lets the ``StrategyRegistry`` filter
the process list for several strategies without reading any editor state
until a strategy is actually chosen.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from idefiles.editors import EditorKind, EditorProfile
from idefiles.models import DetectionOutcome, ProcessSnapshot


class EditorStrategy(ABC):
    """Abstract base class for per-editor detection strategies.

    Attributes:
        profile: Static identity of the editor (kind, binary names).
    """

    def __init__(self, profile: EditorProfile) -> None:
        self.profile = profile

    @property
    def kind(self) -> EditorKind:
        return self.profile.kind

    @property
    def display_name(self) -> str:
        return self.profile.display_name

    def matches(self, process: ProcessSnapshot) -> bool:
        """Decide whether ``process`` belongs to this editor.

        A process matches when its name, lowercased, equals or starts with
        one of the profile's binary names, or when its executable path,
        lowercased, contains one.

        Args:
            process: The process to test.

        Returns:
            True if the process belongs to this editor.
        """
        name = process.process_name.lower()
        exe = process.executable_path.lower()
        for binary in self.profile.binary_names:
            if name == binary or name.startswith(binary):
                return True
            if exe and binary in exe:
                return True
        return False

    @abstractmethod
    def extract(self, processes: Sequence[ProcessSnapshot]) -> DetectionOutcome:
        """Resolve the open files of this editor.

        Must not raise on unreadable evidence; readers absorb their own
        failures.

        Args:
            processes: Processes already accepted by ``matches``, in the
                order the process source listed them.

        Returns:
            The merged outcome, with at least one file.

        Raises:
            WindowParseError: If no evidence source produced a file.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.key!r})"
