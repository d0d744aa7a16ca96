"""idefiles exception hierarchy.

All public exceptions inherit from IdeFilesError, giving callers a single
base class to catch when they want to handle any idefiles-specific failure
without swallowing unrelated errors.

Detection failures form their own branch under ``DetectionError``. Each one
is terminal for the request that raised it: the caller receives the error
and no partial result.
"""

from __future__ import annotations


class IdeFilesError(Exception):
    """Base exception for all idefiles errors."""


class ConfigError(IdeFilesError):
    """Raised when an explicitly requested configuration file is unusable.

    Covers unreadable files, malformed YAML, and values of the wrong
    shape (for example a scalar where a list of paths is expected).
    """


class DetectionError(IdeFilesError):
    """Base class for failures of a detection request."""


class NoProcessFound(DetectionError):
    """Raised when no running process matches the requested editor."""

    def __init__(self, editor: str) -> None:
        self.editor = editor
        super().__init__(f"No {editor} processes found")


class WindowParseError(DetectionError):
    """Raised when editor processes were found but no file was recovered.

    Every evidence source (window title, command line, persisted session
    state, directory scan) was consulted for every matched process and
    none of them produced a usable file.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Failed to parse window information: {message}")


class SystemApiError(DetectionError):
    """Raised when the operating system process source fails.

    Covers failures of process enumeration itself. Failures to read a
    single process's details are not errors; they count as missing
    evidence.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"System API error: {message}")


class UnsupportedEditor(DetectionError):
    """Raised when detection is requested for an editor with no strategy."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unsupported editor: {name}")
