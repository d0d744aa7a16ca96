"""Process source: the operating system view the registry works from.

``ProcessSource`` is the interface; ``PsutilProcessSource`` implements it
with psutil on every platform psutil supports.

Window titles are not something psutil knows about. On Linux under X11 they
are read from ``wmctrl -lp``, which prints one line per top-level window:

.. code-block:: text

    0x04a00003  0 4242   myhost main.go - myapp [/home/u/myapp] - GoLand 2024.1

When ``wmctrl`` is missing, fails, or the platform is not Linux, every
process gets an empty title and strategies fall back to their other
evidence sources.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from abc import ABC, abstractmethod

import psutil

from idefiles.exceptions import SystemApiError
from idefiles.models import ProcessSnapshot

logger = logging.getLogger(__name__)

WMCTRL_COMMAND: tuple[str, ...] = ("wmctrl", "-lp")
WMCTRL_TIMEOUT_SECONDS = 2.0

_SOFT_ERRORS = (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess)


class ProcessSource(ABC):
    """Enumerates running processes and reads their details on demand."""

    @abstractmethod
    def list_processes(self) -> list[ProcessSnapshot]:
        """Snapshot every visible process.

        Raises:
            SystemApiError: If the process table cannot be enumerated.
        """

    @abstractmethod
    def get_cmdline(self, pid: int) -> list[str] | None:
        """Argument vector of ``pid``, or None when it cannot be read."""

    @abstractmethod
    def get_cwd(self, pid: int) -> str | None:
        """Working directory of ``pid``, or None when it cannot be read."""


def parse_wmctrl_output(output: str) -> dict[int, str]:
    """Map pids to window titles from ``wmctrl -lp`` output.

    A process with several windows keeps the first listed title. Lines
    with pid 0 (windows whose owner is unknown) are skipped.
    """
    titles: dict[int, str] = {}
    for line in output.splitlines():
        parts = line.split(None, 4)
        if len(parts) < 5:
            continue
        try:
            pid = int(parts[2])
        except ValueError:
            continue
        if pid > 0 and pid not in titles:
            titles[pid] = parts[4].strip()
    return titles


def read_window_titles() -> dict[int, str]:
    """Read top-level window titles keyed by owning pid.

    Returns:
        The titles, or an empty mapping when they are unavailable.
    """
    if not sys.platform.startswith("linux"):
        return {}
    try:
        result = subprocess.run(
            WMCTRL_COMMAND,
            capture_output=True,
            text=True,
            timeout=WMCTRL_TIMEOUT_SECONDS,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        logger.debug("wmctrl unavailable, window titles disabled")
        return {}
    if result.returncode != 0:
        logger.debug("wmctrl exited with %d", result.returncode)
        return {}
    return parse_wmctrl_output(result.stdout)


class PsutilProcessSource(ProcessSource):
    """Process source backed by psutil.

    Args:
        with_titles: Read window titles via ``wmctrl``. Disable for faster
            listings when titles are not needed.
    """

    def __init__(self, with_titles: bool = True) -> None:
        self.with_titles = with_titles

    def list_processes(self) -> list[ProcessSnapshot]:
        titles = read_window_titles() if self.with_titles else {}
        snapshots: list[ProcessSnapshot] = []
        try:
            for proc in psutil.process_iter(["pid", "name", "exe"]):
                try:
                    info = proc.info
                    pid = info.get("pid") or proc.pid
                    snapshots.append(ProcessSnapshot(
                        pid=pid,
                        process_name=info.get("name") or "",
                        window_title=titles.get(pid, ""),
                        executable_path=info.get("exe") or "",
                        cmdline_fetcher=self.get_cmdline,
                        cwd_fetcher=self.get_cwd,
                    ))
                except _SOFT_ERRORS:
                    continue
        except psutil.Error as exc:
            raise SystemApiError(f"cannot enumerate processes: {exc}") from exc
        logger.debug("Listed %d processes (%d window titles)", len(snapshots), len(titles))
        return snapshots

    def get_cmdline(self, pid: int) -> list[str] | None:
        try:
            return psutil.Process(pid).cmdline()
        except _SOFT_ERRORS:
            return None

    def get_cwd(self, pid: int) -> str | None:
        try:
            return psutil.Process(pid).cwd() or None
        except _SOFT_ERRORS:
            return None
