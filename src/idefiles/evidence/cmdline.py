"""Command-line evidence: what an editor was asked to open.

Editors started with explicit arguments reveal their project or files on
their argument vector. Two interpretations are provided:

``read_command_line`` -- GUI editors (VS Code, JetBrains IDEs):

.. code-block:: text

    code /path/to/workspace                    directory -> project
    code --folder-uri file:///path/to/ws       folder URI -> project
    code --file-uri=file:///path/to/a.py       file URI -> file
    code /path/to/a.py /path/to/b.py           files

    Bare arguments must contain a path separator and must exist on disk.
    Helper processes spawned by the editor carry extension bundles and
    build artifacts on their command lines; these are filtered out by a
    static noise list before classification.

``read_positional_files`` -- terminal editors (vim, nano):

.. code-block:: text

    vim -n src/main.c +42 README.md

    Every positional argument is a candidate file, relative to the editor's
    working directory. Flags that take a value consume it, ``+cmd``
    arguments are skipped.

Both readers fail soft: a missing argument vector (permission denied, the
process exited) is simply ``NO_EVIDENCE``.
"""

from __future__ import annotations

import logging
import os
from typing import Sequence
from urllib.parse import unquote

from idefiles.evidence import fs
from idefiles.evidence.base import NO_EVIDENCE, Evidence, EvidenceSource
from idefiles.models import FileRecord

logger = logging.getLogger(__name__)

_FOLDER_URI_FLAG = "--folder-uri"
_FILE_URI_FLAG = "--file-uri"
_FILE_SCHEME = "file://"

# Substrings marking editor internals, caches and vendored dependencies.
NOISE_SUBSTRINGS: tuple[str, ...] = (
    "/.vscode/extensions/",
    "/.vscode-server/",
    "/resources/app/extensions/",
    "/CachedExtension",
    "node_modules",
    ".min.js",
)

# Script names that mark bundled editor helper entry points.
_BUNDLE_MARKERS: tuple[str, ...] = ("server", "bundle")


def is_noise_path(path: str) -> bool:
    """True when ``path`` points into editor internals or build output."""
    if any(marker in path for marker in NOISE_SUBSTRINGS):
        return True
    return path.endswith(".js") and any(m in path for m in _BUNDLE_MARKERS)


def decode_file_uri(uri: str) -> str | None:
    """Turn a ``file://`` URI (or plain path) into a filesystem path.

    Returns:
        The decoded path, or None for other schemes (remote workspaces,
        untitled buffers) which have no local path.
    """
    if uri.startswith(_FILE_SCHEME):
        return unquote(uri[len(_FILE_SCHEME):]) or None
    if "://" in uri:
        return None
    return uri or None


def _has_separator(arg: str) -> bool:
    return "/" in arg or os.sep in arg


def read_command_line(argv: Sequence[str] | None) -> Evidence:
    """Interpret a GUI editor's argument vector.

    Args:
        argv: Full argument vector including the executable, or None when
            it could not be read.

    Returns:
        Evidence with the first directory argument as project path and
        every existing file argument as an inactive file record.
    """
    if not argv:
        return NO_EVIDENCE

    project_path: str | None = None
    files: list[FileRecord] = []

    def add_file(path: str) -> None:
        if fs.is_file(path):
            files.append(FileRecord.for_path(path))
        else:
            logger.debug("Ignoring missing file argument: %s", path)

    i = 1
    while i < len(argv):
        arg = argv[i]
        if arg.startswith(_FOLDER_URI_FLAG) or arg.startswith(_FILE_URI_FLAG):
            is_folder = arg.startswith(_FOLDER_URI_FLAG)
            flag, eq, value = arg.partition("=")
            if flag not in (_FOLDER_URI_FLAG, _FILE_URI_FLAG):
                i += 1
                continue
            if not eq:
                if i + 1 >= len(argv):
                    break
                i += 1
                value = argv[i]
            path = decode_file_uri(value)
            if path and not is_noise_path(path):
                if is_folder:
                    if project_path is None:
                        project_path = path
                else:
                    add_file(path)
        elif not arg.startswith("-") and _has_separator(arg):
            path = decode_file_uri(arg)
            if path and not is_noise_path(path):
                if fs.is_dir(path):
                    if project_path is None:
                        project_path = path
                elif fs.exists(path):
                    add_file(path)
        i += 1

    if project_path is None and not files:
        return NO_EVIDENCE
    return Evidence(
        source=EvidenceSource.CMDLINE,
        files=tuple(files),
        project_path=project_path,
    )


def read_positional_files(
    argv: Sequence[str] | None,
    cwd: str | None = None,
    value_flags: frozenset[str] = frozenset(),
) -> Evidence:
    """Interpret a terminal editor's argument vector.

    Args:
        argv: Full argument vector including the executable, or None.
        cwd: The editor process's working directory, used to absolutize
            relative arguments. Falls back to this process's own cwd.
        value_flags: Flags that consume the following argument
            (``-u vimrc``), so their values are not mistaken for files.

    Returns:
        Evidence with one record per existing file argument. The first is
        active; ``tab_index`` is the position among recovered files.
    """
    if not argv:
        return NO_EVIDENCE

    base = cwd or os.getcwd()
    files: list[FileRecord] = []
    skip_next = False
    only_files = False
    for arg in argv[1:]:
        if skip_next:
            skip_next = False
            continue
        if not arg:
            continue
        if not only_files:
            if arg == "--":
                only_files = True
                continue
            if arg in value_flags:
                skip_next = True
                continue
            if arg.startswith("-") or arg.startswith("+"):
                continue
        path = arg if os.path.isabs(arg) else os.path.join(base, arg)
        if not fs.is_file(path):
            logger.debug("Ignoring non-file argument: %s", arg)
            continue
        files.append(FileRecord.for_path(
            path,
            is_active=not files,
            tab_index=len(files),
        ))

    if not files:
        return NO_EVIDENCE
    return Evidence(source=EvidenceSource.CMDLINE, files=tuple(files))
