"""Reader for VS Code's per-workspace session database.

VS Code keeps one storage directory per opened workspace:

.. code-block:: text

    ~/.config/Code/User/workspaceStorage/<id>/
        workspace.json     {"folder": "file:///home/u/myapp"}
        state.vscdb        sqlite key-value store (table ItemTable)

The open editors live under the ``memento/workbench.parts.editor`` key as a
JSON document describing the editor grid. The grid is a tree: branch nodes
split the window, leaf nodes are editor groups. Each group lists its
editors, and each editor embeds another JSON document (as a string) whose
``resourceJSON.fsPath`` is the file path:

.. code-block:: json

    {"editorpart.state": {"serializedGrid": {"root": {
        "type": "branch",
        "data": [{"type": "leaf", "data": {
            "editors": [{"id": "workbench.editors.files.fileEditorInput",
                         "value": "{\\"resourceJSON\\": {\\"fsPath\\": \\"/home/u/myapp/main.py\\"}}"}],
            "mru": [0]}}]}}}}

Index 0 of a group's ``mru`` (most recently used) list is that group's
active editor.

Store Selection:
    1. The store whose ``workspace.json`` names the caller's workspace.
    2. Otherwise the ``RECENT_SESSION_LIMIT`` most recently modified stores
       across all storage directories, newest first. This assumes the most
       recently written store belongs to the foreground window, which is a
       guess when several VS Code windows are open.

Malformed stores, missing keys and locked databases all read as "no
session data".
"""

from __future__ import annotations

import json
import logging
import platform
import sqlite3
from pathlib import Path
from typing import Any, Iterator, Sequence

from idefiles.evidence import fs
from idefiles.evidence.base import NO_EVIDENCE, Evidence, EvidenceSource
from idefiles.evidence.cmdline import decode_file_uri
from idefiles.models import FileRecord

logger = logging.getLogger(__name__)

STATE_DB_FILENAME = "state.vscdb"
WORKSPACE_JSON_FILENAME = "workspace.json"
EDITOR_STATE_KEY = "memento/workbench.parts.editor"

# Number of most recently modified stores tried when no store matches.
RECENT_SESSION_LIMIT = 2

# Product directory names of VS Code builds sharing the storage layout.
_PRODUCT_DIRS: tuple[str, ...] = ("Code", "Code - Insiders", "Code - OSS", "VSCodium")


def default_storage_dirs(home: Path | None = None, system: str | None = None) -> tuple[Path, ...]:
    """Per-platform ``workspaceStorage`` directories of known VS Code builds."""
    home_dir = home if home is not None else Path.home()
    system_name = (system or platform.system()).lower()
    if system_name == "darwin":
        base = home_dir / "Library" / "Application Support"
    elif system_name == "windows":
        base = home_dir / "AppData" / "Roaming"
    else:
        base = home_dir / ".config"
    return tuple(base / product / "User" / "workspaceStorage" for product in _PRODUCT_DIRS)


def _normalize_dir(path: str) -> str:
    return path.rstrip("/\\") or path


def read_workspace_folder(workspace_json: Path) -> str | None:
    """Return the local folder recorded in a store's ``workspace.json``."""
    content = fs.read_text(workspace_json)
    if content is None:
        return None
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    for key in ("folder", "workspace"):
        value = data.get(key)
        if isinstance(value, str):
            return decode_file_uri(value)
    return None


def _walk_groups(node: Any) -> Iterator[dict]:
    """Yield editor-group dicts from a serialized grid node, depth first."""
    if not isinstance(node, dict):
        return
    data = node.get("data")
    if isinstance(data, list):
        for child in data:
            yield from _walk_groups(child)
    elif node.get("type") != "branch" and isinstance(data, dict):
        yield data


def _editor_path(editor: Any) -> str | None:
    """Decode one serialized editor entry to its file path."""
    if not isinstance(editor, dict):
        return None
    value = editor.get("value")
    if not isinstance(value, str):
        return None
    try:
        descriptor = json.loads(value)
    except json.JSONDecodeError:
        return None
    if not isinstance(descriptor, dict):
        return None
    resource = descriptor.get("resourceJSON")
    if not isinstance(resource, dict):
        return None
    if resource.get("scheme", "file") != "file":
        return None
    path = resource.get("fsPath") or resource.get("path")
    return path if isinstance(path, str) and path else None


def parse_editor_state(state: Any) -> list[FileRecord]:
    """Extract open editors from the decoded editor-layout record.

    Args:
        state: The JSON value stored under ``EDITOR_STATE_KEY``.

    Returns:
        Records in group order, then tab order within a group. The MRU head
        of each group is marked active. Empty for unrecognised layouts.
    """
    if not isinstance(state, dict):
        return []
    part = state.get("editorpart.state")
    if isinstance(part, str):
        try:
            part = json.loads(part)
        except json.JSONDecodeError:
            return []
    if not isinstance(part, dict):
        return []
    grid = part.get("serializedGrid")
    if not isinstance(grid, dict):
        return []

    files: list[FileRecord] = []
    for group in _walk_groups(grid.get("root")):
        editors = group.get("editors")
        if not isinstance(editors, list):
            continue
        mru = group.get("mru")
        active_index = mru[0] if isinstance(mru, list) and mru and isinstance(mru[0], int) else None
        for index, editor in enumerate(editors):
            path = _editor_path(editor)
            if path is None:
                continue
            files.append(FileRecord.for_path(
                path,
                is_active=index == active_index,
                tab_index=index,
            ))
    return files


def read_state_database(db_path: Path) -> list[FileRecord]:
    """Read open editors from a ``state.vscdb`` sqlite file.

    Returns:
        Recovered records, or an empty list when the database is missing,
        locked, malformed or has no editor state.
    """
    if not fs.is_file(db_path):
        return []
    try:
        conn = sqlite3.connect(f"{db_path.as_uri()}?mode=ro", uri=True)
    except sqlite3.Error:
        logger.debug("Cannot open session database %s", db_path, exc_info=True)
        return []
    try:
        row = conn.execute(
            "SELECT value FROM ItemTable WHERE key = ?", (EDITOR_STATE_KEY,),
        ).fetchone()
    except sqlite3.Error:
        logger.debug("Cannot query session database %s", db_path, exc_info=True)
        return []
    finally:
        conn.close()

    if row is None or row[0] is None:
        return []
    raw = row[0]
    if not isinstance(raw, (str, bytes)):
        logger.debug("Non-text editor state in %s", db_path)
        return []
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    try:
        state = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Malformed editor state in %s", db_path)
        return []
    return parse_editor_state(state)


class VSCodeSessionReader:
    """Finds and reads the session store for a VS Code workspace.

    Usage::

        reader = VSCodeSessionReader(default_storage_dirs())
        evidence = reader.read("/home/u/myapp")
    """

    def __init__(self, storage_dirs: Sequence[Path]) -> None:
        self.storage_dirs: tuple[Path, ...] = tuple(storage_dirs)

    def _store_dirs(self) -> list[Path]:
        stores: list[Path] = []
        for storage_dir in self.storage_dirs:
            stores.extend(entry for entry in fs.list_dir(storage_dir) if fs.is_dir(entry))
        return stores

    def find_store(self, workspace_path: str) -> Path | None:
        """Return the store whose ``workspace.json`` names ``workspace_path``.

        An exact match on the decoded folder is preferred over every store.
        Only then is the raw file searched for the ``file://`` URI, which
        must end the JSON string (optionally after a trailing slash) so
        ``/u/app`` never matches ``/u/app2`` or ``/u/app/sub``.
        """
        wanted = _normalize_dir(workspace_path)
        stores = self._store_dirs()
        for store in stores:
            folder = read_workspace_folder(store / WORKSPACE_JSON_FILENAME)
            if folder is not None and _normalize_dir(folder) == wanted:
                return store

        uri_fragments = (f'file://{wanted}"', f'file://{wanted}/"')
        for store in stores:
            content = fs.read_text(store / WORKSPACE_JSON_FILENAME)
            if content is not None and any(fragment in content for fragment in uri_fragments):
                return store
        return None

    def recent_stores(self) -> list[Path]:
        """The most recently modified stores, newest first."""
        stores = sorted(self._store_dirs(), key=fs.modified_time, reverse=True)
        return stores[:RECENT_SESSION_LIMIT]

    def _evidence(self, store: Path, files: list[FileRecord]) -> Evidence:
        return Evidence(
            source=EvidenceSource.SESSION,
            files=tuple(files),
            project_path=read_workspace_folder(store / WORKSPACE_JSON_FILENAME),
            authoritative=True,
        )

    def read(self, workspace_path: str | None) -> Evidence:
        """Recover open editors for a workspace.

        Args:
            workspace_path: Workspace folder from the command line, or None
                when VS Code was started without one.

        Returns:
            Session evidence, with the workspace folder recorded by the
            store as project path; ``NO_EVIDENCE`` when no store has open
            editors.
        """
        if workspace_path:
            store = self.find_store(workspace_path)
            if store is not None:
                # The workspace's own store is final, even when empty.
                files = read_state_database(store / STATE_DB_FILENAME)
                if files:
                    return self._evidence(store, files)
                logger.debug("Session store %s has no open editors", store)
                return NO_EVIDENCE

        for store in self.recent_stores():
            files = read_state_database(store / STATE_DB_FILENAME)
            if files:
                logger.debug("Using recent session store %s", store)
                return self._evidence(store, files)
        return NO_EVIDENCE
