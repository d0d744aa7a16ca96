"""Reader for JetBrains per-project workspace state (``.idea/workspace.xml``).

JetBrains IDEs persist the open editor tabs of a project in the
``FileEditorManager`` component of the workspace file:

.. code-block:: xml

    <component name="FileEditorManager">
      <leaf>
        <file current-in-tab="true">
          <entry file="file://$PROJECT_DIR$/cmd/main.go">...</entry>
        </file>
        <file current-in-tab="false">
          <entry file="file://$PROJECT_DIR$/go.mod">...</entry>
        </file>
      </leaf>
    </component>

``current-in-tab`` marks the focused tab. The file is rewritten by the IDE
while it runs, so it can be stale, truncated, or from an older release
without this component. When the structured section yields nothing, a
path-only scan of the raw text collects up to ``FALLBACK_FILE_LIMIT``
project files with no focus information.

Every recovered path is checked on disk; files that no longer exist are
dropped.
"""

from __future__ import annotations

import logging
import os
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from idefiles.evidence import fs
from idefiles.evidence.base import NO_EVIDENCE, Evidence, EvidenceSource
from idefiles.evidence.project_locator import METADATA_DIR
from idefiles.models import FileRecord

logger = logging.getLogger(__name__)

# Workspace files to probe, in priority order.
WORKSPACE_FILENAMES: tuple[str, ...] = (
    "workspace.xml",
    "workspace_with_tabs.xml",
)

EDITOR_COMPONENT = "FileEditorManager"

# Upper bound on files collected by the path-only fallback.
FALLBACK_FILE_LIMIT = 10

_PROJECT_DIR_URL = re.compile(r'file://\$PROJECT_DIR\$([^"<>\s]+)')

_PROJECT_DIR_PREFIX = "file://$PROJECT_DIR$"
_USER_HOME_PREFIX = "file://$USER_HOME$"
_ABSOLUTE_PREFIX = "file://"


def _join_relative(base: str, relative: str) -> str:
    return os.path.join(base, relative.lstrip("/"))


def resolve_entry_url(url: str, project_path: str, home: str | None = None) -> str | None:
    """Turn a workspace ``entry file=`` URL into a filesystem path.

    Args:
        url: The URL, e.g. ``file://$PROJECT_DIR$/src/app.py``.
        project_path: Directory substituted for ``$PROJECT_DIR$``.
        home: Directory substituted for ``$USER_HOME$``.

    Returns:
        The path, or None for archives and other non-file URLs.
    """
    if url.startswith(_PROJECT_DIR_PREFIX):
        return _join_relative(project_path, url[len(_PROJECT_DIR_PREFIX):])
    if url.startswith(_USER_HOME_PREFIX):
        home_dir = home if home is not None else str(Path.home())
        return _join_relative(home_dir, url[len(_USER_HOME_PREFIX):])
    if url.startswith(_ABSOLUTE_PREFIX) and "$" not in url:
        return url[len(_ABSOLUTE_PREFIX):] or None
    return None


def _record(path: str, *, is_active: bool, tab_index: int | None) -> FileRecord:
    return FileRecord.for_path(path, is_active=is_active, tab_index=tab_index)


def parse_editor_section(
    content: str,
    project_path: str,
    home: str | None = None,
) -> list[FileRecord]:
    """Extract open tabs from the ``FileEditorManager`` component.

    Args:
        content: Raw workspace XML.
        project_path: Project directory for ``$PROJECT_DIR$``.
        home: Override for ``$USER_HOME$`` (for testing).

    Returns:
        Records for tabs whose files exist, in tab order. Empty when the
        XML is malformed or the component is missing.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError:
        logger.debug("Malformed workspace XML under %s", project_path)
        return []

    files: list[FileRecord] = []
    for component in root.iter("component"):
        if component.get("name") != EDITOR_COMPONENT:
            continue
        for file_el in component.iter("file"):
            current = file_el.get("current-in-tab")
            entry = file_el.find("entry")
            if current is None or entry is None:
                continue
            path = resolve_entry_url(entry.get("file", ""), project_path, home)
            if path is None or not fs.is_file(path):
                continue
            files.append(_record(
                path,
                is_active=current == "true",
                tab_index=len(files),
            ))
        break
    return files


def scan_project_urls(content: str, project_path: str, limit: int = FALLBACK_FILE_LIMIT) -> list[FileRecord]:
    """Collect existing regular ``$PROJECT_DIR$`` files mentioned anywhere in ``content``.

    Returns:
        At most ``limit`` inactive records, in order of first mention.
    """
    files: list[FileRecord] = []
    seen: set[str] = set()
    for match in _PROJECT_DIR_URL.finditer(content):
        path = _join_relative(project_path, match.group(1))
        if path in seen or not fs.is_file(path):
            continue
        seen.add(path)
        files.append(_record(path, is_active=False, tab_index=None))
        if len(files) >= limit:
            break
    return files


def read_jetbrains_workspace(project_path: str, home: str | None = None) -> Evidence:
    """Recover open editor tabs from a JetBrains project's metadata.

    Args:
        project_path: Project root (the directory holding ``.idea``).
        home: Override for ``$USER_HOME$`` (for testing).

    Returns:
        Authoritative evidence from the first workspace file with a usable
        ``FileEditorManager`` section; otherwise non-authoritative evidence
        from the capped path-only scan; ``NO_EVIDENCE`` when neither finds
        an existing file.
    """
    idea_dir = Path(project_path) / METADATA_DIR
    if not fs.is_dir(idea_dir):
        return NO_EVIDENCE

    contents: list[str] = []
    for filename in WORKSPACE_FILENAMES:
        content = fs.read_text(idea_dir / filename)
        if content is None:
            continue
        files = parse_editor_section(content, project_path, home)
        if files:
            return Evidence(
                source=EvidenceSource.SESSION,
                files=tuple(files),
                project_path=project_path,
                authoritative=True,
            )
        contents.append(content)

    fallback: list[FileRecord] = []
    for content in contents:
        remaining = FALLBACK_FILE_LIMIT - len(fallback)
        if remaining <= 0:
            break
        known = {record.path for record in fallback}
        for record in scan_project_urls(content, project_path, remaining):
            if record.path not in known:
                fallback.append(record)

    if not fallback:
        return NO_EVIDENCE
    return Evidence(
        source=EvidenceSource.SESSION,
        files=tuple(fallback[:FALLBACK_FILE_LIMIT]),
        project_path=project_path,
    )
