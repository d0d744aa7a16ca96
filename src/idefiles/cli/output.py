"""Output formatting helpers for the idefiles CLI.

Text formats (``json``, ``plain``, ``paths``) are built as plain strings so
they can be piped and tested without a terminal. The ``table`` format and
the listing commands render with rich.

Plain Format::

    * /home/u/myapp/main.go        active file
      /home/u/myapp/go.mod
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from idefiles.editors import EditorProfile
from idefiles.models import DetectionOutcome, FileRecord, ProcessSnapshot

OUTPUT_FORMATS: tuple[str, ...] = ("json", "plain", "paths", "table")

console = Console()


def _selected(outcome: DetectionOutcome, active_only: bool) -> list[FileRecord]:
    if not active_only:
        return list(outcome.open_files)
    active = outcome.active_file
    return [active] if active is not None else []


def outcome_to_json(outcome: DetectionOutcome, active_only: bool = False) -> str:
    """Serialize an outcome, or only its active file record."""
    payload: Any
    if active_only:
        active = outcome.active_file
        payload = active.to_dict() if active is not None else None
    else:
        payload = outcome.to_dict()
    return json.dumps(payload, indent=2)


def format_plain(outcome: DetectionOutcome, active_only: bool = False) -> str:
    """One file per line, the active file marked with ``*``."""
    lines = [
        f"{'*' if record.is_active else ' '} {record.path}"
        for record in _selected(outcome, active_only)
    ]
    return "\n".join(lines)


def format_paths(outcome: DetectionOutcome, active_only: bool = False) -> str:
    """Bare paths, one per line."""
    return "\n".join(record.path for record in _selected(outcome, active_only))


def format_outcome(outcome: DetectionOutcome, output_format: str, active_only: bool = False) -> str:
    """Render an outcome in one of the text formats.

    Raises:
        ValueError: For ``table`` or an unknown format.
    """
    if output_format == "json":
        return outcome_to_json(outcome, active_only)
    if output_format == "plain":
        return format_plain(outcome, active_only)
    if output_format == "paths":
        return format_paths(outcome, active_only)
    raise ValueError(f"not a text format: {output_format}")


def print_outcome_table(outcome: DetectionOutcome, active_only: bool = False) -> None:
    """Print an outcome as a rich table."""
    title = outcome.editor_display_name
    if outcome.project_path:
        title = f"{title} ({outcome.project_path})"

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("", justify="center")
    table.add_column("File", style="bold")
    table.add_column("Path", style="dim")
    table.add_column("Tab", justify="right")
    table.add_column("Project")

    for record in _selected(outcome, active_only):
        marker = Text("*", style="bold green") if record.is_active else Text("")
        name = Text(record.display_name + (" [+]" if record.is_modified else ""))
        table.add_row(
            marker,
            name,
            record.path,
            "-" if record.tab_index is None else str(record.tab_index),
            record.owning_project_name or "-",
        )
    console.print(table)


def print_editors_table(profiles: Sequence[EditorProfile], supported: set) -> None:
    """Print known editors with their keys and detection support."""
    table = Table(title="Known Editors", show_header=True, header_style="bold")
    table.add_column("Key", style="bold")
    table.add_column("Editor")
    table.add_column("Family", style="dim")
    table.add_column("Binaries", style="dim")
    table.add_column("Detection", justify="center")

    for profile in profiles:
        status = (
            Text("yes", style="green") if profile.kind in supported
            else Text("no", style="red")
        )
        table.add_row(
            profile.kind.key,
            profile.display_name,
            profile.family,
            ", ".join(profile.binary_names) or "-",
            status,
        )
    console.print(table)


def print_processes_table(rows: Sequence[tuple[ProcessSnapshot, str]]) -> None:
    """Print processes with the editor each one was attributed to."""
    if not rows:
        console.print("[dim]No editor processes found.[/dim]")
        return

    table = Table(title="Editor Processes", show_header=True, header_style="bold")
    table.add_column("PID", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Editor")
    table.add_column("Window Title", style="dim")

    for process, editor in rows:
        table.add_row(str(process.pid), process.process_name, editor, process.window_title or "-")
    console.print(table)
