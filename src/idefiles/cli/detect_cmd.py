"""``idefiles detect`` -- Report the files open in a running editor.

With ``--editor KEY`` detects that editor; without it (or with ``--auto``)
detects the first running supported editor, GUI IDEs before terminal
editors.

Exit Codes:
    0 -- An outcome was produced.
    1 -- Detection failed (no process, no file, unsupported editor,
         process table unreadable).
    2 -- Usage or configuration error.
"""

from __future__ import annotations

import sys

import click

from idefiles.cli.context import get_config
from idefiles.cli.output import OUTPUT_FORMATS, format_outcome, print_outcome_table
from idefiles.editors import EditorKind
from idefiles.exceptions import DetectionError
from idefiles.registry import default_registry


def _parse_editor(ctx: click.Context, param: click.Parameter, value: str | None) -> EditorKind | None:
    if value is None:
        return None
    kind = EditorKind.from_key(value)
    if kind is None:
        keys = ", ".join(k.key for k in EditorKind)
        raise click.BadParameter(f"unknown editor '{value}' (expected one of: {keys})")
    return kind


@click.command("detect")
@click.option(
    "--editor", "-e", "editor",
    callback=_parse_editor,
    default=None,
    metavar="KEY",
    help="Editor key (see 'idefiles editors'). Default: auto-detect.",
)
@click.option(
    "--auto", "auto",
    is_flag=True,
    default=False,
    help="Detect the first running supported editor.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="json",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--active", "active_only",
    is_flag=True,
    default=False,
    help="Only report the active file.",
)
@click.pass_context
def detect_command(
    ctx: click.Context,
    editor: EditorKind | None,
    auto: bool,
    output_format: str,
    active_only: bool,
) -> None:
    """Detect the files open in a running editor."""
    if editor is not None and auto:
        raise click.UsageError("--editor and --auto are mutually exclusive")

    registry = default_registry(get_config(ctx))
    try:
        outcome = registry.auto_detect() if editor is None else registry.detect(editor)
    except DetectionError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if output_format == "table":
        print_outcome_table(outcome, active_only)
        return

    text = format_outcome(outcome, output_format, active_only)
    if text:
        click.echo(text)
