"""``idefiles processes`` -- Show which running processes look like editors.

A troubleshooting aid: lists every process claimed by a detection
strategy, with its window title, so a failing ``detect`` can be traced to
a missing process or an unreadable title.

Exit Codes:
    0 -- Listing printed (possibly empty).
    1 -- The process table could not be read.
"""

from __future__ import annotations

import json
import sys

import click

from idefiles.cli.context import get_config
from idefiles.cli.output import print_processes_table
from idefiles.exceptions import DetectionError
from idefiles.registry import default_registry


@click.command("processes")
@click.option(
    "--json", "as_json",
    is_flag=True,
    default=False,
    help="Print the listing as JSON.",
)
@click.pass_context
def processes_command(ctx: click.Context, as_json: bool) -> None:
    """List running processes attributed to a supported editor."""
    registry = default_registry(get_config(ctx))
    try:
        pairs = registry.matching_processes()
    except DetectionError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    rows = [(process, strategy.display_name) for process, strategy in pairs]
    if as_json:
        click.echo(json.dumps([
            {
                "pid": process.pid,
                "name": process.process_name,
                "editor": editor,
                "window_title": process.window_title,
                "executable": process.executable_path,
            }
            for process, editor in rows
        ], indent=2))
        return
    print_processes_table(rows)
