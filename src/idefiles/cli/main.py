"""idefiles CLI: report the files open in running code editors.

Entry point for the ``idefiles`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    detect     -- Detect the open files of one editor, or the first running one.
    editors    -- List known editors and their keys.
    processes  -- List running processes attributed to an editor.

Usage::

    idefiles detect                          # First running editor, JSON
    idefiles detect --editor goland          # A specific editor
    idefiles detect --active --format paths  # Just the focused file
    idefiles -v detect --format table        # Debug logging on stderr
    idefiles --config ~/idefiles.yaml detect
    idefiles editors
    idefiles processes
"""

from __future__ import annotations

import logging

import click

from idefiles import __version__
from idefiles.cli.detect_cmd import detect_command
from idefiles.cli.editors_cmd import editors_command
from idefiles.cli.processes_cmd import processes_command

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Log detection decisions to stderr.",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Configuration file (default: $IDEFILES_CONFIG or ~/.config/idefiles/config.yaml).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """idefiles: find out which files your editor has open.

    Inspects running editor processes (window titles, command lines) and
    the editors' own session state to report open files, the active file
    and the project.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)
    ctx.ensure_object(dict)["config_path"] = config_path


# Register all subcommands
cli.add_command(detect_command)
cli.add_command(editors_command)
cli.add_command(processes_command)
