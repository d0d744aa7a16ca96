"""``idefiles editors`` -- List known editors and their keys.

Exit Codes:
    0 -- Always (informational command).
"""

from __future__ import annotations

import click

from idefiles.cli.output import print_editors_table
from idefiles.editors import EDITOR_PROFILES, FAMILY_NONE


@click.command("editors")
@click.option(
    "--keys", "keys_only",
    is_flag=True,
    default=False,
    help="Print only the keys of detectable editors.",
)
def editors_command(keys_only: bool) -> None:
    """List known editors, their keys and detection support."""
    supported = {p.kind for p in EDITOR_PROFILES if p.family != FAMILY_NONE}
    if keys_only:
        for profile in EDITOR_PROFILES:
            if profile.kind in supported:
                click.echo(profile.kind.key)
        return
    print_editors_table(EDITOR_PROFILES, supported)
