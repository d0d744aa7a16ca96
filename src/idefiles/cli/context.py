"""Per-invocation state shared by the idefiles subcommands."""

from __future__ import annotations

import sys

import click

from idefiles.config import DetectorConfig, load_config
from idefiles.exceptions import ConfigError


def get_config(ctx: click.Context) -> DetectorConfig:
    """Load the configuration once per invocation.

    Exits with status 2 when the configuration file is unusable.
    """
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        try:
            obj["config"] = load_config(obj.get("config_path"))
        except ConfigError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(2)
    return obj["config"]
