# src/testscout/cli/locate_cmds.py

import os

import click
import structlog

from testscout.discovery import locate
from testscout.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.locate")


@click.command(name="locate")
@click.argument("path", type=str)
@click.option(
    "--existing",
    is_flag=True,
    default=False,
    help="Only print candidate directories that exist on disk.",
)
def locate_cli(path: str, existing: bool):
    """Print the directories that may hold tests for PATH, most specific first."""
    candidates = locate(path)
    if existing:
        candidates = [candidate for candidate in candidates if os.path.isdir(candidate)]
    log.debug("Search locations computed", path=path, count=len(candidates), emoji_key="path")
    for candidate in candidates:
        click.echo(candidate)

# 🖥️⚙️
