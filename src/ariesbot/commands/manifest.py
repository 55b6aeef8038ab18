"""Command: print the structured-surface command manifest."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from ariesbot.commands._context import AppContext


@click.command("commands")
@click.pass_obj
def manifest(app: AppContext) -> None:
    """List the bot's commands as the platform registration payload."""
    entries = app.router.manifest()
    if app.settings.json_output:
        click.echo(json.dumps(entries, indent=2))
        return
    for entry in entries:
        options = " ".join(
            f"<{o['name']}>" if o["required"] else f"[{o['name']}]" for o in entry["options"]
        )
        line = f"{app.router.prefix}{entry['name']} {options}".rstrip()
        click.echo(f"{line:<24} {entry['description']}")
