"""Command: run a prefixed chat line through the bot."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ariesbot.commands._base import AriesCommand, identity_options

if TYPE_CHECKING:
    from ariesbot.commands._context import AppContext


@click.command(
    cls=AriesCommand,
    examples="""\
  ariesbot say "!ping hello" --as 42
  ariesbot say "!add_user" --as 42 --name alice
  ariesbot say "!rm_user <@43>" --as 42 --guild 7 --role bot_admin""",
)
@click.argument("line")
@identity_options
@click.pass_obj
def say(
    app: AppContext,
    line: str,
    caller_id: int,
    caller_name: str | None,
    guild_id: int | None,
    dm: bool,
    roles: tuple[str, ...],
) -> None:
    """Send LINE as a chat message and print the bot's reply."""
    ctx = app.invocation_context(caller_id, caller_name, guild_id, roles, dm=dm)
    reply = app.router.handle_line(line, ctx)
    if reply is None:
        msg = f"Not a command (prefix is {app.router.prefix!r}): {line}"
        raise click.UsageError(msg)
    app.emit_reply(reply)
