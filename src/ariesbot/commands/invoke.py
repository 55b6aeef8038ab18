"""Command: structured invocation of a bot command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ariesbot.commands._base import AriesCommand, identity_options

if TYPE_CHECKING:
    from ariesbot.commands._context import AppContext


def _parse_params(raw: tuple[str, ...]) -> dict[str, str]:
    params: dict[str, str] = {}
    for item in raw:
        name, sep, value = item.partition("=")
        if not sep or not name:
            msg = f"Expected NAME=VALUE, got {item!r}"
            raise click.BadParameter(msg, param_hint="--param")
        params[name] = value
    return params


@click.command(
    cls=AriesCommand,
    examples="""\
  ariesbot invoke ping -p text=hello --as 42
  ariesbot invoke age -p user=43 --as 42
  ariesbot --json invoke rm_user -p user=43 --as 42 --role bot_admin""",
)
@click.argument("command_name")
@click.option("-p", "--param", "raw_params", multiple=True, help="Parameter as NAME=VALUE.")
@identity_options
@click.pass_obj
def invoke(
    app: AppContext,
    command_name: str,
    raw_params: tuple[str, ...],
    caller_id: int,
    caller_name: str | None,
    guild_id: int | None,
    dm: bool,
    roles: tuple[str, ...],
) -> None:
    """Invoke COMMAND_NAME through the structured surface."""
    from ariesbot.bot.descriptors import Invocation
    from ariesbot.domain.errors import UnknownCommandError

    try:
        app.router.get(command_name)
    except UnknownCommandError as exc:
        raise click.UsageError(str(exc)) from exc

    ctx = app.invocation_context(caller_id, caller_name, guild_id, roles, dm=dm)
    invocation = Invocation(name=command_name, params=_parse_params(raw_params))
    app.emit_reply(app.router.reply(invocation, ctx))
