"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Bot state is opened lazily so ``--help`` and
``--version`` never touch the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ariesbot.infrastructure.directory import StaticDirectory
from ariesbot.output.formatters import format_reply, format_result

if TYPE_CHECKING:
    from ariesbot.bot.context import BotData, InvocationContext
    from ariesbot.bot.router import Reply, Router
    from ariesbot.config.settings import AriesSettings
    from ariesbot.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: AriesSettings) -> None:
        self.settings = settings
        self.directory = StaticDirectory.from_config(settings.directory)
        self._data: BotData | None = None
        self._router: Router | None = None

        from ariesbot.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def data(self) -> BotData:
        """Shared bot state (database opened on first access)."""
        if self._data is None:
            from ariesbot.bot.context import BotData

            self._data = BotData.from_settings(self.settings, directory=self.directory)
        return self._data

    @property
    def router(self) -> Router:
        if self._router is None:
            from ariesbot.bot.router import build_router

            self._router = build_router(
                prefix=self.settings.bot.prefix,
                case_insensitive=self.settings.bot.case_insensitive,
            )
        return self._router

    def invocation_context(
        self,
        caller_id: int,
        caller_name: str | None,
        guild_id: int | None,
        roles: tuple[str, ...],
        *,
        dm: bool = False,
    ) -> InvocationContext:
        """Build the context a platform adapter would hand the core."""
        from ariesbot.bot.context import InvocationContext
        from ariesbot.domain.types import Member, Scope

        known = self.directory.resolve_member(None, str(caller_id))
        name = caller_name or (known.name if known else str(caller_id))
        caller = Member(id=caller_id, name=name)
        self.directory.add_member(caller, roles=list(roles))

        scope_id = None if dm else (guild_id if guild_id is not None else self.directory.guild_id)
        scope = Scope(id=scope_id) if scope_id is not None else None
        return InvocationContext(caller=caller, scope=scope, data=self.data)

    def emit(self, result: ServiceResult) -> None:
        """Print an operator result; failures go to stderr with exit code 1."""
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def emit_reply(self, reply: Reply) -> None:
        """Print a bot reply; failed invocations exit with code 1."""
        output = format_reply(reply.result, reply.text, json_output=self.settings.json_output)
        if reply.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        if self._data is not None:
            self._data.close()
            self._data = None
