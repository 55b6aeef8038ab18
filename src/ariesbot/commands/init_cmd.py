"""Command: database initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ariesbot.commands._base import AriesCommand

if TYPE_CHECKING:
    from ariesbot.commands._context import AppContext


@click.command(
    "init",
    cls=AriesCommand,
    examples="""\
  ariesbot init
  ariesbot --config deploy/ariesbot.toml init""",
)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the database and stamp it at the latest migration."""
    from ariesbot.infrastructure.database.migrations import stamp_head
    from ariesbot.services.result import ServiceResult

    db_url = app.settings.db_url
    count = app.data.registry.count()
    stamp_head(db_url)
    app.emit(ServiceResult.success("init", database=db_url, users=count))
