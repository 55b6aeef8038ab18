"""Command: apply pending database migrations."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ariesbot.commands._base import AriesCommand

if TYPE_CHECKING:
    from ariesbot.commands._context import AppContext


@click.command(
    cls=AriesCommand,
    examples="""\
  ariesbot upgrade --check
  ariesbot upgrade""",
)
@click.option("--check", "check_only", is_flag=True, help="List pending migrations only.")
@click.pass_obj
def upgrade(app: AppContext, check_only: bool) -> None:
    """Bring the database schema up to date."""
    from ariesbot.services.upgrade import UpgradeService

    svc = UpgradeService(app.data.registry.engine)
    app.emit(svc.check_pending() if check_only else svc.apply())
