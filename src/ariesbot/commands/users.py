"""Command: list the user registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from ariesbot.commands._context import AppContext


@click.command()
@click.pass_obj
def users(app: AppContext) -> None:
    """Show every user stored in the registry."""
    from ariesbot.domain.errors import StoreFaultError
    from ariesbot.services.result import ServiceResult

    try:
        rows = app.data.registry.list_users()
    except StoreFaultError as exc:
        app.emit(ServiceResult.failure("users", exc.code, exc.message, **exc.detail))
        return
    app.emit(
        ServiceResult.success(
            "users",
            count=len(rows),
            items=[row.model_dump() for row in rows],
        )
    )
