"""Shared bot state and the per-invocation context.

:class:`BotData` is built once at startup and holds the only store
handle; every :class:`InvocationContext` receives it explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ariesbot.infrastructure.database.engine import init_database
from ariesbot.infrastructure.directory import StaticDirectory
from ariesbot.infrastructure.registry import UserRegistry

if TYPE_CHECKING:
    from ariesbot.config.settings import AriesSettings
    from ariesbot.domain.types import Member, Scope
    from ariesbot.infrastructure.directory import Directory


@dataclass(frozen=True)
class BotData:
    """State shared by every invocation."""

    registry: UserRegistry
    directory: Directory
    admin_role: str = "bot_admin"
    prefix: str = "!"
    case_insensitive: bool = True
    expose_diagnostics: bool = True
    max_workers: int = 8

    @classmethod
    def from_settings(
        cls,
        settings: AriesSettings,
        *,
        directory: Directory | None = None,
    ) -> BotData:
        """Open the configured database and assemble the shared state."""
        engine = init_database(settings.db_url)
        return cls(
            registry=UserRegistry(engine),
            directory=directory or StaticDirectory.from_config(settings.directory),
            admin_role=settings.auth.admin_role,
            prefix=settings.bot.prefix,
            case_insensitive=settings.bot.case_insensitive,
            expose_diagnostics=settings.replies.expose_diagnostics,
            max_workers=settings.bot.max_workers,
        )

    def close(self) -> None:
        self.registry.engine.dispose()


@dataclass(frozen=True)
class InvocationContext:
    """Who is invoking, where, and with which shared state."""

    caller: Member
    scope: Scope | None
    data: BotData

    @property
    def registry(self) -> UserRegistry:
        return self.data.registry

    @property
    def directory(self) -> Directory:
        return self.data.directory
