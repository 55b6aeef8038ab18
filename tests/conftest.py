"""Shared pytest fixtures and test helpers for ariesbot tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from ariesbot.bot.context import BotData, InvocationContext
from ariesbot.bot.router import Router, build_router
from ariesbot.domain.types import Member, Scope
from ariesbot.infrastructure.database.engine import default_db_url, init_database
from ariesbot.infrastructure.directory import StaticDirectory
from ariesbot.infrastructure.registry import UserRegistry

GUILD = Scope(id=7)
ADMIN_ROLE_ID = 900

ALICE = Member(id=1001, name="alice")  # holds bot_admin
BOB = Member(id=1002, name="bob")
CAROL = Member(id=1003, name="carol")

MakeCtx = Callable[..., InvocationContext]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(default_db_url(tmp_path))
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def registry(db_engine: Engine) -> UserRegistry:
    return UserRegistry(db_engine)


@pytest.fixture
def directory() -> StaticDirectory:
    """One guild with a configured admin role held only by alice."""
    d = StaticDirectory(roles={"bot_admin": ADMIN_ROLE_ID}, guild_id=GUILD.id)
    d.add_member(ALICE, roles=["bot_admin"])
    d.add_member(BOB)
    d.add_member(CAROL)
    return d


@pytest.fixture
def bot_data(registry: UserRegistry, directory: StaticDirectory) -> BotData:
    return BotData(registry=registry, directory=directory)


@pytest.fixture
def router() -> Router:
    return build_router()


@pytest.fixture
def make_ctx(bot_data: BotData) -> MakeCtx:
    """Build an InvocationContext; pass ``scope=None`` for a direct message."""

    def _make(caller: Member = BOB, scope: Scope | None = GUILD) -> InvocationContext:
        return InvocationContext(caller=caller, scope=scope, data=bot_data)

    return _make


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty temp directory with no inherited config.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.delenv("ARIESBOT_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


def write_config(root: Path, body: str) -> Path:
    """Write ``ariesbot.toml`` under *root* and return its path."""
    path = root / "ariesbot.toml"
    path.write_text(body, encoding="utf-8")
    return path
