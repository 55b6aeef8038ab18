"""Tests for the bot command handlers, dispatched through the router."""

from __future__ import annotations

from typing import Any

import pytest

from ariesbot.bot.context import BotData, InvocationContext
from ariesbot.bot.descriptors import Invocation
from ariesbot.bot.router import Router
from ariesbot.domain.types import Member, Scope
from ariesbot.infrastructure.directory import StaticDirectory
from ariesbot.infrastructure.registry import UserRegistry
from tests.conftest import ALICE, BOB, CAROL, GUILD, MakeCtx


def run(router: Router, ctx: InvocationContext, name: str, **params: Any) -> tuple[bool, str]:
    reply = router.reply(Invocation(name=name, params=params), ctx)
    return reply.ok, reply.text


class TestPing:
    def test_without_text(self, router: Router, make_ctx: MakeCtx) -> None:
        assert run(router, make_ctx(), "ping") == (True, "pong")

    def test_with_text(self, router: Router, make_ctx: MakeCtx) -> None:
        assert run(router, make_ctx(), "ping", text="hi") == (True, "pong: hi")


class TestAge:
    def test_defaults_to_caller(self, router: Router, make_ctx: MakeCtx) -> None:
        ok, text = run(router, make_ctx(BOB), "age")
        assert ok
        assert text == f"bob's account was created at {BOB.created_at.isoformat()}"

    def test_other_user(self, router: Router, make_ctx: MakeCtx) -> None:
        ok, text = run(router, make_ctx(BOB), "age", user=ALICE)
        assert ok
        assert text.startswith("alice's account was created at ")

    def test_works_in_direct_messages(self, router: Router, make_ctx: MakeCtx) -> None:
        ok, _ = run(router, make_ctx(BOB, scope=None), "age")
        assert ok


class TestGid:
    def test_in_guild(self, router: Router, make_ctx: MakeCtx) -> None:
        assert run(router, make_ctx(), "gid") == (True, "guild id: 7")

    def test_outside_guild(self, router: Router, make_ctx: MakeCtx) -> None:
        assert run(router, make_ctx(scope=None), "gid") == (True, "guild id: None")


class TestGetUser:
    def test_absent(self, router: Router, make_ctx: MakeCtx) -> None:
        assert run(router, make_ctx(BOB), "get_user") == (True, "None")

    def test_present(
        self, router: Router, make_ctx: MakeCtx, registry: UserRegistry
    ) -> None:
        registry.insert(BOB.id, "bob")
        assert run(router, make_ctx(BOB), "get_user") == (True, "User(id=1002, name='bob')")


class TestAddUser:
    def test_adds_caller_by_default(
        self, router: Router, make_ctx: MakeCtx, registry: UserRegistry
    ) -> None:
        assert run(router, make_ctx(BOB), "add_user") == (True, "user bob was created")
        assert registry.lookup(BOB.id) is not None

    def test_adds_other_user(
        self, router: Router, make_ctx: MakeCtx, registry: UserRegistry
    ) -> None:
        assert run(router, make_ctx(BOB), "add_user", user=CAROL) == (
            True,
            "user carol was created",
        )
        assert registry.lookup(CAROL.id) is not None

    def test_duplicate(self, router: Router, make_ctx: MakeCtx, registry: UserRegistry) -> None:
        run(router, make_ctx(BOB), "add_user")
        ok, text = run(router, make_ctx(BOB), "add_user")
        assert not ok
        assert text == "failed to create user because: user bob already exists"
        assert registry.count() == 1


class TestRmUser:
    def test_self_without_role(
        self, router: Router, make_ctx: MakeCtx, registry: UserRegistry
    ) -> None:
        registry.insert(BOB.id, "bob")
        assert run(router, make_ctx(BOB), "rm_user") == (True, "user bob was deleted")
        assert registry.lookup(BOB.id) is None

    def test_self_named_explicitly(
        self, router: Router, make_ctx: MakeCtx, registry: UserRegistry
    ) -> None:
        registry.insert(BOB.id, "bob")
        ok, _ = run(router, make_ctx(BOB), "rm_user", user=BOB)
        assert ok

    def test_self_in_direct_messages(
        self, router: Router, make_ctx: MakeCtx, registry: UserRegistry
    ) -> None:
        registry.insert(BOB.id, "bob")
        ok, _ = run(router, make_ctx(BOB, scope=None), "rm_user")
        assert ok

    def test_non_admin_on_other_is_denied_without_mutation(
        self, router: Router, make_ctx: MakeCtx, registry: UserRegistry
    ) -> None:
        registry.insert(CAROL.id, "carol")
        before = registry.list_users()
        ok, text = run(router, make_ctx(BOB), "rm_user", user=CAROL)
        assert not ok
        assert text == "need admin permission to remove other user"
        assert registry.list_users() == before

    def test_admin_removes_other(
        self, router: Router, make_ctx: MakeCtx, registry: UserRegistry
    ) -> None:
        registry.insert(CAROL.id, "carol")
        assert run(router, make_ctx(ALICE), "rm_user", user=CAROL) == (
            True,
            "user carol was deleted",
        )
        assert registry.count() == 0

    def test_other_outside_guild_is_no_scope(
        self, router: Router, make_ctx: MakeCtx, registry: UserRegistry
    ) -> None:
        registry.insert(CAROL.id, "carol")
        ok, text = run(router, make_ctx(ALICE, scope=None), "rm_user", user=CAROL)
        assert not ok
        assert text == "need admin permission to remove other user (not in a guild)"
        assert registry.count() == 1

    def test_unconfigured_role(
        self, router: Router, make_ctx: MakeCtx, registry: UserRegistry
    ) -> None:
        registry.insert(CAROL.id, "carol")
        reply = router.reply(
            Invocation(name="rm_user", params={"user": CAROL}), make_ctx(ALICE, Scope(id=8))
        )
        assert reply.result.error is not None
        assert reply.result.error.code == "ROLE_NOT_CONFIGURED"
        assert reply.text == "role bot_admin is not configured in this guild"
        assert registry.count() == 1

    def test_absent_user(self, router: Router, make_ctx: MakeCtx) -> None:
        assert run(router, make_ctx(ALICE), "rm_user", user=CAROL) == (
            False,
            "user carol doesn't exist",
        )

    def test_custom_admin_role(
        self, router: Router, registry: UserRegistry, directory: StaticDirectory
    ) -> None:
        directory.add_role("janitor", 950)
        directory.add_member(BOB, roles=["janitor"])
        data = BotData(registry=registry, directory=directory, admin_role="janitor")
        registry.insert(CAROL.id, "carol")
        ctx = InvocationContext(caller=BOB, scope=GUILD, data=data)
        assert run(router, ctx, "rm_user", user=CAROL) == (True, "user carol was deleted")


class TestStoreFaultReplies:
    @pytest.fixture
    def broken_ctx(self, bot_data: BotData) -> InvocationContext:
        with bot_data.registry.engine.begin() as conn:
            conn.exec_driver_sql("DROP TABLE users")
        return InvocationContext(caller=BOB, scope=GUILD, data=bot_data)

    def test_add_user_shows_diagnostic(self, router: Router, broken_ctx: InvocationContext) -> None:
        ok, text = run(router, broken_ctx, "add_user")
        assert not ok
        assert text.startswith("failed to create user because: OperationalError")
        assert "no such table: users" in text

    def test_get_user_shows_diagnostic(self, router: Router, broken_ctx: InvocationContext) -> None:
        ok, text = run(router, broken_ctx, "get_user")
        assert not ok
        assert text.startswith("failed to look up user because: ")

    def test_diagnostic_hidden_when_disabled(
        self, router: Router, broken_ctx: InvocationContext
    ) -> None:
        data = BotData(
            registry=broken_ctx.data.registry,
            directory=broken_ctx.data.directory,
            expose_diagnostics=False,
        )
        ctx = InvocationContext(caller=Member(id=5, name="x"), scope=None, data=data)
        assert run(router, ctx, "add_user") == (False, "failed to create user")
