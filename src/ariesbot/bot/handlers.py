"""Handlers for the bot's commands.

Handlers receive already-resolved parameters: optional user parameters
have been defaulted to the caller by the router. They return a
successful ``ServiceResult`` or raise an ``AriesError``; turning
failures into replies is the router's job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ariesbot.bot.descriptors import CommandDescriptor, ParamSpec
from ariesbot.domain.authorization import check, require
from ariesbot.domain.types import ParamDefault, ParamKind
from ariesbot.services.result import ServiceResult

if TYPE_CHECKING:
    from ariesbot.bot.context import InvocationContext
    from ariesbot.domain.types import Member


def age(ctx: InvocationContext, user: Member) -> ServiceResult:
    """Displays your or another user's account creation date."""
    assert user.created_at is not None
    return ServiceResult.success(
        "age",
        user=user.name,
        user_id=user.id,
        created_at=user.created_at.isoformat(),
    )


def ping(ctx: InvocationContext, text: str | None) -> ServiceResult:
    return ServiceResult.success("ping", text=text)


def gid(ctx: InvocationContext) -> ServiceResult:
    return ServiceResult.success("gid", guild_id=ctx.scope.id if ctx.scope else None)


def get_user(ctx: InvocationContext) -> ServiceResult:
    user = ctx.registry.lookup(ctx.caller.id)
    return ServiceResult.success(
        "get_user",
        user_id=ctx.caller.id,
        found=user is not None,
        user=user.model_dump() if user else None,
        raw=repr(user),
    )


def add_user(ctx: InvocationContext, user: Member) -> ServiceResult:
    created = ctx.registry.insert(user.id, user.name)
    return ServiceResult.success("add_user", user=created.name, user_id=created.id)


def rm_user(ctx: InvocationContext, user: Member) -> ServiceResult:
    """Remove a user; removing anyone but yourself needs the admin role."""
    decision = check(ctx.caller, user, ctx.scope, ctx.data.admin_role, ctx.directory)
    require(decision, scope=ctx.scope, target=user.name)
    ctx.registry.delete(user.id, user.name)
    return ServiceResult.success(
        "rm_user",
        user=user.name,
        user_id=user.id,
        authorized_by=str(decision.reason),
    )


def _user_param(description: str) -> ParamSpec:
    return ParamSpec("user", ParamKind.USER, description, default=ParamDefault.CALLER)


COMMANDS: tuple[CommandDescriptor, ...] = (
    CommandDescriptor(
        "age",
        "Displays your or another user's account creation date",
        age,
        (_user_param("Selected user"),),
    ),
    CommandDescriptor(
        "ping",
        "Replies with pong",
        ping,
        (ParamSpec("text", ParamKind.TEXT, "text to return"),),
    ),
    CommandDescriptor("gid", "Shows the current guild id", gid),
    CommandDescriptor("get_user", "Looks you up in the user registry", get_user),
    CommandDescriptor(
        "add_user",
        "Adds you or another user to the registry",
        add_user,
        (_user_param("user to add"),),
    ),
    CommandDescriptor(
        "rm_user",
        "Removes you or (with the admin role) another user from the registry",
        rm_user,
        (_user_param("user to remove"),),
    ),
)
