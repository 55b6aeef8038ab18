"""Reply renderer — one line of chat text per ServiceResult.

Successful results are rendered by ``result.op``; failures by
``error.code``. Store and handler faults include the underlying
diagnostic verbatim unless ``expose_diagnostics`` is off, in which case
the reply is opaque and the diagnostic is only logged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ariesbot.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

_ACTION_VERBS = {"lookup": "look up", "create": "create", "delete": "delete"}


def render_reply(result: ServiceResult, *, expose_diagnostics: bool = True) -> str:
    """Render *result* as the text sent back to the invoking surface."""
    if result.ok:
        renderer = _SUCCESS_RENDERERS.get(result.op, _render_generic)
        return renderer(result.data)
    assert result.error is not None
    return _render_error(result.op, result.error, expose_diagnostics=expose_diagnostics)


# ── Success renderers ─────────────────────────────────────────────────


def _render_ping(data: dict[str, Any]) -> str:
    text = data.get("text")
    return "pong" if text is None else f"pong: {text}"


def _render_age(data: dict[str, Any]) -> str:
    return f"{data['user']}'s account was created at {data['created_at']}"


def _render_gid(data: dict[str, Any]) -> str:
    return f"guild id: {data['guild_id']}"


def _render_get_user(data: dict[str, Any]) -> str:
    return str(data["raw"])


def _render_add_user(data: dict[str, Any]) -> str:
    return f"user {data['user']} was created"


def _render_rm_user(data: dict[str, Any]) -> str:
    return f"user {data['user']} was deleted"


def _render_generic(data: dict[str, Any]) -> str:
    return "done"


_SUCCESS_RENDERERS: dict[str, Callable[[dict[str, Any]], str]] = {
    "ping": _render_ping,
    "age": _render_age,
    "gid": _render_gid,
    "get_user": _render_get_user,
    "add_user": _render_add_user,
    "rm_user": _render_rm_user,
}


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(op: str, error: ServiceError, *, expose_diagnostics: bool) -> str:
    detail = error.detail
    code = error.code

    if code == "PERMISSION_DENIED":
        if detail.get("reason") == "no_scope":
            return "need admin permission to remove other user (not in a guild)"
        return "need admin permission to remove other user"
    if code == "ROLE_NOT_CONFIGURED":
        return f"role {detail.get('role')} is not configured in this guild"
    if code == "NOT_FOUND":
        return f"user {detail.get('user')} doesn't exist"
    if code == "ALREADY_EXISTS":
        return f"failed to create user because: user {detail.get('user')} already exists"
    if code == "INVALID_ARGUMENT":
        return f"invalid argument: {error.message}"
    if code == "STORE_FAULT":
        verb = _ACTION_VERBS.get(detail.get("action", ""), detail.get("action", "access"))
        return _with_diagnostic(f"failed to {verb} user", detail, op, expose_diagnostics)
    if code == "HANDLER_FAILED":
        return _with_diagnostic(f"command {op} failed", detail, op, expose_diagnostics)
    return error.message


def _with_diagnostic(
    headline: str, detail: dict[str, Any], op: str, expose_diagnostics: bool
) -> str:
    diagnostic = detail.get("diagnostic")
    if not diagnostic:
        return headline
    if expose_diagnostics:
        return f"{headline} because: {diagnostic}"
    logger.warning("Hidden diagnostic for %s: %s", op, diagnostic)
    return headline
