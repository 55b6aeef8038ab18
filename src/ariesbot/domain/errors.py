"""Error taxonomy for the command core.

Handlers raise these; the router converts them into failed
``ServiceResult`` objects so no invocation ever crashes the process.
Each error carries a stable ``code`` and a ``detail`` mapping that the
renderer uses to build the reply.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class DenialReason(StrEnum):
    """Why an authorization check did not grant access."""

    NO_SCOPE = "no_scope"
    ROLE_LACKING = "role_lacking"
    ROLE_NOT_CONFIGURED = "role_not_configured"


class AriesError(Exception):
    """Base class for every failure the core renders as a reply."""

    code = "ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class PermissionDeniedError(AriesError):
    code = "PERMISSION_DENIED"

    def __init__(self, reason: DenialReason, *, role: str, target: str | None = None) -> None:
        msg = f"permission denied ({reason}): role {role!r} required"
        super().__init__(msg, reason=str(reason), role=role, user=target)
        self.reason = reason


class RoleNotConfiguredError(AriesError):
    code = "ROLE_NOT_CONFIGURED"

    def __init__(self, role: str, scope_id: int) -> None:
        msg = f"role {role!r} does not exist in guild {scope_id}"
        super().__init__(msg, role=role, scope_id=scope_id)


class NotFoundError(AriesError):
    code = "NOT_FOUND"

    def __init__(self, user_id: int, name: str | None = None) -> None:
        label = name if name is not None else str(user_id)
        super().__init__(f"user {label} doesn't exist", user_id=user_id, user=label)


class AlreadyExistsError(AriesError):
    code = "ALREADY_EXISTS"

    def __init__(self, user_id: int, name: str | None = None) -> None:
        label = name if name is not None else str(user_id)
        super().__init__(f"user {label} already exists", user_id=user_id, user=label)


class StoreFaultError(AriesError):
    """The underlying storage raised; ``diagnostic`` is its text verbatim."""

    code = "STORE_FAULT"

    def __init__(self, action: str, cause: BaseException) -> None:
        diagnostic = f"{type(cause).__name__}: {cause}"
        super().__init__(f"store fault during {action}", action=action, diagnostic=diagnostic)
        self.cause = cause


class InvalidArgumentError(AriesError):
    code = "INVALID_ARGUMENT"


class UnknownCommandError(LookupError):
    """A surface handed the router a command name it never registered."""


class DuplicateCommandError(ValueError):
    """Two descriptors share one command name."""
