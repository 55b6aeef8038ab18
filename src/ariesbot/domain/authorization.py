"""Authorization guard for destructive or other-targeting actions.

Policy, evaluated in order:

1. Acting on yourself is always granted.
2. Outside a guild there is no role to hold: denied with ``no_scope``.
3. A guild that lacks the required role is a configuration problem,
   reported as ``role_not_configured`` rather than a plain denial.
4. Otherwise the caller must hold the role.

The guard is a pure function of the identities and the role lookups it
is handed; it never touches the registry.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel

from ariesbot.domain.errors import DenialReason, PermissionDeniedError, RoleNotConfiguredError
from ariesbot.domain.types import Member, Role, Scope


class RoleLookup(Protocol):
    """Role resolution supplied by the platform integration layer."""

    def role_by_name(self, scope: Scope, name: str) -> Role | None: ...

    def has_role(self, member: Member, scope: Scope, role: Role) -> bool: ...


class GrantReason(StrEnum):
    SELF = "self"
    ROLE_HELD = "role_held"


class Decision(BaseModel):
    """Outcome of one authorization check. Never persisted."""

    model_config = {"frozen": True}

    granted: bool
    reason: GrantReason | DenialReason
    role: str

    @classmethod
    def grant(cls, reason: GrantReason, role: str) -> Decision:
        return cls(granted=True, reason=reason, role=role)

    @classmethod
    def deny(cls, reason: DenialReason, role: str) -> Decision:
        return cls(granted=False, reason=reason, role=role)


def check(
    caller: Member,
    target: Member,
    scope: Scope | None,
    required_role: str,
    roles: RoleLookup,
) -> Decision:
    """Decide whether *caller* may act on *target*."""
    if target.id == caller.id:
        return Decision.grant(GrantReason.SELF, required_role)
    if scope is None:
        return Decision.deny(DenialReason.NO_SCOPE, required_role)

    role = roles.role_by_name(scope, required_role)
    if role is None:
        return Decision.deny(DenialReason.ROLE_NOT_CONFIGURED, required_role)
    if roles.has_role(caller, scope, role):
        return Decision.grant(GrantReason.ROLE_HELD, required_role)
    return Decision.deny(DenialReason.ROLE_LACKING, required_role)


def require(decision: Decision, *, scope: Scope | None = None, target: str | None = None) -> None:
    """Raise the matching error unless *decision* is granted."""
    if decision.granted:
        return
    if decision.reason == DenialReason.ROLE_NOT_CONFIGURED:
        raise RoleNotConfiguredError(decision.role, scope.id if scope else 0)
    raise PermissionDeniedError(DenialReason(decision.reason), role=decision.role, target=target)
