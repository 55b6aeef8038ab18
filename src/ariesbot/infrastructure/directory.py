"""Member and role directory.

The hosting platform owns member and role data. The core sees it only
through the :class:`Directory` protocol: role lookups for the guard and
member resolution for the free-text surface.

:class:`StaticDirectory` is an in-memory implementation fed from the
``[directory]`` config section. The operator CLI and the tests use it
in place of a live gateway.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from ariesbot.domain.types import Member, Role, Scope

if TYPE_CHECKING:
    from ariesbot.config.models import DirectoryConfig

_MENTION_RE = re.compile(r"^<@!?(\d+)>$")


def parse_user_token(token: str) -> int | None:
    """Extract a user id from a mention (``<@id>``, ``<@!id>``) or bare digits."""
    match = _MENTION_RE.match(token)
    if match:
        return int(match.group(1))
    if token.isdigit():
        return int(token)
    return None


class Directory(Protocol):
    """Everything the core asks of the platform about people and roles."""

    def role_by_name(self, scope: Scope, name: str) -> Role | None: ...

    def has_role(self, member: Member, scope: Scope, role: Role) -> bool: ...

    def resolve_member(self, scope: Scope | None, token: str) -> Member | None: ...


@dataclass
class _Entry:
    member: Member
    roles: set[str] = field(default_factory=set)


class StaticDirectory:
    """Fixed set of members and roles for a single guild.

    When ``guild_id`` is set, role lookups in any other guild find
    nothing, which the guard reports as an unconfigured role.
    """

    def __init__(self, roles: dict[str, int] | None = None, guild_id: int | None = None) -> None:
        self._roles: dict[str, Role] = {
            name: Role(id=role_id, name=name) for name, role_id in (roles or {}).items()
        }
        self._members: dict[int, _Entry] = {}
        self.guild_id = guild_id

    @classmethod
    def from_config(cls, config: DirectoryConfig) -> StaticDirectory:
        directory = cls(roles=dict(config.roles), guild_id=config.guild_id)
        for raw_id, entry in config.members.items():
            directory.add_member(Member(id=int(raw_id), name=entry.name), roles=entry.roles)
        return directory

    def add_role(self, name: str, role_id: int) -> Role:
        role = Role(id=role_id, name=name)
        self._roles[name] = role
        return role

    def add_member(self, member: Member, roles: list[str] | None = None) -> None:
        """Register *member*, merging *roles* with any already held.

        A member already known under the same id takes the new identity,
        so a renamed caller resolves by its current name only.
        """
        entry = self._members.get(member.id)
        if entry is None:
            entry = self._members[member.id] = _Entry(member)
        else:
            entry.member = member
        entry.roles.update(roles or [])

    # ------------------------------------------------------------------
    # Directory protocol
    # ------------------------------------------------------------------

    def role_by_name(self, scope: Scope, name: str) -> Role | None:
        if self.guild_id is not None and scope.id != self.guild_id:
            return None
        return self._roles.get(name)

    def has_role(self, member: Member, scope: Scope, role: Role) -> bool:
        entry = self._members.get(member.id)
        return entry is not None and role.name in entry.roles

    def resolve_member(self, scope: Scope | None, token: str) -> Member | None:
        user_id = parse_user_token(token)
        if user_id is not None:
            entry = self._members.get(user_id)
            return entry.member if entry else None
        lowered = token.lower()
        for entry in self._members.values():
            if entry.member.name.lower() == lowered:
                return entry.member
        return None
