"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ariesbot.toml only contains
overrides. A fresh deployment needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class BotConfig(BaseModel):
    """[bot] section."""

    model_config = {"frozen": True}

    prefix: str = Field(default="!", min_length=1)
    case_insensitive: bool = True
    max_workers: int = Field(default=8, ge=1)


class AuthConfig(BaseModel):
    """[auth] section."""

    model_config = {"frozen": True}

    admin_role: str = "bot_admin"


class DatabaseConfig(BaseModel):
    """[database] section.

    An empty ``url`` selects the SQLite file under the data root.
    """

    model_config = {"frozen": True}

    url: str = ""


class RepliesConfig(BaseModel):
    """[replies] section."""

    model_config = {"frozen": True}

    expose_diagnostics: bool = True


class MemberEntry(BaseModel):
    """One ``[directory.members."<id>"]`` table."""

    model_config = {"frozen": True}

    name: str
    roles: list[str] = Field(default_factory=list)


class DirectoryConfig(BaseModel):
    """[directory] section — static members and roles for the operator CLI."""

    model_config = {"frozen": True}

    guild_id: int | None = None
    roles: dict[str, int] = Field(default_factory=dict)
    members: dict[str, MemberEntry] = Field(default_factory=dict)
