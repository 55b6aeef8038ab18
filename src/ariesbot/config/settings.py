"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``ARIESBOT_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``ariesbot.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from ariesbot.config.discovery import find_config
from ariesbot.config.models import (
    AuthConfig,
    BotConfig,
    DatabaseConfig,
    DirectoryConfig,
    RepliesConfig,
)
from ariesbot.infrastructure.database.engine import default_db_url


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``ariesbot.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# TOML path handed from from_cli() to settings_customise_sources().
_tls = threading.local()


class AriesSettings(BaseSettings):
    """Settings for the bot core and the operator CLI.

    Attributes:
        data_root: Directory holding ``.ariesbot/`` (parent of
            ``ariesbot.toml``, or CWD if no config found).
        config_path: The TOML file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ARIESBOT_",
        "env_nested_delimiter": "__",
    }

    data_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    bot: BotConfig = Field(default_factory=BotConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    replies: RepliesConfig = Field(default_factory=RepliesConfig)
    directory: DirectoryConfig = Field(default_factory=DirectoryConfig)

    @property
    def db_url(self) -> str:
        """Configured database URL, or the SQLite file under ``data_root``."""
        return self.database.url or default_db_url(self.data_root)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        data_root: Path | None = None,
        **cli_flags: Any,
    ) -> AriesSettings:
        """Construct settings from a CLI invocation.

        Discovers ``ariesbot.toml`` via walk-up (or explicit *config_path*),
        resolves *data_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                msg = f"Config file not found: {p}"
                raise click.ClickException(msg)
            toml_path = p
        else:
            toml_path = find_config(data_root)

        resolved_root = data_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                data_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
