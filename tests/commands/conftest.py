"""Fixtures for CLI command tests: a configured single-guild deployment."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.conftest import write_config

DEPLOYMENT_TOML = """\
[directory]
guild_id = 7

[directory.roles]
bot_admin = 900

[directory.members."1001"]
name = "alice"
roles = ["bot_admin"]

[directory.members."1002"]
name = "bob"

[directory.members."1003"]
name = "carol"
"""


@pytest.fixture
def deployment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temp working directory holding ``ariesbot.toml``; returns its root."""
    monkeypatch.delenv("ARIESBOT_CONFIG", raising=False)
    write_config(tmp_path, DEPLOYMENT_TOML)
    monkeypatch.chdir(tmp_path)
    return tmp_path
