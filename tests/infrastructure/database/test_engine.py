"""Tests for database engine setup and initialization."""

from pathlib import Path

from sqlalchemy import inspect, text

from ariesbot.infrastructure.database.engine import (
    create_db_engine,
    default_db_url,
    init_database,
)


class TestDefaultDbUrl:
    def test_points_under_data_dir(self, tmp_path: Path) -> None:
        assert default_db_url(tmp_path) == f"sqlite:///{tmp_path}/.ariesbot/aries.db"


class TestCreateDbEngine:
    def test_wal_mode_enabled(self, tmp_path: Path) -> None:
        engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
        engine.dispose()

    def test_busy_timeout_set(self, tmp_path: Path) -> None:
        engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA busy_timeout")).scalar() == 5000
        engine.dispose()


class TestInitDatabase:
    def test_creates_data_directory_and_file(self, tmp_path: Path) -> None:
        engine = init_database(default_db_url(tmp_path))
        assert (tmp_path / ".ariesbot" / "aries.db").exists()
        engine.dispose()

    def test_creates_users_table(self, tmp_path: Path) -> None:
        engine = init_database(default_db_url(tmp_path))
        columns = {c["name"]: c for c in inspect(engine).get_columns("users")}
        assert set(columns) == {"id", "name"}
        assert columns["name"]["nullable"] is False
        assert inspect(engine).get_pk_constraint("users")["constrained_columns"] == ["id"]
        engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        """Calling init_database twice should not raise or lose data."""
        url = default_db_url(tmp_path)
        first = init_database(url)
        with first.begin() as conn:
            conn.execute(text("INSERT INTO users (id, name) VALUES (1, 'a')"))
        first.dispose()
        second = init_database(url)
        with second.connect() as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM users")).scalar() == 1
        second.dispose()
