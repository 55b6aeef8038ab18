"""UpgradeService — database migration with Alembic.

Pipeline: CHECK → MIGRATE (or STAMP) → REPORT
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import inspect

from ariesbot.infrastructure.database.migrations import build_config
from ariesbot.services.result import ServiceResult

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class UpgradeService:
    """Handles database schema migrations via Alembic."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._db_url = engine.url.render_as_string(hide_password=False)

    def _tables_exist(self) -> bool:
        """Detect a database created by ``metadata.create_all`` without Alembic."""
        return "users" in inspect(self._engine).get_table_names()

    def check_pending(self) -> ServiceResult:
        """List pending migrations without applying."""
        op = "upgrade"

        try:
            script = ScriptDirectory.from_config(build_config(self._db_url))
            head = script.get_current_head()

            with self._engine.connect() as conn:
                current = MigrationContext.configure(conn).get_current_revision()

            pending: list[dict[str, Any]] = []
            if current != head and head is not None:
                rev_obj = script.get_revision(head)
                while rev_obj is not None and rev_obj.revision != current:
                    pending.append({"revision": rev_obj.revision, "description": rev_obj.doc or ""})
                    down = rev_obj.down_revision
                    if down is None:
                        break
                    rev_obj = script.get_revision(str(down))
        except Exception as exc:
            return ServiceResult.failure(op, "CHECK_FAILED", f"Failed to check migrations: {exc}")

        return ServiceResult.success(
            op,
            pending_count=len(pending),
            pending=pending,
            current=current,
            head=head,
        )

    def apply(self) -> ServiceResult:
        op = "upgrade"

        check_result = self.check_pending()
        if not check_result.ok:
            return check_result

        if check_result.data["pending_count"] == 0:
            return ServiceResult.success(
                op,
                applied_count=0,
                current=check_result.data["head"],
                message="Database is already up to date",
            )

        cfg = build_config(self._db_url)
        try:
            if check_result.data["current"] is None and self._tables_exist():
                # Tables predate version tracking: stamp instead of re-creating them.
                command.stamp(cfg, "head")
            else:
                command.upgrade(cfg, "head")
        except Exception as exc:
            logger.warning("Migration failed", exc_info=True)
            return ServiceResult.failure(op, "MIGRATION_FAILED", f"Migration failed: {exc}")

        return ServiceResult.success(
            op,
            applied_count=check_result.data["pending_count"],
            current=check_result.data["head"],
            message="Database upgraded",
        )
