"""UserRegistry — CRUD over the persistent ``users`` relation.

The registry wraps one shared, pooled ``Engine``. Every operation runs
in its own short transaction, so concurrent invocations need no
in-process locking: the primary key on ``users.id`` decides which of two
racing inserts wins.

Absence is a normal result for :meth:`lookup`. Every other storage
error surfaces as :class:`StoreFaultError` carrying the driver's
diagnostic text.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ariesbot.domain.errors import AlreadyExistsError, NotFoundError, StoreFaultError
from ariesbot.domain.types import User
from ariesbot.infrastructure.database.schema import users

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class UserRegistry:
    """Store operations over ``users(id, name)``."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def lookup(self, user_id: int) -> User | None:
        """Return the stored user, or None when *user_id* is absent."""
        try:
            with self._engine.connect() as conn:
                row = conn.execute(select(users).where(users.c.id == user_id)).first()
        except SQLAlchemyError as exc:
            raise StoreFaultError("lookup", exc) from exc
        if row is None:
            return None
        return User(id=row.id, name=row.name)

    def insert(self, user_id: int, name: str) -> User:
        """Insert a new user.

        Raises:
            AlreadyExistsError: *user_id* is already stored.
            StoreFaultError: any other storage failure.
        """
        try:
            with self._engine.begin() as conn:
                conn.execute(insert(users).values(id=user_id, name=name))
        except IntegrityError as exc:
            logger.debug("Insert of user %s rejected by primary key", user_id)
            raise AlreadyExistsError(user_id, name) from exc
        except SQLAlchemyError as exc:
            raise StoreFaultError("create", exc) from exc
        return User(id=user_id, name=name)

    def delete(self, user_id: int, name: str | None = None) -> User:
        """Delete a stored user after confirming it exists.

        The existence check and the delete are separate statements. When a
        concurrent delete wins in between, zero rows are removed and this
        call reports NotFound; the relation is unaffected.

        Raises:
            NotFoundError: *user_id* is not stored.
            StoreFaultError: any other storage failure.
        """
        existing = self._lookup_for("delete", user_id)
        if existing is None:
            raise NotFoundError(user_id, name)
        try:
            with self._engine.begin() as conn:
                removed = conn.execute(delete(users).where(users.c.id == user_id)).rowcount
        except SQLAlchemyError as exc:
            raise StoreFaultError("delete", exc) from exc
        if removed == 0:
            raise NotFoundError(user_id, name)
        return existing

    def count(self) -> int:
        try:
            with self._engine.connect() as conn:
                return int(conn.execute(select(func.count()).select_from(users)).scalar_one())
        except SQLAlchemyError as exc:
            raise StoreFaultError("count", exc) from exc

    def list_users(self) -> list[User]:
        """All stored users ordered by id."""
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(select(users).order_by(users.c.id)).fetchall()
        except SQLAlchemyError as exc:
            raise StoreFaultError("list", exc) from exc
        return [User(id=row.id, name=row.name) for row in rows]

    def _lookup_for(self, action: str, user_id: int) -> User | None:
        try:
            return self.lookup(user_id)
        except StoreFaultError as exc:
            raise StoreFaultError(action, exc.cause) from exc.cause
