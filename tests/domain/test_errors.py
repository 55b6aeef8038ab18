"""Tests for the error taxonomy."""

from sqlalchemy.exc import OperationalError

from ariesbot.domain.errors import (
    AlreadyExistsError,
    AriesError,
    NotFoundError,
    StoreFaultError,
)


class TestErrors:
    def test_codes_are_distinct(self) -> None:
        codes = {
            cls.code
            for cls in (AriesError, NotFoundError, AlreadyExistsError, StoreFaultError)
        }
        assert len(codes) == 4

    def test_not_found_prefers_name(self) -> None:
        err = NotFoundError(42, "bob")
        assert err.detail == {"user_id": 42, "user": "bob"}
        assert str(err) == "user bob doesn't exist"

    def test_not_found_falls_back_to_id(self) -> None:
        assert NotFoundError(42).detail["user"] == "42"

    def test_store_fault_keeps_cause_text(self) -> None:
        cause = OperationalError("SELECT 1", {}, Exception("disk I/O error"))
        err = StoreFaultError("create", cause)
        assert err.cause is cause
        assert err.detail["action"] == "create"
        assert "disk I/O error" in err.detail["diagnostic"]
        assert err.detail["diagnostic"].startswith("OperationalError: ")
