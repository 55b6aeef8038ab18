"""ServiceResult and ServiceError — the result envelope of every operation.

Bot handlers, the router, the reply renderer, and the operator CLI all
exchange this type. A failed result never carries a live exception;
only the error code, message, and detail survive.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for handlers and services.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"add_user"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(cls, op: str, **data: Any) -> ServiceResult:
        return cls(ok=True, op=op, data=data)

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
