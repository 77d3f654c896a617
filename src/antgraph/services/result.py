"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
Engine exceptions stop at the service boundary and come back as a failed
result carrying one of the :class:`ErrorCode` values. Path queries whose
endpoints are missing or on different frequencies are not failures; they
succeed with zero paths and a ``reason``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Machine-readable failure codes shared by every front end."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    FREQUENCY_MISMATCH = "FREQUENCY_MISMATCH"
    ALLOCATION = "ALLOCATION"
    MAP_NOT_FOUND = "MAP_NOT_FOUND"
    MAP_FORMAT = "MAP_FORMAT"
    FILE_EXISTS = "FILE_EXISTS"
    IO_ERROR = "IO_ERROR"
    ERROR = "ERROR"


class ServiceError(BaseModel):
    """Why an operation failed."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"dfs"``, ``"paths"``, ``"render_map"``, ...).
        data: Payload validated against the op's contract model.
        warnings: Non-fatal findings, e.g. an ambiguous coordinate lookup.
        error: Set when ``ok`` is False.
        meta: Telemetry span tree under ``"telemetry"`` when verbose.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def exit_code(self) -> int:
        """Process exit status for a CLI reporting this result."""
        return 0 if self.ok else 1


def error_result(op: str, code: ErrorCode | str, message: str, **detail: Any) -> ServiceResult:
    """Build a failed ServiceResult; *detail* keyword arguments go to ``error.detail``."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=ErrorCode(code), message=message, detail=detail),
    )
