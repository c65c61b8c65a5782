"""Structured errors for the curriculum harness.

Every harness failure is a ``HarnessError`` carrying a stable code, so test
suites can assert on the kind of failure and CI logs can render one
consistent envelope:

    {
        "error": {
            "code": "INVALID_INPUT",
            "message": "Human-readable description",
            "details": [...optional field-level errors...]
        }
    }
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError


# ── Error Codes ──────────────────────────────────────────────────────────────


class ErrorCode(str, Enum):
    """Standard error codes carried by harness exceptions."""

    INVALID_INPUT = "INVALID_INPUT"
    PROJECT_FILE_ERROR = "PROJECT_FILE_ERROR"
    TERMINAL_LOG_MISSING = "TERMINAL_LOG_MISSING"
    COMMAND_FAILED = "COMMAND_FAILED"
    COMMAND_TIMEOUT = "COMMAND_TIMEOUT"


# ── Error Schemas ────────────────────────────────────────────────────────────


class FieldError(BaseModel):
    """Individual field validation error."""

    field: str
    message: str
    type: str


class ErrorEnvelope(BaseModel):
    """Standard error envelope."""

    code: str
    message: str
    details: list[FieldError] | list[dict[str, Any]] | None = None


class ErrorResponse(BaseModel):
    """Top-level error document."""

    error: ErrorEnvelope


# ── Exceptions ───────────────────────────────────────────────────────────────


class HarnessError(Exception):
    """Domain-specific harness error with structured code + message."""

    code: ErrorCode = ErrorCode.INVALID_INPUT

    def __init__(
        self,
        message: str,
        details: list[dict[str, Any]] | None = None,
    ):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_envelope(self) -> ErrorResponse:
        return ErrorResponse(
            error=ErrorEnvelope(
                code=self.code.value,
                message=self.message,
                details=self.details,
            )
        )


class InvalidInputError(HarnessError, ValueError):
    """Caller passed a malformed ledger, pool, record, key or argument."""

    code = ErrorCode.INVALID_INPUT

    @classmethod
    def from_validation_error(cls, context: str, exc: ValidationError) -> "InvalidInputError":
        """Wrap a pydantic ValidationError with field-level detail."""
        details = []
        for err in exc.errors():
            loc = err.get("loc", [])
            field = ".".join(str(part) for part in loc)
            details.append(
                FieldError(
                    field=field or "unknown",
                    message=err.get("msg", "Invalid value"),
                    type=err.get("type", "value_error"),
                ).model_dump()
            )
        return cls(f"{context}: {len(details)} validation error(s)", details=details)


class ProjectFileError(HarnessError):
    """A project file or directory could not be read, parsed or written."""

    code = ErrorCode.PROJECT_FILE_ERROR


class TerminalLogError(HarnessError):
    """A terminal or shell-history log is missing or empty."""

    code = ErrorCode.TERMINAL_LOG_MISSING


class CommandError(HarnessError):
    """A shell command exited with a non-zero status."""

    code = ErrorCode.COMMAND_FAILED

    def __init__(
        self,
        message: str,
        *,
        exit_code: int,
        stdout: str = "",
        stderr: str = "",
    ):
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message, details=[{"exit_code": exit_code, "stderr": stderr}])


class CommandTimeoutError(HarnessError):
    """A shell command did not finish within the configured timeout."""

    code = ErrorCode.COMMAND_TIMEOUT
