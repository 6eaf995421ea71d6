from __future__ import annotations

from typing import Optional


class AgriInfoError(Exception):
    """Base class for every error raised by the identification pipeline."""

    kind = "agriinfo_error"


class SchemaViolation(AgriInfoError):
    """A value did not match its declared shape."""

    kind = "schema_violation"

    def __init__(self, field: str, constraint: str) -> None:
        self.field = field
        self.constraint = constraint
        super().__init__(f"{field}: {constraint}")

    def to_dict(self) -> dict:
        return {"field": self.field, "constraint": self.constraint}


class InvalidRequest(AgriInfoError):
    kind = "invalid_request"

    def __init__(
        self, message: str, *, violation: Optional[SchemaViolation] = None
    ) -> None:
        self.violation = violation
        super().__init__(message)


class InvalidResponse(AgriInfoError):
    kind = "invalid_response"

    def __init__(
        self, message: str, *, violation: Optional[SchemaViolation] = None
    ) -> None:
        self.violation = violation
        super().__init__(message)


class ModelInvocationError(AgriInfoError):
    """The hosted model call itself failed (network, timeout, quota, bad output)."""

    kind = "model_invocation_failed"


class FileReadError(AgriInfoError):
    """Local file read failed before any request was formed."""

    kind = "file_read_failed"
