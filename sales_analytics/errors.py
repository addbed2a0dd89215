"""
Error taxonomy surfaced to API callers.

Each error carries an HTTP status and a machine-readable code; the app-level
exception handler renders them as ``{"error": ..., "code": ...}``.
"""
from __future__ import annotations


class AnalyticsError(Exception):
    """Base class for errors reported back to the caller."""
    status_code = 400
    code = "error"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class MissingParameter(AnalyticsError):
    """A required request field is absent."""
    code = "missing_parameter"


class InvalidParameter(AnalyticsError):
    """A request field is present but cannot be coerced to its type."""
    code = "invalid_parameter"


class NotFound(AnalyticsError):
    """Unknown dataset id, empty dataset, or unknown series name."""
    code = "not_found"


class ParseFailure(AnalyticsError):
    """The uploaded file could not be read or tokenized."""
    status_code = 500
    code = "parse_failure"
