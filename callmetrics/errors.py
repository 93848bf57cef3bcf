# callmetrics/errors.py
# Structured contract errors
# Raised for caller bugs only; bad business data never ends up here

from collections.abc import Iterable, Mapping
from typing import Any


class AppError(Exception):
    """Base library error with a structured payload."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: dict = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict:
        content = {"code": self.error_code, "message": self.message}
        if self.details:
            content["details"] = self.details
        return {"error": content}


class InvalidInputError(AppError):
    """Input does not have the structure the engine expects."""
    def __init__(self, message: str = "Invalid input", details: dict = None):
        super().__init__(
            message=message,
            error_code="INVALID_INPUT",
            details=details
        )


class UnknownEngineError(AppError):
    """No calculation engine is registered under the requested kind."""
    def __init__(self, kind: object):
        super().__init__(
            message=f"Calculation engine not found: {kind!r}",
            error_code="UNKNOWN_ENGINE",
            details={"kind": str(kind)}
        )


class InvalidPeriodError(AppError):
    """Period bounds are inverted."""
    def __init__(self, message: str = "Invalid period", details: dict = None):
        super().__init__(
            message=message,
            error_code="INVALID_PERIOD",
            details=details
        )


def ensure_iterable(value: Any, what: str) -> None:
    """Reject inputs that are not a collection of items."""
    if value is None or isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise InvalidInputError(
            f"{what} must be an iterable of items, got {type(value).__name__}",
            details={"type": type(value).__name__},
        )
