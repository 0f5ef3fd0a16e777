"""
Error taxonomy for indicator computation and storage

- InvalidParameterError: configuration rejected before any I/O
- InsufficientDataError: fewer input points than the window needs
- ParameterMismatchError: internal contract violation (programming error)
- StoreUnavailableError: backend connection/query failure (retryable)
"""

from enum import Enum


class ParameterErrorReason(str, Enum):
    """Why an indicator configuration was rejected"""

    NOT_POSITIVE = "not_positive"
    NOT_INTEGER = "not_integer"
    TOO_LARGE = "too_large"
    MALFORMED = "malformed"
    UNKNOWN_KIND = "unknown_kind"


class IndicatorError(Exception):
    """Base class for all engine errors"""

    code = "IndicatorError"

    def to_dict(self) -> dict:
        """Structured error payload for the query surface"""
        return {"error": self.code, "message": str(self)}


class InvalidParameterError(IndicatorError, ValueError):
    code = "InvalidParameter"

    def __init__(self, reason: ParameterErrorReason, detail: str = ""):
        self.reason = reason
        self.detail = detail
        message = f"Invalid parameter ({reason.value})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

    def to_dict(self) -> dict:
        return {**super().to_dict(), "reason": self.reason.value}


class InsufficientDataError(IndicatorError, ValueError):
    code = "InsufficientData"

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient data: need {required} points, got {available}")

    def to_dict(self) -> dict:
        return {**super().to_dict(), "required": self.required, "available": self.available}


class ParameterMismatchError(IndicatorError, ValueError):
    code = "ParameterMismatch"

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} values, got {actual}")


class StoreUnavailableError(IndicatorError, RuntimeError):
    """Raised when the indicator store cannot serve an operation. Safe to retry."""

    code = "StoreUnavailable"
