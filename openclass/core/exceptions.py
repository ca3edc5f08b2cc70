# openclass/core/exceptions.py
"""Error taxonomy shared by the API and the client layer.

Every failure the service reports is an ``AppError`` tagged with one
``ErrorKind``. The kind fixes the HTTP status, the machine-readable code and
the default message, so callers can branch on ``error.kind`` instead of
matching message strings.
"""
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION_ERROR"
    AUTHENTICATION = "AUTHENTICATION_ERROR"
    AUTHORIZATION = "AUTHORIZATION_ERROR"
    NOT_FOUND = "NOT_FOUND_ERROR"
    CONFLICT = "CONFLICT_ERROR"
    RATE_LIMIT = "RATE_LIMIT_ERROR"
    INTERNAL = "INTERNAL_ERROR"

    @property
    def code(self) -> str:
        return self.value

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]

    @classmethod
    def from_code(cls, code: Optional[str]) -> "ErrorKind":
        """Classify a wire ``code``; anything unrecognised is INTERNAL."""
        try:
            return cls(code)
        except ValueError:
            return cls.INTERNAL

    @classmethod
    def from_status(cls, status_code: int) -> "ErrorKind":
        # 422 is what the framework uses for body validation
        if status_code == 422:
            return cls.VALIDATION
        for kind, status in _STATUS_CODES.items():
            if status == status_code and kind is not cls.INTERNAL:
                return kind
        return cls.INTERNAL


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.RATE_LIMIT: 429,
    ErrorKind.INTERNAL: 500,
}

_DEFAULT_MESSAGES = {
    ErrorKind.VALIDATION: "Invalid request data",
    ErrorKind.AUTHENTICATION: "Authentication failed",
    ErrorKind.AUTHORIZATION: "You do not have permission to perform this action",
    ErrorKind.NOT_FOUND: "Resource not found",
    ErrorKind.CONFLICT: "Resource already exists",
    ErrorKind.RATE_LIMIT: "Rate limit exceeded",
    ErrorKind.INTERNAL: "Internal server error",
}


class AppError(Exception):
    """A classified failure raised by routes and services."""
    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        details: Optional[Any] = None,
        status_code: Optional[int] = None
    ):
        self.kind = kind
        # Framework errors outside the taxonomy keep their own status
        self._status_code = status_code
        self.message = message or kind.default_message
        # Only validation errors expose field-level details on the wire
        self.details = details if kind is ErrorKind.VALIDATION else None
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self._status_code or self.kind.status_code

    @property
    def code(self) -> str:
        return self.kind.code

    def to_envelope(self) -> dict:
        envelope = {"success": False, "error": self.message, "code": self.code}
        if self.details is not None:
            envelope["details"] = self.details
        return envelope

    def __repr__(self) -> str:
        return f"AppError({self.kind.name}, {self.message!r})"


def validation_error(message: str = None, details: Any = None) -> AppError:
    return AppError(ErrorKind.VALIDATION, message, details)

def authentication_error(message: str = None) -> AppError:
    return AppError(ErrorKind.AUTHENTICATION, message)

def authorization_error(message: str = None) -> AppError:
    return AppError(ErrorKind.AUTHORIZATION, message)

def not_found_error(resource: str = None, id: str = None) -> AppError:
    message = None
    if resource:
        message = f"{resource} not found"
        if id:
            message += f" with id: {id}"
    return AppError(ErrorKind.NOT_FOUND, message)

def conflict_error(message: str = None) -> AppError:
    return AppError(ErrorKind.CONFLICT, message)

def rate_limit_error(message: str = None) -> AppError:
    return AppError(ErrorKind.RATE_LIMIT, message)

def internal_error() -> AppError:
    return AppError(ErrorKind.INTERNAL)
