"""Error kinds and the exceptions that carry them.

Every failure a handler can report is an :class:`AdminPanelError` subclass.
The HTTP status comes from the exception's :class:`ErrorKind`, never from its
(translated) message text.
"""
from enum import Enum
from typing import Dict, Optional


class ErrorKind(Enum):
    """Closed set of error kinds, each bound to one HTTP status code."""

    VALIDATION = 400
    AUTHENTICATION = 401
    AUTHORIZATION = 403
    NOT_FOUND = 404
    CONFLICT = 409
    RATE_LIMIT = 429
    INTERNAL = 500

    @property
    def status_code(self) -> int:
        return self.value


class AdminPanelError(Exception):
    """Base class for errors that map onto a JSON error response."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_response(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(AdminPanelError):
    kind = ErrorKind.VALIDATION


class AuthenticationError(AdminPanelError):
    kind = ErrorKind.AUTHENTICATION


class AuthorizationError(AdminPanelError):
    kind = ErrorKind.AUTHORIZATION


class NotFoundError(AdminPanelError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(AdminPanelError):
    kind = ErrorKind.CONFLICT


class RateLimitError(AdminPanelError):
    kind = ErrorKind.RATE_LIMIT
