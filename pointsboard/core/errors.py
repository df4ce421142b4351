"""Failure kinds raised by the auth core and the HTTP status each one maps to."""

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated failure kinds. Callers branch on the kind, never on the message."""

    BAD_REQUEST = "bad_request"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    UNAUTHENTICATED = "unauthenticated"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND = {
    ErrorKind.BAD_REQUEST: 400,
    # Duplicate username/email is a validation failure for clients.
    ErrorKind.CONFLICT: 400,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class ServiceError(Exception):
    """Raised by services and the auth gate; carries a kind and a client-safe message."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def __repr__(self) -> str:
        return f"ServiceError(kind={self.kind.value!r}, message={self.message!r})"
