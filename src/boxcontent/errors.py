"""Exceptions raised by the Box SDK."""

from __future__ import annotations


class BoxError(Exception):
    """Base class for all Box SDK errors."""


class TransportError(BoxError):
    """The transport could not complete the HTTP exchange."""

    def __init__(self, message: str, cause: Exception | None = None):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause


class ClientError(BoxError):
    """Error status from the API, or a response missing an expected field."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: bytes | str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InvalidResponseError(BoxError):
    """A JSON response body could not be decoded."""

    def __init__(self, message: str = "Invalid Response", *, body: bytes | str | None = None):
        super().__init__(message)
        self.body = body


class ValidationError(BoxError, ValueError):
    """A required argument was missing or invalid."""


def require_not_none(**values: object) -> None:
    """Raise ValidationError naming every keyword whose value is None."""
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise ValidationError(f"{', '.join(missing)} cannot be None.")


CONFLICT_STATUS = 409


def check_status(status_code: int, body: bytes | str) -> None:
    """Raise ClientError for 4xx/5xx statuses, letting 409 conflicts through."""
    if status_code < 400 or status_code == CONFLICT_STATUS:
        return
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    snippet = text if len(text) <= 500 else text[:500] + "..."
    raise ClientError(f"HTTP {status_code}: {snippet}", status_code=status_code, body=body)


__all__ = [
    "BoxError",
    "TransportError",
    "ClientError",
    "InvalidResponseError",
    "ValidationError",
    "CONFLICT_STATUS",
    "check_status",
    "require_not_none",
]
