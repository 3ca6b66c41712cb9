"""
Typed request errors raised while computing payment runtime options.

The ``code`` values match what the flow engine's RPC layer expects so the
transport can map them onto protocol-level responses.
"""

from __future__ import annotations

__all__ = [
    "BadRequestError",
    "DecryptionError",
    "NotFoundError",
    "RequestError",
]


class RequestError(Exception):
    code = "INTERNAL_SERVER_ERROR"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class BadRequestError(RequestError):
    """The block configuration or session data cannot produce a payment."""

    code = "BAD_REQUEST"
    status_code = 400


class NotFoundError(RequestError):
    """The credentials reference does not resolve to a stored record."""

    code = "NOT_FOUND"
    status_code = 404


class DecryptionError(ValueError):
    """Raised when a stored credential payload cannot be decrypted."""
