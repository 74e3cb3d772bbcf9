"""Project-native domain error kinds raised by client services."""

from __future__ import annotations


class ZosmfClientError(Exception):
    """Base exception for client-side validation and polling failures."""


class MissingParameterError(ZosmfClientError, ValueError):
    """Required input is absent; raised before any remote call is issued."""


class InvalidParameterError(ZosmfClientError, ValueError):
    """Input is present but outside the accepted values."""


class MaxAttemptsExceededError(ZosmfClientError, TimeoutError):
    """Bounded poll loop exhausted its attempts before reaching the target condition.

    Attributes:
        attempts: Number of remote queries performed.
        last_status: Last status observed before giving up.
    """

    def __init__(self, message: str, attempts: int, last_status: str | None = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_status = last_status
