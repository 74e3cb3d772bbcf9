"""Project-native typed exceptions for remote call failures."""

from __future__ import annotations


class ZosmfAdapterError(Exception):
    """Base exception for adapter-level remote failures.

    Attributes:
        status_code: HTTP status code when the failure came from an HTTP response.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ZosmfConnectionError(ZosmfAdapterError, ConnectionError):
    """Transport-level connectivity failure during z/OSMF communication."""


class ZosmfTransportTimeoutError(ZosmfAdapterError, TimeoutError):
    """Single HTTP request exceeded the configured transport timeout."""


class ZosmfHttpError(ZosmfAdapterError, RuntimeError):
    """z/OSMF answered with a non-success HTTP status."""


class ZosmfResponseError(ZosmfAdapterError, ValueError):
    """z/OSMF answered with a body that does not match the expected contract."""


class SshShellError(ZosmfAdapterError, ConnectionError):
    """SSH connect, authentication or channel failure."""
