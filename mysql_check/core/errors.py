"""
Error types and HTTP error handling.

Every per-request failure is a HealthCheckError and is answered with an
opaque 503. The detail only reaches the error log, and only in debug mode.
"""

from http import HTTPStatus

from fastapi.responses import PlainTextResponse


class MySQLCheckError(Exception):
    """Base exception for all probe errors."""


class ConfigError(MySQLCheckError):
    """Config file could not be read or parsed."""


class ConfigReadError(ConfigError):
    """Config file could not be read."""


class HealthCheckError(MySQLCheckError):
    """The checked MySQL node is unhealthy."""


class DatabaseOpenError(HealthCheckError):
    """Connection could not be set up from the connection string."""


class PingError(HealthCheckError):
    """Server did not answer."""


class QueryError(HealthCheckError):
    """Read-only flag could not be read."""


class ReadOnlyError(HealthCheckError):
    """Server has @@global.read_only set."""

    def __init__(self, message: str = "mysql is read only"):
        super().__init__(message)


def service_unavailable() -> PlainTextResponse:
    status = HTTPStatus.SERVICE_UNAVAILABLE
    return PlainTextResponse(status.phrase, status_code=status.value)


def server_error(context, exc: HealthCheckError) -> PlainTextResponse:
    """
    Log the failure (debug only) and hide it behind a bare 503.
    The logged source location is the caller's.
    """
    if context.debug:
        context.error_log.error(f"{type(exc).__name__}: {exc}", stacklevel=2)
    return service_unavailable()
