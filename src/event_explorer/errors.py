"""Errors raised when talking to the events backend."""


class BackendError(Exception):
    """Base class for backend failures."""

    pass


class NetworkFailure(BackendError):
    """Raised when a request never completed successfully (connection, timeout, HTTP status)."""

    pass


class DecodeFailure(BackendError):
    """Raised when a response body is not what the backend promised."""

    pass
