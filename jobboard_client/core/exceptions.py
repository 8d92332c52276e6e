from __future__ import annotations

"""Centralized, structured exception hierarchy for the job-board client.

Every error raised by this package carries a machine-readable `code` for
programmatic handling and a human-readable `message` that a UI can show
as-is. Errors that originate from a backend response also carry the HTTP
`status_code` and the decoded `payload`.

Propagation policy: only a 401 on a protected request is handled inside the
session manager (one refresh-and-retry). Everything else reaches the caller
unchanged.
"""

from typing import Any, Final

__all__: Final = [
    "JobBoardClientError",
    "TransportError",
    "StorageError",
    "AuthenticationError",
    "RefreshError",
    "ApiError",
    "UnauthorizedError",
    "ValidationError",
    "ServerError",
]


class JobBoardClientError(Exception):
    """Base exception class for all errors raised by the client.

    Attributes:
        message (str): A human-readable error message, suitable for display.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Client-side failures
# ---------------------------------------------------------------------------


class TransportError(JobBoardClientError):
    """Raised when the backend could not be reached.

    Covers DNS failures, refused connections and timeouts. Never retried by
    the session manager.
    """

    def __init__(self, message: str, code: str = "transport_error"):
        super().__init__(message, code)


class StorageError(JobBoardClientError):
    """Raised when the session store cannot be read or written."""

    def __init__(self, message: str, code: str = "storage_error"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Auth-related errors
# ---------------------------------------------------------------------------


class AuthenticationError(JobBoardClientError):
    """Raised when the backend rejects credentials during login or registration.

    The message is the backend's own message when it sent one, otherwise a
    generic fallback such as "Login failed".
    """

    def __init__(self, message: str, code: str = "authentication_error"):
        super().__init__(message, code)


class RefreshError(AuthenticationError):
    """Raised when the refresh token is missing, expired or rejected.

    Always fatal to the session: the stored tokens are cleared and the host
    is sent to the login entry point.
    """

    def __init__(self, message: str = "Session expired, please log in again", code: str = "refresh_failed"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Backend-reported errors
# ---------------------------------------------------------------------------


class ApiError(JobBoardClientError):
    """Raised for a non-success HTTP response from the backend.

    Attributes:
        status_code (int): HTTP status of the response.
        payload (Any): Decoded JSON body, or None when the body was not JSON.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        payload: Any = None,
        code: str = "api_error",
    ):
        super().__init__(message, code)
        self.status_code = status_code
        self.payload = payload


class UnauthorizedError(ApiError):
    """Raised when a protected request is still 401 after the one allowed retry."""

    def __init__(self, message: str = "Unauthorized", payload: Any = None, code: str = "unauthorized"):
        super().__init__(message, 401, payload, code)


class ValidationError(ApiError):
    """Raised for a 4xx response other than 401.

    The backend message is kept verbatim so the UI can surface it.
    """

    def __init__(self, message: str, status_code: int = 400, payload: Any = None, code: str = "validation_error"):
        super().__init__(message, status_code, payload, code)


class ServerError(ApiError):
    """Raised for a 5xx response."""

    def __init__(self, message: str, status_code: int = 500, payload: Any = None, code: str = "server_error"):
        super().__init__(message, status_code, payload, code)
