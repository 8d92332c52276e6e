"""Session layer for the job-board REST backend.

Typical use::

    from jobboard_client import create_session_manager, AccountService

    async with create_session_manager() as session:
        await session.login("john@example.com", "Seeker123!")
        jobs = await session.request("GET", "/jobs", params={"page": 1})
        me = await AccountService(session).get_current_user()
"""

from jobboard_client.core.exceptions import (
    ApiError,
    AuthenticationError,
    JobBoardClientError,
    RefreshError,
    ServerError,
    StorageError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from jobboard_client.domain.entities.user import Role, User
from jobboard_client.domain.services.auth import AccountService, AuthEndpoints, SessionManager
from jobboard_client.domain.value_objects import ApiResponse, PendingRequest, TokenPair, normalize_token_payload
from jobboard_client.infrastructure.dependency_injection import create_session_manager

__version__ = "0.1.0"

__all__ = [
    "AccountService",
    "ApiError",
    "ApiResponse",
    "AuthEndpoints",
    "AuthenticationError",
    "JobBoardClientError",
    "PendingRequest",
    "RefreshError",
    "Role",
    "ServerError",
    "SessionManager",
    "StorageError",
    "TokenPair",
    "TransportError",
    "UnauthorizedError",
    "User",
    "ValidationError",
    "create_session_manager",
    "normalize_token_payload",
]
