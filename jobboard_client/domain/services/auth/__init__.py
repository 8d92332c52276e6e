from .account import AccountService
from .payloads import LoginRequest, RefreshRequest, RegisterRequest, UpdateProfileRequest
from .session_manager import AuthEndpoints, SessionManager

__all__ = [
    "AccountService",
    "AuthEndpoints",
    "SessionManager",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "UpdateProfileRequest",
]
