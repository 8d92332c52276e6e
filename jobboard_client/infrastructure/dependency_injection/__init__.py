from .session_dependencies import (
    create_account_service,
    create_login_redirect,
    create_session_manager,
    create_session_store,
    create_transport,
)

__all__ = [
    "create_account_service",
    "create_login_redirect",
    "create_session_manager",
    "create_session_store",
    "create_transport",
]
