"""Composition root for the session layer.

Builds concrete stores, transports and redirects from `Settings` and wires
them into a `SessionManager`. Anything passed in explicitly wins over the
settings, which is how tests swap in fakes.
"""

from typing import Optional

import structlog

from jobboard_client.adapters.navigation import CallbackLoginRedirect, LoggingLoginRedirect, RedirectCallback
from jobboard_client.core.config.settings import Settings
from jobboard_client.core.config.settings import settings as default_settings
from jobboard_client.domain.interfaces.navigation import ILoginRedirect
from jobboard_client.domain.interfaces.session_store import ISessionStore
from jobboard_client.domain.interfaces.transport import IHttpTransport
from jobboard_client.domain.services.auth.account import AccountService
from jobboard_client.domain.services.auth.session_manager import AuthEndpoints, SessionManager
from jobboard_client.infrastructure.http.transport import HttpTransport
from jobboard_client.infrastructure.storage.file import FileSessionStore
from jobboard_client.infrastructure.storage.memory import InMemorySessionStore
from jobboard_client.infrastructure.storage.redis import RedisSessionStore

logger = structlog.get_logger(__name__)


def create_session_store(settings: Optional[Settings] = None) -> ISessionStore:
    """Build the session store selected by SESSION_STORE_BACKEND."""
    settings = settings or default_settings
    backend = settings.SESSION_STORE_BACKEND
    keys = {"access_key": settings.ACCESS_TOKEN_KEY, "refresh_key": settings.REFRESH_TOKEN_KEY}

    if backend == "memory":
        return InMemorySessionStore()
    if backend == "file":
        return FileSessionStore(settings.SESSION_STORE_PATH, **keys)
    if backend == "redis":
        return RedisSessionStore.from_url(settings.REDIS_URL, prefix=settings.SESSION_KEY_PREFIX, **keys)
    raise ValueError(f"Unknown session store backend: {backend}")


def create_transport(settings: Optional[Settings] = None) -> IHttpTransport:
    settings = settings or default_settings
    return HttpTransport(base_url=settings.API_BASE_URL, timeout=settings.REQUEST_TIMEOUT_SECONDS)


def create_login_redirect(
    settings: Optional[Settings] = None, on_login_required: Optional[RedirectCallback] = None
) -> ILoginRedirect:
    settings = settings or default_settings
    if on_login_required is not None:
        return CallbackLoginRedirect(on_login_required, login_path=settings.LOGIN_PATH)
    return LoggingLoginRedirect(login_path=settings.LOGIN_PATH)


def create_session_manager(
    settings: Optional[Settings] = None,
    *,
    store: Optional[ISessionStore] = None,
    transport: Optional[IHttpTransport] = None,
    login_redirect: Optional[ILoginRedirect] = None,
    on_login_required: Optional[RedirectCallback] = None,
) -> SessionManager:
    """Wire a `SessionManager` from settings.

    Args:
        settings: Configuration; the package-wide singleton when omitted.
        store: Overrides SESSION_STORE_BACKEND.
        transport: Overrides the httpx transport built from API_BASE_URL.
        login_redirect: Overrides the redirect adapter.
        on_login_required: Callback receiving LOGIN_PATH when the session ends.
    """
    settings = settings or default_settings
    settings.validate_required_fields()

    manager = SessionManager(
        store=store or create_session_store(settings),
        transport=transport or create_transport(settings),
        login_redirect=login_redirect or create_login_redirect(settings, on_login_required),
        endpoints=AuthEndpoints.from_settings(settings),
        coalesce_refresh=settings.COALESCE_REFRESH,
    )
    logger.debug(
        "Session manager created",
        store=type(manager.store).__name__,
        base_url=settings.API_BASE_URL,
        coalesce_refresh=settings.COALESCE_REFRESH,
    )
    return manager


def create_account_service(session_manager: SessionManager) -> AccountService:
    return AccountService(session_manager)
