"""Session Manager.

Owns the access/refresh token pair for one client and is the single path every
protected backend call goes through.

Per-request lifecycle::

    NEW -> ATTACHED -> SENT -> SUCCESS | FAILED | NEEDS_REFRESH
    NEEDS_REFRESH -> REFRESHING -> RETRIED_ONCE -> SUCCESS | FAILED
                                -> REFRESH_FAILED -> LOGGED_OUT

Rules:
- A request is re-sent at most once after a 401, so a backend that always
  answers 401 costs exactly two calls before the caller sees the failure.
- Requests that hit 401 together share one in-flight refresh.
- A failed refresh always ends the session: tokens are cleared, the host is
  redirected to login, and the caller receives the `RefreshError`.
- Every other outcome (success, other 4xx/5xx, transport failure) reaches the
  caller unchanged.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from jobboard_client.core.exceptions import (
    AuthenticationError,
    JobBoardClientError,
    RefreshError,
    ServerError,
    StorageError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from jobboard_client.domain.entities.user import User
from jobboard_client.domain.interfaces.navigation import ILoginRedirect
from jobboard_client.domain.interfaces.session_store import ISessionStore
from jobboard_client.domain.interfaces.transport import IHttpTransport
from jobboard_client.domain.services.auth.payloads import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
)
from jobboard_client.domain.value_objects.api_response import ApiResponse
from jobboard_client.domain.value_objects.pending_request import PendingRequest
from jobboard_client.domain.value_objects.token_pair import TokenPair, mask_token, normalize_token_payload

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AuthEndpoints:
    """Backend paths used by the session layer, relative to the API base URL."""

    login: str = "/auth/login"
    register: str = "/auth/register"
    refresh: str = "/auth/refresh"
    logout: str = "/auth/logout"
    me: str = "/auth/me"
    profile: str = "/users/profile"
    cv: str = "/users/cv"

    @classmethod
    def from_settings(cls, settings) -> "AuthEndpoints":
        return cls(
            login=settings.AUTH_LOGIN_ENDPOINT,
            register=settings.AUTH_REGISTER_ENDPOINT,
            refresh=settings.AUTH_REFRESH_ENDPOINT,
            logout=settings.AUTH_LOGOUT_ENDPOINT,
            me=settings.AUTH_ME_ENDPOINT,
            profile=settings.USER_PROFILE_ENDPOINT,
            cv=settings.USER_CV_ENDPOINT,
        )


class SessionManager:
    """Attaches credentials, refreshes expired sessions and ends dead ones.

    Args:
        store: Where the token pair lives between calls and restarts.
        transport: Sends requests to the backend.
        login_redirect: Invoked once a session cannot be refreshed. When None,
            the event is only logged.
        endpoints: Backend auth paths.
        coalesce_refresh: Share one in-flight refresh between concurrent 401s.
    """

    def __init__(
        self,
        store: ISessionStore,
        transport: IHttpTransport,
        login_redirect: Optional[ILoginRedirect] = None,
        *,
        endpoints: Optional[AuthEndpoints] = None,
        coalesce_refresh: bool = True,
    ):
        self.store = store
        self.endpoints = endpoints or AuthEndpoints()
        self._transport = transport
        self._login_redirect = login_redirect
        self._coalesce_refresh = coalesce_refresh
        self._refresh_task: Optional[asyncio.Future] = None

    # ------------------------------------------------------------------
    # Protected requests
    # ------------------------------------------------------------------

    async def is_authenticated(self) -> bool:
        return bool(await self.store.get_access_token())

    async def attach_credentials(self, request: PendingRequest) -> PendingRequest:
        """Returns `request` carrying the stored access token, if there is one."""
        token = await self.store.get_access_token()
        if token:
            return request.with_bearer(token)
        return request

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        files: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiResponse:
        """Builds a `PendingRequest` and dispatches it."""
        return await self.dispatch(
            PendingRequest(
                method=method, path=path, json=json, files=files, params=params or {}, headers=headers or {}
            )
        )

    async def dispatch(self, request: PendingRequest) -> ApiResponse:
        """Sends `request`, transparently recovering from one expired access token.

        Returns:
            The successful response.

        Raises:
            UnauthorizedError: If the request is still 401 after its one retry.
            RefreshError: If the session had to be refreshed and could not be.
            ValidationError: For any other 4xx.
            ServerError: For a 5xx.
            TransportError: If the backend could not be reached.
        """
        attached = await self.attach_credentials(request)
        response = await self._transport.send(attached)

        if response.status_code != 401:
            return self._check_response(response)

        if not request.can_retry:
            logger.warning(
                "Request still unauthorized after retry",
                method=request.method,
                path=request.path,
                retry_count=request.retry_count,
            )
            raise UnauthorizedError(response.message("Unauthorized"), payload=response.payload)

        retry = request.mark_retried()
        current = await self.store.get_access_token()
        if current and current != attached.bearer_token:
            # Another request already rotated the tokens after this one was sent.
            logger.debug(
                "Access token rotated while request was in flight",
                method=request.method,
                path=request.path,
            )
        else:
            await self._refresh_session()

        return await self.dispatch(retry)

    # ------------------------------------------------------------------
    # Token refresh
    # ------------------------------------------------------------------

    async def refresh(self) -> TokenPair:
        """Exchanges the stored refresh token for a new token pair and stores it.

        The call goes out without a bearer header and is not subject to the
        401 retry protocol.

        Raises:
            RefreshError: If no refresh token is stored, the backend rejects it,
                the response carries no tokens, or the backend is unreachable.
        """
        tokens = await self.store.get()
        if tokens is None or not tokens.can_refresh:
            raise RefreshError("No refresh token available", code="missing_refresh_token")

        body = RefreshRequest(refresh_token=tokens.refresh).model_dump(by_alias=True)
        try:
            response = await self._transport.send(
                PendingRequest(method="POST", path=self.endpoints.refresh, json=body)
            )
        except TransportError as e:
            raise RefreshError(e.message, code="refresh_transport_error") from e

        if not response.ok or not response.success:
            logger.info(
                "Refresh token rejected",
                status_code=response.status_code,
                refresh_token=mask_token(tokens.refresh),
            )
            raise RefreshError(response.message("Refresh token rejected"), code="refresh_rejected")

        new_tokens = normalize_token_payload(response.data)
        if new_tokens is None:
            raise RefreshError("Refresh response did not include tokens", code="missing_tokens")

        await self.store.set(new_tokens)
        logger.info("Access token refreshed", tokens=new_tokens.mask_for_logging())
        return new_tokens

    async def _refresh_session(self) -> TokenPair:
        if not self._coalesce_refresh:
            return await self._refresh_or_expire()

        task = self._refresh_task
        if task is None or task.done():
            task = asyncio.ensure_future(self._refresh_or_expire())
            task.add_done_callback(self._on_refresh_done)
            self._refresh_task = task
        else:
            logger.debug("Joining in-flight token refresh")
        # A cancelled caller must not cancel the refresh other callers await.
        return await asyncio.shield(task)

    def _on_refresh_done(self, task: asyncio.Future) -> None:
        if self._refresh_task is task:
            self._refresh_task = None
        if not task.cancelled():
            task.exception()

    async def _refresh_or_expire(self) -> TokenPair:
        try:
            return await self.refresh()
        except RefreshError as e:
            logger.warning("Token refresh failed; ending session", code=e.code, error=e.message)
            await self._expire_session()
            raise

    async def _expire_session(self) -> None:
        await self.clear_session()
        if self._login_redirect is None:
            logger.warning("Session expired; no login redirect registered")
            return
        try:
            await self._login_redirect.redirect_to_login()
        except Exception:
            logger.exception("Login redirect failed")

    # ------------------------------------------------------------------
    # Login / register / logout
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> Optional[User]:
        """Authenticates with email and password and stores the new session.

        Returns:
            The user from the login response, or None if the backend omitted it.

        Raises:
            AuthenticationError: If the backend rejects the credentials.
            ValidationError: For any other 4xx.
            ServerError: For a 5xx.
            TransportError: If the backend could not be reached.
        """
        body = LoginRequest(email=email, password=password).model_dump()
        return await self._authenticate(self.endpoints.login, body, fallback="Login failed")

    async def register(self, fields: Union[RegisterRequest, Mapping[str, Any]]) -> Optional[User]:
        """Creates an account and stores the session the backend returns.

        Raises the same errors as `login`.
        """
        payload = fields if isinstance(fields, RegisterRequest) else RegisterRequest.model_validate(dict(fields))
        return await self._authenticate(
            self.endpoints.register, payload.model_dump(exclude_none=True), fallback="Registration failed"
        )

    async def _authenticate(self, path: str, body: Mapping[str, Any], fallback: str) -> Optional[User]:
        response = await self._transport.send(PendingRequest(method="POST", path=path, json=body))

        if response.status_code == 401 or (response.ok and not response.success):
            logger.info("Authentication rejected", endpoint=path, status_code=response.status_code)
            raise AuthenticationError(response.message(fallback), code="invalid_credentials")
        self._check_response(response, fallback)

        data = response.data if isinstance(response.data, Mapping) else {}
        tokens = normalize_token_payload(data)
        if tokens is None:
            logger.error("Authentication response did not include tokens", endpoint=path)
            raise AuthenticationError(fallback, code="missing_tokens")

        await self.store.set(tokens)
        user = _parse_user(data.get("user"))
        logger.info(
            "Session established",
            endpoint=path,
            user_id=user.id if user else None,
            tokens=tokens.mask_for_logging(),
        )
        return user

    async def logout(self) -> None:
        """Ends the session locally, telling the backend on a best-effort basis.

        Never raises: a failed backend call is logged and the stored tokens
        are cleared regardless.
        """
        try:
            access = await self.store.get_access_token()
            if access:
                response = await self._transport.send(
                    PendingRequest(method="POST", path=self.endpoints.logout).with_bearer(access)
                )
                if not response.ok:
                    logger.warning(
                        "Backend logout rejected; clearing local session anyway",
                        status_code=response.status_code,
                    )
            else:
                logger.debug("No stored session; skipping backend logout")
        except JobBoardClientError as e:
            logger.warning("Backend logout failed; clearing local session anyway", error=e.message)
        except Exception:
            logger.exception("Unexpected error during backend logout; clearing local session anyway")
        finally:
            await self.clear_session()
        logger.info("User logged out")

    async def clear_session(self) -> None:
        """Removes the stored tokens; storage failures are logged, not raised."""
        try:
            await self.store.clear()
        except StorageError as e:
            logger.error("Failed to clear stored session", error=e.message)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_response(self, response: ApiResponse, fallback: Optional[str] = None) -> ApiResponse:
        if response.ok:
            return response

        status_code = response.status_code
        message = response.message(fallback or f"Request failed with status {status_code}")
        if status_code == 401:
            raise UnauthorizedError(message, payload=response.payload)
        if 400 <= status_code < 500:
            raise ValidationError(message, status_code=status_code, payload=response.payload)
        raise ServerError(message, status_code=status_code, payload=response.payload)

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "SessionManager":
        return self

    async def __aexit__(self, exc_type, exc_val, traceback) -> None:
        await self.aclose()


def _parse_user(data: Any) -> Optional[User]:
    if not isinstance(data, Mapping):
        return None
    try:
        return User.model_validate(data)
    except PydanticValidationError as e:
        logger.warning("Ignoring malformed user payload", error=str(e))
        return None
