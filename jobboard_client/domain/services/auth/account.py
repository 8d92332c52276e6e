import asyncio
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from jobboard_client.core.exceptions import ApiError, JobBoardClientError
from jobboard_client.domain.entities.user import User
from jobboard_client.domain.services.auth.payloads import UpdateProfileRequest
from jobboard_client.domain.services.auth.session_manager import SessionManager
from jobboard_client.domain.value_objects.api_response import ApiResponse

logger = structlog.get_logger(__name__)


class AccountService:
    """Current-user operations on top of a `SessionManager`.

    All calls go through `SessionManager.dispatch`, so an expired access token
    is refreshed transparently here as well.
    """

    def __init__(self, session_manager: SessionManager):
        self._session = session_manager

    async def get_current_user(self) -> User:
        """Fetches the authenticated user from ``GET /auth/me``."""
        response = await self._session.request("GET", self._session.endpoints.me)
        return _user_from(response)

    async def update_profile(self, fields: Union[UpdateProfileRequest, Mapping[str, Any]]) -> User:
        """Updates name, email or avatar; fields left unset are not sent."""
        payload = fields if isinstance(fields, UpdateProfileRequest) else UpdateProfileRequest.model_validate(dict(fields))
        response = await self._session.request(
            "PUT", self._session.endpoints.profile, json=payload.model_dump(exclude_unset=True)
        )
        return _user_from(response)

    async def upload_cv(
        self,
        cv: Union[bytes, str, Path],
        filename: Optional[str] = None,
        content_type: str = "application/pdf",
    ) -> str:
        """Uploads a CV as multipart form data and returns its URL.

        Args:
            cv: File contents, or a path to read them from.
            filename: Name sent with the upload; defaults to the path's name.
            content_type: MIME type of the file.

        Raises:
            ApiError: If the backend response carries no ``cvUrl``.
        """
        if isinstance(cv, (str, Path)):
            path = Path(cv).expanduser()
            content = await asyncio.to_thread(path.read_bytes)
            filename = filename or path.name
        else:
            content = cv
        files = {"cv": (filename or "cv", content, content_type)}

        response = await self._session.request("POST", self._session.endpoints.cv, files=files)
        data = response.data
        cv_url = data.get("cvUrl") if isinstance(data, Mapping) else None
        if not response.success or not cv_url:
            raise ApiError(
                response.message("CV upload response did not include a URL"),
                status_code=response.status_code,
                payload=response.payload,
                code="unexpected_payload",
            )
        logger.info("CV uploaded", filename=filename or "cv")
        return cv_url

    async def restore_session(self) -> Optional[User]:
        """Resumes a stored session at start-up.

        Without a stored token the backend is not called. If the stored
        session cannot be confirmed for any reason the tokens are dropped and
        the host starts logged out.
        """
        if not await self._session.is_authenticated():
            return None
        try:
            user = await self.get_current_user()
        except JobBoardClientError as e:
            logger.warning("Stored session could not be restored", code=e.code, error=e.message)
            await self._session.clear_session()
            return None
        logger.info("Session restored", user_id=user.id)
        return user


def _user_from(response: ApiResponse) -> User:
    data = response.data
    if not response.success or not isinstance(data, Mapping):
        raise ApiError(
            response.message("Unexpected user payload from backend"),
            status_code=response.status_code,
            payload=response.payload,
            code="unexpected_payload",
        )
    try:
        return User.model_validate(data)
    except PydanticValidationError as e:
        raise ApiError(
            "Malformed user payload from backend",
            status_code=response.status_code,
            payload=response.payload,
            code="unexpected_payload",
        ) from e
