"""HTTP transport built on httpx.

This is the only module that speaks HTTP. It sends a `PendingRequest` once,
decodes the JSON body, and turns network-level failures into `TransportError`.
Status codes are left to the session manager.
"""

from typing import Optional

import httpx
import structlog

from jobboard_client.core.exceptions import TransportError
from jobboard_client.domain.interfaces.transport import IHttpTransport
from jobboard_client.domain.value_objects.api_response import ApiResponse
from jobboard_client.domain.value_objects.pending_request import PendingRequest

logger = structlog.get_logger(__name__)

# Content-Type is left to httpx so multipart bodies keep their boundary.
DEFAULT_HEADERS = {"Accept": "application/json"}


class HttpTransport(IHttpTransport):
    """`IHttpTransport` over a shared `httpx.AsyncClient`.

    Args:
        base_url: Backend API root, e.g. ``http://localhost:3000/api/v1``.
        timeout: Per-request timeout in seconds.
        client: Pre-built client (tests pass one with an ASGI or mock transport).
            When given, `base_url` and `timeout` are ignored and the caller
            keeps ownership of it.

    Redirects are followed, so a 3xx never reaches the caller as a result.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout, headers=DEFAULT_HEADERS, follow_redirects=True
        )

    async def send(self, request: PendingRequest) -> ApiResponse:
        try:
            response = await self._client.request(
                request.method,
                request.path,
                json=request.json,
                files=dict(request.files) if request.files else None,
                params=dict(request.params) or None,
                headers=dict(request.headers),
            )
        except httpx.TimeoutException as e:
            logger.warning("Backend request timed out", method=request.method, path=request.path)
            raise TransportError(f"Request to {request.path} timed out", code="timeout") from e
        except httpx.HTTPError as e:
            logger.warning(
                "Backend request failed", method=request.method, path=request.path, error=str(e)
            )
            raise TransportError(f"Network error while calling {request.path}: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        logger.debug(
            "Backend responded",
            method=request.method,
            path=request.path,
            status_code=response.status_code,
            retry_count=request.retry_count,
        )
        return ApiResponse(status_code=response.status_code, payload=payload, headers=dict(response.headers))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, traceback) -> None:
        await self.aclose()
