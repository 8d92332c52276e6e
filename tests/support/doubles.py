"""Hand-driven test doubles for the session layer's collaborators."""

from typing import Awaitable, Callable, List

from jobboard_client.domain.interfaces.navigation import ILoginRedirect
from jobboard_client.domain.interfaces.transport import IHttpTransport
from jobboard_client.domain.value_objects.api_response import ApiResponse
from jobboard_client.domain.value_objects.pending_request import PendingRequest

Handler = Callable[[PendingRequest], Awaitable[ApiResponse]]


class ScriptedTransport(IHttpTransport):
    """Transport whose answers come from an async handler; records every request."""

    def __init__(self, handler: Handler):
        self.handler = handler
        self.requests: List[PendingRequest] = []
        self.closed = False

    async def send(self, request: PendingRequest) -> ApiResponse:
        self.requests.append(request)
        return await self.handler(request)

    async def aclose(self) -> None:
        self.closed = True

    def count(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.path == path)


class RecordingLoginRedirect(ILoginRedirect):
    def __init__(self):
        self.calls = 0

    async def redirect_to_login(self) -> None:
        self.calls += 1


def ok(data=None, status_code: int = 200) -> ApiResponse:
    return ApiResponse(status_code=status_code, payload={"success": True, "data": data})


def error(status_code: int, message: str = "") -> ApiResponse:
    payload = {"success": False}
    if message:
        payload["message"] = message
    return ApiResponse(status_code=status_code, payload=payload)
