from abc import ABC, abstractmethod

from jobboard_client.domain.value_objects.api_response import ApiResponse
from jobboard_client.domain.value_objects.pending_request import PendingRequest


class IHttpTransport(ABC):
    """Sends one request to the backend and returns its decoded response.

    The transport never interprets status codes; any HTTP status is a
    response. Only network-level failures raise.
    """

    @abstractmethod
    async def send(self, request: PendingRequest) -> ApiResponse:
        """Sends `request` exactly once.

        Raises:
            TransportError: If the backend could not be reached or timed out.
        """
        raise NotImplementedError

    @abstractmethod
    async def aclose(self) -> None:
        """Releases the underlying connection pool."""
        raise NotImplementedError
