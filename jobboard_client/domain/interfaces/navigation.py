from abc import ABC, abstractmethod


class ILoginRedirect(ABC):
    """Sends the host application to its login entry point.

    Called once a session is irrecoverably lost (refresh failed) and the
    stored tokens have already been cleared.
    """

    @abstractmethod
    async def redirect_to_login(self) -> None:
        raise NotImplementedError
