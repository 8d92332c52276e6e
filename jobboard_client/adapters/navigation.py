"""Login redirect adapters.

A browser client would assign ``window.location`` here. A Python host decides
what "go to the login page" means for it: a GUI swaps screens, a CLI prints a
prompt, a worker stops and pages someone. These adapters cover the two common
cases: call back into the host, or only log.
"""

import inspect
from typing import Awaitable, Callable, Union

import structlog

from jobboard_client.domain.interfaces.navigation import ILoginRedirect

logger = structlog.get_logger(__name__)

RedirectCallback = Callable[[str], Union[None, Awaitable[None]]]


class CallbackLoginRedirect(ILoginRedirect):
    """Invokes a host callback with the login path.

    The callback may be a plain function or a coroutine function.
    """

    def __init__(self, callback: RedirectCallback, login_path: str = "/login"):
        self._callback = callback
        self.login_path = login_path

    async def redirect_to_login(self) -> None:
        logger.info("Redirecting to login", login_path=self.login_path)
        result = self._callback(self.login_path)
        if inspect.isawaitable(result):
            await result


class LoggingLoginRedirect(ILoginRedirect):
    """Only records that the session ended; used when the host registers no callback."""

    def __init__(self, login_path: str = "/login"):
        self.login_path = login_path

    async def redirect_to_login(self) -> None:
        logger.warning(
            "Session expired and could not be refreshed; login required",
            login_path=self.login_path,
        )
