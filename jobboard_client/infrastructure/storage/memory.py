from typing import Optional

import structlog

from jobboard_client.domain.interfaces.session_store import ISessionStore
from jobboard_client.domain.value_objects.token_pair import TokenPair

logger = structlog.get_logger(__name__)


class InMemorySessionStore(ISessionStore):
    """Keeps the token pair in process memory.

    Used by tests and short-lived scripts. Writes swap one immutable
    `TokenPair` reference, so they are atomic on the event loop.
    """

    def __init__(self, tokens: Optional[TokenPair] = None):
        self._tokens = tokens

    async def get(self) -> Optional[TokenPair]:
        return self._tokens

    async def set(self, tokens: TokenPair) -> None:
        self._tokens = tokens
        logger.debug("Session tokens stored", store="memory", tokens=tokens.mask_for_logging())

    async def clear(self) -> None:
        self._tokens = None
        logger.debug("Session tokens cleared", store="memory")
