"""Session store interface.

The session store is the client's durable key-value storage for the current
token pair. Writers are login, register, refresh and logout; every outgoing
request reads the access token.
"""

from abc import ABC, abstractmethod
from typing import Optional

from jobboard_client.domain.value_objects.token_pair import TokenPair


class ISessionStore(ABC):
    """Interface for persisting the current `TokenPair`.

    Implementations must make `set` and `clear` atomic per call: a reader
    never observes a new access token next to an old refresh token.
    """

    @abstractmethod
    async def get(self) -> Optional[TokenPair]:
        """Returns the stored token pair, or None when there is no session.

        Raises:
            StorageError: If the backing store cannot be read.
        """
        raise NotImplementedError

    @abstractmethod
    async def set(self, tokens: TokenPair) -> None:
        """Replaces the stored token pair as a whole.

        Raises:
            StorageError: If the backing store cannot be written.
        """
        raise NotImplementedError

    @abstractmethod
    async def clear(self) -> None:
        """Removes both tokens. Clearing an empty store is a no-op."""
        raise NotImplementedError

    async def get_access_token(self) -> Optional[str]:
        tokens = await self.get()
        return tokens.access if tokens else None
