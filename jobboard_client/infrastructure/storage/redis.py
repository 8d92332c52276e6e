"""
Redis session store.

Keeps the token pair under two string keys so that several worker processes
acting for the same account share one session:

    <prefix>access_token
    <prefix>refresh_token

`set` writes both keys in a MULTI/EXEC transaction and `clear` deletes both in
a single DEL, so no reader ever sees half a pair.

**Security Note**: Ensure that the Redis connection URL (REDIS_URL) includes SSL/TLS
parameters if connecting over an insecure network to prevent token interception.
Avoid logging connection details that contain passwords.
"""

from typing import Optional

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from jobboard_client.core.exceptions import StorageError
from jobboard_client.domain.interfaces.session_store import ISessionStore
from jobboard_client.domain.value_objects.token_pair import TokenPair

logger = structlog.get_logger(__name__)


class RedisSessionStore(ISessionStore):
    """Stores the token pair in Redis."""

    def __init__(
        self,
        redis_client: Redis,
        prefix: str = "jobboard:",
        access_key: str = "access_token",
        refresh_key: str = "refresh_token",
    ):
        self.redis_client = redis_client
        self.access_key = f"{prefix}{access_key}"
        self.refresh_key = f"{prefix}{refresh_key}"

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisSessionStore":
        redis_client = Redis.from_url(url, encoding="utf-8", decode_responses=True)
        logger.debug("Redis session store connection created")
        return cls(redis_client, **kwargs)

    async def get(self) -> Optional[TokenPair]:
        try:
            access, refresh = await self.redis_client.mget(self.access_key, self.refresh_key)
        except RedisError as e:
            raise StorageError(f"Failed to read session from Redis: {e}") from e

        if not access:
            return None
        return TokenPair(access=_decode(access), refresh=_decode(refresh))

    async def set(self, tokens: TokenPair) -> None:
        try:
            async with self.redis_client.pipeline(transaction=True) as pipe:
                pipe.set(self.access_key, tokens.access)
                pipe.set(self.refresh_key, tokens.refresh)
                await pipe.execute()
        except RedisError as e:
            raise StorageError(f"Failed to write session to Redis: {e}") from e
        logger.debug("Session tokens stored", store="redis", tokens=tokens.mask_for_logging())

    async def clear(self) -> None:
        try:
            await self.redis_client.delete(self.access_key, self.refresh_key)
        except RedisError as e:
            raise StorageError(f"Failed to clear session in Redis: {e}") from e
        logger.debug("Session tokens cleared", store="redis")

    async def aclose(self) -> None:
        await self.redis_client.aclose()
        logger.debug("Redis session store connection closed")


def _decode(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)
