from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

from jobboard_client.core.exceptions import StorageError
from jobboard_client.domain.value_objects.token_pair import TokenPair
from jobboard_client.infrastructure.storage.redis import RedisSessionStore


@pytest.fixture
def pipeline():
    """Provides a mocked Redis transaction pipeline usable as an async context manager."""
    pipe = MagicMock()
    pipe.__aenter__.return_value = pipe
    pipe.__aexit__.return_value = False
    pipe.execute = AsyncMock(return_value=[True, True])
    return pipe


@pytest_asyncio.fixture
def redis_client(pipeline):
    """Provides a mocked asynchronous Redis client."""
    mock_redis = AsyncMock(spec=Redis)
    mock_redis.mget = AsyncMock(return_value=[None, None])
    mock_redis.delete = AsyncMock(return_value=2)
    mock_redis.aclose = AsyncMock()
    mock_redis.pipeline = MagicMock(return_value=pipeline)
    return mock_redis


@pytest.fixture
def store(redis_client):
    return RedisSessionStore(redis_client, prefix="test:")


@pytest.mark.asyncio
async def test_get_reads_both_keys_in_one_call(store, redis_client):
    redis_client.mget.return_value = ["a1", "r1"]

    tokens = await store.get()

    assert tokens == TokenPair(access="a1", refresh="r1")
    redis_client.mget.assert_awaited_once_with("test:access_token", "test:refresh_token")


@pytest.mark.asyncio
async def test_get_decodes_bytes(store, redis_client):
    redis_client.mget.return_value = [b"a1", None]

    assert await store.get() == TokenPair(access="a1", refresh="")


@pytest.mark.asyncio
async def test_get_without_access_token_is_no_session(store, redis_client):
    redis_client.mget.return_value = [None, "r1"]

    assert await store.get() is None


@pytest.mark.asyncio
async def test_set_writes_both_keys_in_a_transaction(store, redis_client, pipeline):
    await store.set(TokenPair(access="a2", refresh="r2"))

    redis_client.pipeline.assert_called_once_with(transaction=True)
    pipeline.set.assert_any_call("test:access_token", "a2")
    pipeline.set.assert_any_call("test:refresh_token", "r2")
    pipeline.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_clear_deletes_both_keys_at_once(store, redis_client):
    await store.clear()

    redis_client.delete.assert_awaited_once_with("test:access_token", "test:refresh_token")


@pytest.mark.asyncio
async def test_read_failure_raises_storage_error(store, redis_client):
    redis_client.mget.side_effect = RedisConnectionError("Connection refused")

    with pytest.raises(StorageError, match="read session"):
        await store.get()


@pytest.mark.asyncio
async def test_write_failure_raises_storage_error(store, pipeline):
    pipeline.execute.side_effect = RedisConnectionError("Connection refused")

    with pytest.raises(StorageError, match="write session"):
        await store.set(TokenPair(access="a1", refresh="r1"))


@pytest.mark.asyncio
async def test_clear_failure_raises_storage_error(store, redis_client):
    redis_client.delete.side_effect = RedisConnectionError("Connection refused")

    with pytest.raises(StorageError, match="clear session"):
        await store.clear()


@pytest.mark.asyncio
async def test_aclose_closes_client(store, redis_client):
    await store.aclose()
    redis_client.aclose.assert_awaited_once()


def test_default_prefix():
    store = RedisSessionStore(AsyncMock(spec=Redis))
    assert store.access_key == "jobboard:access_token"
    assert store.refresh_key == "jobboard:refresh_token"
