"""
Tests for the Redis slot store.
"""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from gql_response_cache.exceptions import StoreUnavailableError
from gql_response_cache.protocols import SlotStore
from gql_response_cache.repositories import RedisSlotStore


@pytest.fixture
def redis_client():
    """Mock asyncio Redis client."""
    client = AsyncMock()
    client.get.return_value = None
    client.set.return_value = True
    client.ping.return_value = True
    return client


@pytest.fixture
def slot_store(redis_client):
    return RedisSlotStore(redis_client=redis_client)


def test_satisfies_protocol(slot_store):
    assert isinstance(slot_store, SlotStore)


@pytest.mark.asyncio
async def test_get_returns_raw_bytes(slot_store, redis_client):
    redis_client.get.return_value = b"L"
    assert await slot_store.get("gql:GetUser") == b"L"
    redis_client.get.assert_awaited_once_with("gql:GetUser")


@pytest.mark.asyncio
async def test_set_passes_expiry_and_nx(slot_store, redis_client):
    assert await slot_store.set("gql:GetUser", b"L", 120, only_if_absent=True) is True
    redis_client.set.assert_awaited_once_with("gql:GetUser", b"L", ex=120, nx=True)


@pytest.mark.asyncio
async def test_lost_claim_returns_false(slot_store, redis_client):
    redis_client.set.return_value = None
    assert await slot_store.set("gql:GetUser", b"L", 120, only_if_absent=True) is False


@pytest.mark.asyncio
async def test_plain_set_overwrites(slot_store, redis_client):
    await slot_store.set("gql:GetUser", b"R{}", 60)
    redis_client.set.assert_awaited_once_with("gql:GetUser", b"R{}", ex=60, nx=False)


@pytest.mark.asyncio
async def test_redis_errors_are_wrapped(slot_store, redis_client):
    redis_client.get.side_effect = RedisConnectionError("refused")
    redis_client.set.side_effect = RedisTimeoutError("timeout")

    with pytest.raises(StoreUnavailableError) as exc_info:
        await slot_store.get("gql:GetUser")
    assert exc_info.value.details["operation"] == "get"
    assert exc_info.value.details["original_error_type"] == "ConnectionError"

    with pytest.raises(StoreUnavailableError):
        await slot_store.set("gql:GetUser", b"L", 120)


@pytest.mark.asyncio
async def test_health_check(slot_store, redis_client):
    assert await slot_store.health_check() is True

    redis_client.ping.side_effect = RedisConnectionError("refused")
    assert await slot_store.health_check() is False


@pytest.mark.asyncio
async def test_close(slot_store, redis_client):
    await slot_store.close()
    redis_client.aclose.assert_awaited_once()
