"""
Shared fixtures: an in-memory slot store and a scripted executor.
"""

import asyncio
import time

import pytest

from gql_response_cache.config import CacheConfig, get_settings
from gql_response_cache.dto import CacheEntryOptions
from gql_response_cache.entities import RequestDescriptor
from gql_response_cache.services import CacheCoordinator

USER_QUERY = "{ getUser { id } }"


class InMemorySlotStore:
    """Dictionary-backed SlotStore with expiry, recording every call."""

    def __init__(self) -> None:
        self.values: dict[str, bytes] = {}
        self.ttls: dict[str, int] = {}
        self.calls: list[tuple[str, str]] = []
        self.healthy = True
        self._deadlines: dict[str, float] = {}

    def _expire(self, key: str) -> None:
        deadline = self._deadlines.get(key)
        if deadline is not None and time.monotonic() >= deadline:
            self.values.pop(key, None)
            self.ttls.pop(key, None)
            self._deadlines.pop(key, None)

    async def get(self, key: str) -> bytes | None:
        self.calls.append(("get", key))
        self._expire(key)
        return self.values.get(key)

    async def set(self, key: str, value: bytes, ttl: int, only_if_absent: bool = False) -> bool:
        self.calls.append(("set", key))
        self._expire(key)
        if only_if_absent and key in self.values:
            return False
        self.values[key] = value
        self.ttls[key] = ttl
        self._deadlines[key] = time.monotonic() + ttl
        return True

    async def health_check(self) -> bool:
        return self.healthy


class FakeExecutor:
    """OperationExecutor returning a fixed body."""

    def __init__(self, response: dict | None = None, delay: float = 0.0) -> None:
        self.response = response or {"data": {"getUser": {"id": "1"}}}
        self.delay = delay
        self.calls: list = []
        self.available = True

    async def execute(self, request, headers=None) -> dict:
        self.calls.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.response

    async def is_available(self) -> bool:
        return self.available


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read environment settings in every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store():
    """Create an empty in-memory slot store."""
    return InMemorySlotStore()


@pytest.fixture
def executor():
    """Create an executor answering with a GetUser body."""
    return FakeExecutor()


@pytest.fixture
def fast_config():
    """Configuration with short poll timings."""
    return CacheConfig(
        entries=(
            CacheEntryOptions(filter="GetUser", ttl=60),
            CacheEntryOptions(filter="GetPosts"),
        ),
        ttl=300,
        poll_interval=0.01,
        poll_timeout=0.2,
    )


@pytest.fixture
def coordinator(store, fast_config):
    """Create a coordinator over the in-memory store."""
    return CacheCoordinator(store=store, config=fast_config)


@pytest.fixture
def make_request():
    """Build request descriptors with GetUser defaults."""

    def _make(**overrides) -> RequestDescriptor:
        fields = {
            "operation_name": "GetUser",
            "operation_kind": "query",
            "query": USER_QUERY,
            "variables": {},
        }
        fields.update(overrides)
        return RequestDescriptor(**fields)

    return _make
