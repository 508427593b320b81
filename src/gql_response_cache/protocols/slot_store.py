"""Slot store protocol.

Defines the interface for the shared key/value store that holds cache
slots. The store is the only authority on slot state; eviction is left to
its own expiry mechanism.

Implementations can include:
- Redis (default)
- Valkey / KeyDB / any Redis-compatible server
- An in-memory dictionary (tests)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SlotStore(Protocol):
    """Protocol for slot storage backends.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed.

    Example:
        ```python
        from gql_response_cache.protocols import SlotStore

        store: SlotStore = RedisSlotStore.create()
        ```
    """

    async def get(self, key: str) -> bytes | None:
        """Read the raw bytes stored under a key.

        Args:
            key: The cache key

        Returns:
            The stored bytes, or None when the key is absent or expired
        """
        ...

    async def set(self, key: str, value: bytes, ttl: int, only_if_absent: bool = False) -> bool:
        """Write bytes under a key with an expiry.

        Args:
            key: The cache key
            value: The bytes to store
            ttl: Time-to-live in seconds
            only_if_absent: Only write when the key holds no value (atomic)

        Returns:
            True if the value was written, False if ``only_if_absent`` lost
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
