"""Redis implementation of SlotStore.

It's the default implementation and satisfies the SlotStore protocol.
Expiry is delegated to Redis (``SET ... EX``), and the loading claim uses
``SET ... NX`` so exactly one requester wins it.
"""

import redis.asyncio as redis
from redis.exceptions import RedisError

from gql_response_cache.config import get_redis_client
from gql_response_cache.dto.options import RedisOptions
from gql_response_cache.exceptions import StoreUnavailableError


class RedisSlotStore:
    """Redis implementation of the slot store.

    This class satisfies the SlotStore protocol through structural
    typing - no explicit inheritance needed.

    Every Redis failure surfaces as StoreUnavailableError; nothing falls
    back to computing silently.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        options: RedisOptions | None = None,
    ) -> None:
        """Initialize the Redis slot store.

        Args:
            redis_client: asyncio Redis client. If None, creates one from options/env.
            options: Connection options used when no client is given.
        """
        self._client = redis_client or get_redis_client(options)

    @classmethod
    def create(cls, options: RedisOptions | None = None) -> "RedisSlotStore":
        """Factory method to create RedisSlotStore with defaults.

        Args:
            options: Connection options. Unset fields fall back to env, then defaults.

        Returns:
            Configured RedisSlotStore
        """
        return cls(options=options)

    async def get(self, key: str) -> bytes | None:
        """Read the raw slot bytes.

        Args:
            key: The cache key

        Returns:
            Stored bytes, or None if absent

        Raises:
            StoreUnavailableError: If Redis fails
        """
        try:
            return await self._client.get(key)
        except RedisError as e:
            raise StoreUnavailableError("get", key, e) from e

    async def set(self, key: str, value: bytes, ttl: int, only_if_absent: bool = False) -> bool:
        """Write slot bytes with an expiry.

        Args:
            key: The cache key
            value: The encoded slot
            ttl: Time-to-live in seconds
            only_if_absent: Use SET NX so the write only happens on an empty key

        Returns:
            True if written, False if the NX condition failed

        Raises:
            StoreUnavailableError: If Redis fails
        """
        try:
            result = await self._client.set(key, value, ex=ttl, nx=only_if_absent)
        except RedisError as e:
            raise StoreUnavailableError("set", key, e) from e
        return bool(result)

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError):
            return False

    async def close(self) -> None:
        """Close the connection pool.

        Should be called when shutting down the application.
        """
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
