"""Cache coordinator for the three-state slot protocol.

For each eligible request the coordinator looks at the slot stored under
the request's key and either serves the cached payload, waits for another
requester that is already computing it, or lets the caller compute and
then writes the result back.

    absent  --(first requester claims)-->  loading  --(write-back)-->  ready
       ^                                      |                         |
       +-------(loading_ttl expires)----------+----(ttl expires)--------+

The store is the only place slot state lives. No in-process lock is held:
the loading marker is advisory and other requesters choose to wait on it.

A computation that produces no cacheable payload (an upstream failure or a
response with GraphQL errors) leaves its loading marker in place until
``loading_ttl`` expires. Until then every requester for that key waits the
full ``poll_timeout`` before computing itself.
"""

import asyncio
from collections.abc import Mapping
from typing import Any

import structlog

from gql_response_cache.config import CacheConfig
from gql_response_cache.dto.options import CacheOptions
from gql_response_cache.entities import CacheSlot, Interception, RequestDescriptor
from gql_response_cache.models import CoordinatorMetrics
from gql_response_cache.protocols import SlotStore
from gql_response_cache.repositories.redis_repository import RedisSlotStore
from gql_response_cache.services.cache_keys import derive_key
from gql_response_cache.services.eligibility import EligibilityFilter

logger = structlog.get_logger(__name__)


class CacheCoordinator:
    """Cache-or-compute arbitration around a single request.

    The framework calls ``intercept`` before computing a response and
    ``write_back`` once a response exists.

    Example:
        ```python
        coordinator = CacheCoordinator.create(
            store=RedisSlotStore.create(),
            options=CacheOptions(entries=[CacheEntryOptions(filter="GetUser", ttl=60)]),
        )

        interception = await coordinator.intercept(descriptor)
        if interception.short_circuit:
            payload = interception.payload
        else:
            payload = await execute(descriptor)
        await coordinator.write_back(descriptor, payload)
        ```
    """

    def __init__(
        self,
        store: SlotStore,
        config: CacheConfig | None = None,
        metrics: CoordinatorMetrics | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            store: Slot store backend (required).
            config: Resolved configuration. Defaults to environment settings.
            metrics: Counter sink. A fresh one is created if omitted.
        """
        self._store = store
        self._config = config or CacheConfig.resolve()
        self._eligibility = EligibilityFilter(
            entries=self._config.entries,
            enable_header=self._config.enable_header,
            enable_query=self._config.enable_query,
        )
        self._metrics = metrics or CoordinatorMetrics()

    @classmethod
    def create(
        cls,
        store: SlotStore | None = None,
        options: CacheOptions | None = None,
    ) -> "CacheCoordinator":
        """Factory method resolving explicit options over the environment.

        Args:
            store: Slot store backend. If None, a RedisSlotStore is built from
                ``options.redis``.
            options: Explicit options. Unset fields fall back to env, then defaults.

        Returns:
            Configured CacheCoordinator
        """
        if store is None:
            store = RedisSlotStore.create(options.redis if options else None)
        return cls(store=store, config=CacheConfig.resolve(options))

    def is_cacheable(self, request: RequestDescriptor) -> bool:
        return self._eligibility.is_cacheable(request)

    def derive_key(self, request: RequestDescriptor) -> str:
        return derive_key(request)

    def select_ttl(self, operation_name: str | None) -> int:
        """Pick the time-to-live for a write-back.

        The first allow-list entry matching the operation decides; without
        its own ttl, the global ttl applies (itself defaulting to 24 hours).
        """
        entry = self._eligibility.match_entry(operation_name)
        if entry is not None and entry.ttl:
            return entry.ttl
        return self._config.ttl

    async def intercept(self, request: RequestDescriptor) -> Interception:
        """Try to answer a request without computing it.

        Business logic:
        1. Ineligible or must-revalidate requests compute; the store is untouched
        2. Absent slot: claim it with the loading marker and compute
        3. Loading slot (or a lost claim): wait for it to become ready
        4. Ready slot: serve the cached payload

        Args:
            request: The request descriptor

        Returns:
            Interception telling the caller to compute or serve a payload

        Raises:
            StoreUnavailableError: If the store fails
            SlotDecodeError: If the stored slot is corrupt
        """
        if not self.is_cacheable(request) or request.forces_revalidation:
            return Interception.compute()

        key = derive_key(request)
        slot = await self._read(key)

        if slot.is_absent:
            claimed = await self._store.set(
                key,
                CacheSlot.loading().encode(),
                self._config.loading_ttl,
                only_if_absent=True,
            )
            if claimed:
                self._metrics.record_compute()
                logger.info("cache_miss", key=key, loading_ttl=self._config.loading_ttl)
                return Interception.compute()
            # Another requester claimed the slot between our read and write
            slot = CacheSlot.loading()

        if slot.is_loading:
            return await self._wait_for_ready(key)

        payload = slot.payload(key)
        self._metrics.record_hit()
        logger.info("cache_hit", key=key)
        return Interception.serve(payload, source="cache")

    async def write_back(self, request: RequestDescriptor, payload: Any) -> bool:
        """Persist a computed response.

        Business logic:
        1. Ineligible requests are skipped; the store is untouched
        2. Responses carrying GraphQL errors are never cached; the loading
           marker then stays until loading_ttl expires, and requests for the
           key wait out poll_timeout before computing themselves
        3. A ready slot is kept unless the request forces revalidation, which
           skips the read and overwrites unconditionally
        4. Otherwise the payload overwrites the slot with the selected ttl

        Args:
            request: The request descriptor
            payload: The response body (JSON-serializable)

        Returns:
            True if the payload was written

        Raises:
            StoreUnavailableError: If the store fails
        """
        if not self.is_cacheable(request):
            return False

        key = derive_key(request)

        if _has_errors(payload):
            self._metrics.record_skipped_write()
            logger.info("cache_write_skipped", key=key, reason="errors")
            return False

        # Revalidation overwrites whatever the slot holds, corrupt bytes included
        if not request.forces_revalidation and (await self._read(key)).is_ready:
            self._metrics.record_skipped_write()
            logger.debug("cache_write_skipped", key=key, reason="ready")
            return False

        ttl = self.select_ttl(request.operation_name)
        await self._store.set(key, CacheSlot.ready(payload).encode(), ttl)

        self._metrics.record_write()
        logger.info("cache_write", key=key, ttl=ttl)
        return True

    async def _read(self, key: str) -> CacheSlot:
        return CacheSlot.decode(await self._store.get(key), key)

    async def _wait_for_ready(self, key: str) -> Interception:
        """Wait on a loading slot until it is ready or the deadline passes."""
        loop = asyncio.get_running_loop()
        started = loop.time()
        logger.info("cache_poll_wait", key=key, timeout=self._config.poll_timeout)

        try:
            slot = await asyncio.wait_for(self._poll(key), timeout=self._config.poll_timeout)
        except asyncio.TimeoutError:
            self._metrics.record_poll_timeout()
            logger.warning(
                "cache_poll_timeout",
                key=key,
                waited=round(loop.time() - started, 3),
            )
            return Interception.compute()

        payload = slot.payload(key)
        self._metrics.record_poll_hit()
        logger.info("cache_poll_hit", key=key, waited=round(loop.time() - started, 3))
        return Interception.serve(payload, source="poll")

    async def _poll(self, key: str) -> CacheSlot:
        while True:
            await asyncio.sleep(self._config.poll_interval)
            slot = await self._read(key)
            if slot.is_ready:
                return slot

    def reset_metrics(self) -> None:
        self._metrics = CoordinatorMetrics()

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def metrics(self) -> CoordinatorMetrics:
        return self._metrics

    @property
    def store(self) -> SlotStore:
        """Get the underlying store (for testing)."""
        return self._store


def _has_errors(payload: Any) -> bool:
    return isinstance(payload, Mapping) and bool(payload.get("errors"))
