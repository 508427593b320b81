"""GraphQL Response Cache - cache-or-compute coordination over Redis.

This package sits in front of an expensive GraphQL query handler and a
shared Redis store. It decides which requests are cacheable, derives a
deterministic key per request, serves cached results, and makes concurrent
requesters for the same uncached key wait for a single computation.

Layers:
    - protocols: Interface contracts (SlotStore, OperationExecutor)
    - repositories: Data access implementations
    - services: Business logic (eligibility, keys, coordinator)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts, options)
    - entities: Domain models (internal)

Usage:
    ```python
    from gql_response_cache import CacheCoordinator, CacheEntryOptions, CacheOptions, RedisSlotStore

    coordinator = CacheCoordinator.create(
        store=RedisSlotStore.create(),
        options=CacheOptions(entries=[CacheEntryOptions(filter="GetUser", ttl=60)]),
    )
    ```

For HTTP API:
    ```python
    from gql_response_cache.api.app import app
    ```
"""

from gql_response_cache.config import CacheConfig, get_redis_client, get_settings
from gql_response_cache.dto import CacheEntryOptions, CacheOptions, GraphQLRequest, RedisOptions
from gql_response_cache.entities import CacheSlot, Interception, RequestDescriptor, SlotState
from gql_response_cache.exceptions import (
    ResponseCacheError,
    SlotDecodeError,
    StoreUnavailableError,
    UpstreamError,
)
from gql_response_cache.handlers import GraphQLCacheHandler
from gql_response_cache.protocols import OperationExecutor, SlotStore
from gql_response_cache.repositories import HttpUpstreamExecutor, RedisSlotStore
from gql_response_cache.services import CacheCoordinator, EligibilityFilter, derive_key

__all__ = [
    # Configuration
    "CacheConfig",
    "get_settings",
    "get_redis_client",
    "CacheOptions",
    "CacheEntryOptions",
    "RedisOptions",
    # Protocols (interfaces)
    "SlotStore",
    "OperationExecutor",
    # Services (business logic)
    "CacheCoordinator",
    "EligibilityFilter",
    "derive_key",
    # Handlers (HTTP)
    "GraphQLCacheHandler",
    # Repositories (data access)
    "RedisSlotStore",
    "HttpUpstreamExecutor",
    # Entities (domain models)
    "CacheSlot",
    "SlotState",
    "Interception",
    "RequestDescriptor",
    # DTOs (API contracts)
    "GraphQLRequest",
    # Errors
    "ResponseCacheError",
    "StoreUnavailableError",
    "SlotDecodeError",
    "UpstreamError",
]
