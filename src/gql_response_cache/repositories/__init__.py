"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the upstream GraphQL
server) behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with in-memory implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from gql_response_cache.protocols import OperationExecutor, SlotStore

from .redis_repository import RedisSlotStore
from .upstream_executor import HttpUpstreamExecutor

__all__ = [
    "SlotStore",
    "OperationExecutor",
    "RedisSlotStore",
    "HttpUpstreamExecutor",
]
