"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract and the
operator-facing options. They are used for validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .options import CacheEntryOptions, CacheOptions, RedisOptions
from .requests import GraphQLRequest
from .responses import CacheStatsResponse, HealthCheckResponse

__all__ = [
    "CacheEntryOptions",
    "CacheOptions",
    "RedisOptions",
    "GraphQLRequest",
    "CacheStatsResponse",
    "HealthCheckResponse",
]
