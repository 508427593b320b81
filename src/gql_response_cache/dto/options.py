"""Operator-facing options for the response cache.

Every field is optional: an unset field falls back to its environment
variable, then to the hard default (see ``gql_response_cache.config``).
"""

import re

from pydantic import BaseModel, ConfigDict, Field


class CacheEntryOptions(BaseModel):
    """One allow-list entry.

    A ``str`` filter matches the operation name exactly, a compiled pattern
    matches when ``pattern.search(operation_name)`` succeeds.
    """

    model_config = ConfigDict(frozen=True)

    filter: str | re.Pattern = Field(..., description="Operation name or compiled pattern")
    ttl: int | None = Field(
        None,
        description="Time-to-live override for matching operations, in seconds",
        gt=0,
    )

    def matches(self, operation_name: str | None) -> bool:
        """Check whether this entry covers the given operation name."""
        if not operation_name:
            return False
        if isinstance(self.filter, str):
            return self.filter == operation_name
        return self.filter.search(operation_name) is not None


class RedisOptions(BaseModel):
    """Connection parameters for the slot store."""

    host: str | None = Field(None, description="Redis host")
    port: int | None = Field(None, description="Redis port", ge=1, le=65535)
    username: str | None = Field(None, description="Redis ACL username")
    password: str | None = Field(None, description="Redis password")
    connect_timeout: float | None = Field(
        None,
        description="Socket connect timeout in seconds",
        gt=0,
    )


class CacheOptions(BaseModel):
    """Options for the cache coordinator."""

    entries: list[CacheEntryOptions] | None = Field(
        None,
        description="Allow-list of cacheable operations (order matters for TTL lookup)",
    )
    ttl: int | None = Field(None, description="Global time-to-live in seconds", gt=0)
    enable_header: bool | None = Field(
        None,
        description="Honour 'cache-control: no-cache' as a per-request opt-out",
    )
    enable_query: bool | None = Field(
        None,
        description="Honour '?cache=false' as a per-request opt-out",
    )
    loading_ttl: int | None = Field(
        None,
        description="Expiry of the loading marker in seconds",
        gt=0,
    )
    poll_interval: float | None = Field(
        None,
        description="Delay between two reads of a loading slot, in seconds",
        gt=0,
    )
    poll_timeout: float | None = Field(
        None,
        description="Maximum time spent waiting on a loading slot, in seconds",
        gt=0,
    )
    redis: RedisOptions | None = None
