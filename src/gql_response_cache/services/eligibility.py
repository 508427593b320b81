"""Cacheability decision for incoming requests."""

from collections.abc import Sequence

from gql_response_cache.dto.options import CacheEntryOptions
from gql_response_cache.entities import RequestDescriptor


class EligibilityFilter:
    """Decide whether a request takes part in caching at all.

    Example:
        ```python
        allow = EligibilityFilter(entries=[CacheEntryOptions(filter="GetUser")])
        allow.is_cacheable(descriptor)
        ```
    """

    def __init__(
        self,
        entries: Sequence[CacheEntryOptions],
        enable_header: bool = False,
        enable_query: bool = False,
    ) -> None:
        """Initialize the filter.

        Args:
            entries: Allow-list of operations, in lookup order
            enable_header: Honour 'cache-control: no-cache'
            enable_query: Honour '?cache=false'
        """
        self._entries = tuple(entries)
        self._enable_header = enable_header
        self._enable_query = enable_query

    def match_entry(self, operation_name: str | None) -> CacheEntryOptions | None:
        """Return the first entry covering the operation, or None."""
        for entry in self._entries:
            if entry.matches(operation_name):
                return entry
        return None

    def is_cacheable(self, request: RequestDescriptor) -> bool:
        """Determine if a request is cacheable:
        - Has a GraphQL operation name
        - Has a GraphQL query document
        - It's a GraphQL query (not a mutation or subscription)
        - The allow-list has an entry for the operation name
        - If enabled, cache is not disabled by header 'cache-control: no-cache'
        - If enabled, cache is not disabled by query parameter '?cache=false'

        Never raises; a missing field simply makes the request ineligible.
        """
        return (
            bool(request.operation_name)
            and bool(request.query)
            and request.operation_kind == "query"
            and self.match_entry(request.operation_name) is not None
            and (not self._enable_header or request.cache_control != "no-cache")
            and (not self._enable_query or request.param("cache") != "false")
        )

    @property
    def entries(self) -> tuple[CacheEntryOptions, ...]:
        return self._entries
