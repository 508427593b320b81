"""Request descriptor domain entity."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

DEFAULT_LOCALE = "default"


@dataclass(frozen=True)
class RequestDescriptor:
    """Read-only view of an inbound GraphQL request.

    Built by the request framework; the cache only reads it.

    Attributes:
        operation_name: Resolved GraphQL operation name, if any
        operation_kind: "query", "mutation" or "subscription", if known
        query: Raw query document text
        variables: Bound operation variables
        headers: HTTP headers (names are matched case-insensitively)
        query_params: URL query-string parameters
    """

    operation_name: str | None = None
    operation_kind: str | None = None
    query: str | None = None
    variables: Mapping[str, Any] | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", {k.lower(): v for k, v in self.headers.items()})

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    def param(self, name: str) -> str | None:
        return self.query_params.get(name)

    @property
    def locale(self) -> str:
        """Locale from the ``languageCode`` query parameter."""
        return self.param("languageCode") or DEFAULT_LOCALE

    @property
    def cache_control(self) -> str | None:
        return self.header("cache-control")

    @property
    def forces_revalidation(self) -> bool:
        """Whether the caller asked to recompute and overwrite the cached value."""
        return self.cache_control == "must-revalidate"
