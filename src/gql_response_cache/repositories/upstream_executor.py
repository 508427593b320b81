"""Upstream GraphQL executor over HTTP.

Forwards operations the cache cannot answer to the GraphQL server it sits
in front of.
"""

from collections.abc import Mapping
from typing import Any

import httpx

from gql_response_cache.config import get_settings
from gql_response_cache.dto.requests import GraphQLRequest
from gql_response_cache.exceptions import UpstreamError

# Request headers worth passing through to the upstream server
FORWARDED_HEADERS = ("authorization", "accept-language", "cookie")


class HttpUpstreamExecutor:
    """HTTP implementation of the OperationExecutor protocol.

    This class satisfies the OperationExecutor protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        executor = HttpUpstreamExecutor.create(url="http://localhost:4000/graphql")
        body = await executor.execute(GraphQLRequest(query="{ me { id } }"))
        ```
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            url: Upstream GraphQL endpoint. Defaults to settings.upstream_url.
            timeout: Request timeout in seconds. Defaults to settings.upstream_timeout.
            client: Pre-built HTTP client (for testing).
        """
        settings = get_settings()
        self._url = url or settings.upstream_url
        self._timeout = timeout or settings.upstream_timeout
        self._client = client

    @classmethod
    def create(cls, url: str | None = None, timeout: float | None = None) -> "HttpUpstreamExecutor":
        """Factory method to create HttpUpstreamExecutor with defaults.

        Args:
            url: Upstream endpoint. If None, uses settings.
            timeout: Request timeout. If None, uses settings.

        Returns:
            Configured HttpUpstreamExecutor
        """
        return cls(url=url, timeout=timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def url(self) -> str:
        return self._url

    async def execute(
        self,
        request: GraphQLRequest,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Send the operation upstream and return its response body.

        GraphQL-level errors come back inside the body; only transport
        failures and non-JSON answers raise.

        Raises:
            UpstreamError: If the upstream request fails
        """
        forwarded = {
            name: value
            for name, value in (headers or {}).items()
            if name.lower() in FORWARDED_HEADERS
        }

        try:
            response = await self.client.post(
                self._url,
                json=request.model_dump(by_alias=True, exclude_none=True),
                headers=forwarded,
            )
            # 4xx answers still carry a GraphQL errors body
            if response.is_server_error:
                response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise UpstreamError(f"Upstream GraphQL request failed: {e}", {"url": self._url}) from e
        except ValueError as e:
            raise UpstreamError(f"Upstream returned invalid JSON: {e}", {"url": self._url}) from e

        if not isinstance(body, dict):
            raise UpstreamError("Upstream returned a non-object body", {"url": self._url})
        return body

    async def is_available(self) -> bool:
        """Check if the upstream answers a trivial introspection query.

        Returns:
            True if reachable, False otherwise
        """
        try:
            await self.execute(GraphQLRequest(query="{ __typename }"))
            return True
        except UpstreamError:
            return False

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
