"""Operation executor protocol.

Defines the interface for whatever actually computes a GraphQL response
when the cache cannot short-circuit.

Implementations can include:
- An upstream GraphQL server over HTTP (default)
- An in-process schema executor
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from gql_response_cache.dto.requests import GraphQLRequest


@runtime_checkable
class OperationExecutor(Protocol):
    """Protocol for GraphQL operation executors."""

    async def execute(
        self,
        request: GraphQLRequest,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Execute an operation and return the response body.

        Args:
            request: The GraphQL request body
            headers: Headers to forward to the executor

        Returns:
            The GraphQL response body ({"data": ..., "errors": ...})
        """
        ...

    async def is_available(self) -> bool:
        """Check if the executor is reachable.

        Returns:
            True if available, False otherwise
        """
        ...
