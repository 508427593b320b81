"""HTTP handlers for cached GraphQL execution.

Handlers convert between the HTTP request and the cache layer's request
descriptor. They handle HTTP concerns like status codes and error mapping.
"""

from collections.abc import Mapping
from typing import Any

from fastapi import HTTPException, status

from gql_response_cache.dto import CacheStatsResponse, GraphQLRequest, HealthCheckResponse
from gql_response_cache.entities import RequestDescriptor
from gql_response_cache.exceptions import SlotDecodeError, StoreUnavailableError, UpstreamError
from gql_response_cache.protocols import OperationExecutor
from gql_response_cache.services import CacheCoordinator
from gql_response_cache.utils import select_operation


class GraphQLCacheHandler:
    """HTTP handler running GraphQL operations through the cache.

    The handler is the framework side of the cache lifecycle: it asks the
    coordinator first, executes the operation only when told to, and
    always hands the resulting payload back for write-back.

    Example:
        ```python
        handler = GraphQLCacheHandler(coordinator=coordinator, executor=executor)

        @app.post("/graphql")
        async def graphql(request: Request, body: GraphQLRequest):
            return await handler.handle(body, request.headers, request.query_params)
        ```
    """

    def __init__(self, coordinator: CacheCoordinator, executor: OperationExecutor) -> None:
        """Initialize the handler.

        Args:
            coordinator: The cache coordinator (required).
            executor: Computes responses the cache cannot serve (required).
        """
        self._coordinator = coordinator
        self._executor = executor

    @staticmethod
    def build_descriptor(
        body: GraphQLRequest,
        headers: Mapping[str, str] | None = None,
        query_params: Mapping[str, str] | None = None,
    ) -> RequestDescriptor:
        """Build the cache layer's view of a request.

        When the body has no operationName, the name of the document's single
        operation is used, as GraphQL servers do.
        """
        operation = select_operation(body.query, body.operation_name)
        operation_name = body.operation_name or (operation.name if operation else None)

        return RequestDescriptor(
            operation_name=operation_name,
            operation_kind=operation.kind if operation else None,
            query=body.query,
            variables=body.variables,
            headers=dict(headers or {}),
            query_params=dict(query_params or {}),
        )

    async def handle(
        self,
        body: GraphQLRequest,
        headers: Mapping[str, str] | None = None,
        query_params: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """Handle POST /graphql requests.

        Args:
            body: The GraphQL request DTO
            headers: Incoming HTTP headers
            query_params: Incoming URL query parameters

        Returns:
            The GraphQL response body

        Raises:
            HTTPException: 503 if the cache store is down, 500 for a corrupt
                cache entry, 502 if the upstream fails
        """
        descriptor = self.build_descriptor(body, headers, query_params)

        try:
            interception = await self._coordinator.intercept(descriptor)
            if interception.short_circuit:
                payload = interception.payload
            else:
                payload = await self._executor.execute(body, headers)

            await self._coordinator.write_back(descriptor, payload)

        except StoreUnavailableError as e:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Cache store unavailable: {e}",
            ) from e
        except SlotDecodeError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Corrupt cache entry: {e}",
            ) from e
        except UpstreamError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Upstream execution failed: {e}",
            ) from e

        return payload

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests.

        Returns:
            CacheStatsResponse with coordinator counters and configuration
        """
        metrics = self._coordinator.metrics
        config = self._coordinator.config

        return CacheStatsResponse(
            cache_hits=metrics.cache_hits,
            poll_hits=metrics.poll_hits,
            computes=metrics.computes,
            poll_timeouts=metrics.poll_timeouts,
            writes=metrics.writes,
            skipped_writes=metrics.skipped_writes,
            hit_rate=metrics.hit_rate,
            ttl_seconds=config.ttl,
            cacheable_operations=[
                entry.filter if isinstance(entry.filter, str) else f"/{entry.filter.pattern}/"
                for entry in config.entries
            ],
        )

    async def reset_stats(self) -> dict[str, str]:
        """Handle POST /stats/reset requests."""
        self._coordinator.reset_metrics()
        return {"message": "Cache statistics reset"}

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Returns:
            HealthCheckResponse with store and upstream status
        """
        cache_healthy = await self._coordinator.store.health_check()
        upstream_healthy = await self._executor.is_available()

        return HealthCheckResponse(
            status="healthy" if cache_healthy else "unhealthy",
            cache_healthy=cache_healthy,
            upstream_healthy=upstream_healthy,
        )
