"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import Depends, FastAPI, Request

from gql_response_cache.config import get_settings
from gql_response_cache.dto import CacheOptions
from gql_response_cache.handlers import GraphQLCacheHandler
from gql_response_cache.logging_config import configure_logging
from gql_response_cache.repositories import HttpUpstreamExecutor
from gql_response_cache.services import CacheCoordinator

logger = structlog.get_logger(__name__)


def get_handler(request: Request) -> GraphQLCacheHandler:
    """Dependency injection for GraphQLCacheHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The GraphQLCacheHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "graphql_handler", None)
    if handler is None:
        raise RuntimeError("GraphQLCacheHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Store and executor (data access). The store is built from
       ``app.state.cache_options`` (a CacheOptions set before startup),
       falling back to environment settings
    2. Coordinator (business logic) - stored in app.state.cache_coordinator
    3. Handler (HTTP endpoints) - stored in app.state.graphql_handler

    Cleanup:
        Closes client connections and removes everything from app.state
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    options: CacheOptions | None = getattr(app.state, "cache_options", None)
    coordinator = CacheCoordinator.create(options=options)
    store = coordinator.store
    executor = HttpUpstreamExecutor.create()
    handler = GraphQLCacheHandler(coordinator=coordinator, executor=executor)
    connection = store.client.connection_pool.connection_kwargs

    app.state.slot_store = store
    app.state.executor = executor
    app.state.cache_coordinator = coordinator
    app.state.graphql_handler = handler

    logger.info(
        "response_cache_started",
        redis=f"{connection['host']}:{connection['port']}",
        upstream=executor.url,
        operations=len(coordinator.config.entries),
        ttl=coordinator.config.ttl,
        store_healthy=await store.health_check(),
    )

    yield

    await executor.close()
    await store.close()
    del app.state.graphql_handler
    del app.state.cache_coordinator
    del app.state.executor
    del app.state.slot_store
    logger.info("response_cache_stopped")


# Type alias for cleaner dependency injection
HandlerDep = Annotated[GraphQLCacheHandler, Depends(get_handler)]
