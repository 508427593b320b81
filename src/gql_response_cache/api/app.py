from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gql_response_cache.api.dependencies import HandlerDep, lifespan
from gql_response_cache.config import get_settings
from gql_response_cache.dto import CacheStatsResponse, GraphQLRequest, HealthCheckResponse

app = FastAPI(
    title="GraphQL Response Cache",
    description="Redis-backed response cache with request coalescing for GraphQL queries",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "GraphQL Response Cache",
        "version": "0.1.0",
        "description": "Redis-backed response cache with request coalescing for GraphQL queries",
        "endpoints": {
            "graphql": "/graphql",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> JSONResponse:
    """Health check endpoint."""
    result = await handler.health_check()
    return JSONResponse(
        status_code=status.HTTP_200_OK if result.cache_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=result.model_dump(),
    )


@app.post("/graphql")
async def graphql(request: Request, body: GraphQLRequest, handler: HandlerDep) -> dict[str, Any]:
    """
    Run a GraphQL operation through the response cache.

    Args:
        request: The raw HTTP request (headers and query parameters).
        body: The GraphQL request body.

    Returns:
        The GraphQL response body, cached or freshly computed.
    """
    return await handler.handle(body, request.headers, request.query_params)


@app.get("/stats", response_model=CacheStatsResponse)
async def get_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Get cache coordinator statistics."""
    return await handler.get_stats()


@app.post("/stats/reset", response_model=dict[str, str])
async def reset_stats(handler: HandlerDep) -> dict[str, str]:
    """Reset cache coordinator statistics."""
    return await handler.reset_stats()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "gql_response_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
