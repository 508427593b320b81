"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class CacheStatsResponse(BaseModel):
    """Response DTO for coordinator statistics."""

    cache_hits: int = Field(..., description="Requests served from a ready slot", ge=0)
    poll_hits: int = Field(..., description="Requests served after waiting on a loading slot", ge=0)
    computes: int = Field(..., description="Eligible requests that had to compute", ge=0)
    poll_timeouts: int = Field(..., description="Waits that gave up and computed", ge=0)
    writes: int = Field(..., description="Payloads written to the store", ge=0)
    skipped_writes: int = Field(..., description="Write-backs skipped to keep a ready value", ge=0)
    hit_rate: float = Field(..., description="Share of eligible requests served from cache", ge=0.0, le=1.0)
    ttl_seconds: int = Field(..., description="Global time-to-live in seconds", ge=0)
    cacheable_operations: list[str] = Field(
        default_factory=list,
        description="Configured allow-list filters, in lookup order",
    )


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the slot store is reachable")
    upstream_healthy: bool | None = Field(
        None,
        description="Whether the upstream GraphQL server is reachable",
    )
