#!/usr/bin/env python3
"""
Demo script for the GraphQL response cache.

This script runs the cache coordinator against a local Redis with a slow
fake resolver, showing a miss, a hit, request coalescing and revalidation.
"""

import asyncio
import time

from gql_response_cache import (
    CacheCoordinator,
    CacheEntryOptions,
    CacheOptions,
    RedisSlotStore,
    RequestDescriptor,
)
from gql_response_cache.logging_config import configure_logging

QUERY = "query GetUser($id: ID!) { getUser(id: $id) { id name } }"


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def make_request(user_id: str, **kwargs) -> RequestDescriptor:
    return RequestDescriptor(
        operation_name="GetUser",
        operation_kind="query",
        query=QUERY,
        variables={"id": user_id},
        **kwargs,
    )


async def resolve(request: RequestDescriptor, delay: float = 0.5) -> dict:
    """Pretend to be an expensive resolver."""
    await asyncio.sleep(delay)
    return {"data": {"getUser": {"id": request.variables["id"], "name": f"User {request.variables['id']}"}}}


async def run(coordinator: CacheCoordinator, request: RequestDescriptor) -> tuple[str, float]:
    """Run one request through the cache lifecycle."""
    start = time.perf_counter()
    interception = await coordinator.intercept(request)
    if interception.short_circuit:
        payload, source = interception.payload, interception.source
    else:
        payload, source = await resolve(request), "computed"
    await coordinator.write_back(request, payload)
    return source, (time.perf_counter() - start) * 1000


async def demo_miss_then_hit(coordinator: CacheCoordinator, user_id: str) -> None:
    """Demonstrate a miss followed by a hit."""
    print_section("Miss, then hit")

    for attempt in (1, 2):
        source, duration = await run(coordinator, make_request(user_id))
        print(f"  Request {attempt}: {source:<9} {duration:8.2f}ms")


async def demo_coalescing(coordinator: CacheCoordinator, user_id: str) -> None:
    """Demonstrate concurrent requests sharing one computation."""
    print_section("Concurrent requests for an uncached key")

    results = await asyncio.gather(*(run(coordinator, make_request(user_id)) for _ in range(5)))
    for index, (source, duration) in enumerate(results, start=1):
        print(f"  Requester {index}: {source:<9} {duration:8.2f}ms")


async def demo_revalidation(coordinator: CacheCoordinator, user_id: str) -> None:
    """Demonstrate forcing a recomputation."""
    print_section("cache-control: must-revalidate")

    request = make_request(user_id, headers={"cache-control": "must-revalidate"})
    source, duration = await run(coordinator, request)
    print(f"  Revalidated: {source:<9} {duration:8.2f}ms")


async def main() -> None:
    """Run all demos."""
    configure_logging("warning")

    print("\n🚀 GraphQL Response Cache Demo")
    print("=" * 70)

    store = RedisSlotStore.create()
    coordinator = CacheCoordinator.create(
        store=store,
        options=CacheOptions(
            entries=[CacheEntryOptions(filter="GetUser", ttl=30)],
            poll_interval=0.1,
        ),
    )
    # Fresh keys on every run
    run_id = str(int(time.time()))

    try:
        await demo_miss_then_hit(coordinator, f"{run_id}-1")
        await demo_coalescing(coordinator, f"{run_id}-2")
        await demo_revalidation(coordinator, f"{run_id}-1")

        print_section("Statistics")
        for name, value in coordinator.metrics.to_dict().items():
            print(f"  {name:<15} {value}")

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure Redis is running:")
        print("  docker run -p 6379:6379 redis")
        print("\nOr set REDIS_HOST / REDIS_PORT to your Redis instance.")
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
