from dataclasses import dataclass


@dataclass
class CoordinatorMetrics:
    """Track outcomes of the cache coordinator in this process."""

    cache_hits: int = 0
    poll_hits: int = 0
    computes: int = 0
    poll_timeouts: int = 0
    writes: int = 0
    skipped_writes: int = 0

    @property
    def total_lookups(self) -> int:
        """Eligible requests that reached the store."""
        return self.cache_hits + self.poll_hits + self.computes

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate (ready slots and successful waits)."""
        if self.total_lookups == 0:
            return 0.0
        return (self.cache_hits + self.poll_hits) / self.total_lookups

    def record_hit(self) -> None:
        self.cache_hits += 1

    def record_poll_hit(self) -> None:
        self.poll_hits += 1

    def record_compute(self) -> None:
        self.computes += 1

    def record_poll_timeout(self) -> None:
        """Record a wait that gave up; the request computes afterwards."""
        self.poll_timeouts += 1
        self.computes += 1

    def record_write(self) -> None:
        self.writes += 1

    def record_skipped_write(self) -> None:
        self.skipped_writes += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "cache_hits": self.cache_hits,
            "poll_hits": self.poll_hits,
            "computes": self.computes,
            "poll_timeouts": self.poll_timeouts,
            "writes": self.writes,
            "skipped_writes": self.skipped_writes,
            "hit_rate": self.hit_rate,
        }
