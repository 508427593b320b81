import os
import re
from dataclasses import dataclass, field
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

from gql_response_cache.dto.options import CacheEntryOptions, CacheOptions, RedisOptions

load_dotenv()

DEFAULT_TTL = 60 * 60 * 24
DEFAULT_LOADING_TTL = 120
DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_POLL_TIMEOUT = 30.0


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value else None


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    redis_port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    redis_username: str | None = field(default_factory=lambda: os.getenv("REDIS_USERNAME"))
    redis_password: str | None = field(default_factory=lambda: os.getenv("REDIS_PASSWORD"))
    redis_connect_timeout: float = field(
        default_factory=lambda: float(os.getenv("REDIS_CONNECT_TIMEOUT", "20"))
    )

    # Cache
    cache_entries: str = field(default_factory=lambda: os.getenv("CACHE_ENTRIES", ""))
    cache_ttl: int | None = field(default_factory=lambda: _env_int("CACHE_TTL"))
    cache_enable_header: bool = field(default_factory=lambda: _env_bool("CACHE_ENABLE_HEADER"))
    cache_enable_query: bool = field(default_factory=lambda: _env_bool("CACHE_ENABLE_QUERY"))
    cache_loading_ttl: int = field(
        default_factory=lambda: int(os.getenv("CACHE_LOADING_TTL", str(DEFAULT_LOADING_TTL)))
    )
    cache_poll_interval: float = field(
        default_factory=lambda: float(os.getenv("CACHE_POLL_INTERVAL", str(DEFAULT_POLL_INTERVAL)))
    )
    cache_poll_timeout: float = field(
        default_factory=lambda: float(os.getenv("CACHE_POLL_TIMEOUT", str(DEFAULT_POLL_TIMEOUT)))
    )

    # Upstream GraphQL server
    upstream_url: str = field(
        default_factory=lambda: os.getenv("UPSTREAM_URL", "http://localhost:4000/graphql")
    )
    upstream_timeout: float = field(default_factory=lambda: float(os.getenv("UPSTREAM_TIMEOUT", "30")))

    # API
    api_host: str = field(default_factory=lambda: os.getenv("API_HOST", "0.0.0.0"))
    api_port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "8000")))
    api_reload: bool = field(default_factory=lambda: _env_bool("API_RELOAD", "true"))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "info"))
    log_json: bool = field(default_factory=lambda: _env_bool("LOG_JSON"))

    @property
    def entries(self) -> list[CacheEntryOptions]:
        """Allow-list parsed from CACHE_ENTRIES."""
        return parse_entries(self.cache_entries)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not 1 <= self.redis_port <= 65535:
            raise ValueError(f"REDIS_PORT must be between 1 and 65535, got {self.redis_port}")

        if self.cache_ttl is not None and self.cache_ttl <= 0:
            raise ValueError(f"CACHE_TTL must be positive, got {self.cache_ttl}")

        for name, value in (
            ("CACHE_LOADING_TTL", self.cache_loading_ttl),
            ("CACHE_POLL_INTERVAL", self.cache_poll_interval),
            ("CACHE_POLL_TIMEOUT", self.cache_poll_timeout),
            ("REDIS_CONNECT_TIMEOUT", self.redis_connect_timeout),
        ):
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")


def parse_entries(raw: str) -> list[CacheEntryOptions]:
    """Parse a CACHE_ENTRIES value.

    Comma-separated items of the form ``Name`` or ``Name=ttl``. An item
    wrapped in slashes (``/^List.*/=300``) is compiled as a pattern.

    Args:
        raw: The raw environment value

    Returns:
        Entries in declaration order
    """
    entries = []
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue

        name, ttl = item, None
        head, sep, tail = item.rpartition("=")
        if sep and tail.strip().isdigit():
            name, ttl = head.strip(), int(tail)

        if len(name) > 2 and name.startswith("/") and name.endswith("/"):
            entries.append(CacheEntryOptions(filter=re.compile(name[1:-1]), ttl=ttl))
        else:
            entries.append(CacheEntryOptions(filter=name, ttl=ttl))
    return entries


@dataclass(frozen=True)
class CacheConfig:
    """Fully resolved coordinator configuration.

    Precedence for every value: explicit option, then environment variable,
    then hard default.
    """

    entries: tuple[CacheEntryOptions, ...] = ()
    ttl: int = DEFAULT_TTL
    enable_header: bool = False
    enable_query: bool = False
    loading_ttl: int = DEFAULT_LOADING_TTL
    poll_interval: float = DEFAULT_POLL_INTERVAL
    poll_timeout: float = DEFAULT_POLL_TIMEOUT

    @classmethod
    def resolve(
        cls,
        options: CacheOptions | None = None,
        settings: "Settings | None" = None,
    ) -> "CacheConfig":
        """Merge explicit options over environment settings.

        Args:
            options: Explicit options. Unset fields fall through.
            settings: Environment settings. Defaults to get_settings().

        Returns:
            Resolved CacheConfig
        """
        options = options or CacheOptions()
        settings = settings or get_settings()

        entries = options.entries if options.entries is not None else settings.entries
        return cls(
            entries=tuple(entries),
            ttl=options.ttl or settings.cache_ttl or DEFAULT_TTL,
            enable_header=_first_set(options.enable_header, settings.cache_enable_header),
            enable_query=_first_set(options.enable_query, settings.cache_enable_query),
            loading_ttl=options.loading_ttl or settings.cache_loading_ttl,
            poll_interval=options.poll_interval or settings.cache_poll_interval,
            poll_timeout=options.poll_timeout or settings.cache_poll_timeout,
        )


def _first_set(explicit: bool | None, fallback: bool) -> bool:
    return fallback if explicit is None else explicit


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_redis_client(
    options: RedisOptions | None = None,
    settings: Settings | None = None,
) -> redis.Redis:
    """Create an asyncio Redis client instance.

    Connection is lazy: nothing is dialled until the first command.
    """
    options = options or RedisOptions()
    settings = settings or get_settings()
    return redis.Redis(
        host=options.host or settings.redis_host,
        port=options.port or settings.redis_port,
        username=options.username or settings.redis_username,
        password=options.password or settings.redis_password,
        socket_connect_timeout=options.connect_timeout or settings.redis_connect_timeout,
        decode_responses=False,
    )
