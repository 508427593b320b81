"""Errors raised by the response cache.

None of these are swallowed by the coordinator: a store outage or a corrupt
slot fails the request instead of silently bypassing the cache.
"""

from typing import Any


class ResponseCacheError(Exception):
    """Base exception for response cache errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class StoreUnavailableError(ResponseCacheError):
    """Raised when the slot store cannot be reached or times out."""

    def __init__(self, operation: str, key: str | None = None, original_error: Exception | None = None):
        details: dict[str, Any] = {"operation": operation}
        if key:
            details["key"] = key
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__

        super().__init__(f"Slot store unavailable during {operation}", details)


class SlotDecodeError(ResponseCacheError):
    """Raised when stored slot bytes cannot be decoded."""

    def __init__(self, reason: str, key: str | None = None) -> None:
        details = {"reason": reason}
        if key:
            details["key"] = key
        super().__init__(f"Corrupt cache slot: {reason}", details)


class UpstreamError(ResponseCacheError):
    """Raised when the upstream operation executor fails."""
