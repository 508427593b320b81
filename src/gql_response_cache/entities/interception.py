"""Interception domain entity."""

from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class Interception:
    """Outcome of the pre-computation cache step.

    Either the caller must compute the response itself, or the cache
    short-circuits with a payload.

    Attributes:
        short_circuit: True when ``payload`` should be served as the response
        payload: The cached response payload (only meaningful on short-circuit)
        source: Where the payload came from: "cache" for a ready slot,
            "poll" for a slot that became ready while waiting
    """

    short_circuit: bool = False
    payload: Any = None
    source: Literal["cache", "poll"] | None = None

    @classmethod
    def compute(cls) -> "Interception":
        return cls()

    @classmethod
    def serve(cls, payload: Any, source: Literal["cache", "poll"] = "cache") -> "Interception":
        return cls(short_circuit=True, payload=payload, source=source)
