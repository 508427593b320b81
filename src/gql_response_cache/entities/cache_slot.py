"""Cache slot domain entity and its byte encoding.

A slot is the single value stored under a cache key. Its state is carried
by a one-byte tag at the start of the stored bytes:

    (no value)         absent
    b"L"               loading: a computation is in flight
    b"R" + <json>      ready: the serialized response payload
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from gql_response_cache.exceptions import SlotDecodeError

LOADING_TAG = b"L"
READY_TAG = b"R"


class SlotState(str, Enum):
    """The three states of a cache slot."""

    ABSENT = "absent"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class CacheSlot:
    """Decoded cache slot.

    Attributes:
        state: Slot state
        body: Serialized payload, only set for READY slots
    """

    state: SlotState
    body: bytes | None = None

    @classmethod
    def absent(cls) -> "CacheSlot":
        return cls(SlotState.ABSENT)

    @classmethod
    def loading(cls) -> "CacheSlot":
        return cls(SlotState.LOADING)

    @classmethod
    def ready(cls, payload: Any) -> "CacheSlot":
        """Build a READY slot from a JSON-serializable payload."""
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        return cls(SlotState.READY, body)

    @classmethod
    def decode(cls, raw: bytes | None, key: str | None = None) -> "CacheSlot":
        """Decode stored bytes into a slot.

        Only the state tag is checked here; the payload is parsed lazily by
        ``payload()``.

        Raises:
            SlotDecodeError: If the tag is unknown or a loading marker carries data
        """
        if raw is None:
            return cls.absent()
        if isinstance(raw, str):
            raw = raw.encode("utf-8")

        tag, body = raw[:1], raw[1:]
        if tag == LOADING_TAG:
            if body:
                raise SlotDecodeError("loading marker carries data", key)
            return cls.loading()
        if tag == READY_TAG:
            return cls(SlotState.READY, body)
        raise SlotDecodeError(f"unknown state tag {tag!r}", key)

    def encode(self) -> bytes:
        """Encode the slot for storage.

        Raises:
            ValueError: For ABSENT slots, which are never stored
        """
        if self.state is SlotState.LOADING:
            return LOADING_TAG
        if self.state is SlotState.READY:
            return READY_TAG + (self.body or b"")
        raise ValueError("An absent slot has no stored representation")

    def payload(self, key: str | None = None) -> Any:
        """Deserialize the payload of a READY slot.

        Raises:
            SlotDecodeError: If the slot is not ready or the body is not valid JSON
        """
        if self.state is not SlotState.READY or self.body is None:
            raise SlotDecodeError(f"slot is {self.state.value}, not ready", key)
        try:
            return json.loads(self.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SlotDecodeError(f"invalid payload: {e}", key) from e

    @property
    def is_absent(self) -> bool:
        return self.state is SlotState.ABSENT

    @property
    def is_loading(self) -> bool:
        return self.state is SlotState.LOADING

    @property
    def is_ready(self) -> bool:
        return self.state is SlotState.READY
