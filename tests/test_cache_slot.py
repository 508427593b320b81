"""
Tests for the cache slot encoding.
"""

import pytest

from gql_response_cache.entities import CacheSlot, SlotState
from gql_response_cache.exceptions import SlotDecodeError


def test_absent_slot():
    slot = CacheSlot.decode(None)
    assert slot.state is SlotState.ABSENT
    assert slot.is_absent


def test_loading_marker_is_one_tag_byte():
    assert CacheSlot.loading().encode() == b"L"
    assert CacheSlot.decode(b"L").is_loading


def test_ready_slot_keeps_payload():
    payload = {"data": {"getUser": {"id": "1", "name": "Zoë"}}}
    raw = CacheSlot.ready(payload).encode()

    assert raw.startswith(b"R")
    slot = CacheSlot.decode(raw)
    assert slot.is_ready
    assert slot.payload() == payload


def test_string_values_are_accepted():
    assert CacheSlot.decode('R{"data":null}').payload() == {"data": None}


@pytest.mark.parametrize("raw", [b"loading", b"{\"data\":{}}", b"X", b""])
def test_unknown_tags_are_rejected(raw):
    """Legacy sentinels and untagged JSON are corrupt, not misses."""
    with pytest.raises(SlotDecodeError):
        CacheSlot.decode(raw, key="gql:GetUser")


def test_loading_with_data_is_rejected():
    with pytest.raises(SlotDecodeError):
        CacheSlot.decode(b"Lextra")


def test_invalid_ready_body_fails_on_payload():
    """The tag decodes; the body only fails when it is parsed."""
    slot = CacheSlot.decode(b"R{not json")
    assert slot.is_ready
    with pytest.raises(SlotDecodeError) as exc_info:
        slot.payload(key="gql:GetUser")
    assert exc_info.value.details["key"] == "gql:GetUser"


def test_payload_of_loading_slot_is_an_error():
    with pytest.raises(SlotDecodeError):
        CacheSlot.loading().payload()


def test_absent_slot_cannot_be_encoded():
    with pytest.raises(ValueError):
        CacheSlot.absent().encode()
