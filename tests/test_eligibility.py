"""
Tests for the cacheability decision.
"""

import re

import pytest

from gql_response_cache.dto import CacheEntryOptions
from gql_response_cache.services import EligibilityFilter


@pytest.fixture
def allow():
    """Filter allowing GetUser and any List* operation, opt-outs disabled."""
    return EligibilityFilter(
        entries=[
            CacheEntryOptions(filter="GetUser"),
            CacheEntryOptions(filter=re.compile(r"^List")),
        ]
    )


def test_allowed_query_is_cacheable(allow, make_request):
    assert allow.is_cacheable(make_request()) is True


def test_pattern_entry_matches(allow, make_request):
    assert allow.is_cacheable(make_request(operation_name="ListPosts")) is True


def test_operation_outside_allow_list(allow, make_request):
    assert allow.is_cacheable(make_request(operation_name="GetPosts")) is False


@pytest.mark.parametrize(
    "overrides",
    [
        {"operation_name": None},
        {"operation_name": ""},
        {"query": None},
        {"query": ""},
        {"operation_kind": "mutation"},
        {"operation_kind": "subscription"},
        {"operation_kind": None},
    ],
)
def test_incomplete_or_non_query_requests(allow, make_request, overrides):
    """Missing name/query or a non-query operation is never cacheable."""
    assert allow.is_cacheable(make_request(**overrides)) is False


def test_no_entries_means_nothing_is_cacheable(make_request):
    assert EligibilityFilter(entries=[]).is_cacheable(make_request()) is False


def test_header_opt_out_only_when_enabled(make_request):
    entries = [CacheEntryOptions(filter="GetUser")]
    request = make_request(headers={"Cache-Control": "no-cache"})

    assert EligibilityFilter(entries).is_cacheable(request) is True
    assert EligibilityFilter(entries, enable_header=True).is_cacheable(request) is False
    assert EligibilityFilter(entries, enable_header=True).is_cacheable(make_request()) is True


def test_query_opt_out_only_when_enabled(make_request):
    entries = [CacheEntryOptions(filter="GetUser")]
    request = make_request(query_params={"cache": "false"})

    assert EligibilityFilter(entries).is_cacheable(request) is True
    assert EligibilityFilter(entries, enable_query=True).is_cacheable(request) is False
    # Only the literal "false" opts out
    other = make_request(query_params={"cache": "0"})
    assert EligibilityFilter(entries, enable_query=True).is_cacheable(other) is True


def test_decision_is_repeatable(allow, make_request):
    """Calling the filter twice on the same descriptor gives the same answer."""
    for request in (make_request(), make_request(operation_kind="mutation")):
        assert allow.is_cacheable(request) == allow.is_cacheable(request)


def test_first_matching_entry_wins():
    first = CacheEntryOptions(filter=re.compile("User"), ttl=10)
    second = CacheEntryOptions(filter="GetUser", ttl=20)
    assert EligibilityFilter([first, second]).match_entry("GetUser") is first
