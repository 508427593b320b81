"""
Tests for cache key derivation.
"""

import base64
import hashlib
import json

from gql_response_cache.services.cache_keys import derive_key, encode_variables, query_fingerprint


def test_identical_requests_share_a_key(make_request):
    """Same operation, locale, query and variables give the same key."""
    first = make_request(variables={"id": 1, "lang": "en"})
    second = make_request(variables={"id": 1, "lang": "en"})
    assert derive_key(first) == derive_key(second)
    assert derive_key(first) == derive_key(first)


def test_key_layout(make_request):
    """Key is gql:<operation>:<locale>:<digest>:<variables>."""
    key = derive_key(make_request(variables={"id": "42"}))
    prefix, operation, locale, digest, variables = key.split(":")

    assert prefix == "gql"
    assert operation == "GetUser"
    assert locale == "default"
    assert digest == hashlib.sha256(b"{getUser{id}}").hexdigest()
    assert json.loads(base64.b64decode(variables)) == {"id": "42"}


def test_locale_comes_from_language_code(make_request):
    """languageCode query parameter separates keys."""
    english = derive_key(make_request(query_params={"languageCode": "en"}))
    french = derive_key(make_request(query_params={"languageCode": "fr"}))
    default = derive_key(make_request())

    assert english.split(":")[2] == "en"
    assert len({english, french, default}) == 3


def test_spaces_and_line_breaks_do_not_matter(make_request):
    """Reformatting a query with spaces and newlines keeps the key."""
    compact = make_request(query="{getUser{id}}")
    spread = make_request(query="{\r\n  getUser {\n    id\n  }\n}")
    assert derive_key(compact) == derive_key(spread)


def test_same_length_queries_do_not_collide(make_request):
    """Different queries of equal length get different keys."""
    first = make_request(query="{ getUser { id } }")
    second = make_request(query="{ getUser { ab } }")
    assert derive_key(first) != derive_key(second)


def test_variable_order_is_preserved():
    """Encoding keeps insertion order rather than sorting."""
    assert encode_variables({"a": 1, "b": 2}) != encode_variables({"b": 2, "a": 1})


def test_missing_fields_still_produce_a_key(make_request):
    """Derivation never fails, even on an empty descriptor."""
    key = derive_key(make_request(operation_name=None, query=None, variables=None))
    assert key.startswith("gql::default:")
    assert key.endswith(base64.b64encode(b"null").decode())


def test_non_json_variables_are_encoded():
    """Values JSON cannot represent fall back to their string form."""
    from datetime import date

    encoded = encode_variables({"day": date(2024, 1, 2)})
    assert json.loads(base64.b64decode(encoded)) == {"day": "2024-01-02"}


def test_fingerprint_of_empty_query():
    assert query_fingerprint(None) == query_fingerprint("") == hashlib.sha256(b"").hexdigest()
