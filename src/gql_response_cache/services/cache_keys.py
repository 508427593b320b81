"""Cache key derivation.

A key has the shape ``gql:<operation>:<locale>:<query digest>:<variables>``.
"""

import base64
import hashlib
import json
from collections.abc import Mapping
from typing import Any

from gql_response_cache.entities import RequestDescriptor

KEY_PREFIX = "gql"
KEY_DELIMITER = ":"

# Characters dropped from the query text before hashing
QUERY_WHITESPACE = frozenset(" \n\r")


def query_fingerprint(query: str | None) -> str:
    """SHA-256 hex digest of the query text without spaces and line breaks."""
    normalized = "".join(c for c in (query or "") if c not in QUERY_WHITESPACE)
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def encode_variables(variables: Mapping[str, Any] | None) -> str:
    """Base64 of the compact JSON encoding of the variables.

    Key order is preserved as given; values JSON cannot represent are
    encoded with ``str()``.
    """
    encoded = json.dumps(
        dict(variables) if variables is not None else None,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return base64.b64encode(encoded.encode("utf-8")).decode("ascii")


def derive_key(request: RequestDescriptor) -> str:
    """Derive the cache key of a request.

    Pure and total: identical inputs always give the identical key.

    Args:
        request: The request descriptor

    Returns:
        The cache key
    """
    return KEY_DELIMITER.join(
        [
            KEY_PREFIX,
            request.operation_name or "",
            request.locale,
            query_fingerprint(request.query),
            encode_variables(request.variables),
        ]
    )
