"""
Tests for the HTTP upstream executor.
"""

import json

import httpx
import pytest

from gql_response_cache.dto import GraphQLRequest
from gql_response_cache.exceptions import UpstreamError
from gql_response_cache.protocols import OperationExecutor
from gql_response_cache.repositories import HttpUpstreamExecutor

URL = "http://upstream.test/graphql"


def make_executor(handler) -> HttpUpstreamExecutor:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpUpstreamExecutor(url=URL, timeout=5, client=client)


def test_satisfies_protocol():
    assert isinstance(HttpUpstreamExecutor(url=URL), OperationExecutor)


@pytest.mark.asyncio
async def test_forwards_body_and_selected_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["headers"] = request.headers
        return httpx.Response(200, json={"data": {"me": {"id": "1"}}})

    executor = make_executor(handler)
    body = await executor.execute(
        GraphQLRequest(query="query Me { me { id } }", operation_name="Me"),
        {"Authorization": "Bearer token", "Cache-Control": "no-cache"},
    )

    assert body == {"data": {"me": {"id": "1"}}}
    assert seen["body"] == {"query": "query Me { me { id } }", "operationName": "Me"}
    assert seen["headers"]["authorization"] == "Bearer token"
    assert "cache-control" not in seen["headers"]


@pytest.mark.asyncio
async def test_client_errors_keep_graphql_body():
    def handler(request):
        return httpx.Response(400, json={"errors": [{"message": "bad query"}]})

    body = await make_executor(handler).execute(GraphQLRequest(query="{ x }"))
    assert body["errors"][0]["message"] == "bad query"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(502, json={"errors": []}),
        httpx.Response(200, text="<html>"),
        httpx.Response(200, json=[1, 2]),
    ],
)
async def test_failures_raise_upstream_error(response):
    executor = make_executor(lambda request: response)
    with pytest.raises(UpstreamError):
        await executor.execute(GraphQLRequest(query="{ x }"))


@pytest.mark.asyncio
async def test_is_available():
    def down(request):
        raise httpx.ConnectError("refused", request=request)

    assert await make_executor(lambda r: httpx.Response(200, json={"data": {}})).is_available() is True
    assert await make_executor(down).is_available() is False
