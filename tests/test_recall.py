import json

import httpx

from oracle.recall import Memory, RecallClient


def _client(handler) -> RecallClient:
    return RecallClient("https://recall.test/", transport=httpx.MockTransport(handler))


def test_search_posts_query_and_reads_data():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": [
            {"content": "Use locking", "source": "oracle:direct"},
            {"content": "No source"},
            "garbage",
        ]})

    memories = _client(handler).search("rate limiter", agent_id="oracle-demo", limit=5)

    assert seen["path"] == "/api/memories/search"
    assert seen["body"] == {"query": "rate limiter", "limit": 5, "agent_id": "oracle-demo"}
    assert memories == [
        Memory(content="Use locking", source="oracle:direct"),
        Memory(content="No source", source=None),
    ]


def test_search_omits_agent_id_when_unset():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": []})

    _client(handler).search("q")

    assert seen["body"] == {"query": "q", "limit": 10}


def test_search_returns_empty_on_server_error():
    client = _client(lambda request: httpx.Response(500, text="boom"))

    assert client.search("q") == []


def test_search_returns_empty_on_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    assert _client(handler).search("q") == []


def test_search_returns_empty_on_bad_json():
    client = _client(lambda request: httpx.Response(200, text="<html>"))

    assert client.search("q") == []


def test_store_returns_new_id():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"data": {"id": 42}})

    memory_id = _client(handler).store(
        "Use CSS variables", importance=0.7, agent_id="oracle-demo", source="oracle:direct", category="pattern"
    )

    assert memory_id == 42
    assert seen["path"] == "/api/memories"
    assert seen["body"] == {
        "content": "Use CSS variables",
        "importance": 0.7,
        "agent_id": "oracle-demo",
        "source": "oracle:direct",
        "metadata": {"category": "pattern"},
    }


def test_store_returns_none_on_failure():
    assert _client(lambda request: httpx.Response(422, json={"errors": {}})).store("x") is None
    assert _client(lambda request: httpx.Response(200, json={"data": {}})).store("x") is None


def test_get_fetches_single_memory():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/api/memories/7"
        return httpx.Response(200, json={"data": {"id": 7, "content": "hello"}})

    with _client(handler) as client:
        assert client.get(7) == {"id": 7, "content": "hello"}


def test_get_returns_none_when_missing():
    assert _client(lambda request: httpx.Response(404)).get(1) is None
