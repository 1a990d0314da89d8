import json

import httpx
import pytest

from app.core.craft_client import CraftClient
from app.core.exceptions import APITimeoutError, DocumentStoreError


def make_client(handler) -> CraftClient:
    return CraftClient(
        base_url="https://craft.example/api/v1/",
        transport=httpx.MockTransport(handler),
    )


class TestCraftClient:

    @pytest.mark.asyncio
    async def test_get_collection_items(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"items": [{"id": "i1"}]})

        result = await make_client(handler).get_collection_items("c1")

        assert result == {"items": [{"id": "i1"}]}
        assert seen["url"] == "https://craft.example/api/v1/collections/c1/items?maxDepth=-1"

    @pytest.mark.asyncio
    async def test_requests_are_sent_as_json_without_credentials(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["headers"] = request.headers
            return httpx.Response(200, json={"items": []})

        await make_client(handler).list_collections()

        assert seen["headers"]["content-type"] == "application/json"
        assert "authorization" not in seen["headers"]

    @pytest.mark.asyncio
    async def test_put_table_sends_single_block_update(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"items": []})

        rows = [[{"value": "GEMsunriseTime", "attributes": []}, {"value": "6:42 AM", "attributes": []}]]
        await make_client(handler).put_table("tbl-1", rows)

        assert seen["method"] == "PUT"
        assert seen["path"] == "/api/v1/blocks"
        assert seen["body"] == {"blocks": [{"id": "tbl-1", "rows": rows}]}

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self):
        client = make_client(lambda request: httpx.Response(503, text="unavailable"))
        with pytest.raises(DocumentStoreError):
            await client.list_collections()

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(APITimeoutError):
            await make_client(handler).get_table("tbl-1")

    @pytest.mark.asyncio
    async def test_unreachable_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(DocumentStoreError):
            await make_client(handler).get_table("tbl-1")
