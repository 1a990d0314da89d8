"""Craft multi-document API client.

The Craft store is treated as an opaque key/value and table store: collections
of call sheet items, and table blocks addressed by id.
"""

from typing import Any, Dict, List, Optional

import httpx

from app.core.base_http_client import BaseHTTPClient
from app.core.exceptions import DocumentStoreError
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class CraftClient(BaseHTTPClient):
    """Thin async wrapper over the Craft collections and blocks endpoints."""

    error_class = DocumentStoreError

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url=base_url, timeout=timeout, transport=transport)
        LOGGER.info(f"Initialized Craft client for {self.base_url}")

    async def list_collections(self) -> Dict[str, Any]:
        """Fetch all collections."""
        return await self.call_api("/collections")

    async def get_collection_items(self, collection_id: str) -> Dict[str, Any]:
        """Fetch every item of a collection with its full block tree."""
        return await self.call_api(
            f"/collections/{collection_id}/items",
            params={"maxDepth": -1},
        )

    async def get_table(self, table_id: str) -> Dict[str, Any]:
        """Fetch the currently persisted table block."""
        return await self.call_api("/blocks", params={"id": table_id, "maxDepth": -1})

    async def put_table(self, table_id: str, rows: List[List[Dict[str, Any]]]) -> Dict[str, Any]:
        """Replace the rows of a table block."""
        return await self.update_blocks([{"id": table_id, "rows": rows}])

    async def update_blocks(self, blocks: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Update blocks in place."""
        return await self.call_api("/blocks", method="PUT", payload={"blocks": blocks})
