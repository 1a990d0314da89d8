"""Read side of the call sheet store: catalogue and single production lookup.

Productions are re-parsed from the store on every call; nothing is cached.
"""

import re
from collections import OrderedDict
from typing import Any, Dict, List, Mapping, Optional

from app.core.exceptions import CollectionNotFoundError, ProductionNotFoundError
from app.models.callsheet import Production, ProductionCatalog, ProductionGroup, ShootDay
from app.services.callsheet.document_parser import parse_production
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

DAY_SUFFIX_PATTERN = re.compile(r"\s*-\s*Day\s*\d+$", re.IGNORECASE)


def item_title(item: Mapping[str, Any]) -> Optional[str]:
    return item.get("production_title") or item.get("title")


def base_title(title: str) -> str:
    """``"Harbour Lights - Day 2"`` -> ``"Harbour Lights"``."""
    return DAY_SUFFIX_PATTERN.sub("", title).strip() or title


def _day_sort_key(day: ShootDay) -> float:
    try:
        return float(day.shoot_day or 0)
    except (TypeError, ValueError):
        return 0.0


def group_productions(items: List[Mapping[str, Any]], productions: List[Production]) -> List[ProductionGroup]:
    grouped: "OrderedDict[str, ProductionGroup]" = OrderedDict()
    for item, production in zip(items, productions):
        title = item_title(item)
        key = base_title(title)
        group = grouped.setdefault(key, ProductionGroup(title=key))
        group.days.append(
            ShootDay(
                id=production.id,
                shoot_day=production.properties.get("shoot_day_") or 1,
                date=production.properties.get("date_of_shoot"),
                full_title=title,
            )
        )

    for group in grouped.values():
        group.days.sort(key=_day_sort_key)
    return list(grouped.values())


class ProductionService:
    """Lists and loads productions from the call sheet collection."""

    def __init__(self, document_store, collection_name: str = "CallSheetAPI"):
        self.document_store = document_store
        self.collection_name = collection_name

    async def _find_collection_id(self) -> str:
        collections = await self.document_store.list_collections()
        for collection in collections.get("items") or []:
            name = collection.get("name") or ""
            if name == self.collection_name or self.collection_name in name:
                return collection["id"]
        raise CollectionNotFoundError(f"{self.collection_name} collection not found")

    async def _list_items(self) -> List[Dict[str, Any]]:
        collection_id = await self._find_collection_id()
        response = await self.document_store.get_collection_items(collection_id)
        return list(response.get("items") or [])

    async def list_productions(self) -> ProductionCatalog:
        """Parse every titled item and group them by base title."""
        items = [item for item in await self._list_items() if item_title(item)]
        productions = [parse_production(item) for item in items]

        LOGGER.info(f"Loaded {len(productions)} productions")
        return ProductionCatalog(
            productions=productions,
            grouped=group_productions(items, productions),
        )

    async def list_grouped_productions(self) -> List[ProductionGroup]:
        catalog = await self.list_productions()
        return catalog.grouped

    async def get_production(self, production_id: str) -> Production:
        """Load a single production.

        Raises:
            ProductionNotFoundError: If no item has ``production_id``
        """
        for item in await self._list_items():
            if item.get("id") == production_id:
                return parse_production(item)
        raise ProductionNotFoundError(f"Production {production_id} not found")
