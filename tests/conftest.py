"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Dict
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.callsheet import Production
from app.services.callsheet.document_parser import parse_production
from callsheet_factories import enrichment_reply_item, h1, h2, location_table, table


@pytest.fixture
def test_client() -> TestClient:
    """Create FastAPI test client.

    Returns:
        TestClient: FastAPI test client instance
    """
    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    """Ensure FastAPI dependency overrides are reset between tests."""
    app.dependency_overrides = {}
    yield
    app.dependency_overrides = {}


@pytest.fixture
def sample_item() -> Dict[str, Any]:
    """Raw Craft collection item for one shoot day.

    Returns:
        Dict[str, Any]: Item with crew, cast, two locations and scenes
    """
    return {
        "id": "item-day-1",
        "title": "Harbour Lights - Day 1",
        "properties": {
            "date_of_shoot": "2026-10-20",
            "shoot_day_": 1,
            "closed_set": True,
            "crew_call": "6:00 AM",
        },
        "content": [
            {"type": "text", "markdown": "Some intro text"},
            h1("Crew"),
            table(
                "crew-table",
                ("Role", "Name", "Phone", "Call Time"),
                ("Director", "Alex Moreno", "0412 345 678", "6:00 AM"),
                ("Gaffer", "Sam Lee", "(04) 9876-5432", "5:30 AM"),
                ("", "", "", ""),
            ),
            h1("Cast"),
            table(
                "cast-table",
                ("Character", "Name", "Phone", "Call Time"),
                ("Detective Ray", "Jordan Park", "+61 400 111 222", "7:00 AM"),
            ),
            h1("Locations"),
            h2("Location 1"),
            location_table("loc-table-1", "123 Main St, Sydney NSW"),
            h2("Location 2"),
            location_table("loc-table-2", "45 Harbour Rd, Sydney NSW"),
            h1("Scenes"),
            table(
                "scenes-table",
                ("Scene", "Description", "Characters", "INT/EXT", "Location"),
                ("12", "Ray arrives at the docks", "Detective Ray", "EXT", "Harbour Rd"),
            ),
        ],
    }


@pytest.fixture
def sample_production(sample_item) -> Production:
    return parse_production(sample_item)


@pytest.fixture
def mock_document_store() -> AsyncMock:
    """Create mock document store.

    ``get_table`` echoes a location table for whatever id is requested.

    Returns:
        AsyncMock: Mocked Craft client
    """
    store = AsyncMock()

    async def get_table(table_id):
        return location_table(table_id, "from store")

    store.get_table.side_effect = get_table
    store.put_table.return_value = {"items": []}
    return store


@pytest.fixture
def mock_knowledge_client() -> AsyncMock:
    """Create mock knowledge service answering for two locations."""
    client = AsyncMock()
    client.ask.return_value = (
        "```json\n"
        + json.dumps([enrichment_reply_item("First"), enrichment_reply_item("Second")])
        + "\n```"
    )
    return client
