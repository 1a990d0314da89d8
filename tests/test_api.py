"""Tests for API endpoints."""

from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from app.core.dependencies import get_enrichment_service, get_production_service
from app.core.exceptions import DocumentStoreError, KnowledgeServiceError, ProductionNotFoundError
from app.main import app
from app.models.callsheet import ProductionCatalog
from app.services.callsheet.production_service import ProductionService
from app.services.enrichment.enrichment_service import EnrichmentService


def override_services(production_service, enrichment_service=None):
    app.dependency_overrides[get_production_service] = lambda: production_service
    if enrichment_service is not None:
        app.dependency_overrides[get_enrichment_service] = lambda: enrichment_service


def store_for(sample_item) -> AsyncMock:
    store = AsyncMock()
    store.list_collections.return_value = {"items": [{"id": "c1", "name": "CallSheetAPI"}]}
    store.get_collection_items.return_value = {"items": [sample_item]}
    return store


class TestProductionEndpoints:
    """Test suite for production API endpoints.

    Tests the public API interface, focusing on request/response behavior,
    redaction and error handling.
    """

    def test_list_productions(self, test_client: TestClient, sample_production) -> None:
        service = AsyncMock(spec=ProductionService)
        service.list_productions.return_value = ProductionCatalog(
            productions=[sample_production],
            grouped=[],
        )
        override_services(service)

        response = test_client.get("/api/productions")

        assert response.status_code == 200
        data = response.json()
        assert data["productions"][0]["id"] == "item-day-1"
        assert "Phone" not in data["productions"][0]["crew"][0]

    def test_list_productions_upstream_failure(self, test_client: TestClient) -> None:
        service = AsyncMock(spec=ProductionService)
        service.list_productions.side_effect = DocumentStoreError("Craft unavailable")
        override_services(service)

        response = test_client.get("/api/productions")

        assert response.status_code == 502
        assert response.json()["detail"]["error"] == "DocumentStoreError"

    def test_get_production_enriches_and_redacts(
        self, test_client: TestClient, sample_item, mock_knowledge_client, mock_document_store
    ) -> None:
        override_services(
            ProductionService(store_for(sample_item)),
            EnrichmentService(mock_knowledge_client, mock_document_store),
        )

        response = test_client.get("/api/production/item-day-1")

        assert response.status_code == 200
        data = response.json()
        assert data["locations"][0]["tableId"] == "loc-table-1"
        assert data["locations"][0]["gemData"]["GEMnearestHospital"] == "First Hospital"
        assert all("Phone" not in member for member in data["crew"] + data["cast"])
        assert data["properties"]["closed_set"] is True
        mock_knowledge_client.ask.assert_awaited_once()

    def test_get_production_without_enrichment(
        self, test_client: TestClient, sample_item, mock_knowledge_client, mock_document_store
    ) -> None:
        override_services(
            ProductionService(store_for(sample_item)),
            EnrichmentService(mock_knowledge_client, mock_document_store),
        )

        response = test_client.get("/api/production/item-day-1", params={"enrich": "false"})

        assert response.status_code == 200
        assert response.json()["locations"][0]["gemData"]["GEMnearestHospital"] == ""
        mock_knowledge_client.ask.assert_not_awaited()

    def test_get_production_survives_enrichment_failure(
        self, test_client: TestClient, sample_item, mock_document_store
    ) -> None:
        knowledge = AsyncMock()
        knowledge.ask.side_effect = KnowledgeServiceError("quota exceeded")
        override_services(
            ProductionService(store_for(sample_item)),
            EnrichmentService(knowledge, mock_document_store),
        )

        response = test_client.get("/api/production/item-day-1")

        assert response.status_code == 200
        assert response.json()["id"] == "item-day-1"

    def test_get_production_not_found(self, test_client: TestClient) -> None:
        service = AsyncMock(spec=ProductionService)
        service.get_production.side_effect = ProductionNotFoundError("Production missing not found")
        override_services(service, AsyncMock(spec=EnrichmentService))

        response = test_client.get("/api/production/missing")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "ProductionNotFoundError"

    def test_force_enrich(
        self, test_client: TestClient, sample_item, mock_knowledge_client, mock_document_store
    ) -> None:
        override_services(
            ProductionService(store_for(sample_item)),
            EnrichmentService(mock_knowledge_client, mock_document_store),
        )

        response = test_client.post("/api/production/item-day-1/enrich")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["production"]["locations"][1]["gemData"]["GEMtransportDesc"] == "N/A"

    def test_force_enrich_upstream_failure(self, test_client: TestClient, sample_item, mock_document_store) -> None:
        knowledge = AsyncMock()
        knowledge.ask.side_effect = KnowledgeServiceError("Gemini unavailable")
        override_services(
            ProductionService(store_for(sample_item)),
            EnrichmentService(knowledge, mock_document_store),
        )

        response = test_client.post("/api/production/item-day-1/enrich")

        assert response.status_code == 502

    def test_authenticate_match(self, test_client: TestClient, sample_item) -> None:
        override_services(ProductionService(store_for(sample_item)), EnrichmentService(None, AsyncMock()))

        response = test_client.post(
            "/api/production/item-day-1/authenticate",
            json={"phone": "0412-345-678"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["authenticated"] is True
        assert data["userInfo"]["name"] == "Alex Moreno"
        assert data["userInfo"]["kind"] == "crew"
        assert data["isClosedSet"] is True
        assert data["production"]["crew"][0]["Phone"] == "0412 345 678"

    def test_authenticate_no_match(self, test_client: TestClient, sample_item) -> None:
        override_services(ProductionService(store_for(sample_item)), EnrichmentService(None, AsyncMock()))

        response = test_client.post(
            "/api/production/item-day-1/authenticate",
            json={"phone": "0400 000 000"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["authenticated"] is False
        assert data["userInfo"] is None
        assert data["isClosedSet"] is False
        assert "Phone" not in data["production"]["crew"][0]

    def test_authenticate_requires_phone(self, test_client: TestClient) -> None:
        override_services(AsyncMock(spec=ProductionService), AsyncMock(spec=EnrichmentService))

        response = test_client.post("/api/production/item-day-1/authenticate", json={})

        assert response.status_code == 422


class TestHealthEndpoint:

    def test_health(self, test_client: TestClient) -> None:
        response = test_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data
        assert isinstance(data["geminiConfigured"], bool)
