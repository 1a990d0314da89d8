"""FastAPI dependency providers for services and upstream clients."""

from functools import lru_cache
from typing import Optional

from app.core.config import settings
from app.core.craft_client import CraftClient
from app.core.gemini_client import GeminiClient
from app.services.callsheet.production_service import ProductionService
from app.services.enrichment.enrichment_service import EnrichmentService
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


@lru_cache
def get_craft_client() -> CraftClient:
    return CraftClient(base_url=settings.craft_api_base, timeout=settings.craft.timeout)


@lru_cache
def get_knowledge_client() -> Optional[GeminiClient]:
    """Gemini client, or None when no usable API key is configured."""
    if not settings.gemini_configured:
        LOGGER.warning("GEMINI_API_KEY not configured. Location enrichment will be skipped.")
        return None
    return GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        search_grounding=settings.llm.search_grounding,
        timeout=settings.llm.timeout,
    )


def get_production_service() -> ProductionService:
    return ProductionService(
        document_store=get_craft_client(),
        collection_name=settings.craft.collection_name,
    )


def get_enrichment_service() -> EnrichmentService:
    return EnrichmentService(
        knowledge_client=get_knowledge_client(),
        document_store=get_craft_client(),
        timezone=settings.shoot_timezone,
    )
