"""Health check API endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter

from app.core.config import settings
from app.models.response import HealthCheckResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health check endpoint",
    description="Check if the service is running and whether enrichment is configured",
    operation_id="get_service_health_status",
)
async def health_check() -> HealthCheckResponse:
    """Health check endpoint."""
    return HealthCheckResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        gemini_configured=settings.gemini_configured,
    )
