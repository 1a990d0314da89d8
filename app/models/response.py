from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.callsheet import Production


class HealthCheckResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Service status
        timestamp: Time the check ran
        gemini_configured: Whether an enrichment API key is present
    """

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(
        default="ok",
        description="Service health status",
        examples=["ok"],
    )
    timestamp: datetime = Field(..., description="Time of the check")
    gemini_configured: bool = Field(
        ...,
        alias="geminiConfigured",
        description="Whether location enrichment is available",
    )


class EnrichResponse(BaseModel):
    """Result of a forced re-enrichment."""

    success: bool = True
    production: Production
