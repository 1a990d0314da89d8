from pydantic import BaseModel, Field


class AuthenticateRequest(BaseModel):
    """Phone number supplied by a caller asking to see a call sheet."""

    phone: str = Field(..., description="Caller phone number, any formatting", examples=["0412 345 678"])
