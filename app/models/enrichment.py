"""Knowledge service reply models."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_APPLICABLE = "N/A"


def flatten_text(value: Any) -> str:
    """Render a reply value as a single line of text.

    ``{"name": "RPA Hospital", "address": "50 Missenden Rd"}`` becomes
    ``"RPA Hospital, 50 Missenden Rd"``; lists are joined the same way and
    blank parts are dropped. ``True`` reads as ``"Yes"``; ``None`` and
    ``False`` are blank.
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "Yes"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, dict):
        value = list(value.values())
    if isinstance(value, (list, tuple)):
        return ", ".join(part for part in (flatten_text(item) for item in value) if part)
    return str(value).strip()


class LocationEnrichment(BaseModel):
    """The ten enrichment attributes returned for one location.

    Missing, null or blank attributes fall back to an empty string, except
    ``transportDesc`` which falls back to ``"N/A"``.
    """

    model_config = ConfigDict(extra="ignore")

    nearestHospital: str = ""
    nearestFireStation: str = ""
    nearestPoliceStation: str = ""
    nearestEmergencyAfterHours: str = ""
    sunriseTime: str = ""
    sunsetTime: str = ""
    weatherTemp: str = ""
    weatherDesc: str = ""
    publicTransportInfo: str = ""
    transportDesc: str = Field(default=NOT_APPLICABLE)

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return flatten_text(value)

    @field_validator("transportDesc")
    @classmethod
    def _default_transport(cls, value: str) -> str:
        return value or NOT_APPLICABLE

    def as_fields(self) -> Dict[str, str]:
        """Return the attributes keyed by their canonical field name."""
        return self.model_dump()
