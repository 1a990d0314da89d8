"""Decides whether a location still needs enrichment."""

from typing import Mapping, Optional, Tuple

from app.models.enrichment import LocationEnrichment
from app.services.callsheet.fields import to_persisted_key

ENRICHMENT_FIELD_NAMES: Tuple[str, ...] = tuple(LocationEnrichment.model_fields)
ENRICHMENT_FIELDS: Tuple[str, ...] = tuple(to_persisted_key(name) for name in ENRICHMENT_FIELD_NAMES)


def needs_enrichment(gem_data: Optional[Mapping[str, Optional[str]]]) -> bool:
    """True if any of the ten enrichment keys is missing or blank."""
    gem_data = gem_data or {}
    for key in ENRICHMENT_FIELDS:
        value = gem_data.get(key)
        if value is None or not str(value).strip():
            return True
    return False
