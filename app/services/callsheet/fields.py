"""Location field routing.

Location tables mix plain fields (address, unit base, ...) with enrichment
fields. In the persisted document enrichment keys carry the ``GEM`` prefix
(``GEMsunriseTime``); this module is the only place that knows about it.
"""

from dataclasses import dataclass
from typing import Union

GEM_PREFIX = "GEM"


@dataclass(frozen=True)
class RawField:
    """An author-supplied location field."""

    key: str
    value: str


@dataclass(frozen=True)
class EnrichmentField:
    """An externally sourced location field, kept under its persisted key."""

    key: str
    value: str

    @property
    def name(self) -> str:
        return to_field_name(self.key)


LocationField = Union[RawField, EnrichmentField]


def to_persisted_key(name: str) -> str:
    """``sunriseTime`` -> ``GEMsunriseTime``."""
    return f"{GEM_PREFIX}{name}"


def to_field_name(persisted_key: str) -> str:
    """``GEMsunriseTime`` -> ``sunriseTime``."""
    bare = persisted_key[len(GEM_PREFIX):]
    return bare[:1].lower() + bare[1:]


def is_enrichment_key(key: str) -> bool:
    return key.startswith(GEM_PREFIX)


def decode_location_field(key: str, value: str) -> LocationField:
    if is_enrichment_key(key):
        return EnrichmentField(key=key, value=value)
    return RawField(key=key, value=value)
