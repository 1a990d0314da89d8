"""Location enrichment service.

Collects every location of a production that still lacks enrichment data,
asks the knowledge service about all of them in a single call (one call per
production keeps us under the upstream rate limits), folds the answers back
into the locations and writes them into the persisted location tables.

Running it twice without new upstream data is a no-op the second time: a
merged location has all ten fields filled, so the gate skips it.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import AppError, MalformedReplyError, ValidationError
from app.core.base_service import BaseService
from app.models.callsheet import Location, Production
from app.models.enrichment import NOT_APPLICABLE, LocationEnrichment
from app.prompts.enrichment_prompts import (
    LOCATION_ENRICHMENT_PROMPT,
    LOCATION_LINE,
    NEXT_LOCATION_SUFFIX,
)
from app.services.callsheet.fields import is_enrichment_key, to_field_name, to_persisted_key
from app.services.callsheet.table_codec import cell_text
from app.services.enrichment.gate import needs_enrichment
from app.utils.json_parser import parse_json_safely
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class EnrichmentCandidate:
    """A location selected for enrichment, with its travel context."""

    position: int
    address: str
    next_address: Optional[str]


def select_candidates(locations: Sequence[Location]) -> List[EnrichmentCandidate]:
    """Pick the locations that need enrichment and have an address.

    ``next_address`` is the address of the location immediately following in
    the full list, whether or not that one is itself a candidate.
    """
    candidates: List[EnrichmentCandidate] = []
    for position, location in enumerate(locations):
        if not needs_enrichment(location.gem_data):
            LOGGER.info(f"Location {location.index} already enriched, skipping")
            continue
        if not location.address:
            LOGGER.info(f"Location {location.index} has no address, skipping")
            continue
        next_address = None
        if position + 1 < len(locations):
            next_address = locations[position + 1].address or None
        candidates.append(
            EnrichmentCandidate(position=position, address=location.address, next_address=next_address)
        )
    return candidates


def resolve_shoot_date(properties: Mapping[str, Any], timezone: str = "Australia/Sydney") -> str:
    """Human readable shoot date, defaulting to today in ``timezone``."""
    raw = properties.get("date_of_shoot")
    if raw:
        try:
            shoot_date = date.fromisoformat(str(raw)[:10])
        except ValueError:
            LOGGER.warning(f"Unrecognised shoot date '{raw}', passing it through")
            return str(raw)
    else:
        try:
            shoot_date = datetime.now(ZoneInfo(timezone)).date()
        except ZoneInfoNotFoundError:
            LOGGER.warning(f"Unknown timezone '{timezone}', using local date")
            shoot_date = date.today()
    return f"{shoot_date:%A}, {shoot_date.day} {shoot_date:%B %Y}"


def build_prompt(candidates: Sequence[EnrichmentCandidate], shoot_date: str) -> str:
    lines = []
    for position, candidate in enumerate(candidates, start=1):
        line = LOCATION_LINE.format(position=position, address=candidate.address)
        if candidate.next_address:
            line += NEXT_LOCATION_SUFFIX.format(next_address=candidate.next_address)
        lines.append(line)
    return LOCATION_ENRICHMENT_PROMPT.format(
        shoot_date=shoot_date,
        locations="\n".join(lines),
        count=len(candidates),
    )


def decode_reply(text: str) -> List[Any]:
    """Decode the knowledge service reply into a list of results.

    A lone object is read as a one-element list.

    Raises:
        MalformedReplyError: If the reply is not JSON or not a list/object
    """
    parsed = parse_json_safely(text)
    if isinstance(parsed, dict):
        LOGGER.warning("Reply is a single object, wrapping in list")
        return [parsed]
    if not isinstance(parsed, list):
        raise MalformedReplyError(
            f"Expected a JSON array from the knowledge service, got {type(parsed).__name__}"
        )
    return parsed


def align_results(
    candidates: Sequence[EnrichmentCandidate],
    results: Sequence[Any],
) -> List[Tuple[EnrichmentCandidate, LocationEnrichment]]:
    """Pair candidates with reply items by batch position.

    A short reply enriches only the candidates it covers; extra items are
    dropped; items that are not objects are skipped.
    """
    if len(results) != len(candidates):
        LOGGER.warning(
            "Enrichment reply length does not match request",
            extra={"requested": len(candidates), "received": len(results)},
        )

    aligned: List[Tuple[EnrichmentCandidate, LocationEnrichment]] = []
    for candidate, result in zip(candidates, results):
        if not isinstance(result, dict):
            LOGGER.warning(f"Skipping non-object enrichment result for '{candidate.address}'")
            continue
        try:
            aligned.append((candidate, LocationEnrichment.model_validate(result)))
        except PydanticValidationError as e:
            LOGGER.warning(f"Skipping invalid enrichment result for '{candidate.address}': {e}")
    return aligned


def merge_enrichment(candidate: EnrichmentCandidate, enrichment: LocationEnrichment) -> Dict[str, str]:
    """Build the complete persisted-key map for one location."""
    fields = enrichment.as_fields()
    if candidate.next_address is None:
        fields["transportDesc"] = NOT_APPLICABLE
    return {to_persisted_key(name): value for name, value in fields.items()}


def build_table_update(
    table: Mapping[str, Any],
    gem_data: Mapping[str, str],
) -> List[List[Dict[str, Any]]]:
    """Rewrite the value cell of existing GEM rows that have a new value.

    Values come from the location's merged ``gem_data`` rather than the raw
    reply item, so defaults and the forced ``"N/A"`` for the last location are
    persisted too and the stored table matches the in-memory location. Other
    rows, and GEM rows whose merged value is blank, are returned untouched.
    """
    fields = {to_field_name(key): value for key, value in gem_data.items() if is_enrichment_key(key)}
    rows: List[List[Dict[str, Any]]] = []
    for row in table.get("rows") or []:
        if len(row) >= 2:
            key = cell_text(row[0])
            if key and is_enrichment_key(key):
                value = fields.get(to_field_name(key))
                if value:
                    rows.append([
                        {"value": key, "attributes": []},
                        {"value": value, "attributes": []},
                    ])
                    continue
        rows.append(row)
    return rows


class EnrichmentService(BaseService):
    """Enriches production locations through the knowledge service.

    Attributes:
        knowledge_client: Object exposing ``async ask(prompt) -> str``; ``None``
            when no API key is configured, in which case enrichment is skipped
        document_store: Object exposing ``get_table`` / ``put_table``
        timezone: Timezone used when the production has no shoot date
    """

    def __init__(self, knowledge_client, document_store, timezone: str = "Australia/Sydney"):
        super().__init__()
        self.knowledge_client = knowledge_client
        self.document_store = document_store
        self.timezone = timezone

    async def enrich(self, production: Production, force: bool = False) -> Production:
        """Enrich every eligible location of ``production``.

        Args:
            production: Parsed production
            force: Clear existing enrichment first so every location is refreshed

        Returns:
            Production: A copy with merged enrichment data
        """
        return await self.execute(production, force=force)

    def validate(self, production, force: bool = False):
        if not isinstance(production, Production):
            raise ValidationError("enrich expects a Production")

    async def run(self, production: Production, force: bool = False) -> Production:
        production = production.model_copy(deep=True)

        if force:
            for location in production.locations:
                location.gem_data = {}

        if self.knowledge_client is None:
            LOGGER.warning("Knowledge service not configured, skipping enrichment")
            return production

        candidates = select_candidates(production.locations)
        if not candidates:
            LOGGER.info("All locations already enriched")
            return production

        prompt = build_prompt(candidates, resolve_shoot_date(production.properties, self.timezone))

        LOGGER.info(f"Enriching {len(candidates)} locations in a single request...")
        reply = await self.knowledge_client.ask(prompt)

        try:
            results = decode_reply(reply)
        except MalformedReplyError as e:
            LOGGER.error(
                f"Discarding malformed enrichment reply: {e}",
                extra={"production_id": production.id, "response": (reply or "")[:500]},
            )
            return production

        for candidate, enrichment in align_results(candidates, results):
            location = production.locations[candidate.position]
            location.gem_data = merge_enrichment(candidate, enrichment)

            if location.table_id:
                await self._write_back(location)

        LOGGER.info(
            "Enrichment merged",
            extra={"production_id": production.id, "requested": len(candidates), "received": len(results)},
        )
        return production

    async def _write_back(self, location: Location) -> bool:
        """Persist a location's enrichment into its table; failures are logged only."""
        try:
            table = await self.document_store.get_table(location.table_id)
            if not isinstance(table, dict) or not table.get("rows"):
                LOGGER.error(f"Could not fetch table {location.table_id} for update")
                return False

            rows = build_table_update(table, location.gem_data)
            await self.document_store.put_table(location.table_id, rows)
        except AppError as e:
            LOGGER.error(
                f"Error updating location table: {e}",
                extra={"table_id": location.table_id, "location_index": location.index},
            )
            return False
        except Exception as e:
            LOGGER.error(
                f"Unexpected error writing back location table: {e}",
                exc_info=True,
                extra={"table_id": location.table_id, "location_index": location.index},
            )
            return False

        LOGGER.info(f"Updated store with enriched data for location {location.index}")
        return True
