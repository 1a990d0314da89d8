"""Call sheet document parser.

A call sheet item is a flat list of blocks. Level-1 headings open a section
(crew, cast, locations, scenes), level-2 headings inside Locations open a new
location, and tables are decoded according to the section they sit in.

Known limitations, kept as-is:
- a level-1 heading matching several section keywords takes the first one in
  the order crew, cast, location, scene;
- a second table in the crew, cast or scenes section replaces the first.
"""

from dataclasses import dataclass, replace
from enum import Enum
from functools import reduce
from typing import Any, Iterable, Mapping, Optional, Tuple

from app.models.callsheet import Location, Person, Production, Scene
from app.services.callsheet.fields import EnrichmentField, decode_location_field
from app.services.callsheet.table_codec import to_key_value, to_record_list
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class BlockKind(str, Enum):
    HEADING_1 = "heading-1"
    HEADING_2 = "heading-2"
    TABLE = "table"
    OTHER = "other"


class Section(str, Enum):
    CREW = "crew"
    CAST = "cast"
    LOCATIONS = "locations"
    SCENES = "scenes"
    NONE = "none"


SECTION_KEYWORDS: Tuple[Tuple[str, Section], ...] = (
    ("crew", Section.CREW),
    ("cast", Section.CAST),
    ("location", Section.LOCATIONS),
    ("scene", Section.SCENES),
)

HEADING_STYLES = {"h1": BlockKind.HEADING_1, "h2": BlockKind.HEADING_2}


def classify_block(block: Mapping[str, Any]) -> BlockKind:
    """Map a raw Craft block onto the kinds the parser cares about."""
    block_type = block.get("type")
    if block_type == "table":
        return BlockKind.TABLE
    if block_type == "text":
        return HEADING_STYLES.get(block.get("textStyle"), BlockKind.OTHER)
    try:
        return BlockKind(block_type)
    except ValueError:
        return BlockKind.OTHER


def heading_text(block: Mapping[str, Any]) -> str:
    """Lower-cased heading text with markdown heading marks removed."""
    text = block.get("markdown") or block.get("text") or ""
    return str(text).lstrip("#").strip().lower()


def section_for(text: str) -> Section:
    for keyword, section in SECTION_KEYWORDS:
        if keyword in text:
            return section
    return Section.NONE


@dataclass(frozen=True)
class ParserState:
    """Accumulator carried through the block fold."""

    section: Section = Section.NONE
    current_location_index: Optional[int] = None
    crew: Tuple[Person, ...] = ()
    cast: Tuple[Person, ...] = ()
    scenes: Tuple[Scene, ...] = ()
    locations: Tuple[Location, ...] = ()

    @property
    def current_location(self) -> Optional[Location]:
        if self.current_location_index is None:
            return None
        return self.locations[self.current_location_index - 1]


def _on_heading_1(state: ParserState, block: Mapping[str, Any]) -> ParserState:
    return replace(state, section=section_for(heading_text(block)))


def _on_heading_2(state: ParserState, block: Mapping[str, Any]) -> ParserState:
    if state.section is not Section.LOCATIONS or "location" not in heading_text(block):
        return state
    index = len(state.locations) + 1
    location = Location(index=index)
    return replace(
        state,
        current_location_index=index,
        locations=state.locations + (location,),
    )


def decode_location_table(block: Mapping[str, Any], location: Location) -> Location:
    """Fold a location key/value table into a copy of ``location``."""
    data = dict(location.data)
    gem_data = dict(location.gem_data)
    for key, value in to_key_value(block).items():
        decoded = decode_location_field(key, value)
        if isinstance(decoded, EnrichmentField):
            gem_data[decoded.key] = decoded.value
        else:
            data[decoded.key] = decoded.value
    table_id = block.get("id")
    return location.model_copy(
        update={
            "table_id": str(table_id) if table_id is not None else None,
            "data": data,
            "gem_data": gem_data,
        }
    )


def _on_table(state: ParserState, block: Mapping[str, Any]) -> ParserState:
    if state.section is Section.CREW:
        return replace(state, crew=tuple(to_record_list(block)))
    if state.section is Section.CAST:
        return replace(state, cast=tuple(to_record_list(block)))
    if state.section is Section.SCENES:
        return replace(state, scenes=tuple(to_record_list(block)))
    if state.section is Section.LOCATIONS and state.current_location is not None:
        position = state.current_location_index - 1
        updated = decode_location_table(block, state.current_location)
        locations = state.locations[:position] + (updated,) + state.locations[position + 1:]
        return replace(state, locations=locations)
    return state


BLOCK_HANDLERS = {
    BlockKind.HEADING_1: _on_heading_1,
    BlockKind.HEADING_2: _on_heading_2,
    BlockKind.TABLE: _on_table,
}


def step(state: ParserState, block: Mapping[str, Any]) -> ParserState:
    """Advance the parser by one block; unknown blocks leave the state unchanged."""
    if not isinstance(block, Mapping):
        return state
    handler = BLOCK_HANDLERS.get(classify_block(block))
    if handler is None:
        return state
    return handler(state, block)


def parse_blocks(blocks: Iterable[Mapping[str, Any]]) -> ParserState:
    return reduce(step, blocks, ParserState())


def parse_production(item: Mapping[str, Any]) -> Production:
    """Build a ``Production`` from a raw collection item.

    Args:
        item: Store item carrying ``id``, ``title``/``production_title``,
            ``properties`` and an ordered ``content`` block list

    Returns:
        Production: Parsed production
    """
    state = parse_blocks(item.get("content") or [])

    production = Production(
        id=str(item.get("id", "")),
        title=item.get("production_title") or item.get("title"),
        properties=dict(item.get("properties") or {}),
        crew=list(state.crew),
        cast=list(state.cast),
        locations=list(state.locations),
        scenes=list(state.scenes),
    )

    LOGGER.debug(
        "Parsed production",
        extra={
            "production_id": production.id,
            "crew": len(production.crew),
            "cast": len(production.cast),
            "locations": len(production.locations),
            "scenes": len(production.scenes),
        },
    )
    return production
