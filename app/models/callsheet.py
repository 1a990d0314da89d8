"""Call sheet domain models.

Crew, cast and scene rows stay as header-keyed string mappings because their
columns are whatever the call sheet author put in the table header row.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Person = Dict[str, str]
Scene = Dict[str, str]


class Location(BaseModel):
    """One shooting location discovered under the Locations section."""

    model_config = ConfigDict(populate_by_name=True)

    index: int = Field(..., description="1-based position in discovery order")
    table_id: Optional[str] = Field(
        default=None,
        alias="tableId",
        description="Id of the persisted table block backing this location",
    )
    data: Dict[str, str] = Field(default_factory=dict, description="Address and unit base fields")
    gem_data: Dict[str, str] = Field(
        default_factory=dict,
        alias="gemData",
        description="Enrichment fields keyed by their persisted GEM* key",
    )

    @property
    def address(self) -> str:
        return (self.data.get("Location Address") or "").strip()


class Production(BaseModel):
    """One shoot day of call sheet data for a title."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Store item id")
    title: Optional[str] = Field(default=None, description="Production title")
    properties: Dict[str, Any] = Field(default_factory=dict, description="Shoot metadata")
    crew: List[Person] = Field(default_factory=list)
    cast: List[Person] = Field(default_factory=list)
    locations: List[Location] = Field(default_factory=list)
    scenes: List[Scene] = Field(default_factory=list)

    @property
    def is_closed_set(self) -> bool:
        return self.properties.get("closed_set") is True


class UserInfo(BaseModel):
    """Crew or cast member matched by phone number."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    role: Optional[str] = Field(default=None, description="Crew role")
    character: Optional[str] = Field(default=None, description="Cast character")
    call_time: Optional[str] = Field(default=None, alias="callTime")
    kind: Literal["crew", "cast"]


class AuthenticationResult(BaseModel):
    """Outcome of a phone-number lookup against a production."""

    model_config = ConfigDict(populate_by_name=True)

    authenticated: bool
    user_info: Optional[UserInfo] = Field(default=None, alias="userInfo")
    production: Production
    is_closed_set: bool = Field(default=False, alias="isClosedSet")


class ShootDay(BaseModel):
    """A single day entry inside a grouped production listing."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    shoot_day: Any = Field(default=1, alias="shootDay")
    date: Optional[str] = None
    full_title: str = Field(..., alias="fullTitle")


class ProductionGroup(BaseModel):
    """All shoot days sharing a base title."""

    title: str
    days: List[ShootDay] = Field(default_factory=list)


class ProductionCatalog(BaseModel):
    """Every parsed production plus the title grouping."""

    productions: List[Production] = Field(default_factory=list)
    grouped: List[ProductionGroup] = Field(default_factory=list)
