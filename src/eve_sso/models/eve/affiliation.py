"""EVE Online character affiliation data model."""

from pydantic import BaseModel, Field


class EveAffiliation(BaseModel):
    """Current corporation/alliance/faction membership of a character."""

    character_id: int = Field(..., description="Character ID")
    corporation_id: int = Field(..., description="Corporation the character is in")
    alliance_id: int | None = Field(None, description="Alliance, if any")
    faction_id: int | None = Field(None, description="Faction warfare faction, if any")
