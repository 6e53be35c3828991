"""Verified character identity returned by the SSO verify endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class AuthorizedCharacterData(BaseModel):
    """Character identity stamped with the token pair that proved it.

    Field aliases match the PascalCase keys of the ``/oauth/verify``
    response. Instances are frozen; affiliation enrichment produces a new
    instance via ``model_copy``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    character_id: int = Field(..., alias="CharacterID")
    character_name: str = Field(..., alias="CharacterName")
    expires_on: str | None = Field(None, alias="ExpiresOn")
    scopes: str = Field("", alias="Scopes")
    token_type: str | None = Field(None, alias="TokenType")
    character_owner_hash: str | None = Field(None, alias="CharacterOwnerHash")
    intellectual_property: str | None = Field(None, alias="IntellectualProperty")

    token: str = ""
    refresh_token: str = ""

    alliance_id: int | None = None
    corporation_id: int | None = None
    faction_id: int | None = None

    @property
    def scope_list(self) -> list[str]:
        """Granted scopes as a list."""
        return self.scopes.split()
