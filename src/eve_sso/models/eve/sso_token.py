"""EVE SSO token data model."""

from pydantic import BaseModel, ConfigDict, Field


class SsoToken(BaseModel):
    """Token pair issued by the SSO token endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str = Field(..., description="Bearer token for ESI requests")
    refresh_token: str = Field("", description="Token used to obtain a new pair")
    token_type: str = Field("Bearer", description="Token type, normally Bearer")
    expires_in: int = Field(..., description="Access token lifetime in seconds")
