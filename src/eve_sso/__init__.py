"""EVE Online SSO (OAuth 2.0 / PKCE) client with character verification."""

from .data.clients.esi import (
    SSOAuth,
    create_pkce_pair,
    generate_code_verifier,
    generate_state,
)
from .models.app import DataSource, GrantType, TokenOutcome, TokenResult
from .models.eve import AuthorizedCharacterData, EveAffiliation, SsoToken

__all__ = [
    "AuthorizedCharacterData",
    "DataSource",
    "EveAffiliation",
    "GrantType",
    "SSOAuth",
    "SsoToken",
    "TokenOutcome",
    "TokenResult",
    "create_pkce_pair",
    "generate_code_verifier",
    "generate_state",
]
