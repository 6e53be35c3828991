"""EVE SSO client: authorization URLs, token exchange and verification."""

from .auth import SSOAuth
from .environment import parse_datasource, resolve_esi_url, resolve_sso_url
from .pkce import (
    PKCEPair,
    create_code_challenge,
    create_pkce_pair,
    encode_code_verifier,
    generate_code_verifier,
    generate_state,
)

__all__ = [
    "PKCEPair",
    "SSOAuth",
    "create_code_challenge",
    "create_pkce_pair",
    "encode_code_verifier",
    "generate_code_verifier",
    "generate_state",
    "parse_datasource",
    "resolve_esi_url",
    "resolve_sso_url",
]
