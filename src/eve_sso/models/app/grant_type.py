"""OAuth 2.0 grant types accepted by the SSO token endpoint."""

from enum import Enum


class GrantType(Enum):
    """Mechanism by which a token is obtained."""

    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"
