"""EVE Online data models (domain layer)."""

from .affiliation import EveAffiliation
from .authorized_character import AuthorizedCharacterData
from .sso_token import SsoToken

__all__ = [
    "AuthorizedCharacterData",
    "EveAffiliation",
    "SsoToken",
]
