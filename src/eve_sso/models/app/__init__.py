"""Application-level models (enums and result types)."""

from .datasource import DataSource
from .grant_type import GrantType
from .token_result import TokenOutcome, TokenResult

__all__ = [
    "DataSource",
    "GrantType",
    "TokenOutcome",
    "TokenResult",
]
