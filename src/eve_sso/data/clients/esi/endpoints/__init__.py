"""ESI endpoint classes for organized API access."""

from .character import CharacterEndpoints

__all__ = [
    "CharacterEndpoints",
]
