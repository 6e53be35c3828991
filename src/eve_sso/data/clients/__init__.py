"""API clients."""

from .esi import SSOAuth

__all__ = ["SSOAuth"]
