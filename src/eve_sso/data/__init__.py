from .clients import SSOAuth

__all__ = [
    "SSOAuth",
]
