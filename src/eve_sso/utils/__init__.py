"""Utility functions and classes for EVE SSO."""

from .config import Config, get_config, global_config, reload_config, reset_config
from .exceptions import (
    ConfigurationError,
    ESIError,
    EveSSOError,
    SSOParseError,
    SSOProtocolError,
    SSOTransportError,
)
from .logging_setup import setup_logging

__all__ = [
    "Config",
    "ConfigurationError",
    "ESIError",
    "EveSSOError",
    "SSOParseError",
    "SSOProtocolError",
    "SSOTransportError",
    "get_config",
    "global_config",
    "reload_config",
    "reset_config",
    "setup_logging",
]
