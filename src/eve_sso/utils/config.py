"""Centralized configuration management for EVE SSO.

This module provides application-level configuration from environment variables.

Features:
- Environment variable support via .env files
- Fallback priority: .env → hardcoded defaults
- Type-safe configuration using Pydantic
- Singleton pattern for global access

Usage:
    from eve_sso.utils import global_config

    auth = SSOAuth(
        client_id=global_config.esi.client_id,
        datasource=global_config.esi.datasource,
        callback_url=global_config.esi.callback_url,
    )
"""

from __future__ import annotations

import threading
import tomllib
from logging import getLogger
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from eve_sso.models.app.datasource import DataSource

from .exceptions import ConfigurationError

logger = getLogger(__name__)


def _read_pyproject() -> dict:
    """Read pyproject.toml and extract project metadata."""
    pyproject_path = Path(__file__).parents[3] / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            project = tomllib.load(f).get("project", {})
            return {
                "name": project.get("name", "eve-sso"),
                "version": project.get("version", "?.?.?"),
            }
    except (OSError, tomllib.TOMLDecodeError) as e:
        # Installed (non-editable) copies ship without pyproject.toml
        logger.debug(f"Could not read pyproject.toml: {e}")
        return {"name": "eve-sso", "version": "?.?.?"}


# Read project metadata once at module load
_PROJECT_METADATA = _read_pyproject()


class ESIConfig(BaseSettings):
    """EVE SSO and ESI configuration."""

    # Client credentials
    client_id: str = Field(
        default="",
        description="EVE application client ID from https://developers.eveonline.com/",
    )
    secret_key: str | None = Field(
        default=None,
        description="EVE application secret key (legacy SSO flow only)",
    )
    callback_url: str = Field(
        default="http://localhost:8080/callback",
        description="OAuth callback URL (must match app registration)",
    )

    # Datasource
    datasource: DataSource = Field(
        default=DataSource.TRANQUILITY,
        description="EVE server datasource (tranquility=live, singularity=test, serenity=China)",
    )
    esi_url: str | None = Field(
        default=None,
        description="Base URL for ESI API endpoints (defaults per datasource)",
    )

    request_timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="ESI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("datasource", mode="before")
    @classmethod
    def normalize_datasource(cls, v: object) -> object:
        """Accept datasource names in any letter case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("esi_url")
    @classmethod
    def normalize_esi_url(cls, v: str | None) -> str | None:
        """Ensure the ESI base URL ends with a slash."""
        if v is None or v == "":
            return None
        return v if v.endswith("/") else f"{v}/"


class AppConfig(BaseSettings):
    """Application-wide configuration."""

    name: str = Field(
        default_factory=lambda: _PROJECT_METADATA["name"],
        description="Application name (from pyproject.toml)",
    )
    version: str = Field(
        default_factory=lambda: _PROJECT_METADATA["version"],
        description="Application version (from pyproject.toml)",
    )
    user_agent: str = Field(
        default="",
        description="HTTP User-Agent header (auto-generated if empty)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def computed_user_agent(self) -> str:
        """Generate User-Agent header if not explicitly set."""
        if self.user_agent:
            return self.user_agent
        return f"{self.name}/{self.version}"


class Config:
    """Main configuration container."""

    def __init__(self) -> None:
        """Initialize configuration from environment and defaults.

        Raises:
            ConfigurationError: If any setting fails validation.
        """
        try:
            self.app = AppConfig()
            self.esi = ESIConfig()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def reload(self) -> None:
        """Reload configuration from environment variables."""
        self.__init__()

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(\n  app={self.app},\n  esi={self.esi}\n)"


# Global configuration instance (singleton)
_config_instance: Config | None = None
_config_lock = threading.Lock()


def get_config(config: Config | None = None) -> Config:
    """Get the global configuration instance (lazy initialization).

    Args:
        config: Optional config instance to use instead of singleton.
                If provided, replaces the singleton.
                Useful for dependency injection.

    Returns:
        Global Config instance
    """
    global _config_instance  # noqa: PLW0603

    if config is not None:
        with _config_lock:
            _config_instance = config
        return _config_instance

    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = Config()

    assert _config_instance is not None
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment.

    Returns:
        Reloaded Config instance
    """
    global _config_instance  # noqa: PLW0603
    with _config_lock:
        _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Reset the global config instance.

    Primarily for testing.
    """
    global _config_instance  # noqa: PLW0603
    with _config_lock:
        _config_instance = None


# Create the global config instance for convenience
global_config = get_config()
