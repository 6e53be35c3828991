"""Mapping of EVE data sources to SSO and ESI hosts."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from eve_sso.models.app import DataSource
from eve_sso.utils.exceptions import ConfigurationError

SSO_URLS: Mapping[DataSource, str] = MappingProxyType(
    {
        DataSource.TRANQUILITY: "https://login.eveonline.com",
        DataSource.SINGULARITY: "https://sisilogin.testeveonline.com",
        DataSource.SERENITY: "https://login.evepc.163.com",
    }
)

ESI_URLS: Mapping[DataSource, str] = MappingProxyType(
    {
        DataSource.TRANQUILITY: "https://esi.evetech.net/",
        DataSource.SINGULARITY: "https://esi.evetech.net/",
        DataSource.SERENITY: "https://esi.evepc.163.com/",
    }
)


def parse_datasource(value: DataSource | str) -> DataSource:
    """Convert a configured datasource to a DataSource.

    Args:
        value: DataSource member or its name (case-insensitive)

    Returns:
        Matching DataSource

    Raises:
        ConfigurationError: If the value names no known datasource
    """
    if isinstance(value, DataSource):
        return value
    try:
        return DataSource(str(value).strip().lower())
    except ValueError as e:
        valid = ", ".join(ds.value for ds in DataSource)
        raise ConfigurationError(
            f"Unknown datasource {value!r}; expected one of: {valid}"
        ) from e


def resolve_sso_url(datasource: DataSource | str) -> str:
    """Return the SSO host URL (no trailing slash) for a datasource."""
    return SSO_URLS[parse_datasource(datasource)]


def resolve_esi_url(datasource: DataSource | str) -> str:
    """Return the default ESI base URL (with trailing slash) for a datasource."""
    return ESI_URLS[parse_datasource(datasource)]
