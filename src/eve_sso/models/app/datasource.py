"""EVE server data sources."""

from enum import Enum


class DataSource(Enum):
    """Deployment environments served by EVE SSO and ESI."""

    TRANQUILITY = "tranquility"
    SINGULARITY = "singularity"
    SERENITY = "serenity"
