"""Character-related ESI endpoints."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import httpx
from pydantic import TypeAdapter, ValidationError

from eve_sso.models.eve import EveAffiliation
from eve_sso.utils.exceptions import SSOParseError, SSOTransportError

if TYPE_CHECKING:
    from eve_sso.data.clients.esi.auth import SSOAuth

logger = logging.getLogger(__name__)

_AFFILIATIONS = TypeAdapter(list[EveAffiliation])


class CharacterEndpoints:
    """Handles character-related ESI endpoints.

    Example:
        ```python
        auth = SSOAuth(client_id="...")
        affiliations = await auth.characters.get_affiliations([character_id], token)
        ```
    """

    def __init__(self, client: SSOAuth):
        """Initialize character endpoints with the SSO client.

        Args:
            client: SSO client instance for HTTP operations
        """
        self._client = client

    async def get_affiliations(
        self, character_ids: Iterable[int], access_token: str
    ) -> list[EveAffiliation] | None:
        """Look up corporation/alliance/faction membership for characters.

        Lookup failures are not fatal: a transport error or non-200 status
        is logged and reported as None.

        Args:
            character_ids: Character IDs to resolve
            access_token: Bearer token sent with the request

        Returns:
            Affiliations in response order, or None if the lookup failed

        Raises:
            SSOParseError: If a 200 response body is not an affiliation list
        """
        ids = list(character_ids)
        url = f"{self._client.esi_url}v1/characters/affiliation/"

        try:
            response = await self._client.request(
                "POST",
                url,
                params={"datasource": self._client.datasource.value},
                json=ids,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except SSOTransportError as e:
            logger.warning("Affiliation lookup for %s failed: %s", ids, e)
            return None

        if response.status_code != httpx.codes.OK:
            logger.warning(
                "Affiliation lookup for %s returned status %s",
                ids,
                response.status_code,
            )
            return None

        try:
            return _AFFILIATIONS.validate_json(response.content)
        except ValidationError as e:
            raise SSOParseError(f"Malformed affiliation response: {e}") from e
