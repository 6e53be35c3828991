"""OAuth authentication for EVE Online SSO.

Supports both SSO flows:

- the legacy flow (``/oauth/...``), authenticated with the application's
  client id and secret key via HTTP Basic
- the v2 flow (``/v2/oauth/...``), authenticated with the client id in the
  request body plus a PKCE code verifier, requiring no secret

After a token is obtained, ``verify`` resolves the character behind it and
enriches it with the character's affiliation (alliance, corporation, faction).

Credentials are attached to each outgoing request. A shared
``httpx.AsyncClient`` passed in by the caller is never mutated, so several
flows may run concurrently against the same transport.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any
from urllib.parse import quote, urlencode

import httpx
from pydantic import ValidationError

from eve_sso.models.app import DataSource, GrantType, TokenResult
from eve_sso.models.eve import AuthorizedCharacterData, SsoToken
from eve_sso.utils import get_config
from eve_sso.utils.exceptions import (
    ConfigurationError,
    SSOParseError,
    SSOProtocolError,
    SSOTransportError,
)

from .endpoints import CharacterEndpoints
from .environment import parse_datasource, resolve_esi_url, resolve_sso_url
from .pkce import create_code_challenge, encode_code_verifier

logger = logging.getLogger(__name__)


class SSOAuth:
    """Handles OAuth 2.0 authentication with EVE Online SSO."""

    def __init__(
        self,
        client_id: str | None = None,
        secret_key: str | None = None,
        callback_url: str | None = None,
        datasource: DataSource | str | None = None,
        esi_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        request_timeout: float | None = None,
    ):
        """Initialize SSO authentication.

        Args:
            client_id: EVE application client ID. Falls back to config/env.
            secret_key: EVE application secret key, needed by the legacy flow only.
                Falls back to config/env.
            callback_url: OAuth callback URL (must match app registration). Falls back to config/env.
            datasource: EVE datasource (tranquility, singularity or serenity). Falls back to config/env.
            esi_url: ESI base URL. Falls back to config/env, then to the datasource default.
            http_client: Shared client to send requests with. The caller owns it;
                when omitted a short-lived client is created per request.
            request_timeout: Timeout for self-created clients. Falls back to config/env.

        Raises:
            ConfigurationError: If client ID or callback URL is missing, or the
                datasource is unknown.
        """
        config = get_config()

        self.client_id = client_id or config.esi.client_id
        if not self.client_id:
            raise ConfigurationError(
                "No SSO client ID configured; pass client_id or set ESI_CLIENT_ID"
            )
        self.callback_url = callback_url or config.esi.callback_url
        if not self.callback_url:
            raise ConfigurationError(
                "No SSO callback URL configured; pass callback_url or set ESI_CALLBACK_URL"
            )

        self.datasource = parse_datasource(datasource or config.esi.datasource)
        self.sso_url = resolve_sso_url(self.datasource)

        esi_url = esi_url or config.esi.esi_url or resolve_esi_url(self.datasource)
        self.esi_url = esi_url if esi_url.endswith("/") else f"{esi_url}/"

        secret_key = secret_key or config.esi.secret_key
        self._client_key = (
            base64.b64encode(f"{self.client_id}:{secret_key}".encode()).decode("ascii")
            if secret_key
            else None
        )

        self.request_timeout = request_timeout or config.esi.request_timeout
        self.user_agent = config.app.computed_user_agent
        self._http_client = http_client

        self.characters = CharacterEndpoints(self)

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the shared client, or a short-lived one if none was given."""
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self.request_timeout) as client:
            yield client

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a single request with per-request headers.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Extra headers for this request only
            **kwargs: Passed through to ``httpx.AsyncClient.request``

        Returns:
            The response, whatever its status

        Raises:
            SSOTransportError: If no response was received
        """
        request_headers = {"User-Agent": self.user_agent}
        if headers:
            request_headers.update(headers)

        try:
            async with self._session() as client:
                return await client.request(
                    method, url, headers=request_headers, **kwargs
                )
        except httpx.TransportError as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise SSOTransportError(f"{method} {url} failed: {e}") from e

    # ------------------------------------------------------------------
    # Authorization URLs
    # ------------------------------------------------------------------

    def _base_auth_params(self) -> dict[str, str]:
        return {
            "response_type": "code",
            "redirect_uri": self.callback_url,
            "client_id": self.client_id,
        }

    @staticmethod
    def _build_url(base: str, params: dict[str, str]) -> str:
        # quote (not quote_plus) so the callback URL is fully percent-encoded
        return f"{base}?{urlencode(params, quote_via=quote)}"

    def create_authentication_url(self, scopes: Sequence[str] | None = None) -> str:
        """Build the legacy flow authorization URL.

        Args:
            scopes: ESI scopes to request; the scope parameter is omitted when empty

        Returns:
            URL to send the user's browser to
        """
        params = self._base_auth_params()
        if scopes:
            params["scope"] = " ".join(scopes)
        return self._build_url(f"{self.sso_url}/oauth/authorize/", params)

    def create_authentication_url_v2(
        self,
        scopes: Sequence[str] | None,
        code_verifier: str,
        state: str,
    ) -> str:
        """Build the v2 (PKCE) flow authorization URL.

        The caller must keep ``code_verifier`` for the code exchange and
        check that the callback returns the same ``state``.

        Args:
            scopes: ESI scopes to request; the scope parameter is omitted when empty
            code_verifier: Raw PKCE verifier
            state: Opaque CSRF protection value

        Returns:
            URL to send the user's browser to
        """
        params = self._base_auth_params()
        params["code_challenge"] = create_code_challenge(code_verifier)
        params["code_challenge_method"] = "S256"
        params["state"] = state
        if scopes:
            params["scope"] = " ".join(scopes)
        return self._build_url(f"{self.sso_url}/v2/oauth/authorize/", params)

    # ------------------------------------------------------------------
    # Token exchange
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_token(response: httpx.Response) -> SsoToken:
        try:
            return SsoToken.model_validate_json(response.content)
        except ValidationError as e:
            raise SSOParseError(
                f"Malformed token response (status {response.status_code}): {e}"
            ) from e

    async def get_token(self, grant_type: GrantType | str, code: str) -> SsoToken:
        """Exchange a code or refresh token using the legacy flow.

        The response status is not checked; an error body fails to parse as
        a token and raises SSOParseError.

        Args:
            grant_type: authorization_code or refresh_token
            code: The authorization code or the refresh token

        Returns:
            Parsed token pair

        Raises:
            ConfigurationError: If no secret key is configured
            SSOTransportError: If no response was received
            SSOParseError: If the body is not a valid token
        """
        grant_type = GrantType(grant_type)
        if self._client_key is None:
            raise ConfigurationError(
                "The legacy SSO flow needs a secret key; pass secret_key or set ESI_SECRET_KEY"
            )

        data = {"grant_type": grant_type.value}
        if grant_type is GrantType.AUTHORIZATION_CODE:
            data["code"] = code
        else:
            data["refresh_token"] = code

        response = await self.request(
            "POST",
            f"{self.sso_url}/oauth/token",
            data=data,
            headers={"Authorization": f"Basic {self._client_key}"},
        )
        return self._parse_token(response)

    async def get_token_v2(
        self,
        grant_type: GrantType | str,
        code: str,
        code_verifier: str | None = None,
        scopes: Sequence[str] | None = None,
    ) -> TokenResult:
        """Exchange a code or refresh token using the v2 (PKCE) flow.

        HTTP and network failures are reported through the returned
        TokenResult rather than raised.

        Args:
            grant_type: authorization_code or refresh_token
            code: The authorization code or the refresh token
            code_verifier: Raw PKCE verifier used to build the authorization URL
                (authorization_code only)
            scopes: Scopes to narrow the refreshed token to (refresh_token only)

        Returns:
            TokenResult describing the outcome

        Raises:
            ValueError: If an authorization_code exchange has no code_verifier
            SSOParseError: If a 200 response is not a valid token
        """
        grant_type = GrantType(grant_type)
        data = {"grant_type": grant_type.value, "client_id": self.client_id}

        if grant_type is GrantType.AUTHORIZATION_CODE:
            if not code_verifier:
                raise ValueError(
                    "code_verifier is required for the authorization_code grant"
                )
            data["code"] = code
            data["code_verifier"] = encode_code_verifier(code_verifier)
        else:
            data["refresh_token"] = code
            if scopes:
                data["scope"] = " ".join(scopes)

        try:
            response = await self.request(
                "POST", f"{self.sso_url}/v2/oauth/token", data=data
            )
        except SSOTransportError as e:
            return TokenResult.transport_error(str(e))

        if response.status_code != httpx.codes.OK:
            logger.error(
                "Token request (%s) failed: %s %s",
                grant_type.value,
                response.status_code,
                response.text[:200],
            )
            return TokenResult.protocol_error(response.status_code, response.text)

        return TokenResult.granted(self._parse_token(response), response.status_code)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    async def verify_identity(self, token: SsoToken) -> AuthorizedCharacterData:
        """Resolve the character behind an access token.

        Args:
            token: Token pair to verify

        Returns:
            Character identity stamped with the token pair, without affiliation

        Raises:
            SSOTransportError: If no response was received
            SSOProtocolError: If the verify endpoint rejects the token
            SSOParseError: If the body is not a character identity
        """
        response = await self.request(
            "GET",
            f"{self.sso_url}/oauth/verify",
            headers={"Authorization": f"Bearer {token.access_token}"},
        )
        if not response.is_success:
            raise SSOProtocolError(
                f"Token verification failed with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            character = AuthorizedCharacterData.model_validate_json(response.content)
        except ValidationError as e:
            raise SSOParseError(f"Malformed verify response: {e}") from e

        return character.model_copy(
            update={"token": token.access_token, "refresh_token": token.refresh_token}
        )

    async def resolve_affiliation(
        self, character: AuthorizedCharacterData
    ) -> AuthorizedCharacterData:
        """Fill in alliance, corporation and faction IDs for a character.

        If the lookup fails the character is returned unchanged, with the
        affiliation fields left unset.

        Args:
            character: Verified character carrying its access token

        Returns:
            Enriched copy of the character, or the character itself on failure
        """
        affiliations = await self.characters.get_affiliations(
            [character.character_id], character.token
        )
        if not affiliations:
            if affiliations is not None:
                logger.warning(
                    "Affiliation lookup returned no entry for %s",
                    character.character_id,
                )
            return character

        affiliation = affiliations[0]
        return character.model_copy(
            update={
                "alliance_id": affiliation.alliance_id,
                "corporation_id": affiliation.corporation_id,
                "faction_id": affiliation.faction_id,
            }
        )

    async def verify(
        self, token: SsoToken, resolve_affiliation: bool = True
    ) -> AuthorizedCharacterData:
        """Verify a token and resolve the character's affiliation.

        The returned object holds the token pair; callers are expected to
        store it for later token refreshes.

        Args:
            token: Token pair to verify
            resolve_affiliation: Whether to look up alliance/corporation/faction

        Returns:
            Verified character identity
        """
        character = await self.verify_identity(token)
        if resolve_affiliation:
            character = await self.resolve_affiliation(character)

        logger.info(
            "Verified %s (id=%s), corporation=%s",
            character.character_name,
            character.character_id,
            character.corporation_id,
        )
        return character
