"""Tests for token verification and affiliation enrichment."""

import json

import httpx
import pytest
from pydantic import ValidationError

from eve_sso.models.eve import AuthorizedCharacterData, SsoToken
from eve_sso.utils.exceptions import SSOParseError, SSOProtocolError

TOKEN = SsoToken(
    access_token="access-1",
    refresh_token="refresh-1",
    token_type="Bearer",
    expires_in=1199,
)

VERIFY_BODY = {
    "CharacterID": 95465499,
    "CharacterName": "CCP Bartender",
    "ExpiresOn": "2017-07-05T14:34:16.5857101",
    "Scopes": "esi-skills.read_skills.v1 esi-wallet.read_character_wallet.v1",
    "TokenType": "Character",
    "CharacterOwnerHash": "lots_of_letters_and_numbers",
    "IntellectualProperty": "EVE",
}

AFFILIATION_BODY = [
    {
        "character_id": 95465499,
        "corporation_id": 109299958,
        "alliance_id": 434243723,
        "faction_id": 500001,
    }
]


class _FakeSSO:
    """Route verify and affiliation requests to canned responses."""

    def __init__(
        self,
        verify: httpx.Response | None = None,
        affiliation: httpx.Response | Exception | None = None,
    ):
        self.verify = (
            verify if verify is not None else httpx.Response(200, json=VERIFY_BODY)
        )
        self.affiliation = (
            affiliation
            if affiliation is not None
            else httpx.Response(200, json=AFFILIATION_BODY)
        )
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/oauth/verify":
            return self.verify
        if request.url.path == "/v1/characters/affiliation/":
            if isinstance(self.affiliation, Exception):
                raise self.affiliation
            return self.affiliation
        return httpx.Response(404)


@pytest.mark.asyncio
async def test_verify_resolves_identity_and_affiliation(make_auth):
    sso = _FakeSSO()
    auth = make_auth(sso)

    character = await auth.verify(TOKEN)

    verify_request, affiliation_request = sso.requests
    assert verify_request.method == "GET"
    assert str(verify_request.url) == "https://login.eveonline.com/oauth/verify"
    assert verify_request.headers["Authorization"] == "Bearer access-1"

    assert affiliation_request.method == "POST"
    assert str(affiliation_request.url) == (
        "https://esi.evetech.net/v1/characters/affiliation/?datasource=tranquility"
    )
    assert affiliation_request.headers["Authorization"] == "Bearer access-1"
    assert json.loads(affiliation_request.content) == [95465499]

    assert character.character_id == 95465499
    assert character.character_name == "CCP Bartender"
    assert character.token == "access-1"
    assert character.refresh_token == "refresh-1"
    assert character.scope_list == [
        "esi-skills.read_skills.v1",
        "esi-wallet.read_character_wallet.v1",
    ]
    assert character.corporation_id == 109299958
    assert character.alliance_id == 434243723
    assert character.faction_id == 500001


@pytest.mark.asyncio
async def test_failed_affiliation_leaves_ids_unset(make_auth):
    auth = make_auth(_FakeSSO(affiliation=httpx.Response(503, text="down")))

    character = await auth.verify(TOKEN)

    assert character.character_id == 95465499
    assert character.character_name == "CCP Bartender"
    assert character.token == "access-1"
    assert character.refresh_token == "refresh-1"
    assert character.alliance_id is None
    assert character.corporation_id is None
    assert character.faction_id is None


@pytest.mark.asyncio
async def test_affiliation_transport_error_is_not_fatal(make_auth):
    sso = _FakeSSO()
    sso.affiliation = httpx.ConnectError("unreachable")
    auth = make_auth(sso)

    character = await auth.verify(TOKEN)

    assert character.corporation_id is None


@pytest.mark.asyncio
async def test_affiliation_without_alliance(make_auth):
    body = [{"character_id": 95465499, "corporation_id": 1000169}]
    auth = make_auth(_FakeSSO(affiliation=httpx.Response(200, json=body)))

    character = await auth.verify(TOKEN)

    assert character.corporation_id == 1000169
    assert character.alliance_id is None
    assert character.faction_id is None


@pytest.mark.asyncio
async def test_empty_affiliation_list_leaves_ids_unset(make_auth):
    auth = make_auth(_FakeSSO(affiliation=httpx.Response(200, json=[])))

    character = await auth.verify(TOKEN)

    assert character.corporation_id is None


@pytest.mark.asyncio
async def test_malformed_affiliation_body_propagates(make_auth):
    auth = make_auth(_FakeSSO(affiliation=httpx.Response(200, text="oops")))

    with pytest.raises(SSOParseError):
        await auth.verify(TOKEN)


@pytest.mark.asyncio
async def test_verify_error_status_propagates(make_auth):
    sso = _FakeSSO(verify=httpx.Response(401, json={"error": "invalid_token"}))
    auth = make_auth(sso)

    with pytest.raises(SSOProtocolError) as excinfo:
        await auth.verify(TOKEN)

    assert excinfo.value.status_code == 401
    # No affiliation lookup after a failed verification
    assert len(sso.requests) == 1


@pytest.mark.asyncio
async def test_verify_non_json_propagates(make_auth):
    auth = make_auth(_FakeSSO(verify=httpx.Response(200, text="<html></html>")))

    with pytest.raises(SSOParseError):
        await auth.verify_identity(TOKEN)


@pytest.mark.asyncio
async def test_verify_without_affiliation(make_auth):
    sso = _FakeSSO()
    auth = make_auth(sso)

    character = await auth.verify(TOKEN, resolve_affiliation=False)

    assert len(sso.requests) == 1
    assert character.corporation_id is None


@pytest.mark.asyncio
async def test_affiliation_uses_configured_datasource(make_auth):
    sso = _FakeSSO()
    auth = make_auth(sso, datasource="serenity")

    await auth.verify(TOKEN)

    assert str(sso.requests[0].url) == "https://login.evepc.163.com/oauth/verify"
    assert str(sso.requests[1].url) == (
        "https://esi.evepc.163.com/v1/characters/affiliation/?datasource=serenity"
    )


def test_authorized_character_is_frozen():
    character = AuthorizedCharacterData.model_validate(VERIFY_BODY)

    with pytest.raises(ValidationError):
        character.corporation_id = 1

    assert character.character_id == 95465499
    assert character.model_dump()["character_name"] == "CCP Bartender"
