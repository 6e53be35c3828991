"""Outcome of a v2 token exchange.

A v2 exchange never raises for HTTP or network failures; instead the caller
receives a ``TokenResult`` that says which of the three things happened:

- the SSO granted a token (``GRANTED``)
- the SSO answered with a non-success status (``PROTOCOL_ERROR``)
- no answer was received at all (``TRANSPORT_ERROR``)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from eve_sso.models.eve.sso_token import SsoToken
from eve_sso.utils.exceptions import SSOProtocolError, SSOTransportError


class TokenOutcome(Enum):
    """Classification of a token exchange attempt."""

    GRANTED = "granted"
    PROTOCOL_ERROR = "protocol_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class TokenResult:
    """Result of a token exchange.

    Attributes:
        outcome: What happened.
        token: Parsed token when the exchange was granted.
        status_code: HTTP status when a response was received.
        detail: Response body or transport error description for failures.
    """

    outcome: TokenOutcome
    token: SsoToken | None = None
    status_code: int | None = None
    detail: str | None = None

    @classmethod
    def granted(cls, token: SsoToken, status_code: int = 200) -> TokenResult:
        return cls(TokenOutcome.GRANTED, token=token, status_code=status_code)

    @classmethod
    def protocol_error(cls, status_code: int, body: str) -> TokenResult:
        return cls(TokenOutcome.PROTOCOL_ERROR, status_code=status_code, detail=body)

    @classmethod
    def transport_error(cls, detail: str) -> TokenResult:
        return cls(TokenOutcome.TRANSPORT_ERROR, detail=detail)

    @property
    def ok(self) -> bool:
        """True when a token with a non-empty access token was granted."""
        return (
            self.outcome is TokenOutcome.GRANTED
            and self.token is not None
            and bool(self.token.access_token)
        )

    @property
    def is_empty(self) -> bool:
        """True when the exchange was granted but carried no access token."""
        return self.outcome is TokenOutcome.GRANTED and not self.ok

    def unwrap(self) -> SsoToken:
        """Return the granted token or raise the matching error.

        Raises:
            SSOProtocolError: The SSO rejected the exchange.
            SSOTransportError: The request never got a response.
        """
        if self.outcome is TokenOutcome.TRANSPORT_ERROR:
            raise SSOTransportError(self.detail or "Token request failed")
        if self.outcome is TokenOutcome.PROTOCOL_ERROR:
            raise SSOProtocolError(
                f"Token request rejected with status {self.status_code}",
                status_code=self.status_code or 0,
                body=self.detail or "",
            )
        assert self.token is not None
        return self.token
