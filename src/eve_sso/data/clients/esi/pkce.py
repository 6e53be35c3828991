"""PKCE (Proof Key for Code Exchange) helpers for EVE SSO v2.

EVE SSO expects the verifier to be base64url-encoded before it is hashed:

    encoded_verifier = base64url(verifier)
    challenge = base64url(sha256(encoded_verifier))

and the *encoded* verifier is what gets sent as ``code_verifier`` when the
authorization code is exchanged. This differs from RFC 7636, which hashes
the verifier as-is; keep the extra encoding step or EVE SSO will reject the
exchange.
"""

from __future__ import annotations

import base64
import hashlib
import secrets
from dataclasses import dataclass


def _b64url(data: bytes) -> str:
    """Base64url encode without padding."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


@dataclass(frozen=True)
class PKCEPair:
    """Verifier and derived values for a single authorization round trip.

    Attributes:
        verifier: Caller-held secret; must be kept until the code exchange.
        encoded_verifier: Value sent as ``code_verifier`` to the token endpoint.
        challenge: Value sent as ``code_challenge`` in the authorization URL.
    """

    verifier: str
    encoded_verifier: str
    challenge: str


def encode_code_verifier(verifier: str) -> str:
    """Base64url-encode (no padding) the UTF-8 bytes of a verifier."""
    return _b64url(verifier.encode("utf-8"))


def create_code_challenge(verifier: str) -> str:
    """Derive the S256 code challenge for a verifier.

    Args:
        verifier: Raw verifier string as held by the caller

    Returns:
        Base64url (no padding) SHA-256 digest of the encoded verifier
    """
    encoded = encode_code_verifier(verifier)
    return _b64url(hashlib.sha256(encoded.encode("utf-8")).digest())


def create_pkce_pair(verifier: str) -> PKCEPair:
    """Build the full PKCE pair for a verifier."""
    return PKCEPair(
        verifier=verifier,
        encoded_verifier=encode_code_verifier(verifier),
        challenge=create_code_challenge(verifier),
    )


def generate_code_verifier() -> str:
    """Generate a high-entropy verifier (32 random bytes, base64url)."""
    return _b64url(secrets.token_bytes(32))


def generate_state() -> str:
    """Generate an opaque state value for CSRF protection."""
    return secrets.token_urlsafe(32)
