"""Pytest configuration and shared fixtures."""

import os
import sys
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

# Add src to Python path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from eve_sso import SSOAuth  # noqa: E402
from eve_sso.utils.config import reset_config  # noqa: E402

CLIENT_ID = "test-client-id"
SECRET_KEY = "test-secret"
CALLBACK_URL = "http://localhost:8080/callback"


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Keep ESI_/APP_ environment variables from leaking into tests."""
    for name in list(os.environ):
        if name.startswith(("ESI_", "APP_")):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_auth() -> Callable[..., SSOAuth]:
    """Build an SSOAuth whose requests are answered by ``handler``."""

    def _make(
        handler: Callable[[httpx.Request], httpx.Response], **kwargs
    ) -> SSOAuth:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        kwargs.setdefault("client_id", CLIENT_ID)
        kwargs.setdefault("secret_key", SECRET_KEY)
        kwargs.setdefault("callback_url", CALLBACK_URL)
        return SSOAuth(http_client=http_client, **kwargs)

    return _make
