"""
Shared fixtures for Steam OpenID tests.

The Steam provider is replaced by httpx.MockTransport (unit tests) or respx
(API tests); no test talks to the real Steam servers.
"""

import os
from typing import Callable, Dict, List, Optional
from urllib.parse import urlencode

# Console logging only while testing
os.environ.setdefault("LOG_DIR", "")

import httpx
import pytest

from steam_openid.core.openid import STEAM_PROVIDER, AuthContext

NS = "http://specs.openid.net/auth/2.0"
STEAM_ID = "76561198000000000"
CLAIMED_ID = f"https://steamcommunity.com/openid/id/{STEAM_ID}"
RETURN_URL = "https://example.com/auth"
VALID_BODY = f"ns:{NS}\nis_valid:true\n"
INVALID_BODY = f"ns:{NS}\nis_valid:false\n"


def make_callback_params(**overrides: str) -> Dict[str, str]:
    """Build a Steam id_res callback; keyword names map to openid.<name>."""
    params = {
        "openid.ns": NS,
        "openid.mode": "id_res",
        "openid.op_endpoint": STEAM_PROVIDER.login_url,
        "openid.claimed_id": CLAIMED_ID,
        "openid.identity": CLAIMED_ID,
        "openid.return_to": RETURN_URL,
        "openid.response_nonce": "2026-10-17T08:00:00ZhYk3sJ2xk0fD9c5l2tUmDy0pY2E=",
        "openid.assoc_handle": "1234567890",
        "openid.signed": "signed,ns,mode",
        "openid.sig": "W0d3ZXsc2lnbmF0dXJlK3Rlc3Q=",
    }
    for name, value in overrides.items():
        params[f"openid.{name}"] = value
    return params


def make_context(params: Optional[Dict[str, str]] = None, request_uri: str = "/auth") -> AuthContext:
    """Context for a callback on https://example.com/auth carrying `params` in the query."""
    if params:
        request_uri = f"{request_uri}?{urlencode(params)}"
    return AuthContext.from_parts("https", "example.com", request_uri, params or {})


class RecordingProvider:
    """MockTransport handler standing in for the Steam check_authentication endpoint."""

    def __init__(self, body: str = VALID_BODY, status_code: int = 200, error: Optional[Exception] = None):
        self.body = body
        self.status_code = status_code
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def callback_params() -> Callable[..., Dict[str, str]]:
    return make_callback_params


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def context_for() -> Callable[..., AuthContext]:
    return make_context


@pytest.fixture
def provider_factory() -> Callable[..., RecordingProvider]:
    return RecordingProvider
