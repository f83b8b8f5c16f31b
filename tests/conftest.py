"""Pytest configuration and fixtures for Claude Max Auth tests."""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from claude_oauth import Credential, CredentialStore
from claude_oauth.models import current_time_ms


class FakeTokenEndpoint:
    """Stands in for the provider token endpoint and records every request."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = {
            "access_token": "new-access",
            "refresh_token": "new-refresh",
            "expires_in": 3600,
        }
        self.error: Optional[Exception] = None

    def respond(self, status_code: int = 200, payload: Any = None):
        self.status_code = status_code
        if payload is not None:
            self.payload = payload

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.payload, (dict, list)):
            return httpx.Response(self.status_code, json=self.payload)
        return httpx.Response(self.status_code, text=str(self.payload))

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def token_endpoint() -> FakeTokenEndpoint:
    return FakeTokenEndpoint()


@pytest.fixture
def credentials_path(tmp_path):
    return tmp_path / "credentials" / "claude.json"


@pytest.fixture
def store(credentials_path) -> CredentialStore:
    """CredentialStore isolated in a temp directory."""
    return CredentialStore(credentials_path)


def make_credential(
    access_token: str = "A",
    refresh_token: str = "R",
    expires_in_ms: int = 3_600_000
) -> Credential:
    return Credential(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_at=current_time_ms() + expires_in_ms,
    )
