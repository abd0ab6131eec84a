"""Test configuration for vagrant-login tests."""

from __future__ import annotations

from typing import Any

import pytest

from vagrant_login import LoginClient, TokenSource, TokenStore
from vagrant_login._http import HttpResponse, TransportOutcome

BASE_URL = "https://cloud.example.test"


class FakeTransport:
    """Returns queued outcomes and records every request it was asked to send."""

    def __init__(self, *outcomes: TransportOutcome) -> None:
        self.outcomes = list(outcomes)
        self.requests: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> TransportOutcome:
        self.requests.append({"method": method, "url": url, **kwargs})
        return self.outcomes.pop(0)


def json_response(status_code: int, body: bytes, reason: str = "") -> HttpResponse:
    return HttpResponse(status_code=status_code, body=body, reason=reason)


@pytest.fixture
def environ() -> dict[str, str]:
    """Isolated environment mapping; tests add variables as needed."""
    return {}


@pytest.fixture
def token_path(tmp_path):
    return tmp_path / "data" / "vagrant_login_token"


@pytest.fixture
def warnings() -> list[str]:
    return []


@pytest.fixture
def token_source(environ, token_path, warnings) -> TokenSource:
    return TokenSource(environ, TokenStore(token_path), warn=warnings.append)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(token_source, environ, transport) -> LoginClient:
    """Shared LoginClient fixture wired to the fake transport."""
    return LoginClient(token_source, base_url=BASE_URL, environ=environ, transport=transport)
