from __future__ import annotations

from typing import Callable

import httpx
import pytest

from sonarqube_sdk.client import SonarQubeClient

BASE_URL = "https://sonar.example.com"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(requests_seen: list[httpx.Request]):
    """Build a client whose transport records each request and answers with ``handler``."""
    clients: list[SonarQubeClient] = []

    def factory(handler: Handler | None = None, **kwargs) -> SonarQubeClient:
        def send_request(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            if handler is None:
                return httpx.Response(204, request=request)
            return handler(request)

        kwargs.setdefault("base_url", BASE_URL)
        client = SonarQubeClient(transport=httpx.MockTransport(send_request), **kwargs)
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture(autouse=True)
def clear_sonarqube_env(monkeypatch) -> None:
    for name in ("SONARQUBE_URL", "SONARQUBE_TOKEN", "SONAR_CLI_URL", "SONAR_CLI_TOKEN", "SONAR_CLI_USERNAME", "SONAR_CLI_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
