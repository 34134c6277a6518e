"""Fixtures compartidas para las pruebas."""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qs

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from leadlookup.core.config import settings
from leadlookup.main import app
from leadlookup.services import credentials, genesys
from leadlookup.services.credentials import TokenCache
from leadlookup.services.genesys import GenesysClient
from leadlookup.services.lead_resolver import LeadResolver, get_lead_resolver

AUTH_BASE = "https://login.test"
API_BASE = "https://api.test"


class FakeClock:
    """Reloj controlable en segundos."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGenesys:
    """Simula login y API de Genesys Cloud sobre `httpx.MockTransport`."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, Any]] = {}
        self.api_requests: list[httpx.Request] = []
        self.token_forms: list[dict[str, list[str]]] = []
        self.token_status = 200
        self.expires_in = 3600

    def add(self, path: str, payload: Any = None, *, status: int = 200) -> None:
        self.routes[path] = (status, payload)

    @property
    def token_requests(self) -> int:
        return len(self.token_forms)

    @property
    def api_paths(self) -> list[str]:
        return [request.url.raw_path.decode() for request in self.api_requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/token":
            self.token_forms.append(parse_qs(request.content.decode()))
            if self.token_status != 200:
                return httpx.Response(self.token_status, text="invalid_client")
            return httpx.Response(
                200,
                json={
                    "access_token": f"token-{self.token_requests}",
                    "expires_in": self.expires_in,
                },
            )

        self.api_requests.append(request)
        route = self.routes.get(request.url.raw_path.decode())
        if route is None:
            return httpx.Response(404, json={"message": "not found"})
        status, payload = route
        return httpx.Response(status, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(autouse=True)
def _configured_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "gc_client_id", "test-client-id")
    monkeypatch.setattr(settings, "gc_client_secret", "test-client-secret")
    credentials.get_token_cache.cache_clear()
    genesys.get_genesys_client.cache_clear()
    yield
    credentials.get_token_cache.cache_clear()
    genesys.get_genesys_client.cache_clear()
    app.dependency_overrides.clear()


@pytest.fixture(name="clock")
def fixture_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(name="fake_genesys")
def fixture_fake_genesys() -> FakeGenesys:
    return FakeGenesys()


@pytest.fixture(name="token_cache")
def fixture_token_cache(fake_genesys: FakeGenesys, clock: FakeClock) -> TokenCache:
    return TokenCache(
        "test-client-id",
        "test-client-secret",
        auth_base_url=AUTH_BASE,
        clock=clock,
        transport=fake_genesys.transport,
    )


@pytest.fixture(name="genesys_client")
def fixture_genesys_client(token_cache: TokenCache, fake_genesys: FakeGenesys) -> GenesysClient:
    return GenesysClient(token_cache, api_base_url=API_BASE, transport=fake_genesys.transport)


@pytest.fixture(name="resolver")
def fixture_resolver(genesys_client: GenesysClient) -> LeadResolver:
    return LeadResolver(genesys_client)


@pytest.fixture(name="async_client")
async def fixture_async_client(resolver: LeadResolver) -> AsyncClient:
    """Cliente asíncrono contra la app, con el resolver apuntando a la API simulada."""
    app.dependency_overrides[get_lead_resolver] = lambda: resolver
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture(name="bare_client")
async def fixture_bare_client() -> AsyncClient:
    """Cliente asíncrono sin overrides: usa la configuración real de `settings`."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
