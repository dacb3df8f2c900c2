from __future__ import annotations

import json
from typing import Any, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from hosting_functions.config import Settings, get_settings
from hosting_functions.dependencies import get_http_transport, get_orders
from hosting_functions.main import app
from hosting_functions.repositories.orders import InMemoryOrderStore

GOPAY_TOKEN_PATH = "/api/oauth2/token"
GOPAY_PAYMENT_PATH = "/api/payments/payment"


class FakeUpstream:
    """Canned responses for outbound HTTP calls, keyed by (method, host, path)."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str, str], tuple[int, Any]] = {}
        self.calls: list[httpx.Request] = []

    def add(self, method: str, host: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method.upper(), host, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        key = (request.method, request.url.host, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"message": f"no route for {key}"})
        status, body = self.routes[key]
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self) -> list[str]:
        return [call.url.path for call in self.calls]

    def json_body(self, index: int) -> Any:
        return json.loads(self.calls[index].content)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        gopay_environment="SANDBOX",
        gopay_go_id="8123456789",
        gopay_client_id="client-id",
        gopay_client_secret="client-secret",
        supabase_url="https://project.supabase.co",
        supabase_service_role_key="service-role",
        resend_api_key="re_test",
        db_host="",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def gopay_host(settings: Settings) -> str:
    return httpx.URL(settings.gopay_api_url).host


@pytest.fixture
def gopay_token_ok(upstream: FakeUpstream, gopay_host: str) -> None:
    upstream.add("POST", gopay_host, GOPAY_TOKEN_PATH, body={"access_token": "at-123", "token_type": "bearer"})


@pytest.fixture
def store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


@pytest.fixture
def client(settings: Settings, upstream: FakeUpstream, store: InMemoryOrderStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_transport] = lambda: upstream.transport
    app.dependency_overrides[get_orders] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
