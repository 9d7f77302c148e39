from __future__ import annotations

import httpx
import pytest
from conftest import BASE_URL, FakeBackend

from rentalclient.infrastructure import CredentialRepository, InMemoryKeyValueStore
from rentalclient.infrastructure.credentials import ACCESS_TOKEN_KEY, USER_DATA_KEY
from rentalclient.infrastructure.http import HttpClient
from rentalclient.shared.errors import (
    LocalRequestError,
    NetworkUnreachableError,
    ServerRespondedError,
)


async def _seed(kv_store: InMemoryKeyValueStore, backend: FakeBackend) -> str:
    token = backend.issue_token("demo")
    await kv_store.multi_set({ACCESS_TOKEN_KEY: token, USER_DATA_KEY: '{"id": 1}'})
    return token


@pytest.mark.asyncio
async def test_attaches_bearer_token_from_storage(
    http_client: HttpClient, backend: FakeBackend, kv_store: InMemoryKeyValueStore
) -> None:
    token = await _seed(kv_store, backend)

    body = await http_client.get("/auth/me")

    assert body["username"] == "demo"
    assert backend.requests[-1].headers["Authorization"] == f"Bearer {token}"


@pytest.mark.asyncio
async def test_no_header_without_stored_token(
    http_client: HttpClient, backend: FakeBackend
) -> None:
    await http_client.get("/vehicles")

    assert "Authorization" not in backend.requests[-1].headers


@pytest.mark.asyncio
async def test_public_auth_paths_skip_the_stored_token(
    http_client: HttpClient, backend: FakeBackend, kv_store: InMemoryKeyValueStore
) -> None:
    await _seed(kv_store, backend)

    await http_client.post("/auth/login", json={"username": "demo", "password": "demo123"})

    assert "Authorization" not in backend.requests[-1].headers


@pytest.mark.asyncio
async def test_explicit_authorization_header_is_kept(
    http_client: HttpClient, backend: FakeBackend, kv_store: InMemoryKeyValueStore
) -> None:
    await _seed(kv_store, backend)
    other = backend.issue_token("demo")

    await http_client.get("/auth/me", headers={"Authorization": f"Bearer {other}"})

    assert backend.requests[-1].headers["Authorization"] == f"Bearer {other}"


@pytest.mark.asyncio
async def test_requests_carry_json_content_type_and_request_id(
    http_client: HttpClient, backend: FakeBackend
) -> None:
    await http_client.get("/vehicles")

    sent = backend.requests[-1]
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.headers["X-Request-ID"]
    assert str(sent.url).startswith(BASE_URL)


@pytest.mark.asyncio
async def test_unauthorized_response_clears_stored_session(
    http_client: HttpClient, kv_store: InMemoryKeyValueStore
) -> None:
    await kv_store.multi_set({ACCESS_TOKEN_KEY: "expired", USER_DATA_KEY: '{"id": 1}'})

    with pytest.raises(ServerRespondedError) as excinfo:
        await http_client.get("/auth/me")

    assert excinfo.value.status_code == 401
    assert excinfo.value.code == "401"
    assert kv_store.snapshot() == {}


@pytest.mark.asyncio
async def test_unauthorized_on_resource_path_clears_by_default(
    http_client: HttpClient, backend: FakeBackend, kv_store: InMemoryKeyValueStore
) -> None:
    await _seed(kv_store, backend)
    backend.override("GET", "/reservations", httpx.Response(401, json={"message": "Denied"}))

    with pytest.raises(ServerRespondedError):
        await http_client.get("/reservations")

    assert kv_store.snapshot() == {}


@pytest.mark.asyncio
async def test_unauthorized_on_resource_path_kept_when_scoped_to_auth(
    backend: FakeBackend, kv_store: InMemoryKeyValueStore, credentials: CredentialRepository
) -> None:
    await _seed(kv_store, backend)
    backend.override("GET", "/reservations", httpx.Response(401, json={"message": "Denied"}))
    client = HttpClient(
        base_url=BASE_URL,
        credentials=credentials,
        invalidate_on_any_401=False,
        transport=httpx.MockTransport(backend),
    )

    with pytest.raises(ServerRespondedError) as excinfo:
        await client.get("/reservations")

    assert excinfo.value.message == "Denied"
    assert ACCESS_TOKEN_KEY in kv_store.snapshot()


@pytest.mark.asyncio
async def test_other_error_statuses_leave_storage_alone(
    http_client: HttpClient, backend: FakeBackend, kv_store: InMemoryKeyValueStore
) -> None:
    await _seed(kv_store, backend)
    backend.override("GET", "/vehicles", httpx.Response(500, text="upstream exploded"))

    with pytest.raises(ServerRespondedError) as excinfo:
        await http_client.get("/vehicles")

    assert excinfo.value.message == "Server error occurred"
    assert excinfo.value.body == "upstream exploded"
    assert ACCESS_TOKEN_KEY in kv_store.snapshot()


@pytest.mark.asyncio
async def test_connect_failure_is_network_error(
    http_client: HttpClient, backend: FakeBackend
) -> None:
    backend.override("GET", "/vehicles", httpx.ConnectError("connection refused"))

    with pytest.raises(NetworkUnreachableError) as excinfo:
        await http_client.get("/vehicles")

    assert excinfo.value.message == "Network error - please check your connection"
    assert excinfo.value.code == "NETWORK_ERROR"


@pytest.mark.asyncio
async def test_timeout_is_network_error(http_client: HttpClient, backend: FakeBackend) -> None:
    backend.override("GET", "/vehicles", httpx.ReadTimeout("timed out"))

    with pytest.raises(NetworkUnreachableError):
        await http_client.get("/vehicles")


@pytest.mark.asyncio
async def test_unserializable_body_is_local_error(
    http_client: HttpClient, backend: FakeBackend
) -> None:
    with pytest.raises(LocalRequestError) as excinfo:
        await http_client.post("/reservations", json={"when": object()})

    assert excinfo.value.code == "UNKNOWN_ERROR"
    assert backend.requests == []


@pytest.mark.asyncio
async def test_unexpected_transport_failure_is_local_error(
    http_client: HttpClient, backend: FakeBackend
) -> None:
    backend.override("GET", "/vehicles", RuntimeError("boom"))

    with pytest.raises(LocalRequestError) as excinfo:
        await http_client.get("/vehicles")

    assert excinfo.value.message == "boom"


@pytest.mark.asyncio
async def test_empty_success_body_decodes_to_none(
    http_client: HttpClient, backend: FakeBackend, kv_store: InMemoryKeyValueStore
) -> None:
    await _seed(kv_store, backend)

    assert await http_client.post("/auth/logout") is None
