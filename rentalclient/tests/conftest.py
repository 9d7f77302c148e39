from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from rentalclient.application import SessionStore
from rentalclient.infrastructure import CredentialRepository, InMemoryKeyValueStore
from rentalclient.infrastructure.http import HttpClient, RentalApi

BASE_URL = "http://localhost:8083/api/v1"

DEMO_USER: dict[str, Any] = {
    "id": 1,
    "username": "demo",
    "email": "demo@example.com",
    "firstName": "Demo",
    "lastName": "User",
    "phoneNumber": "+15550100",
    "emailNotificationsEnabled": True,
    "smsNotificationsEnabled": False,
    "pushNotificationsEnabled": True,
    "isActive": True,
    "createdAt": "2024-01-01T10:00:00",
    "updatedAt": "2024-01-01T10:00:00",
}

Override = Callable[[httpx.Request], httpx.Response] | httpx.Response | Exception


def _json(status: int, payload: Any = None) -> httpx.Response:
    if payload is None:
        return httpx.Response(status)
    return httpx.Response(status, json=payload)


class FakeBackend:
    """In-process stand-in for the rental REST API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.accounts: dict[str, dict[str, Any]] = {
            "demo": {"password": "demo123", "user": dict(DEMO_USER)},
        }
        self.tokens: dict[str, str] = {}
        self.requests: list[httpx.Request] = []
        self.overrides: dict[tuple[str, str], Override] = {}
        self._seq = 0

    def override(self, method: str, path: str, outcome: Override) -> None:
        self.overrides[(method, path)] = outcome

    def issue_token(self, username: str) -> str:
        self._seq += 1
        token = f"token-{username}-{self._seq}"
        self.tokens[token] = username
        return token

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and _path(r) == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = _path(request)

        outcome = self.overrides.get((request.method, path))
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        if outcome is not None:
            return outcome(request)

        route = {
            ("POST", "/auth/login"): self._login,
            ("POST", "/auth/register"): self._register,
            ("POST", "/auth/logout"): self._logout,
            ("POST", "/auth/refresh"): self._refresh,
            ("GET", "/auth/me"): self._me,
            ("PUT", "/auth/profile"): self._profile,
            ("PUT", "/auth/change-password"): self._change_password,
            ("PUT", "/auth/notification-preferences"): self._preferences,
            ("GET", "/vehicles"): self._vehicles,
        }.get((request.method, path))
        if route is None:
            return _json(404, {"message": "Not found"})
        return route(request)

    def _caller(self, request: httpx.Request) -> str | None:
        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            return None
        return self.tokens.get(header.removeprefix("Bearer "))

    def _login(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        account = self.accounts.get(body.get("username"))
        if account is None or account["password"] != body.get("password"):
            return _json(401, {"message": "Invalid credentials"})
        token = self.issue_token(body["username"])
        return _json(200, {"accessToken": token, "tokenType": "Bearer", "user": account["user"]})

    def _register(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if body["username"] in self.accounts:
            return _json(409, {"error": "Username already exists"})
        user = {
            "id": len(self.accounts) + 1,
            "username": body["username"],
            "email": body["email"],
            "firstName": body["firstName"],
            "lastName": body["lastName"],
            "phoneNumber": body.get("phoneNumber"),
            "isActive": True,
        }
        self.accounts[body["username"]] = {"password": body["password"], "user": user}
        return _json(201, user)

    def _logout(self, request: httpx.Request) -> httpx.Response:
        if self._caller(request) is None:
            return _json(401, {"message": "Unauthorized"})
        token = request.headers["Authorization"].removeprefix("Bearer ")
        self.tokens.pop(token, None)
        return _json(200)

    def _refresh(self, request: httpx.Request) -> httpx.Response:
        username = self._caller(request)
        if username is None:
            return _json(401, {"message": "Unauthorized"})
        self.tokens.pop(request.headers["Authorization"].removeprefix("Bearer "), None)
        token = self.issue_token(username)
        user = self.accounts[username]["user"]
        return _json(200, {"accessToken": token, "tokenType": "Bearer", "user": user})

    def _me(self, request: httpx.Request) -> httpx.Response:
        username = self._caller(request)
        if username is None:
            return _json(401, {"message": "Unauthorized"})
        return _json(200, self.accounts[username]["user"])

    def _profile(self, request: httpx.Request) -> httpx.Response:
        username = self._caller(request)
        if username is None:
            return _json(401, {"message": "Unauthorized"})
        user = self.accounts[username]["user"]
        user.update(json.loads(request.content))
        user["updatedAt"] = "2024-02-01T10:00:00"
        return _json(200, user)

    def _change_password(self, request: httpx.Request) -> httpx.Response:
        username = self._caller(request)
        if username is None:
            return _json(401, {"message": "Unauthorized"})
        body = json.loads(request.content)
        account = self.accounts[username]
        if account["password"] != body["oldPassword"]:
            return _json(400, {"message": "Current password is incorrect"})
        account["password"] = body["newPassword"]
        return _json(200)

    def _preferences(self, request: httpx.Request) -> httpx.Response:
        if self._caller(request) is None:
            return _json(401, {"message": "Unauthorized"})
        return _json(200)

    def _vehicles(self, request: httpx.Request) -> httpx.Response:
        return _json(200, [{"id": 7, "make": "Toyota", "model": "Corolla"}])


def _path(request: httpx.Request) -> str:
    return request.url.path.removeprefix("/api/v1")


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def credentials(kv_store: InMemoryKeyValueStore) -> CredentialRepository:
    return CredentialRepository(kv_store)


@pytest.fixture()
def http_client(backend: FakeBackend, credentials: CredentialRepository) -> HttpClient:
    return HttpClient(
        base_url=BASE_URL,
        credentials=credentials,
        transport=httpx.MockTransport(backend),
    )


@pytest.fixture()
def api(http_client: HttpClient) -> RentalApi:
    return RentalApi(http_client)


@pytest.fixture()
def session_store(api: RentalApi, credentials: CredentialRepository) -> SessionStore:
    return SessionStore(api=api, credentials=credentials)
