from __future__ import annotations

from pathlib import Path

import pytest

from rentalclient.shared.config import ClientConfig, HttpConfig


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in (
        "API_BASE_URL",
        "API_TIMEOUT",
        "INVALIDATE_ON_ANY_401",
        "STORAGE_PATH",
        "STORAGE_ENCRYPTION_KEY",
        "LOG_LEVEL",
        "DEBUG_LOGGING",
    ):
        monkeypatch.delenv(name, raising=False)

    config = ClientConfig()

    assert config.http.api_base_url == "http://localhost:8083/api/v1"
    assert config.http.api_timeout == 10.0
    assert config.http.invalidate_on_any_401 is True
    assert config.storage.storage_path.name == "storage.json"
    assert config.storage.storage_encryption_key is None
    assert config.log_level == "INFO"
    assert config.debug_logging is False


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("API_BASE_URL", "https://rental.example.com/api/v1/")
    monkeypatch.setenv("API_TIMEOUT", "3.5")
    monkeypatch.setenv("INVALIDATE_ON_ANY_401", "no")
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "session.json"))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DEBUG_LOGGING", "yes")
    monkeypatch.setenv("APP_ENV", "production")

    config = ClientConfig()

    assert config.http.api_base_url == "https://rental.example.com/api/v1"
    assert config.http.api_timeout == 3.5
    assert config.http.invalidate_on_any_401 is False
    assert config.storage.storage_path == tmp_path / "session.json"
    assert config.log_level == "DEBUG"
    assert config.debug_logging is True
    assert config.is_production()


def test_groups_accept_field_names(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)

    config = HttpConfig(api_base_url="http://backend:9000/api/v1", api_timeout=1)

    assert config.api_base_url == "http://backend:9000/api/v1"
    assert config.api_timeout == 1.0


def test_unrelated_shell_variables_are_ignored(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("STORAGE_PATH", "API_BASE_URL", "API_TIMEOUT", "STORAGE_ENCRYPTION_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PATH", "/usr/local/bin:/usr/bin:/bin")
    monkeypatch.setenv("BASE_URL", "http://elsewhere.invalid")
    monkeypatch.setenv("TIMEOUT", "99")
    monkeypatch.setenv("ENCRYPTION_KEY", "not-a-fernet-key")

    config = ClientConfig()

    assert config.storage.storage_path.name == "storage.json"
    assert config.storage.storage_encryption_key is None
    assert config.http.api_base_url == "http://localhost:8083/api/v1"
    assert config.http.api_timeout == 10.0
