# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_GROUP_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class HttpConfig(BaseSettings):
    api_base_url: str = Field("http://localhost:8083/api/v1", alias="API_BASE_URL")
    api_timeout: float = Field(10.0, ge=0.1, alias="API_TIMEOUT")
    # Clears the stored credential on a 401 from any endpoint, not only /auth/*.
    invalidate_on_any_401: bool = Field(True, alias="INVALIDATE_ON_ANY_401")

    model_config = _GROUP_CONFIG

    @field_validator("api_base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("invalidate_on_any_401", mode="before")
    @classmethod
    def _parse_invalidate(cls, value: str | bool) -> bool:
        return _parse_bool(value)


class StorageConfig(BaseSettings):
    storage_path: Path = Field(Path.home() / ".rentalclient" / "storage.json", alias="STORAGE_PATH")
    storage_encryption_key: str | None = Field(None, alias="STORAGE_ENCRYPTION_KEY")

    model_config = _GROUP_CONFIG


def _http_config_factory() -> HttpConfig:
    return HttpConfig()  # type: ignore[call-arg]


def _storage_config_factory() -> StorageConfig:
    return StorageConfig()  # type: ignore[call-arg]


class ClientConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(None, alias="LOG_FILE")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    http: HttpConfig = Field(default_factory=_http_config_factory)
    storage: StorageConfig = Field(default_factory=_storage_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        validate_by_name=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @field_validator("log_level", mode="after")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> ClientConfig:
    return ClientConfig()  # type: ignore[call-arg]


__all__ = ["ClientConfig", "HttpConfig", "StorageConfig", "load_config"]
