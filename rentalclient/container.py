"""Client dependency container."""

from __future__ import annotations

from functools import cached_property

import httpx

from rentalclient.application import SessionStore
from rentalclient.infrastructure import (
    CredentialRepository,
    EncryptedKeyValueStore,
    EncryptionService,
    HttpClient,
    JsonFileKeyValueStore,
    KeyValueStore,
    RentalApi,
    StorageError,
)
from rentalclient.shared.config import ClientConfig, load_config


class Container:
    """Owns the one session store of a process and everything it depends on."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        key_value_store: KeyValueStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._key_value_store = key_value_store
        self._transport = transport

    @cached_property
    def config(self) -> ClientConfig:
        return self._config if self._config is not None else load_config()

    @cached_property
    def key_value_store(self) -> KeyValueStore:
        if self._key_value_store is not None:
            return self._key_value_store
        store: KeyValueStore = JsonFileKeyValueStore(self.config.storage.storage_path)
        key = self.config.storage.storage_encryption_key
        if key:
            try:
                encryption = EncryptionService(key)
            except ValueError as exc:
                raise StorageError(str(exc), error_code="invalid_encryption_key") from exc
            store = EncryptedKeyValueStore(store, encryption)
        return store

    @cached_property
    def credentials(self) -> CredentialRepository:
        return CredentialRepository(self.key_value_store)

    @cached_property
    def http_client(self) -> HttpClient:
        return HttpClient.from_config(
            self.config.http,
            self.credentials,
            debug_logging=self.config.debug_logging,
            transport=self._transport,
        )

    @cached_property
    def api(self) -> RentalApi:
        return RentalApi(self.http_client)

    @cached_property
    def session_store(self) -> SessionStore:
        return SessionStore(api=self.api, credentials=self.credentials)

    async def aclose(self) -> None:
        if "http_client" in self.__dict__:
            await self.http_client.aclose()
