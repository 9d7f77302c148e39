# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Durable key-value storage for session data."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

from rentalclient.infrastructure.encryption import EncryptionService
from rentalclient.shared.logging import logger
from rentalclient.utils.fs import read_json_dict, write_json_atomic


class StorageError(Exception):
    def __init__(self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class KeyValueStore(Protocol):
    """Asynchronous string key-value storage that survives restarts."""

    async def get_item(self, key: str) -> str | None: ...

    async def set_item(self, key: str, value: str) -> None: ...

    async def multi_set(self, items: Mapping[str, str]) -> None: ...

    async def remove_item(self, key: str) -> None: ...

    async def multi_remove(self, keys: Iterable[str]) -> None: ...


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store; used for ephemeral sessions and tests."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    async def multi_set(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    async def multi_remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileKeyValueStore(KeyValueStore):
    """Stores all entries in one JSON object on disk.

    Every mutation is a read-modify-write of the whole file, executed in a
    worker thread and serialized by an ``asyncio.Lock``. The file is replaced
    atomically, so a multi-key write is never observed half-applied.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()
        logger.debug(f"JsonFileKeyValueStore: initialized path={self._path}")

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        try:
            return read_json_dict(self._path)
        except (OSError, ValueError) as exc:
            raise StorageError(
                f"Failed to read storage file: {self._path}",
                error_code="storage_read_failed",
            ) from exc

    def _write(self, data: dict[str, Any]) -> None:
        try:
            write_json_atomic(self._path, data)
        except OSError as exc:
            raise StorageError(
                f"Failed to write storage file: {self._path}",
                error_code="storage_write_failed",
            ) from exc

    def _mutate(self, updates: Mapping[str, str], removals: Iterable[str]) -> None:
        data = self._read()
        data.update(updates)
        for key in removals:
            data.pop(key, None)
        self._write(data)

    async def get_item(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._read)
        value = data.get(key)
        return value if isinstance(value, str) else None

    async def set_item(self, key: str, value: str) -> None:
        await self.multi_set({key: value})

    async def multi_set(self, items: Mapping[str, str]) -> None:
        async with self._lock:
            await asyncio.to_thread(self._mutate, dict(items), ())
        logger.debug(f"storage: set keys={sorted(items)}")

    async def remove_item(self, key: str) -> None:
        await self.multi_remove([key])

    async def multi_remove(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        async with self._lock:
            await asyncio.to_thread(self._mutate, {}, keys)
        logger.debug(f"storage: removed keys={sorted(keys)}")


class EncryptedKeyValueStore(KeyValueStore):
    """Encrypts values at rest on top of another store."""

    def __init__(self, inner: KeyValueStore, encryption: EncryptionService) -> None:
        self._inner = inner
        self._encryption = encryption

    async def get_item(self, key: str) -> str | None:
        ciphertext = await self._inner.get_item(key)
        if ciphertext is None:
            return None
        try:
            return self._encryption.decrypt(ciphertext)
        except ValueError:
            logger.warning(f"storage: undecryptable value key={key}, treating as absent")
            return None

    async def set_item(self, key: str, value: str) -> None:
        await self._inner.set_item(key, self._encryption.encrypt(value))

    async def multi_set(self, items: Mapping[str, str]) -> None:
        await self._inner.multi_set(
            {key: self._encryption.encrypt(value) for key, value in items.items()}
        )

    async def remove_item(self, key: str) -> None:
        await self._inner.remove_item(key)

    async def multi_remove(self, keys: Iterable[str]) -> None:
        await self._inner.multi_remove(keys)


__all__ = [
    "EncryptedKeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageError",
]
