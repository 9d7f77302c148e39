# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .credentials import ACCESS_TOKEN_KEY, SESSION_KEYS, USER_DATA_KEY, CredentialRepository
from .encryption import EncryptionService
from .http import HttpClient, RentalApi
from .storage import (
    EncryptedKeyValueStore,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageError,
)

__all__ = [
    "ACCESS_TOKEN_KEY",
    "CredentialRepository",
    "EncryptedKeyValueStore",
    "EncryptionService",
    "HttpClient",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "RentalApi",
    "SESSION_KEYS",
    "StorageError",
    "USER_DATA_KEY",
]
