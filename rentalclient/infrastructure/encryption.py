# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import base64
import binascii

from cryptography.fernet import Fernet, InvalidToken

from rentalclient.shared.logging import logger


class EncryptionService:
    def __init__(self, key: str | bytes) -> None:
        self._fernet = Fernet(self._validate_key(key))
        logger.debug("EncryptionService initialized")

    @staticmethod
    def _validate_key(key: str | bytes) -> bytes:
        raw_key = key.encode("utf-8") if isinstance(key, str) else key
        try:
            decoded = base64.urlsafe_b64decode(raw_key)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(
                "STORAGE_ENCRYPTION_KEY must be a Fernet key (32 url-safe base64-encoded bytes)"
            ) from exc
        if len(decoded) != 32:
            raise ValueError("STORAGE_ENCRYPTION_KEY must decode to 32 bytes")
        return raw_key

    def encrypt(self, plaintext: str) -> str:
        if not isinstance(plaintext, str):
            raise TypeError(f"Expected str, got {type(plaintext).__name__}")
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        if not isinstance(ciphertext, str):
            raise TypeError(f"Expected str, got {type(ciphertext).__name__}")
        try:
            return self._fernet.decrypt(ciphertext.encode("utf-8")).decode("utf-8")
        except InvalidToken as exc:
            raise ValueError("Failed to decrypt: invalid token or corrupted data") from exc

    @staticmethod
    def generate_key() -> str:
        return Fernet.generate_key().decode("utf-8")


__all__ = ["EncryptionService"]
