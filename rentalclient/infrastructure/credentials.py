# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import ValidationError

from rentalclient.domain.users.entities import Credential, UserProfile
from rentalclient.infrastructure.storage import KeyValueStore
from rentalclient.shared.logging import logger

ACCESS_TOKEN_KEY = "access_token"
USER_DATA_KEY = "user_data"
SESSION_KEYS = (ACCESS_TOKEN_KEY, USER_DATA_KEY)


class CredentialRepository:
    """Mirrors the session's token and user record into a key-value store."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def load_token(self) -> str | None:
        token = await self._store.get_item(ACCESS_TOKEN_KEY)
        return token or None

    async def load_credential(self) -> Credential | None:
        token = await self.load_token()
        if token is None:
            return None
        return Credential(access_token=token)

    async def load_user(self) -> UserProfile | None:
        raw = await self._store.get_item(USER_DATA_KEY)
        if not raw:
            return None
        try:
            return UserProfile.from_json(raw)
        except ValidationError:
            logger.warning("CredentialRepository: stored user record is unreadable")
            return None

    async def save(self, credential: Credential, user: UserProfile) -> None:
        await self._store.multi_set(
            {
                ACCESS_TOKEN_KEY: credential.access_token,
                USER_DATA_KEY: user.to_json(),
            }
        )
        logger.debug(f"CredentialRepository: session saved user_id={user.id}")

    async def save_user(self, user: UserProfile) -> None:
        await self._store.set_item(USER_DATA_KEY, user.to_json())
        logger.debug(f"CredentialRepository: user saved user_id={user.id}")

    async def clear(self) -> None:
        await self._store.multi_remove(SESSION_KEYS)
        logger.debug("CredentialRepository: session cleared")


__all__ = [
    "ACCESS_TOKEN_KEY",
    "CredentialRepository",
    "SESSION_KEYS",
    "USER_DATA_KEY",
]
