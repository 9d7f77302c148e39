# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from rentalclient.domain import (
    AuthResponse,
    ChangePasswordRequest,
    Credential,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    SessionState,
    UserProfile,
)

SessionListener = Callable[[SessionState], None]


class AuthApiPort(Protocol):
    async def login(self, credentials: LoginRequest) -> AuthResponse: ...

    async def register(self, user_data: RegisterRequest) -> UserProfile: ...

    async def logout(self) -> None: ...

    async def refresh_token(self, access_token: str | None = None) -> AuthResponse: ...

    async def get_current_user(self) -> UserProfile: ...

    async def update_profile(self, changes: ProfileUpdate) -> UserProfile: ...

    async def change_password(self, request: ChangePasswordRequest) -> None: ...


class CredentialStorePort(Protocol):
    async def load_token(self) -> str | None: ...

    async def load_user(self) -> UserProfile | None: ...

    async def save(self, credential: Credential, user: UserProfile) -> None: ...

    async def save_user(self, user: UserProfile) -> None: ...

    async def clear(self) -> None: ...


__all__ = ["AuthApiPort", "CredentialStorePort", "SessionListener"]
