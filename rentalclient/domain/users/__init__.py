# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import DEFAULT_TOKEN_TYPE, AuthResponse, CamelModel, Credential, UserProfile
from .requests import (
    ChangePasswordRequest,
    LoginRequest,
    NotificationPreferences,
    ProfileUpdate,
    RegisterRequest,
)

__all__ = [
    "DEFAULT_TOKEN_TYPE",
    "AuthResponse",
    "CamelModel",
    "ChangePasswordRequest",
    "Credential",
    "LoginRequest",
    "NotificationPreferences",
    "ProfileUpdate",
    "RegisterRequest",
    "UserProfile",
]
