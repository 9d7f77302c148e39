# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re

from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from .entities import CamelModel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _require_filled(value: str) -> str:
    if not value or not value.strip():
        raise PydanticCustomError("missing", "Please fill in all fields", {})
    return value


class LoginRequest(CamelModel):
    username: str
    password: str = Field(repr=False)

    @field_validator("username", "password")
    @classmethod
    def _filled(cls, value: str) -> str:
        return _require_filled(value)

    @field_validator("username", mode="after")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        return value.strip()


class RegisterRequest(CamelModel):
    username: str
    email: str
    password: str = Field(repr=False)
    first_name: str
    last_name: str
    phone_number: str | None = None

    @field_validator("username", "email", "password", "first_name", "last_name")
    @classmethod
    def _filled(cls, value: str) -> str:
        return _require_filled(value)

    @field_validator("email", mode="after")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        if not _EMAIL_RE.match(value.strip()):
            raise PydanticCustomError(
                "email_invalid",
                "Please enter a valid email address",
                {},
            )
        return value.strip()

    def to_login(self) -> LoginRequest:
        return LoginRequest(username=self.username, password=self.password)


class ProfileUpdate(CamelModel):
    """Partial user record; only the fields that are set go over the wire."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    email_notifications_enabled: bool | None = None
    sms_notifications_enabled: bool | None = None
    push_notifications_enabled: bool | None = None
    device_token: str | None = None

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ChangePasswordRequest(CamelModel):
    old_password: str = Field(repr=False)
    new_password: str = Field(repr=False)

    @field_validator("old_password", "new_password")
    @classmethod
    def _filled(cls, value: str) -> str:
        return _require_filled(value)


class NotificationPreferences(CamelModel):
    email_notifications_enabled: bool
    sms_notifications_enabled: bool
    push_notifications_enabled: bool
