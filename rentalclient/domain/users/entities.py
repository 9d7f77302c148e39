# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Identity records exchanged with the rental backend."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rentalclient.domain.exceptions import InvariantViolation

DEFAULT_TOKEN_TYPE = "Bearer"


class CamelModel(BaseModel):
    """Base for records whose wire format is camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        extra="ignore",
    )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UserProfile(CamelModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    phone_number: str | None = None
    email_notifications_enabled: bool = False
    sms_notifications_enabled: bool = False
    push_notifications_enabled: bool = False
    device_token: str | None = None
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str) -> UserProfile:
        return cls.model_validate_json(raw)


@dataclass(slots=True, frozen=True)
class Credential:
    access_token: str
    token_type: str = DEFAULT_TOKEN_TYPE

    def __post_init__(self) -> None:
        if not self.access_token:
            raise InvariantViolation("access token must not be empty", field="access_token")

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.access_token}"

    def __repr__(self) -> str:
        return f"Credential(token_type={self.token_type!r}, access_token='***')"


class AuthResponse(CamelModel):
    access_token: str = Field(min_length=1)
    token_type: str = DEFAULT_TOKEN_TYPE
    user: UserProfile

    @property
    def credential(self) -> Credential:
        return Credential(access_token=self.access_token, token_type=self.token_type or DEFAULT_TOKEN_TYPE)
