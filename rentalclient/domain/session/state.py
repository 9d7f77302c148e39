# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Snapshot of who is logged in, as seen by the rest of the application."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from rentalclient.domain.exceptions import InvariantViolation
from rentalclient.domain.users.entities import UserProfile


class SessionOperation(str, Enum):
    INITIALIZE = "initialize"
    LOGIN = "login"
    REGISTER = "register"
    LOGOUT = "logout"
    UPDATE_PROFILE = "update_profile"
    CHANGE_PASSWORD = "change_password"
    REFRESH = "refresh"


class SessionPhase(str, Enum):
    UNKNOWN = "unknown"
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    LOGGING_OUT = "logging_out"


_AUTHENTICATING_OPERATIONS = frozenset(
    {SessionOperation.INITIALIZE, SessionOperation.LOGIN, SessionOperation.REGISTER}
)


@dataclass(slots=True, frozen=True)
class SessionState:
    user: UserProfile | None = None
    is_authenticated: bool = False
    is_loading: bool = False
    last_error: str | None = None
    initialized: bool = False
    operation: SessionOperation | None = None

    def __post_init__(self) -> None:
        if self.is_authenticated and self.user is None:
            raise InvariantViolation("authenticated session requires a user", field="user")
        if self.user is not None and not self.is_authenticated:
            raise InvariantViolation("anonymous session cannot carry a user", field="user")

    @property
    def phase(self) -> SessionPhase:
        if not self.initialized and self.operation is None:
            return SessionPhase.UNKNOWN
        if self.is_loading and self.operation is SessionOperation.LOGOUT:
            return SessionPhase.LOGGING_OUT
        if self.is_loading and self.operation in _AUTHENTICATING_OPERATIONS:
            return SessionPhase.AUTHENTICATING
        if self.is_authenticated:
            return SessionPhase.AUTHENTICATED
        if not self.initialized:
            return SessionPhase.UNKNOWN
        return SessionPhase.ANONYMOUS

    def evolve(self, **changes) -> SessionState:
        return replace(self, **changes)

    @classmethod
    def anonymous(cls, *, last_error: str | None = None) -> SessionState:
        return cls(initialized=True, last_error=last_error)


__all__ = ["SessionOperation", "SessionPhase", "SessionState"]
