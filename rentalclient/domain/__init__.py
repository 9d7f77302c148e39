# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation, NoActiveSessionError
from .rental import (
    CreateReservationRequest,
    PaymentRequest,
    ReservationStatus,
    VehicleFilters,
    VehicleStatus,
)
from .session import SessionOperation, SessionPhase, SessionState
from .users import (
    AuthResponse,
    ChangePasswordRequest,
    Credential,
    LoginRequest,
    NotificationPreferences,
    ProfileUpdate,
    RegisterRequest,
    UserProfile,
)

__all__ = [
    "AuthResponse",
    "ChangePasswordRequest",
    "CreateReservationRequest",
    "Credential",
    "InvariantViolation",
    "LoginRequest",
    "NoActiveSessionError",
    "NotificationPreferences",
    "PaymentRequest",
    "ProfileUpdate",
    "RegisterRequest",
    "ReservationStatus",
    "SessionOperation",
    "SessionPhase",
    "SessionState",
    "UserProfile",
    "VehicleFilters",
    "VehicleStatus",
]
