# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""REST surface of the rental backend.

Auth endpoints are parsed into domain models; vehicle, reservation and payment
payloads are returned as decoded JSON.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from rentalclient.domain import (
    AuthResponse,
    ChangePasswordRequest,
    CreateReservationRequest,
    LoginRequest,
    NotificationPreferences,
    PaymentRequest,
    ProfileUpdate,
    RegisterRequest,
    UserProfile,
    VehicleFilters,
)
from rentalclient.shared.errors import LocalRequestError, coerce_model, format_pydantic_errors
from rentalclient.shared.logging import logger

from .client import HttpClient

M = TypeVar("M", bound=BaseModel)

UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from server"


def _parse(model: type[M], data: Any, *, endpoint: str) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.warning(f"RentalApi: malformed {model.__name__} from {endpoint}")
        raise LocalRequestError(
            UNEXPECTED_RESPONSE_MESSAGE,
            details=format_pydantic_errors(exc),
        ) from exc


class RentalApi:

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    # auth

    async def login(self, credentials: LoginRequest | Mapping[str, Any]) -> AuthResponse:
        payload = coerce_model(LoginRequest, credentials)
        data = await self._http.post("/auth/login", json=payload.to_wire())
        return _parse(AuthResponse, data, endpoint="/auth/login")

    async def register(self, user_data: RegisterRequest | Mapping[str, Any]) -> UserProfile:
        payload = coerce_model(RegisterRequest, user_data)
        data = await self._http.post("/auth/register", json=payload.to_wire())
        return _parse(UserProfile, data, endpoint="/auth/register")

    async def logout(self) -> None:
        await self._http.post("/auth/logout")

    async def refresh_token(self, access_token: str | None = None) -> AuthResponse:
        # /auth/refresh is public, so the current token has to be passed in explicitly
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
        data = await self._http.post("/auth/refresh", headers=headers)
        return _parse(AuthResponse, data, endpoint="/auth/refresh")

    async def get_current_user(self) -> UserProfile:
        data = await self._http.get("/auth/me")
        return _parse(UserProfile, data, endpoint="/auth/me")

    async def update_profile(self, changes: ProfileUpdate | Mapping[str, Any]) -> UserProfile:
        payload = coerce_model(ProfileUpdate, changes)
        data = await self._http.put("/auth/profile", json=payload.to_wire())
        return _parse(UserProfile, data, endpoint="/auth/profile")

    async def change_password(self, request: ChangePasswordRequest | Mapping[str, Any]) -> None:
        payload = coerce_model(ChangePasswordRequest, request)
        await self._http.put("/auth/change-password", json=payload.to_wire())

    async def update_notification_preferences(
        self, preferences: NotificationPreferences | Mapping[str, Any]
    ) -> None:
        payload = coerce_model(NotificationPreferences, preferences)
        await self._http.put("/auth/notification-preferences", json=payload.to_wire())

    # vehicles

    async def get_vehicles(self, filters: VehicleFilters | Mapping[str, Any] | None = None) -> Any:
        params = coerce_model(VehicleFilters, filters).to_params() if filters is not None else None
        return await self._http.get("/vehicles", params=params)

    async def get_vehicle(self, vehicle_id: int) -> Any:
        return await self._http.get(f"/vehicles/{vehicle_id}")

    async def get_available_vehicles(self, start_date: str, end_date: str) -> Any:
        return await self._http.get(
            "/vehicles/available",
            params={"startDate": start_date, "endDate": end_date},
        )

    # reservations

    async def get_reservations(self) -> Any:
        return await self._http.get("/reservations")

    async def get_reservation(self, reservation_id: int) -> Any:
        return await self._http.get(f"/reservations/{reservation_id}")

    async def create_reservation(
        self, reservation: CreateReservationRequest | Mapping[str, Any]
    ) -> Any:
        payload = coerce_model(CreateReservationRequest, reservation)
        return await self._http.post("/reservations", json=payload.to_wire())

    async def update_reservation(self, reservation_id: int, changes: Mapping[str, Any]) -> Any:
        return await self._http.put(f"/reservations/{reservation_id}", json=dict(changes))

    async def cancel_reservation(self, reservation_id: int, reason: str | None = None) -> Any:
        return await self._http.put(
            f"/reservations/{reservation_id}/cancel",
            json={"reason": reason},
        )

    async def confirm_reservation(self, reservation_id: int) -> Any:
        return await self._http.put(f"/reservations/{reservation_id}/confirm")

    # payments

    async def create_payment_intent(self, payment: PaymentRequest | Mapping[str, Any]) -> Any:
        payload = coerce_model(PaymentRequest, payment)
        return await self._http.post("/payments/create-payment-intent", json=payload.to_wire())

    async def confirm_payment(self, payment_intent_id: str) -> Any:
        return await self._http.post(
            "/payments/confirm",
            params={"paymentIntentId": payment_intent_id},
        )

    async def get_payments(self) -> Any:
        return await self._http.get("/payments")

    async def get_user_payments(self, user_id: int) -> Any:
        return await self._http.get(f"/payments/user/{user_id}")

    # dashboard, admin accounts only

    async def get_dashboard_kpis(self) -> Any:
        return await self._http.get("/dashboard/kpis")

    async def get_analytics(self, kind: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self._http.get(f"/analytics/{kind}", params=dict(params) if params else None)


__all__ = ["RentalApi", "UNEXPECTED_RESPONSE_MESSAGE"]
