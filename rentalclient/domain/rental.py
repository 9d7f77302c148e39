# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request shapes for the vehicle, reservation and payment endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import Field, model_validator
from pydantic_core import PydanticCustomError

from rentalclient.domain.users.entities import CamelModel


class VehicleStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    RENTED = "RENTED"
    MAINTENANCE = "MAINTENANCE"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"


class ReservationStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class VehicleFilters(CamelModel):
    category: str | None = None
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    transmission: str | None = None
    fuel_type: str | None = None
    min_seats: int | None = Field(None, ge=1)
    availability: bool | None = None
    sort_by: Literal["price", "year", "rating"] | None = None
    sort_order: Literal["asc", "desc"] | None = None

    @model_validator(mode="after")
    def _price_range(self) -> VehicleFilters:
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise PydanticCustomError(
                "price_range",
                "Minimum price must not exceed maximum price",
                {},
            )
        return self

    def to_params(self) -> dict:
        params = self.to_wire()
        # query strings carry booleans as lowercase literals
        return {key: str(value).lower() if isinstance(value, bool) else value for key, value in params.items()}


class CreateReservationRequest(CamelModel):
    vehicle_id: int
    start_date: str
    end_date: str
    pickup_location: str
    return_location: str
    special_requests: str | None = None


class PaymentRequest(CamelModel):
    reservation_id: int
    user_id: int
    amount: float = Field(gt=0)
    payment_method_id: str
    discount_amount: float | None = Field(None, ge=0)
    promo_code: str | None = None
    currency: str | None = None
    description: str | None = None


__all__ = [
    "CreateReservationRequest",
    "PaymentRequest",
    "ReservationStatus",
    "VehicleFilters",
    "VehicleStatus",
]
