# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

SERVER_ERROR_MESSAGE = "Server error occurred"
NETWORK_ERROR_MESSAGE = "Network error - please check your connection"
UNKNOWN_ERROR_MESSAGE = "An unexpected error occurred"

NETWORK_ERROR_CODE = "NETWORK_ERROR"
UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"


@dataclass(eq=False)
class ApiError(Exception):
    message: str
    code: str | None = None
    details: Any = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ServerRespondedError(ApiError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, body: Any = None, message: str | None = None) -> None:
        super().__init__(
            message=message or SERVER_ERROR_MESSAGE,
            code=str(status_code),
            details=body,
        )
        self.status_code = status_code

    @property
    def body(self) -> Any:
        return self.details

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class NetworkUnreachableError(ApiError):
    """The request went out but no response came back."""

    def __init__(self, message: str = NETWORK_ERROR_MESSAGE) -> None:
        super().__init__(message=message, code=NETWORK_ERROR_CODE)


class LocalRequestError(ApiError):
    """The request could not be built or sent."""

    def __init__(self, message: str | None = None, details: Any = None) -> None:
        super().__init__(
            message=message or UNKNOWN_ERROR_MESSAGE,
            code=UNKNOWN_ERROR_CODE,
            details=details,
        )


class DomainError(ApiError):
    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        resolved_message = message or cast(str, getattr(type(self), "default_message", "Domain error"))
        resolved_code = code or cast(str, getattr(type(self), "default_code", "DOMAIN_ERROR"))
        super().__init__(message=resolved_message, code=resolved_code, details=details)


class RequestValidationError(ApiError):
    def __init__(
        self,
        message: str = "Invalid request data",
        *,
        details: Any = None,
    ) -> None:
        super().__init__(message=message, code="VALIDATION_ERROR", details=details)


__all__ = [
    "ApiError",
    "DomainError",
    "LocalRequestError",
    "NETWORK_ERROR_CODE",
    "NETWORK_ERROR_MESSAGE",
    "NetworkUnreachableError",
    "RequestValidationError",
    "SERVER_ERROR_MESSAGE",
    "ServerRespondedError",
    "UNKNOWN_ERROR_CODE",
    "UNKNOWN_ERROR_MESSAGE",
]
