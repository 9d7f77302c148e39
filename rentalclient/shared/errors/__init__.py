# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import (
    ApiError,
    DomainError,
    LocalRequestError,
    NetworkUnreachableError,
    RequestValidationError,
    ServerRespondedError,
)
from .validation import coerce_model, format_pydantic_errors, raise_validation_error

__all__ = [
    "ApiError",
    "DomainError",
    "LocalRequestError",
    "NetworkUnreachableError",
    "RequestValidationError",
    "ServerRespondedError",
    "coerce_model",
    "format_pydantic_errors",
    "raise_validation_error",
]
