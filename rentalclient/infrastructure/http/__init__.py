# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .client import DEFAULT_HEADERS, HttpClient
from .error_mapper import (
    decode_body,
    extract_message,
    get_error_category,
    map_response_error,
    map_transport_error,
)
from .rental_api import RentalApi
from .stages import (
    PUBLIC_PATHS,
    AttachCredentialStage,
    InvalidateOnUnauthorizedStage,
    NormalizeErrorsStage,
)

__all__ = [
    "AttachCredentialStage",
    "DEFAULT_HEADERS",
    "HttpClient",
    "InvalidateOnUnauthorizedStage",
    "NormalizeErrorsStage",
    "PUBLIC_PATHS",
    "RentalApi",
    "decode_body",
    "extract_message",
    "get_error_category",
    "map_response_error",
    "map_transport_error",
]
