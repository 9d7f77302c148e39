# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Maps httpx failures and error responses onto the client error taxonomy."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from rentalclient.shared.errors import (
    ApiError,
    LocalRequestError,
    NetworkUnreachableError,
    ServerRespondedError,
)

# Transport failures after the request left the client, with nothing coming back.
NO_RESPONSE_ERRORS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
    httpx.ProxyError,
)

# Body keys that may carry a human-readable message, in lookup order.
MESSAGE_KEYS = ("message", "error")


def decode_body(response: httpx.Response) -> Any:
    """Return the parsed JSON body, the raw text when it is not JSON, or None."""

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def extract_message(body: Any) -> str | None:
    if not isinstance(body, Mapping):
        return None
    for key in MESSAGE_KEYS:
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def map_response_error(response: httpx.Response) -> ServerRespondedError:
    body = decode_body(response)
    return ServerRespondedError(
        status_code=response.status_code,
        body=body,
        message=extract_message(body),
    )


def map_transport_error(error: BaseException) -> ApiError:
    if isinstance(error, ApiError):
        return error
    if isinstance(error, NO_RESPONSE_ERRORS):
        return NetworkUnreachableError()
    return LocalRequestError(str(error) or None)


def get_error_category(error: ApiError) -> str:
    if isinstance(error, ServerRespondedError):
        if error.status_code in (401, 403):
            return "auth"
        return "client" if error.status_code < 500 else "server"
    if isinstance(error, NetworkUnreachableError):
        return "network"
    return "local"


__all__ = [
    "MESSAGE_KEYS",
    "NO_RESPONSE_ERRORS",
    "decode_body",
    "extract_message",
    "get_error_category",
    "map_response_error",
    "map_transport_error",
]
