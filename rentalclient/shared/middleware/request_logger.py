# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time
from collections.abc import Mapping
from typing import Any

import httpx

from rentalclient.shared.logging import correlation_scope, logger

from .chain import Handler

REQUEST_ID_HEADER = "X-Request-ID"

_SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key", "x-auth-token"}
_SENSITIVE_PARAMS = {"password", "token", "key", "secret", "auth"}


def _sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    sanitized = {}
    for key, value in headers.items():
        if key.lower() in _SENSITIVE_HEADERS:
            sanitized[key] = f"<hashed:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"
        else:
            sanitized[key] = value
    return sanitized


def _sanitize_query_params(params: Mapping[str, Any]) -> dict[str, Any]:
    sanitized = {}
    for key, value in params.items():
        if any(sensitive in key.lower() for sensitive in _SENSITIVE_PARAMS):
            sanitized[key] = "<redacted>"
        else:
            sanitized[key] = value
    return sanitized


class RequestLogStage:
    """Tags each call with a correlation id and logs its outcome."""

    def __init__(self, *, debug: bool = False) -> None:
        self._debug = debug

    async def __call__(self, request: httpx.Request, call_next: Handler) -> httpx.Response:
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8)
        request.headers[REQUEST_ID_HEADER] = correlation_id

        path = request.url.path
        start = time.perf_counter()
        with correlation_scope(correlation_id):
            if self._debug:
                logger.debug(
                    f"Request started: {request.method} {path} "
                    f"query={_sanitize_query_params(dict(request.url.params))}, "
                    f"headers={_sanitize_headers(request.headers)}, "
                    f"body_size={len(request.content)}"
                )
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.warning(f"Request error: {type(exc).__name__} on {request.method} {path}")
                raise

            duration = time.perf_counter() - start
            logger.info(
                f"Response: {request.method} {path} "
                f"status={response.status_code}, duration={duration:.3f}s"
            )
            return response


__all__ = ["REQUEST_ID_HEADER", "RequestLogStage"]
