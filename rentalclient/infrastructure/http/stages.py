# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable

import httpx

from rentalclient.infrastructure.credentials import CredentialRepository
from rentalclient.infrastructure.storage import StorageError
from rentalclient.shared.errors import ApiError
from rentalclient.shared.logging import logger
from rentalclient.shared.middleware import Handler

from .error_mapper import get_error_category, map_response_error, map_transport_error

AUTH_PATH_PREFIX = "/auth/"
PUBLIC_PATHS = ("/auth/login", "/auth/register", "/auth/refresh")


class NormalizeErrorsStage:
    """Turns every failure below it into an ``ApiError``."""

    async def __call__(self, request: httpx.Request, call_next: Handler) -> httpx.Response:
        try:
            response = await call_next(request)
        except ApiError:
            raise
        except Exception as exc:
            error = map_transport_error(exc)
            logger.warning(
                f"HttpClient: {request.method} {request.url.path} failed "
                f"category={get_error_category(error)} code={error.code}"
            )
            raise error from exc

        if not response.is_success:
            error = map_response_error(response)
            logger.warning(
                f"HttpClient: {request.method} {request.url.path} rejected "
                f"category={get_error_category(error)} status={response.status_code}"
            )
            raise error
        return response


class InvalidateOnUnauthorizedStage:
    """Drops the stored session when the server answers 401."""

    def __init__(self, credentials: CredentialRepository, *, any_path: bool = True) -> None:
        self._credentials = credentials
        self._any_path = any_path

    async def __call__(self, request: httpx.Request, call_next: Handler) -> httpx.Response:
        response = await call_next(request)
        if response.status_code != httpx.codes.UNAUTHORIZED:
            return response
        if not self._any_path and AUTH_PATH_PREFIX not in request.url.path:
            return response

        logger.warning(f"HttpClient: 401 on {request.url.path}, clearing stored credentials")
        try:
            await self._credentials.clear()
        except StorageError as exc:
            # the 401 itself still has to reach the caller
            logger.error(f"HttpClient: failed to clear credentials code={exc.error_code}")
        return response


class AttachCredentialStage:
    """Adds ``Authorization: Bearer <token>`` from storage when a token is present."""

    def __init__(
        self,
        credentials: CredentialRepository,
        *,
        public_paths: Iterable[str] = PUBLIC_PATHS,
    ) -> None:
        self._credentials = credentials
        self._public_paths = tuple(public_paths)

    def _is_public(self, request: httpx.Request) -> bool:
        return request.url.path.endswith(self._public_paths)

    async def __call__(self, request: httpx.Request, call_next: Handler) -> httpx.Response:
        if "Authorization" not in request.headers and not self._is_public(request):
            credential = await self._credentials.load_credential()
            if credential is not None:
                request.headers["Authorization"] = credential.authorization_header
        return await call_next(request)


__all__ = [
    "AUTH_PATH_PREFIX",
    "AttachCredentialStage",
    "InvalidateOnUnauthorizedStage",
    "NormalizeErrorsStage",
    "PUBLIC_PATHS",
]
