# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from rentalclient.infrastructure.credentials import CredentialRepository
from rentalclient.shared.config import HttpConfig
from rentalclient.shared.logging import logger
from rentalclient.shared.middleware import RequestLogStage, compose

from .error_mapper import decode_body, map_transport_error
from .stages import AttachCredentialStage, InvalidateOnUnauthorizedStage, NormalizeErrorsStage

DEFAULT_HEADERS = {"Content-Type": "application/json"}


class HttpClient:
    """JSON client for the rental backend.

    Every call runs through the same stages, outermost first: error
    normalization, invalidation of the stored session on 401, credential
    attachment and request logging. Callers only ever see the decoded body
    or an ``ApiError``.
    """

    def __init__(
        self,
        *,
        base_url: str,
        credentials: CredentialRepository,
        timeout: float = 10.0,
        invalidate_on_any_401: bool = True,
        debug_logging: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=DEFAULT_HEADERS,
            transport=transport,
        )
        self._handler = compose(
            [
                NormalizeErrorsStage(),
                InvalidateOnUnauthorizedStage(credentials, any_path=invalidate_on_any_401),
                AttachCredentialStage(credentials),
                RequestLogStage(debug=debug_logging),
            ],
            self._send,
        )
        logger.debug(f"HttpClient: created base_url={base_url} timeout={timeout}")

    @classmethod
    def from_config(
        cls,
        config: HttpConfig,
        credentials: CredentialRepository,
        *,
        debug_logging: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> HttpClient:
        return cls(
            base_url=config.api_base_url,
            credentials=credentials,
            timeout=config.api_timeout,
            invalidate_on_any_401=config.invalidate_on_any_401,
            debug_logging=debug_logging,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def _send(self, request: httpx.Request) -> httpx.Response:
        return await self._client.send(request)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        try:
            request = self._client.build_request(
                method, path, json=json, params=params, headers=headers
            )
        except Exception as exc:
            # request could not even be assembled: bad URL, unserializable body
            raise map_transport_error(exc) from exc
        response = await self._handler(request)
        return decode_body(response)

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["DEFAULT_HEADERS", "HttpClient"]
