# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Composition of request stages around an outgoing HTTP call."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

import httpx

Handler = Callable[[httpx.Request], Awaitable[httpx.Response]]


class Stage(Protocol):
    async def __call__(self, request: httpx.Request, call_next: Handler) -> httpx.Response: ...


def _bind(stage: Stage, call_next: Handler) -> Handler:
    async def handler(request: httpx.Request) -> httpx.Response:
        return await stage(request, call_next)

    return handler


def compose(stages: Sequence[Stage], endpoint: Handler) -> Handler:
    """Wrap ``endpoint`` so that ``stages[0]`` runs outermost."""

    handler = endpoint
    for stage in reversed(stages):
        handler = _bind(stage, handler)
    return handler


__all__ = ["Handler", "Stage", "compose"]
