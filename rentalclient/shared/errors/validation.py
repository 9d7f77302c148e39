# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NoReturn, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .base import RequestValidationError

M = TypeVar("M", bound=BaseModel)


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors_list = []
    fields_set = set()

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)

        if field_path:
            fields_set.add(field_path)

        errors_list.append(
            {
                "field": field_path or "unknown",
                "type": error.get("type", "value_error"),
                "msg": error.get("msg", ""),
            }
        )

    return {
        "fields": sorted(fields_set),
        "errors": errors_list,
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    details = format_pydantic_errors(exc)
    first = details["errors"][0]["msg"] if details["errors"] else "Invalid request data"
    raise RequestValidationError(first, details=details) from exc


def coerce_model(model: type[M], payload: M | Mapping[str, Any]) -> M:
    """Accept either a model instance or a raw mapping and return the model."""

    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise_validation_error(exc)


__all__ = [
    "coerce_model",
    "format_pydantic_errors",
    "raise_validation_error",
]
