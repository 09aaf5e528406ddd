# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

_MISSING_TYPES = frozenset({"missing", "string_too_short", "string_type"})


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
                "message": error.get("msg", ""),
            }
        )

    return {
        "fields": sorted(fields_set),
        "errors": errors_list,
    }


def is_missing_field_error(exc: PydanticValidationError) -> bool:
    """True when every failure is an absent, empty or non-string field."""
    return all(error.get("type") in _MISSING_TYPES for error in exc.errors())


def raise_validation_error(
    exc: PydanticValidationError,
    *,
    missing_message: str,
    invalid_message: str | None = None,
) -> NoReturn:
    if invalid_message is None or is_missing_field_error(exc):
        raise ValidationError(missing_message) from exc
    raise ValidationError(invalid_message, context=format_pydantic_errors(exc)) from exc


__all__ = [
    "format_pydantic_errors",
    "is_missing_field_error",
    "raise_validation_error",
]
