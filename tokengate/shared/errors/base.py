# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.context:
            payload.update(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        cls = type(self)
        resolved_code = code or cast(str, getattr(cls, "default_code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(cls, "default_status", HTTPStatus.BAD_REQUEST)
        )
        resolved_message = message or cast(str, getattr(cls, "default_message", resolved_code))
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            message=resolved_message,
            context=context,
        )


class ValidationError(AppError):
    def __init__(
        self,
        message: str = "Invalid request.",
        *,
        code: str = "validation_error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            context=context,
        )


class AuthError(AppError):
    """Authentication failures. Messages stay generic on purpose."""


class MissingTokenError(AuthError):
    def __init__(self) -> None:
        super().__init__(
            code="token_missing",
            status=HTTPStatus.UNAUTHORIZED,
            message="Access token is missing or invalid",
        )


class InvalidTokenError(AuthError):
    def __init__(self) -> None:
        super().__init__(
            code="token_invalid",
            status=HTTPStatus.FORBIDDEN,
            message="Token is not valid or has expired",
        )


class RateLimitError(AppError):
    def __init__(self, message: str, *, retry_after: int | None = None) -> None:
        super().__init__(
            code="rate_limited",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            message=message,
        )
        self.retry_after = retry_after


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found.") -> None:
        super().__init__(code="not_found", status=HTTPStatus.NOT_FOUND, message=message)


class InternalError(AppError):
    def __init__(self, message: str = "An unexpected error occurred on the server.") -> None:
        super().__init__(
            code="internal_error",
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            message=message,
        )
