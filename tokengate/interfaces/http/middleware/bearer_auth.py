# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, cast

from flask import g, request

from tokengate.application.interfaces import TokenVerifier
from tokengate.domain.users.entities import TokenClaims
from tokengate.shared.errors.base import InvalidTokenError, MissingTokenError
from tokengate.shared.logging import logger


def current_claims() -> TokenClaims:
    return cast(TokenClaims, g.user)


def extract_bearer_token(header: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header, if any."""
    if not header:
        return None
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class BearerAuth:
    """Guards views behind a valid bearer token.

    No token: 401 and the view never runs. A token that fails verification for
    any reason: 403. The failure kind only goes to the log.
    """

    def __init__(self, tokens: TokenVerifier) -> None:
        self._tokens = tokens

    def authenticate(self) -> TokenClaims:
        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            logger.warning(f"auth: no bearer token on {request.method} {request.path}")
            raise MissingTokenError()

        check = self._tokens.verify(token)
        if not check.ok:
            failure = check.failure.value if check.failure else "unknown"
            logger.warning(
                f"auth: token rejected ({failure}) on {request.method} {request.path}"
            )
            raise InvalidTokenError()

        claims = cast(TokenClaims, check.claims)
        g.user = claims
        logger.debug(f"auth: ok user_id={claims.user_id} {request.method} {request.path}")
        return claims

    def __call__(self, view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def inner(*args: Any, **kwargs: Any) -> Any:
            self.authenticate()
            return view(*args, **kwargs)

        return inner


__all__ = [
    "BearerAuth",
    "current_claims",
    "extract_bearer_token",
]
