# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, time-limited bearer tokens.

Tokens are HS256 JWTs carrying ``userId``, ``email``, ``iat`` and ``exp``.
Nothing is stored server-side: a token stays valid until ``exp`` no matter
what happens to the account afterwards.

Verification never raises for a bad token. It returns a :class:`TokenCheck`
that holds either the claims or the reason the token was refused, so the HTTP
layer can answer every failure the same way while logs keep the distinction.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from tokengate.domain.users.entities import TokenClaims

DEFAULT_TTL = timedelta(hours=1)
_ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ("userId", "email", "iat", "exp")


class TokenFailure(enum.Enum):
    BAD_SIGNATURE = "bad_signature"
    MALFORMED = "malformed"
    EXPIRED = "expired"


@dataclass(slots=True, frozen=True)
class TokenCheck:
    claims: TokenClaims | None = None
    failure: TokenFailure | None = None

    @property
    def ok(self) -> bool:
        return self.claims is not None


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    def __init__(
        self,
        secret: str,
        *,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be blank")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user_id: int, email: str, *, ttl: timedelta | None = None) -> str:
        # Claims carry whole seconds; exp is measured from the same truncated instant.
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + (ttl if ttl is not None else self._ttl)
        payload = {
            "userId": user_id,
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> TokenCheck:
        # Signature first; expiry is judged against our own clock afterwards.
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                options={"verify_exp": False, "verify_iat": False, "require": list(_REQUIRED_CLAIMS)},
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError):
            return TokenCheck(failure=TokenFailure.BAD_SIGNATURE)
        except jwt.InvalidTokenError:
            return TokenCheck(failure=TokenFailure.MALFORMED)

        try:
            claims = TokenClaims(
                user_id=int(payload["userId"]),
                email=str(payload["email"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), UTC),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), UTC),
            )
        except (TypeError, ValueError, OverflowError, OSError):
            return TokenCheck(failure=TokenFailure.MALFORMED)

        if self._clock() >= claims.expires_at:
            return TokenCheck(failure=TokenFailure.EXPIRED)
        return TokenCheck(claims=claims)


__all__ = ["DEFAULT_TTL", "TokenCheck", "TokenFailure", "TokenService"]
