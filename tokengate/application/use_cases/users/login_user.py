# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from tokengate.application.interfaces import RateLimiter, TokenIssuer
from tokengate.domain.users.exceptions import InvalidCredentialsError
from tokengate.domain.users.repositories import PasswordHasher, UserRepository
from tokengate.shared.errors.base import RateLimitError
from tokengate.shared.logging import logger

THROTTLED_MESSAGE = "Too many login attempts from this IP, please try again after 15 minutes"

# Hashed on first use; unknown emails are checked against it so they cost the
# same as a wrong password.
_UNKNOWN_ACCOUNT_PASSWORD = "unknown-account-placeholder"


@dataclass(slots=True, frozen=True)
class LoginResult:
    token: str
    user_id: int
    email: str


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        tokens: TokenIssuer,
        rate_limiter: RateLimiter,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._tokens = tokens
        self._rate_limiter = rate_limiter
        self._decoy_digest: str | None = None

    def execute(self, email: str, password: str, client_address: str) -> LoginResult:
        # Throttle before touching the credential store.
        decision = self._rate_limiter.check(client_address)
        if not decision.allowed:
            raise RateLimitError(THROTTLED_MESSAGE, retry_after=decision.retry_after)

        user = self._users.find_by_email(email)
        if user is None:
            self._password_hasher.verify(password, self._decoy())
            logger.info(f"auth.login: rejected from {client_address} (unknown account)")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info(f"auth.login: rejected from {client_address} user_id={user.id} (bad password)")
            raise InvalidCredentialsError()

        token = self._tokens.issue(user.id, user.email)
        logger.info(f"auth.login: ok user_id={user.id} from {client_address}")
        return LoginResult(token=token, user_id=user.id, email=user.email)

    def _decoy(self) -> str:
        if self._decoy_digest is None:
            self._decoy_digest = self._password_hasher.hash(_UNKNOWN_ACCOUNT_PASSWORD)
        return self._decoy_digest
