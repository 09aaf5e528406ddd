# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from tokengate.application.services.tokens import TokenCheck
from tokengate.infrastructure.auth.rate_limiter import RateDecision


class RateLimiter(Protocol):
    def check(self, address: str) -> RateDecision: ...


class TokenIssuer(Protocol):
    def issue(self, user_id: int, email: str, *, ttl: timedelta | None = None) -> str: ...


class TokenVerifier(Protocol):
    def verify(self, token: str) -> TokenCheck: ...
