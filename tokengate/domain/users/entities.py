# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class UserRecord:

    id: int
    email: str
    password_hash: str


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Identity carried inside a bearer token."""

    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime
