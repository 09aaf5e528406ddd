# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import UserRecord


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> UserRecord | None: ...
    def add(self, email: str, password_hash: str) -> UserRecord: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
