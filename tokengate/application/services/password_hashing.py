"""Password hashing strategies."""

from __future__ import annotations

import bcrypt

from tokengate.domain.users.repositories import PasswordHasher

# bcrypt ignores input past this many bytes; longer passwords are refused.
BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_BYTES:
            raise ValueError(f"password exceeds {BCRYPT_MAX_BYTES} bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    def verify(self, password: str, hashed: str) -> bool:
        if not isinstance(password, str) or not isinstance(hashed, str):
            return False
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_BYTES:
            return False
        try:
            # checkpw compares the derived digest in constant time.
            return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
        except ValueError:
            # malformed digest
            return False
