from __future__ import annotations

import os
import tempfile
from datetime import UTC, datetime, timedelta

# Configuration is read once at import time; pin it before tokengate loads.
_TMP_DIR = tempfile.mkdtemp(prefix="tokengate-tests-")
os.environ["APP_ENV"] = "test"
os.environ["JWT_SECRET"] = "test-signing-secret-0123456789abcdef"
os.environ["JWT_EXPIRES_IN"] = "1h"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'tokengate.db')}"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("EXPOSE_ERROR_DETAILS", None)
os.environ.pop("TRUST_PROXY", None)

import pytest  # noqa: E402

SECRET = os.environ["JWT_SECRET"]


class FakeClock:
    """Settable wall clock for token expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class FakeMonotonic:
    """Settable monotonic clock for rate limiter tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def monotonic() -> FakeMonotonic:
    return FakeMonotonic()
