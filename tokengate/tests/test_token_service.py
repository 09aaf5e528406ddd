from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from tokengate.application.services.tokens import TokenFailure, TokenService

from conftest import SECRET, FakeClock


@pytest.fixture()
def service(clock: FakeClock) -> TokenService:
    return TokenService(SECRET, ttl=timedelta(hours=1), clock=clock)


def test_issued_token_verifies_with_claims(service: TokenService, clock: FakeClock) -> None:
    token = service.issue(7, "alice@example.com")

    check = service.verify(token)

    assert check.ok
    assert check.failure is None
    assert check.claims is not None
    assert check.claims.user_id == 7
    assert check.claims.email == "alice@example.com"
    assert check.claims.issued_at == clock.now
    assert check.claims.expires_at == clock.now + timedelta(hours=1)


def test_token_payload_uses_wire_claim_names(service: TokenService, clock: FakeClock) -> None:
    token = service.issue(7, "alice@example.com")

    payload = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})

    assert payload == {
        "userId": 7,
        "email": "alice@example.com",
        "iat": int(clock.now.timestamp()),
        "exp": int((clock.now + timedelta(hours=1)).timestamp()),
    }


def test_token_expires_after_ttl(service: TokenService, clock: FakeClock) -> None:
    token = service.issue(1, "a@example.com")

    clock.advance(hours=1, seconds=-1)
    assert service.verify(token).ok

    clock.advance(seconds=2)
    check = service.verify(token)
    assert not check.ok
    assert check.failure is TokenFailure.EXPIRED


def test_token_is_expired_exactly_at_exp(service: TokenService, clock: FakeClock) -> None:
    token = service.issue(1, "a@example.com")

    clock.advance(hours=1)

    assert service.verify(token).failure is TokenFailure.EXPIRED


def test_per_call_ttl_overrides_default(service: TokenService, clock: FakeClock) -> None:
    token = service.issue(1, "a@example.com", ttl=timedelta(minutes=5))

    clock.advance(minutes=5, seconds=1)

    assert service.verify(token).failure is TokenFailure.EXPIRED


def test_default_ttl_is_one_hour() -> None:
    assert TokenService(SECRET).ttl == timedelta(hours=1)


def test_token_signed_with_other_secret_is_bad_signature(
    service: TokenService, clock: FakeClock
) -> None:
    other = TokenService("another-signing-secret-0123456789abcdef", clock=clock)
    token = other.issue(1, "a@example.com")

    assert service.verify(token).failure is TokenFailure.BAD_SIGNATURE


def test_tampered_payload_is_bad_signature(service: TokenService) -> None:
    header, _, signature = service.issue(1, "a@example.com").split(".")
    forged = jwt.encode(
        {"userId": 2, "email": "b@example.com", "iat": 0, "exp": 9999999999},
        "attacker-secret-0123456789abcdef0123",
        algorithm="HS256",
    ).split(".")[1]

    check = service.verify(".".join([header, forged, signature]))

    assert check.failure is TokenFailure.BAD_SIGNATURE


def test_signature_is_checked_before_expiry(service: TokenService, clock: FakeClock) -> None:
    other = TokenService("another-signing-secret-0123456789abcdef", clock=clock)
    token = other.issue(1, "a@example.com")

    clock.advance(days=1)

    assert service.verify(token).failure is TokenFailure.BAD_SIGNATURE


def test_disallowed_algorithm_is_bad_signature(service: TokenService, clock: FakeClock) -> None:
    token = jwt.encode(
        {"userId": 1, "email": "a@example.com", "iat": 0, "exp": 9999999999},
        SECRET,
        algorithm="HS512",
    )

    assert service.verify(token).failure is TokenFailure.BAD_SIGNATURE


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "Bearer x.y.z"])
def test_garbage_token_is_malformed(service: TokenService, token: str) -> None:
    check = service.verify(token)

    assert not check.ok
    assert check.failure is TokenFailure.MALFORMED


def test_token_missing_required_claims_is_malformed(service: TokenService) -> None:
    token = jwt.encode({"userId": 1, "exp": 9999999999, "iat": 0}, SECRET, algorithm="HS256")

    assert service.verify(token).failure is TokenFailure.MALFORMED


def test_blank_secret_is_rejected() -> None:
    with pytest.raises(ValueError):
        TokenService("")


def test_verification_uses_real_clock_by_default() -> None:
    past = FakeClock(datetime.now(UTC) - timedelta(hours=2))
    token = TokenService(SECRET, clock=past).issue(1, "a@example.com")

    assert TokenService(SECRET).verify(token).failure is TokenFailure.EXPIRED


def test_sub_second_issue_time_keeps_full_ttl_between_claims() -> None:
    clock = FakeClock(datetime(2025, 1, 1, 12, 0, 0, 900_000, tzinfo=UTC))
    service = TokenService(SECRET, ttl=timedelta(hours=1), clock=clock)

    check = service.verify(service.issue(3, "c@example.com"))

    assert check.claims is not None
    assert check.claims.issued_at == datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)
    assert check.claims.expires_at - check.claims.issued_at == timedelta(hours=1)
