from __future__ import annotations

from tokengate.shared.logging import sanitize_message


def test_bearer_tokens_are_redacted() -> None:
    message = "Authorization failed for Bearer eyJhbGciOiJIUzI1NiJ9.eyJ1c2VySWQiOjF9.abc"

    assert "eyJhbGciOiJIUzI1NiJ9" not in sanitize_message(message)


def test_passwords_are_redacted() -> None:
    sanitized = sanitize_message("login payload password=hunter22 email=a@example.com")

    assert "hunter22" not in sanitized
    assert "***REDACTED***" in sanitized


def test_bcrypt_digests_are_redacted() -> None:
    digest = "$2b$10$" + "a" * 53

    assert digest not in sanitize_message(f"stored digest {digest}")


def test_database_credentials_are_redacted() -> None:
    sanitized = sanitize_message("connecting to mysql+pymysql://app:s3cret@db/places")

    assert "s3cret" not in sanitized
    assert "mysql+pymysql://app:***REDACTED***@db/places" in sanitized


def test_plain_messages_are_untouched() -> None:
    message = "data.list: user_id=3 returned 4 records"

    assert sanitize_message(message) == message
