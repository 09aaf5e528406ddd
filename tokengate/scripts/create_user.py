# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Insert a login-capable user into the credential store."""

from __future__ import annotations

import argparse
import getpass
import re
import sys

from tokengate.application.services.password_hashing import BcryptPasswordHasher
from tokengate.domain.users.exceptions import UserAlreadyExistsError
from tokengate.infrastructure.db import init_db
from tokengate.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemyUserRepository
from tokengate.shared.config import load_config
from tokengate.shared.logging import logger, setup_logging

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value)) and len(value) <= 255


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user that can log in")
    parser.add_argument("email", help="Login email (unique)")
    parser.add_argument("--password", help="Password (prompted if omitted)")
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(debug_mode=config.debug_logging)

    email = args.email.strip()
    if not is_valid_email(email):
        print(f"Invalid email address: {email}", file=sys.stderr)
        return 1

    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Password must not be empty", file=sys.stderr)
        return 1

    init_db()
    hasher = BcryptPasswordHasher(rounds=config.password.bcrypt_rounds)
    try:
        user = SqlAlchemyUserRepository().add(email, hasher.hash(password))
    except UserAlreadyExistsError:
        print(f"A user with email {email} already exists", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Cannot hash password: {exc}", file=sys.stderr)
        return 1

    logger.info(f"create_user: created user_id={user.id}")
    print(f"Created user {user.id} <{user.email}>")
    return 0


if __name__ == "__main__":
    sys.exit(main())
