# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Print a bcrypt digest for seeding ``users.password`` by hand."""

from __future__ import annotations

import argparse
import getpass
import sys

from tokengate.application.services.password_hashing import BcryptPasswordHasher
from tokengate.shared.config.settings import PasswordConfig


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a bcrypt password hash")
    parser.add_argument("password", nargs="?", help="Password to hash (prompted if omitted)")
    parser.add_argument(
        "--rounds", type=int, default=None, help="bcrypt cost factor (default: BCRYPT_ROUNDS)"
    )
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Password must not be empty", file=sys.stderr)
        return 1

    rounds = args.rounds if args.rounds is not None else PasswordConfig().bcrypt_rounds
    hasher = BcryptPasswordHasher(rounds=rounds)
    try:
        print(hasher.hash(password))
    except ValueError as exc:
        print(f"Cannot hash password: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
