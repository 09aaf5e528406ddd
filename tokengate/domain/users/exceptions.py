# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from tokengate.shared.errors.base import AuthError, DomainError


class InvalidCredentialsError(DomainError, AuthError):
    # Same code and message for unknown email and wrong password.
    default_code = "invalid_credentials"
    default_status = HTTPStatus.UNAUTHORIZED
    default_message = "Invalid credentials."


class UserAlreadyExistsError(DomainError):
    default_code = "user_already_exists"
    default_status = HTTPStatus.CONFLICT
    default_message = "A user with this email already exists."
