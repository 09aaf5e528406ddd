# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from tokengate.application.use_cases.users.login_user import LoginUserUseCase
from tokengate.interfaces.http.dto.auth import LoginRequestDTO, LoginResponseDTO
from tokengate.shared.errors.base import AppError, InternalError
from tokengate.shared.errors.validation import raise_validation_error
from tokengate.shared.logging import logger
from tokengate.shared.middleware.client_address import client_address

MISSING_CREDENTIALS_MESSAGE = "Email and password are required."
LOGIN_FAILED_MESSAGE = "Error logging in. Please try again."


class AuthController:
    def __init__(self, *, login_use_case: LoginUserUseCase, trust_proxy: bool = False) -> None:
        self._login_use_case = login_use_case
        self._trust_proxy = trust_proxy

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc, missing_message=MISSING_CREDENTIALS_MESSAGE)

        address = client_address(request, trust_proxy=self._trust_proxy)
        try:
            result = self._login_use_case.execute(dto.email, dto.password, address)
        except AppError:
            raise
        except Exception as exc:
            logger.opt(exception=exc).error(f"auth.login: unexpected failure from {address}")
            raise InternalError(LOGIN_FAILED_MESSAGE) from exc

        payload = LoginResponseDTO(
            token=result.token, user_id=result.user_id, email=result.email
        ).model_dump(by_alias=True)
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
