# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from tokengate.application.use_cases.data.create_data import CreateDataUseCase
from tokengate.application.use_cases.data.list_data import ListDataUseCase
from tokengate.interfaces.http.dto.data import CreateDataRequestDTO, DataRecordDTO
from tokengate.interfaces.http.middleware.bearer_auth import BearerAuth, current_claims
from tokengate.shared.errors.base import AppError, InternalError
from tokengate.shared.errors.validation import raise_validation_error
from tokengate.shared.logging import logger

MISSING_FIELDS_MESSAGE = "Name, city, and country are required."
INVALID_FIELDS_MESSAGE = "Validation error creating data."
FETCH_FAILED_MESSAGE = "Error fetching data. Please try again."
CREATE_FAILED_MESSAGE = "Error creating data. Please try again."


class DataController:
    def __init__(
        self,
        *,
        list_use_case: ListDataUseCase,
        create_use_case: CreateDataUseCase,
        auth: BearerAuth,
    ) -> None:
        self._list_use_case = list_use_case
        self._create_use_case = create_use_case
        self._auth = auth

    def list_data(self) -> tuple[Response, int]:
        claims = current_claims()
        logger.info(f"data.list: user_id={claims.user_id} email={claims.email}")
        try:
            records = self._list_use_case.execute()
        except AppError:
            raise
        except Exception as exc:
            logger.opt(exception=exc).error("data.list: unexpected failure")
            raise InternalError(FETCH_FAILED_MESSAGE) from exc
        return jsonify([DataRecordDTO.from_domain(r).to_json() for r in records]), 200

    def create_data(self) -> tuple[Response, int]:
        try:
            dto = CreateDataRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(
                exc,
                missing_message=MISSING_FIELDS_MESSAGE,
                invalid_message=INVALID_FIELDS_MESSAGE,
            )

        claims = current_claims()
        try:
            record = self._create_use_case.execute(
                dto.name, dto.city, dto.country, created_by=claims.user_id
            )
        except AppError:
            raise
        except Exception as exc:
            logger.opt(exception=exc).error("data.create: unexpected failure")
            raise InternalError(CREATE_FAILED_MESSAGE) from exc
        return jsonify(DataRecordDTO.from_domain(record).to_json()), 201

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("data", __name__)
        bp.add_url_rule(
            "/data", endpoint="list", view_func=self._auth(self.list_data), methods=["GET"]
        )
        bp.add_url_rule(
            "/data", endpoint="create", view_func=self._auth(self.create_data), methods=["POST"]
        )
        return bp
