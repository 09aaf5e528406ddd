# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import traceback
from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from tokengate.shared.config import load_config
from tokengate.shared.logging import logger

from .base import AppError, InternalError, NotFoundError, RateLimitError

_UNMATCHED = (HTTPStatus.NOT_FOUND, HTTPStatus.METHOD_NOT_ALLOWED)


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    if isinstance(error, RateLimitError) and error.retry_after is not None:
        response.headers["Retry-After"] = str(error.retry_after)
    if error.status == HTTPStatus.UNAUTHORIZED:
        response.headers["WWW-Authenticate"] = "Bearer"
    return response, error.status


def register_error_handler(app: Flask) -> None:
    config = load_config()
    show_details = config.show_error_details

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.debug(f"Handled application error {exc.code} on {request.method} {request.path}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        # Unknown paths and unsupported methods on known paths look the same.
        if exc.code in _UNMATCHED:
            return handle_app_error(NotFoundError())
        status = HTTPStatus(exc.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        return jsonify({"error": status.phrase.lower().replace(" ", "_"), "message": exc.description}), status

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.opt(exception=exc).error(
            f"Unhandled application error: {type(exc).__name__} on {request.method} {request.path}"
        )
        error = InternalError()
        payload = error.to_dict()
        if show_details:
            payload["detail"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
        return jsonify(payload), error.status


__all__ = ["handle_app_error", "register_error_handler"]
