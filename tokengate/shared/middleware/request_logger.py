# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from tokengate.shared.config import load_config
from tokengate.shared.logging import (clear_correlation_id, get_correlation_id, logger,
                                      set_correlation_id)

from .client_address import client_address

_SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key", "x-auth-token"}


def _get_user_id() -> int | None:
    user = getattr(g, "user", None)
    return user.user_id if user is not None else None


def _sanitize_headers(headers: dict[str, str]) -> dict[str, str]:
    sanitized = {}
    for key, value in headers.items():
        if key.lower() in _SENSITIVE_HEADERS:
            sanitized[key] = f"<hashed:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"
        else:
            sanitized[key] = value
    return sanitized


def configure_request_logging(app: Flask) -> None:
    config = load_config()
    debug_mode = config.debug_logging
    trust_proxy = config.security.trust_proxy

    @app.before_request
    def _before_request() -> None:
        correlation_id = request.headers.get("X-Request-ID") or secrets.token_urlsafe(8)
        set_correlation_id(correlation_id)
        g.request_start_time = time.perf_counter()

        ip_address = client_address(request, trust_proxy=trust_proxy)
        if debug_mode:
            headers = _sanitize_headers(dict(request.headers))
            logger.debug(
                f"Request started: {request.method} {request.path} "
                f"from {ip_address}, headers={headers}, body_size={request.content_length or 0}"
            )
        else:
            logger.info(f"Request: {request.method} {request.path} from {ip_address}")

    @app.after_request
    def _after_request(response: Response) -> Response:
        start_time = getattr(g, "request_start_time", time.perf_counter())
        duration_ms = (time.perf_counter() - start_time) * 1000.0
        logger.info(
            f"Response: {request.method} {request.path} "
            f"status={response.status_code} duration={duration_ms:.1f}ms user={_get_user_id()}"
        )
        response.headers.setdefault("X-Request-ID", get_correlation_id())
        return response

    @app.teardown_request
    def _teardown_request(_exc: BaseException | None) -> None:
        clear_correlation_id()


__all__ = ["configure_request_logging"]
