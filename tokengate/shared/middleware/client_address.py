# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Request


def client_address(req: Request, *, trust_proxy: bool = False) -> str:
    """Address used to key per-client state such as the login rate limiter.

    ``X-Forwarded-For`` is client-controlled, so it is only honored when the
    service sits behind a proxy that sets it.
    """
    if trust_proxy:
        forwarded = req.headers.get("X-Forwarded-For", "").split(",")[0].strip()
        if forwarded:
            return forwarded
    return req.remote_addr or "unknown"


__all__ = ["client_address"]
