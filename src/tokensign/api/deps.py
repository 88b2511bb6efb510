# Shared FastAPI dependencies for the API layer.
# Created: 2026-10-19

from __future__ import annotations

import hmac
from datetime import timedelta

from fastapi import HTTPException, Request

from tokensign.signer import Signer


def get_signer(request: Request) -> Signer:
    """Return the Signer built for this application by ``create_api_app``."""
    return request.app.state.signer


def get_default_max_age(request: Request) -> timedelta:
    return request.app.state.default_max_age


async def require_api_token(request: Request) -> None:
    """Require ``Authorization: Bearer <api token>``.

    Minting tokens is only for holders of the configured API token. With no
    API token configured, signing over HTTP is disabled.
    """
    expected: str | None = request.app.state.api_token
    if not expected:
        raise HTTPException(status_code=403, detail="Signing is disabled: no API token configured")

    auth_header = request.headers.get("Authorization", "")
    bearer = (
        auth_header.removeprefix("Bearer ").strip() if auth_header.startswith("Bearer ") else ""
    )
    if not bearer or not hmac.compare_digest(bearer.encode("utf-8"), expected.encode("utf-8")):
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
