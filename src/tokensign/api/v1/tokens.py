# Tokens router — sign payloads, verify tokens.
# Created: 2026-10-19

from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends

from tokensign.api.deps import get_default_max_age, get_signer, require_api_token
from tokensign.api.v1.schemas.common import ErrorResponse
from tokensign.api.v1.schemas.tokens import (
    SignRequest,
    SignResponse,
    VerifyRequest,
    VerifyResponse,
)
from tokensign.signer import Signer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Tokens"])


@router.post(
    "/tokens/sign",
    response_model=SignResponse,
    dependencies=[Depends(require_api_token)],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def sign_payload(body: SignRequest, signer: Signer = Depends(get_signer)):
    """Sign a JSON payload and return the token. Requires the API bearer token."""
    token = signer.sign(body.payload)
    logger.info("Issued token (%d chars)", len(token))
    return SignResponse(token=token)


@router.post(
    "/tokens/verify",
    response_model=VerifyResponse,
    responses={401: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def verify_token(
    body: VerifyRequest,
    signer: Signer = Depends(get_signer),
    default_max_age: timedelta = Depends(get_default_max_age),
):
    """Verify a token and return its payload.

    ``max_age_seconds`` falls back to the configured default; 0 disables expiry.
    """
    if body.max_age_seconds is None:
        max_age = default_max_age
    else:
        max_age = timedelta(seconds=body.max_age_seconds)
    payload = signer.verify(body.token, max_age=max_age)
    return VerifyResponse(payload=payload)
