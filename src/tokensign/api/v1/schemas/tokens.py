# Token schemas.
# Created: 2026-10-19

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SignRequest(BaseModel):
    """Payload to sign. Any JSON value is accepted."""

    payload: Any = None


class SignResponse(BaseModel):
    token: str


class VerifyRequest(BaseModel):
    """Token verification request."""

    token: str = Field(..., min_length=1, max_length=65536)
    max_age_seconds: float | None = Field(
        default=None, ge=0, le=1e12, description="Maximum token age; 0 disables expiry"
    )


class VerifyResponse(BaseModel):
    payload: Any = None
