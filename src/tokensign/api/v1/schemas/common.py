# Common API response schemas.
# Created: 2026-10-19

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error envelope. ``code`` is an ErrorKind value."""

    detail: str
    code: str | None = None
