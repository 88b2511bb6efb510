# Health router.
# Created: 2026-10-19

from __future__ import annotations

from fastapi import APIRouter, Depends

from tokensign.api.deps import get_signer
from tokensign.api.v1.schemas.health import HealthSummary
from tokensign.signer import Signer

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthSummary)
async def get_health_status(signer: Signer = Depends(get_signer)):
    """Report that the signer is configured and which digest it uses."""
    return HealthSummary(digest=signer.digest)
