"""System endpoints for the SalaryWatch API."""

from __future__ import annotations

from fastapi import APIRouter

from salarywatch.api.dependencies import ThresholdDep
from salarywatch.core.settings import settings

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config(threshold: ThresholdDep) -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
        "voting": {
            "approvalScoreThreshold": threshold,
        },
    }
