# src/salarywatch/api/endpoints/salaries.py
"""Salary submission endpoints for the SalaryWatch API."""

import uuid

from fastapi import APIRouter, Query, status

from salarywatch.api.dependencies import CurrentPrincipalDep, SalaryServiceDep
from salarywatch.schemas.common import MessageResponse
from salarywatch.schemas.salary import (
    SalaryStatsResponse,
    SalarySubmissionCreate,
    SalarySubmissionResponse,
)

router = APIRouter(prefix="/salaries", tags=["salaries"])


@router.get("", response_model=list[SalarySubmissionResponse])
async def list_salaries(
    _principal: CurrentPrincipalDep,
    service: SalaryServiceDep,
) -> list[SalarySubmissionResponse]:
    """List every submission, newest first."""
    return service.list_submissions()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def submit_salary(
    payload: SalarySubmissionCreate,
    service: SalaryServiceDep,
) -> MessageResponse:
    """Submit a salary record; it always starts out PENDING."""
    submission = service.create_submission(payload)
    return MessageResponse(message="Submitted (PENDING)", id=submission.id)


# Declared before /{submission_id} so "stats" is not parsed as an id.
@router.get("/stats", response_model=SalaryStatsResponse)
async def get_salary_stats(
    service: SalaryServiceDep,
    country: str | None = Query(None),
    role: str | None = Query(None),
    level: str | None = Query(None),
) -> SalaryStatsResponse:
    """Return salary statistics computed from APPROVED submissions only."""
    return service.compute_stats(country=country, role=role, level=level)


@router.get("/{submission_id}", response_model=SalarySubmissionResponse)
async def get_salary(
    submission_id: uuid.UUID,
    service: SalaryServiceDep,
) -> SalarySubmissionResponse:
    """Return one submission with the company masked for anonymous records."""
    return service.get_submission(submission_id)
