# src/salarywatch/api/endpoints/reports.py
"""Report and moderation endpoints for the SalaryWatch API."""

import uuid
from datetime import date

from fastapi import APIRouter, Query, status

from salarywatch.api.dependencies import CurrentPrincipalDep, ModeratorDep, ReportServiceDep
from salarywatch.schemas.common import MessageResponse
from salarywatch.schemas.report import (
    ReportCreate,
    ReportDetailResponse,
    ReportListResponse,
    ReportReviewRequest,
    ReportReviewResponse,
)
from salarywatch.services.report_filters import DEFAULT_PAGE_SIZE, ReportQuery

router = APIRouter(prefix="/reports", tags=["reports", "moderation"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_report(
    report_data: ReportCreate,
    principal: CurrentPrincipalDep,
    service: ReportServiceDep,
) -> MessageResponse:
    """File a report against a submission."""
    report = service.create_report(report_data.submission_id, principal.user_id, report_data.reason)
    return MessageResponse(message="Report created", id=report.id)


@router.get("", response_model=ReportListResponse)
async def list_reports(
    _moderator: ModeratorDep,
    service: ReportServiceDep,
    report_status: str | None = Query(None, alias="status"),
    reason: str | None = Query(None),
    q: str | None = Query(None),
    sort: str = Query("latest"),
    date_from: date | None = Query(None, alias="from"),
    date_to: date | None = Query(None, alias="to"),
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
) -> ReportListResponse:
    """List reports for moderators with filtering, ordering and paging."""
    query = ReportQuery.build(
        status=report_status,
        reason=reason,
        q=q,
        date_from=date_from,
        date_to=date_to,
        sort=sort,
        page=page,
        page_size=page_size,
    )
    return service.list_reports(query)


@router.get("/{report_id}", response_model=ReportDetailResponse)
async def get_report_detail(
    report_id: uuid.UUID,
    _moderator: ModeratorDep,
    service: ReportServiceDep,
) -> ReportDetailResponse:
    """Return a report with its submission, vote tally and report history."""
    return service.get_detail(report_id)


@router.patch("/{report_id}/review", response_model=ReportReviewResponse)
async def review_report(
    report_id: uuid.UUID,
    payload: ReportReviewRequest,
    moderator: ModeratorDep,
    service: ReportServiceDep,
) -> ReportReviewResponse:
    """Set a report's status and apply a moderation action to its submission."""
    return service.review_report(report_id, moderator.user_id, payload)


@router.delete("/{report_id}", response_model=MessageResponse)
async def delete_report(
    report_id: uuid.UUID,
    _moderator: ModeratorDep,
    service: ReportServiceDep,
) -> MessageResponse:
    """Delete a report without touching its submission."""
    service.delete_report(report_id)
    return MessageResponse(message="Report deleted", id=report_id)
