"""
Pydantic schemas for the report queue and moderator review.

These schemas handle:
- User-submitted reports against salary submissions
- The moderator list view with denormalized per-submission counts
- Report detail with vote tally and report history
- Review requests that apply a moderation action
"""

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import Field, StringConstraints

from salarywatch.models.report import REPORT_NOTE_MAX_LENGTH, REPORT_REASON_MAX_LENGTH
from salarywatch.schemas.common import ApiModel
from salarywatch.schemas.salary import SalarySubmissionResponse

ReportReason = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=REPORT_REASON_MAX_LENGTH),
]


class ReportCreate(ApiModel):
    """Schema for filing a report against a submission."""

    submission_id: uuid.UUID
    reason: ReportReason


class ReportListItem(ApiModel):
    """One row of the moderator report list."""

    id: uuid.UUID
    submission_id: uuid.UUID
    user_id: uuid.UUID
    reason: str
    created_at: datetime
    submission_status: str
    report_status: str
    reports_for_submission: int
    downvotes_for_submission: int


class ReportListResponse(ApiModel):
    """Paged moderator report list."""

    items: list[ReportListItem]
    total: int
    page: int
    page_size: int


class ReportHistoryItem(ApiModel):
    """A report previously filed against the same submission."""

    report_id: uuid.UUID
    reason: str
    status: str
    created_at: datetime
    user_id: uuid.UUID


class ReportVoteSummary(ApiModel):
    """Vote tally shown alongside a report."""

    upvotes: int
    downvotes: int
    score: int
    threshold: int
    threshold_progress: int


class ReportDetailResponse(ApiModel):
    """Full report with its submission, tally and history."""

    report_id: uuid.UUID
    submission_id: uuid.UUID
    report_status: str
    reason: str
    internal_note: str | None
    resolution_action: str | None
    created_at: datetime
    user_id: uuid.UUID
    reviewed_by_user_id: uuid.UUID | None = None
    reviewed_at: datetime | None = None
    submission: SalarySubmissionResponse
    vote_summary: ReportVoteSummary
    report_history: list[ReportHistoryItem]


class ReportReviewRequest(ApiModel):
    """Moderator decision on a report.

    ``status`` and ``moderation_action`` are validated against their enums
    by the review service so that unknown values produce a domain error.
    """

    status: str
    moderation_action: str | None = None
    internal_note: str | None = Field(None, max_length=REPORT_NOTE_MAX_LENGTH)


class ReportReviewResponse(ApiModel):
    """Outcome of a review."""

    message: str
    report_id: uuid.UUID
    status: str
    moderation_action: str | None
