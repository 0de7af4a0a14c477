"""Salary submission Pydantic schemas."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import Field

from salarywatch.models.submission import SalarySubmission
from salarywatch.schemas.common import ApiModel


class SalarySubmissionCreate(ApiModel):
    """Schema for submitting a new salary record.

    Status and submission time are assigned by the server; any values the
    client sends for them are ignored.
    """

    country: str = Field(..., min_length=1, max_length=100)
    company: str | None = Field(None, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    level: str | None = Field(None, max_length=100)
    experience_years: int = Field(0, ge=0, le=80)
    salary_amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    currency: str = Field(..., min_length=1, max_length=8)
    period: str | None = Field(None, max_length=16)
    is_anonymous: bool = True


class SalarySubmissionResponse(ApiModel):
    """Public view of a submission; the company is masked for anonymous records."""

    id: uuid.UUID
    country: str | None
    company: str | None
    role: str | None
    level: str | None
    experience_years: int
    salary_amount: float
    currency: str | None
    period: str | None
    is_anonymous: bool
    status: str
    submitted_at: datetime
    is_hidden: bool
    is_locked: bool

    @classmethod
    def from_submission(cls, submission: SalarySubmission) -> "SalarySubmissionResponse":
        """Build the public view of ``submission``."""
        return cls(
            id=submission.id,
            country=submission.country,
            company=submission.display_company,
            role=submission.role,
            level=submission.level,
            experience_years=submission.experience_years,
            salary_amount=float(submission.salary_amount),
            currency=submission.currency,
            period=submission.period,
            is_anonymous=submission.is_anonymous,
            status=submission.status,
            submitted_at=submission.submitted_at,
            is_hidden=submission.is_hidden,
            is_locked=submission.is_locked,
        )


class SalaryStatsResponse(ApiModel):
    """Distribution of approved salaries matching the requested filters."""

    count: int
    average: float
    median: float
    p25: float
    p75: float
