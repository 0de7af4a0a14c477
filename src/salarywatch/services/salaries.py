"""Service-level helpers for salary submissions and their statistics."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy.orm import Session

from salarywatch.db.time import utcnow
from salarywatch.models.submission import SalarySubmission, SubmissionStatus
from salarywatch.repositories.submission_repo import SubmissionRepository
from salarywatch.schemas.salary import (
    SalaryStatsResponse,
    SalarySubmissionCreate,
    SalarySubmissionResponse,
)
from salarywatch.services.errors import NotFoundError

logger = logging.getLogger(__name__)


def percentile(sorted_values: Sequence[float], fraction: float) -> float:
    """Return the linearly interpolated percentile of pre-sorted values.

    ``fraction`` is in ``[0, 1]``; an empty sequence yields ``0.0``.
    """
    if not sorted_values:
        return 0.0
    position = (len(sorted_values) - 1) * fraction
    lower = int(position)
    upper = min(lower + 1, len(sorted_values) - 1)
    weight = position - lower
    return sorted_values[lower] + (sorted_values[upper] - sorted_values[lower]) * weight


def summarize(amounts: Sequence[float]) -> SalaryStatsResponse:
    """Build count, mean, median and quartiles for a set of salary amounts."""
    values = sorted(amounts)
    if not values:
        return SalaryStatsResponse(count=0, average=0.0, median=0.0, p25=0.0, p75=0.0)
    return SalaryStatsResponse(
        count=len(values),
        average=sum(values) / len(values),
        median=percentile(values, 0.5),
        p25=percentile(values, 0.25),
        p75=percentile(values, 0.75),
    )


class SalaryService:
    """Service handling the submission store."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.submissions = SubmissionRepository(db)

    def list_submissions(self) -> list[SalarySubmissionResponse]:
        """Return every submission, newest first, in its public form."""
        return [
            SalarySubmissionResponse.from_submission(submission)
            for submission in self.submissions.list_recent()
        ]

    def create_submission(self, payload: SalarySubmissionCreate) -> SalarySubmission:
        """Store a new submission as PENDING, stamped with the server clock."""
        submission = self.submissions.add(
            SalarySubmission(
                **payload.model_dump(),
                status=SubmissionStatus.PENDING.value,
                submitted_at=utcnow(),
                is_hidden=False,
                is_locked=False,
            )
        )
        self.db.commit()
        logger.info("Salary submission %s received", submission.id)
        return submission

    def get_submission(self, submission_id: uuid.UUID) -> SalarySubmissionResponse:
        """Return one submission in its public form.

        Raises:
            NotFoundError: If the submission does not exist.
        """
        submission = self.submissions.get_by_id(submission_id)
        if submission is None:
            raise NotFoundError("Submission not found")
        return SalarySubmissionResponse.from_submission(submission)

    def compute_stats(
        self,
        *,
        country: str | None = None,
        role: str | None = None,
        level: str | None = None,
    ) -> SalaryStatsResponse:
        """Summarize approved salaries, optionally narrowed by country, role and level."""
        amounts = self.submissions.list_approved_amounts(country=country, role=role, level=level)
        return summarize([float(amount) for amount in amounts])
