"""Data access helpers for working with salary submissions."""
from __future__ import annotations

import uuid
from collections.abc import Iterable
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from salarywatch.models.submission import SalarySubmission, SubmissionStatus

__all__ = ["SubmissionRepository"]


class SubmissionRepository:
    """Thin wrapper around database access for submission entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, submission_id: uuid.UUID) -> SalarySubmission | None:
        """Return a submission by identifier."""
        return self.session.get(SalarySubmission, submission_id)

    def get_many(self, submission_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, SalarySubmission]:
        """Return the submissions that still exist among ``submission_ids``, keyed by id."""
        ids = list(set(submission_ids))
        if not ids:
            return {}
        result = self.session.execute(select(SalarySubmission).where(SalarySubmission.id.in_(ids)))
        return {submission.id: submission for submission in result.scalars()}

    def list_recent(self) -> list[SalarySubmission]:
        """Return all submissions, newest first."""
        result = self.session.execute(
            select(SalarySubmission).order_by(SalarySubmission.submitted_at.desc())
        )
        return list(result.scalars())

    def list_approved_amounts(
        self,
        *,
        country: str | None = None,
        role: str | None = None,
        level: str | None = None,
    ) -> list[Decimal]:
        """Return salary amounts of approved submissions matching the filters.

        Filters compare case-insensitively for equality; ``None`` skips a filter.
        """
        stmt = select(SalarySubmission.salary_amount).where(
            SalarySubmission.status == SubmissionStatus.APPROVED.value
        )
        for column, value in (
            (SalarySubmission.country, country),
            (SalarySubmission.role, role),
            (SalarySubmission.level, level),
        ):
            if value:
                stmt = stmt.where(func.lower(column) == value.strip().lower())
        return list(self.session.execute(stmt).scalars())

    def add(self, submission: SalarySubmission) -> SalarySubmission:
        """Stage a new submission and flush it so its id is assigned."""
        self.session.add(submission)
        self.session.flush()
        return submission

    def delete(self, submission: SalarySubmission) -> None:
        """Stage deletion of a submission."""
        self.session.delete(submission)
