"""Data access helpers for the report queue."""
from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from salarywatch.models.report import Report

__all__ = ["ReportRepository"]


class ReportRepository:
    """Thin wrapper around database access for report entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, report_id: uuid.UUID) -> Report | None:
        """Return a report by identifier."""
        return self.session.get(Report, report_id)

    def list_all(self) -> list[Report]:
        """Return every report, newest first."""
        result = self.session.execute(select(Report).order_by(Report.created_at.desc()))
        return list(result.scalars())

    def list_for_submission(self, submission_id: uuid.UUID) -> list[Report]:
        """Return all reports filed against a submission, newest first."""
        result = self.session.execute(
            select(Report)
            .where(Report.submission_id == submission_id)
            .order_by(Report.created_at.desc())
        )
        return list(result.scalars())

    def add(self, report: Report) -> Report:
        """Stage a new report and flush it so its id is assigned."""
        self.session.add(report)
        self.session.flush()
        return report

    def delete(self, report: Report) -> None:
        """Stage deletion of a report."""
        self.session.delete(report)
