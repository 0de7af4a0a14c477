# src/salarywatch/services/reports.py
"""Report queue and moderator review for SalaryWatch."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from salarywatch.db.time import utcnow
from salarywatch.models.report import ModerationAction, Report, ReportStatus
from salarywatch.models.submission import SalarySubmission, SubmissionStatus
from salarywatch.repositories.report_repo import ReportRepository
from salarywatch.repositories.submission_repo import SubmissionRepository
from salarywatch.repositories.vote_repo import VoteRepository
from salarywatch.schemas.report import (
    ReportDetailResponse,
    ReportHistoryItem,
    ReportListItem,
    ReportListResponse,
    ReportReviewRequest,
    ReportReviewResponse,
)
from salarywatch.schemas.salary import SalarySubmissionResponse
from salarywatch.services.errors import InvalidInputError, InvalidStateError, NotFoundError
from salarywatch.services.report_filters import (
    ReportQuery,
    count_by_submission,
    filter_reports,
    paginate,
    search_reports,
    sort_reports,
)
from salarywatch.services.voting import LOCKED_MESSAGE, VotingService

logger = logging.getLogger(__name__)

UNKNOWN_SUBMISSION_STATUS = "UNKNOWN"


def parse_report_status(raw: str | None) -> ReportStatus:
    """Parse a review status, ignoring case and surrounding space."""
    if raw is None or not raw.strip():
        raise InvalidInputError("Status is required")
    try:
        return ReportStatus(raw.strip().upper())
    except ValueError as err:
        raise InvalidInputError("Invalid report status") from err


def parse_moderation_action(raw: str | None) -> ModerationAction:
    """Parse a moderation action; a missing or blank value means NONE."""
    if raw is None or not raw.strip():
        return ModerationAction.NONE
    try:
        return ModerationAction(raw.strip().upper())
    except ValueError as err:
        raise InvalidInputError("Invalid moderation action") from err


class ReportService:
    """Service handling report intake and moderator decisions."""

    def __init__(self, db: Session, threshold: int) -> None:
        self.db = db
        self.reports = ReportRepository(db)
        self.submissions = SubmissionRepository(db)
        self.votes = VoteRepository(db)
        self.voting = VotingService(db, threshold)

    def _get_report(self, report_id: uuid.UUID) -> Report:
        report = self.reports.get_by_id(report_id)
        if report is None:
            raise NotFoundError("Report not found")
        return report

    def _get_submission(self, submission_id: uuid.UUID) -> SalarySubmission:
        submission = self.submissions.get_by_id(submission_id)
        if submission is None:
            raise NotFoundError("Submission not found")
        return submission

    def create_report(self, submission_id: uuid.UUID, reporter_id: uuid.UUID, reason: str) -> Report:
        """File a NEW report against an unlocked submission.

        Raises:
            NotFoundError: If the submission does not exist.
            InvalidStateError: If the submission is locked.
        """
        submission = self._get_submission(submission_id)
        if submission.is_locked:
            raise InvalidStateError(LOCKED_MESSAGE)

        report = self.reports.add(
            Report(
                submission_id=submission.id,
                user_id=reporter_id,
                reason=reason.strip(),
                created_at=utcnow(),
                status=ReportStatus.NEW.value,
            )
        )
        self.db.commit()
        logger.info("Report %s filed against submission %s", report.id, submission.id)
        return report

    def list_reports(self, query: ReportQuery) -> ReportListResponse:
        """Return one page of the filtered, ordered report queue.

        ``reportsForSubmission`` counts the reports that pass the status,
        reason and date filters; the free-text filter does not narrow it.
        """
        filtered = filter_reports(self.reports.list_all(), query)
        report_counts = count_by_submission(filtered)
        submission_ids = {report.submission_id for report in filtered}
        submissions = self.submissions.get_many(submission_ids)
        downvote_counts = self.votes.downvote_counts(submission_ids)

        matching = search_reports(filtered, query.q, submissions)
        ordered = sort_reports(matching, query.sort, report_counts, downvote_counts)
        page = paginate(ordered, query.page, query.page_size)

        items = []
        for report in page:
            submission = submissions.get(report.submission_id)
            items.append(
                ReportListItem(
                    id=report.id,
                    submission_id=report.submission_id,
                    user_id=report.user_id,
                    reason=report.reason,
                    created_at=report.created_at,
                    submission_status=(
                        submission.status if submission else UNKNOWN_SUBMISSION_STATUS
                    ),
                    report_status=report.status,
                    reports_for_submission=report_counts.get(report.submission_id, 0),
                    downvotes_for_submission=downvote_counts.get(report.submission_id, 0),
                )
            )

        return ReportListResponse(
            items=items,
            total=len(ordered),
            page=query.page,
            page_size=query.page_size,
        )

    def get_detail(self, report_id: uuid.UUID) -> ReportDetailResponse:
        """Return a report with its submission, tally and report history.

        Raises:
            NotFoundError: If the report or its submission does not exist.
        """
        report = self._get_report(report_id)
        submission = self._get_submission(report.submission_id)

        history = [
            ReportHistoryItem(
                report_id=item.id,
                reason=item.reason,
                status=item.status,
                created_at=item.created_at,
                user_id=item.user_id,
            )
            for item in self.reports.list_for_submission(submission.id)
        ]

        return ReportDetailResponse(
            report_id=report.id,
            submission_id=report.submission_id,
            report_status=report.status,
            reason=report.reason,
            internal_note=report.internal_note,
            resolution_action=report.resolution_action,
            created_at=report.created_at,
            user_id=report.user_id,
            reviewed_by_user_id=report.reviewed_by_user_id,
            reviewed_at=report.reviewed_at,
            submission=SalarySubmissionResponse.from_submission(submission),
            vote_summary=self.voting.tally(submission.id),
            report_history=history,
        )

    def apply_moderation_action(self, submission: SalarySubmission, action: ModerationAction) -> None:
        """Stage the side effect of ``action`` on ``submission``.

        REVERT_APPROVAL leaves the votes in place, so the next vote change
        may approve the submission again.
        """
        if action is ModerationAction.HIDE:
            submission.is_hidden = True
        elif action is ModerationAction.UNHIDE:
            submission.is_hidden = False
        elif action is ModerationAction.LOCK:
            submission.is_locked = True
        elif action is ModerationAction.UNLOCK:
            submission.is_locked = False
        elif action is ModerationAction.REVERT_APPROVAL:
            if submission.status.upper() == SubmissionStatus.APPROVED.value:
                submission.status = SubmissionStatus.PENDING.value
        elif action is ModerationAction.DELETE_SUBMISSION:
            removed = self.votes.delete_for_submission(submission.id)
            self.submissions.delete(submission)
            logger.info("Deleting submission %s and %d vote(s)", submission.id, removed)

    def review_report(
        self,
        report_id: uuid.UUID,
        reviewer_id: uuid.UUID,
        payload: ReportReviewRequest,
    ) -> ReportReviewResponse:
        """Apply a moderator decision to a report and its submission.

        The submission side effect and the report update are committed
        together. The report is updated even when the action deleted the
        submission.

        Raises:
            InvalidInputError: For a blank or unknown status or action.
            NotFoundError: If the report or its submission does not exist.
        """
        new_status = parse_report_status(payload.status)
        action = parse_moderation_action(payload.moderation_action)

        report = self._get_report(report_id)
        submission = self._get_submission(report.submission_id)

        self.apply_moderation_action(submission, action)

        note = payload.internal_note
        report.status = new_status.value
        report.internal_note = note.strip() if note and note.strip() else None
        report.resolution_action = None if action is ModerationAction.NONE else action.value
        report.reviewed_by_user_id = reviewer_id
        report.reviewed_at = utcnow()
        self.db.commit()

        logger.info(
            "Report %s reviewed by %s: status=%s action=%s",
            report.id,
            reviewer_id,
            report.status,
            action.value,
        )
        return ReportReviewResponse(
            message="Report updated",
            report_id=report.id,
            status=report.status,
            moderation_action=report.resolution_action,
        )

    def delete_report(self, report_id: uuid.UUID) -> None:
        """Hard-delete a report; nothing else is touched.

        Raises:
            NotFoundError: If the report does not exist.
        """
        report = self._get_report(report_id)
        self.reports.delete(report)
        self.db.commit()
        logger.info("Report %s deleted", report_id)
