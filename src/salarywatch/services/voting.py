# src/salarywatch/services/voting.py
"""Vote ledger operations and the score-to-status rule."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from salarywatch.models.submission import SalarySubmission, SubmissionStatus
from salarywatch.models.vote import VoteType
from salarywatch.repositories.submission_repo import SubmissionRepository
from salarywatch.repositories.vote_repo import VoteRepository
from salarywatch.schemas.report import ReportVoteSummary
from salarywatch.schemas.vote import SubmissionVoteSummary, VoteSummaryResponse
from salarywatch.services.errors import InvalidInputError, InvalidStateError, NotFoundError

logger = logging.getLogger(__name__)

LOCKED_MESSAGE = "Submission is locked for moderation"


def normalize_vote_type(raw: str) -> VoteType:
    """Parse a client-supplied vote type, ignoring case and surrounding space.

    Raises:
        InvalidInputError: If the value is neither UP nor DOWN.
    """
    try:
        return VoteType(raw.strip().upper())
    except ValueError as err:
        raise InvalidInputError("VoteType must be UP or DOWN") from err


def resolve_status(upvotes: int, downvotes: int, threshold: int) -> SubmissionStatus:
    """Return the status a submission should hold for the given tally."""
    if upvotes - downvotes >= threshold:
        return SubmissionStatus.APPROVED
    return SubmissionStatus.PENDING


def threshold_progress(upvotes: int, downvotes: int) -> int:
    """Return the non-negative part of the score, used for progress bars."""
    return max(upvotes - downvotes, 0)


class VotingService:
    """Service handling vote mutations and approval status transitions.

    The approval threshold is supplied by the caller for every instance so
    the rule never reads configuration on its own.
    """

    def __init__(self, db: Session, threshold: int) -> None:
        self.db = db
        self.threshold = threshold
        self.submissions = SubmissionRepository(db)
        self.votes = VoteRepository(db)

    def _get_submission(self, submission_id: uuid.UUID) -> SalarySubmission:
        submission = self.submissions.get_by_id(submission_id)
        if submission is None:
            raise NotFoundError("Submission not found")
        return submission

    def _get_unlocked_submission(self, submission_id: uuid.UUID) -> SalarySubmission:
        submission = self._get_submission(submission_id)
        if submission.is_locked:
            logger.debug("Rejected vote change on locked submission %s", submission_id)
            raise InvalidStateError(LOCKED_MESSAGE)
        return submission

    def cast_vote(
        self,
        submission_id: uuid.UUID,
        voter_id: uuid.UUID,
        vote_type: str,
    ) -> VoteSummaryResponse:
        """Record ``voter_id``'s vote, replacing any earlier one, and recompute status.

        Args:
            submission_id: Submission being voted on.
            voter_id: Identity of the caller.
            vote_type: ``UP`` or ``DOWN`` in any case.

        Returns:
            The tally after the vote, with the caller's vote echoed back.

        Raises:
            InvalidInputError: For an unknown vote type.
            NotFoundError: If the submission does not exist.
            InvalidStateError: If the submission is locked.
        """
        normalized = normalize_vote_type(vote_type)
        submission = self._get_unlocked_submission(submission_id)

        self.votes.upsert(submission.id, voter_id, normalized)
        self.db.commit()

        return self.recompute_status(submission, current_user_vote=normalized.value)

    def remove_vote(self, submission_id: uuid.UUID, voter_id: uuid.UUID) -> VoteSummaryResponse:
        """Delete the caller's vote and recompute status.

        Raises:
            NotFoundError: If the submission or the caller's vote does not exist.
            InvalidStateError: If the submission is locked.
        """
        submission = self._get_unlocked_submission(submission_id)

        vote = self.votes.get(submission.id, voter_id)
        if vote is None:
            raise NotFoundError("Vote not found")

        self.votes.remove(vote)
        self.db.commit()

        return self.recompute_status(submission, current_user_vote=None)

    def recompute_status(
        self,
        submission: SalarySubmission,
        current_user_vote: str | None = None,
    ) -> VoteSummaryResponse:
        """Apply the score-to-status rule to ``submission``.

        Writes only when the target status differs from the stored one, so
        repeated calls with an unchanged vote set never touch the row.

        The vote write that precedes this call is committed separately; two
        concurrent voters may each recompute from a tally that misses the
        other's vote.
        """
        upvotes, downvotes = self.votes.tally(submission.id)
        target = resolve_status(upvotes, downvotes, self.threshold)

        if submission.status.upper() != target.value:
            logger.info(
                "Submission %s moved %s -> %s (score %d, threshold %d)",
                submission.id,
                submission.status,
                target.value,
                upvotes - downvotes,
                self.threshold,
            )
            submission.status = target.value
            self.db.commit()

        return VoteSummaryResponse(
            submission_id=submission.id,
            upvotes=upvotes,
            downvotes=downvotes,
            score=upvotes - downvotes,
            submission_status=submission.status,
            current_user_vote=current_user_vote,
        )

    def get_summary(
        self,
        submission_id: uuid.UUID,
        viewer_id: uuid.UUID | None = None,
    ) -> SubmissionVoteSummary:
        """Return the public tally for a submission without writing anything.

        Locked submissions are readable; ``viewer_id`` selects whose vote is
        echoed back as ``current_user_vote``.
        """
        submission = self._get_submission(submission_id)

        current_user_vote = None
        if viewer_id is not None:
            vote = self.votes.get(submission.id, viewer_id)
            current_user_vote = vote.vote_type if vote else None

        upvotes, downvotes = self.votes.tally(submission.id)
        return SubmissionVoteSummary(
            submission_id=submission.id,
            upvotes=upvotes,
            downvotes=downvotes,
            score=upvotes - downvotes,
            submission_status=submission.status,
            current_user_vote=current_user_vote,
            threshold=self.threshold,
            threshold_progress=threshold_progress(upvotes, downvotes),
            is_hidden=submission.is_hidden,
            is_locked=submission.is_locked,
        )

    def tally(self, submission_id: uuid.UUID) -> ReportVoteSummary:
        """Return the tally block shown on the moderator report detail."""
        upvotes, downvotes = self.votes.tally(submission_id)
        return ReportVoteSummary(
            upvotes=upvotes,
            downvotes=downvotes,
            score=upvotes - downvotes,
            threshold=self.threshold,
            threshold_progress=threshold_progress(upvotes, downvotes),
        )
