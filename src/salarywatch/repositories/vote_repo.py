"""Data access helpers for the vote ledger."""
from __future__ import annotations

import uuid
from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from salarywatch.db.time import utcnow
from salarywatch.models.vote import Vote, VoteType

__all__ = ["VoteRepository"]


class VoteRepository:
    """Ledger of at most one vote per (submission, user) pair."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get(self, submission_id: uuid.UUID, user_id: uuid.UUID) -> Vote | None:
        """Return the vote ``user_id`` cast on ``submission_id``, if any."""
        result = self.session.execute(
            select(Vote).where(Vote.submission_id == submission_id, Vote.user_id == user_id)
        )
        return result.scalars().first()

    def upsert(self, submission_id: uuid.UUID, user_id: uuid.UUID, vote_type: VoteType) -> Vote:
        """Insert a vote, or overwrite the type of the voter's existing one."""
        existing = self.get(submission_id, user_id)
        if existing is None:
            vote = Vote(
                submission_id=submission_id,
                user_id=user_id,
                vote_type=vote_type.value,
                created_at=utcnow(),
            )
            self.session.add(vote)
            return vote

        existing.vote_type = vote_type.value
        existing.updated_at = utcnow()
        return existing

    def remove(self, vote: Vote) -> None:
        """Stage deletion of a single vote."""
        self.session.delete(vote)

    def delete_for_submission(self, submission_id: uuid.UUID) -> int:
        """Delete every vote cast on a submission and return how many went."""
        result = self.session.execute(delete(Vote).where(Vote.submission_id == submission_id))
        return result.rowcount or 0

    def count(self, submission_id: uuid.UUID, vote_type: VoteType) -> int:
        """Count votes of one type on a submission."""
        return self.session.execute(
            select(func.count())
            .select_from(Vote)
            .where(Vote.submission_id == submission_id, Vote.vote_type == vote_type.value)
        ).scalar_one()

    def tally(self, submission_id: uuid.UUID) -> tuple[int, int]:
        """Return ``(upvotes, downvotes)`` for a submission."""
        return self.count(submission_id, VoteType.UP), self.count(submission_id, VoteType.DOWN)

    def downvote_counts(self, submission_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, int]:
        """Return downvote totals keyed by submission id; absent ids have none."""
        ids = list(set(submission_ids))
        if not ids:
            return {}
        rows = self.session.execute(
            select(Vote.submission_id, func.count())
            .where(Vote.submission_id.in_(ids), Vote.vote_type == VoteType.DOWN.value)
            .group_by(Vote.submission_id)
        ).all()
        return {submission_id: int(count) for submission_id, count in rows}
