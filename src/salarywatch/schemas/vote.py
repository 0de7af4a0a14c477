"""Vote-related Pydantic schemas."""

import uuid

from pydantic import Field

from salarywatch.schemas.common import ApiModel


class VoteCreate(ApiModel):
    """Schema for casting or changing a vote."""

    submission_id: uuid.UUID
    vote_type: str = Field(..., description="UP or DOWN, case-insensitive")


class VoteSummaryResponse(ApiModel):
    """Tally returned after a vote is cast or removed."""

    submission_id: uuid.UUID
    upvotes: int
    downvotes: int
    score: int
    submission_status: str
    current_user_vote: str | None = None


class SubmissionVoteSummary(VoteSummaryResponse):
    """Public tally for a submission, including threshold progress."""

    threshold: int
    threshold_progress: int
    is_hidden: bool
    is_locked: bool
