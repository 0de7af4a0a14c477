# src/salarywatch/api/endpoints/votes.py
"""Vote-related endpoints for the SalaryWatch API."""

import uuid

from fastapi import APIRouter

from salarywatch.api.dependencies import (
    CurrentPrincipalDep,
    OptionalPrincipalDep,
    VotingServiceDep,
)
from salarywatch.schemas.vote import SubmissionVoteSummary, VoteCreate, VoteSummaryResponse

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("", response_model=VoteSummaryResponse)
async def cast_vote(
    vote_data: VoteCreate,
    principal: CurrentPrincipalDep,
    service: VotingServiceDep,
) -> VoteSummaryResponse:
    """Cast or change the caller's vote on a submission."""
    return service.cast_vote(vote_data.submission_id, principal.user_id, vote_data.vote_type)


@router.delete("/{submission_id}", response_model=VoteSummaryResponse)
async def remove_vote(
    submission_id: uuid.UUID,
    principal: CurrentPrincipalDep,
    service: VotingServiceDep,
) -> VoteSummaryResponse:
    """Withdraw the caller's vote on a submission."""
    return service.remove_vote(submission_id, principal.user_id)


@router.get("/{submission_id}/summary", response_model=SubmissionVoteSummary)
async def get_vote_summary(
    submission_id: uuid.UUID,
    principal: OptionalPrincipalDep,
    service: VotingServiceDep,
) -> SubmissionVoteSummary:
    """Public vote tally; includes the caller's own vote when a token is sent."""
    viewer_id = principal.user_id if principal else None
    return service.get_summary(submission_id, viewer_id)
