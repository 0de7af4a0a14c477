# mypy: ignore-errors
"""Service-level tests for the vote ledger and the score-to-status rule."""

import uuid
from unittest.mock import patch

import pytest
from sqlalchemy import func, select

from salarywatch.models import SubmissionStatus, Vote, VoteType
from salarywatch.services.errors import InvalidInputError, InvalidStateError, NotFoundError
from salarywatch.services.voting import (
    VotingService,
    normalize_vote_type,
    resolve_status,
    threshold_progress,
)


@pytest.mark.parametrize(
    ("upvotes", "downvotes", "expected"),
    [
        (0, 0, SubmissionStatus.PENDING),
        (2, 0, SubmissionStatus.PENDING),
        (3, 0, SubmissionStatus.APPROVED),
        (5, 2, SubmissionStatus.APPROVED),
        (5, 3, SubmissionStatus.PENDING),
    ],
)
def test_resolve_status(upvotes, downvotes, expected) -> None:
    assert resolve_status(upvotes, downvotes, threshold=3) is expected


def test_threshold_progress_never_negative() -> None:
    assert threshold_progress(1, 4) == 0
    assert threshold_progress(4, 1) == 3


@pytest.mark.parametrize("raw", ["up", " Down ", "UP"])
def test_normalize_vote_type_accepts_any_case(raw) -> None:
    assert normalize_vote_type(raw) in (VoteType.UP, VoteType.DOWN)


@pytest.mark.parametrize("raw", ["", "sideways", "1"])
def test_normalize_vote_type_rejects_unknown(raw) -> None:
    with pytest.raises(InvalidInputError):
        normalize_vote_type(raw)


def _vote_rows(db_session, submission_id) -> int:
    return db_session.execute(
        select(func.count()).select_from(Vote).where(Vote.submission_id == submission_id)
    ).scalar_one()


def test_repeat_vote_updates_single_row(db_session, submission) -> None:
    service = VotingService(db_session, threshold=3)
    voter = uuid.uuid4()

    service.cast_vote(submission.id, voter, "UP")
    service.cast_vote(submission.id, voter, "UP")
    summary = service.cast_vote(submission.id, voter, "down")

    assert _vote_rows(db_session, submission.id) == 1
    assert summary.upvotes == 0
    assert summary.downvotes == 1
    assert summary.score == -1
    assert summary.current_user_vote == "DOWN"


def test_threshold_scenario_with_three_voters(db_session, submission) -> None:
    service = VotingService(db_session, threshold=3)
    voter_a, voter_b, voter_c = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()

    assert service.cast_vote(submission.id, voter_a, "UP").submission_status == "PENDING"
    assert service.cast_vote(submission.id, voter_b, "UP").submission_status == "PENDING"
    summary = service.cast_vote(submission.id, voter_c, "UP")
    assert summary.score == 3
    assert summary.submission_status == "APPROVED"

    summary = service.remove_vote(submission.id, voter_a)
    assert summary.score == 2
    assert summary.submission_status == "PENDING"
    assert submission.status == SubmissionStatus.PENDING.value


def test_threshold_is_supplied_per_instance(db_session, submission) -> None:
    VotingService(db_session, threshold=1).cast_vote(submission.id, uuid.uuid4(), "UP")
    assert submission.status == SubmissionStatus.APPROVED.value


def test_recompute_is_idempotent(db_session, submission, make_votes) -> None:
    make_votes(submission.id, VoteType.UP, 3)
    service = VotingService(db_session, threshold=3)

    with patch.object(db_session, "commit", wraps=db_session.commit) as commit:
        service.recompute_status(submission)
        service.recompute_status(submission)

    assert commit.call_count == 1
    assert submission.status == SubmissionStatus.APPROVED.value


def test_recompute_without_change_never_commits(db_session, submission) -> None:
    service = VotingService(db_session, threshold=3)
    with patch.object(db_session, "commit", wraps=db_session.commit) as commit:
        summary = service.recompute_status(submission)
    assert commit.call_count == 0
    assert summary.submission_status == "PENDING"


def test_remove_missing_vote_is_not_found(db_session, submission) -> None:
    service = VotingService(db_session, threshold=3)
    with pytest.raises(NotFoundError, match="Vote not found"):
        service.remove_vote(submission.id, uuid.uuid4())


def test_vote_on_unknown_submission_is_not_found(db_session) -> None:
    service = VotingService(db_session, threshold=3)
    with pytest.raises(NotFoundError):
        service.cast_vote(uuid.uuid4(), uuid.uuid4(), "UP")


def test_locked_submission_rejects_vote_changes(db_session, make_submission) -> None:
    locked = make_submission(is_locked=True)
    service = VotingService(db_session, threshold=3)

    with pytest.raises(InvalidStateError):
        service.cast_vote(locked.id, uuid.uuid4(), "UP")
    with pytest.raises(InvalidStateError):
        service.remove_vote(locked.id, uuid.uuid4())
    assert _vote_rows(db_session, locked.id) == 0


def test_summary_is_readable_when_locked(db_session, make_submission, make_votes) -> None:
    locked = make_submission(is_locked=True)
    make_votes(locked.id, VoteType.UP, 2)
    make_votes(locked.id, VoteType.DOWN, 3)

    summary = VotingService(db_session, threshold=3).get_summary(locked.id)

    assert summary.score == -1
    assert summary.threshold == 3
    assert summary.threshold_progress == 0
    assert summary.is_locked is True
    assert summary.current_user_vote is None


def test_summary_echoes_viewer_vote(db_session, submission) -> None:
    service = VotingService(db_session, threshold=3)
    voter = uuid.uuid4()
    service.cast_vote(submission.id, voter, "UP")

    assert service.get_summary(submission.id, voter).current_user_vote == "UP"
    assert service.get_summary(submission.id, uuid.uuid4()).current_user_vote is None
