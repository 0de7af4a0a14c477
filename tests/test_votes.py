# mypy: ignore-errors
"""Tests for vote endpoints."""

import uuid

from fastapi import status

from salarywatch.models import VoteType


def _vote(client, headers, submission_id, vote_type):
    return client.post(
        "/api/votes",
        json={"submissionId": str(submission_id), "voteType": vote_type},
        headers=headers,
    )


def test_cast_vote(client, auth_headers, submission) -> None:
    """Test an authenticated UP vote is stored and returns the new tally."""
    response = _vote(client, auth_headers, submission.id, "up")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["submissionId"] == str(submission.id)
    assert body["upvotes"] == 1
    assert body["downvotes"] == 0
    assert body["score"] == 1
    assert body["submissionStatus"] == "PENDING"
    assert body["currentUserVote"] == "UP"


def test_cast_vote_requires_authentication(client, submission) -> None:
    """Test casting a vote without a bearer token is rejected."""
    response = _vote(client, {}, submission.id, "UP")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_invalid_vote_type(client, auth_headers, submission) -> None:
    """Test an unknown vote type is rejected as invalid input."""
    response = _vote(client, auth_headers, submission.id, "SIDEWAYS")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "VoteType must be UP or DOWN"


def test_vote_on_unknown_submission(client, auth_headers) -> None:
    """Test voting on a missing submission returns not found."""
    response = _vote(client, auth_headers, uuid.uuid4(), "UP")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_changing_vote_keeps_single_row(client, auth_headers, submission) -> None:
    """Test switching from UP to DOWN updates the caller's existing vote."""
    _vote(client, auth_headers, submission.id, "UP")
    response = _vote(client, auth_headers, submission.id, "DOWN")
    body = response.json()
    assert body["upvotes"] == 0
    assert body["downvotes"] == 1
    assert body["currentUserVote"] == "DOWN"


def test_three_upvotes_approve_and_removal_reverts(client, headers_for, submission) -> None:
    """Test three upvotes approve a submission and removing one reverts it."""
    voter_a, voter_b, voter_c = (headers_for(uuid.uuid4()) for _ in range(3))

    assert _vote(client, voter_a, submission.id, "UP").json()["submissionStatus"] == "PENDING"
    assert _vote(client, voter_b, submission.id, "UP").json()["submissionStatus"] == "PENDING"
    body = _vote(client, voter_c, submission.id, "UP").json()
    assert body["score"] == 3
    assert body["submissionStatus"] == "APPROVED"

    response = client.delete(f"/api/votes/{submission.id}", headers=voter_a)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["score"] == 2
    assert body["submissionStatus"] == "PENDING"
    assert body["currentUserVote"] is None

    assert client.get(f"/api/salaries/{submission.id}").json()["status"] == "PENDING"


def test_remove_missing_vote(client, auth_headers, submission) -> None:
    """Test removing a vote the caller never cast returns not found."""
    response = client.delete(f"/api/votes/{submission.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Vote not found"


def test_locked_submission_rejects_votes(client, auth_headers, make_submission) -> None:
    """Test a locked submission refuses new votes."""
    locked = make_submission(is_locked=True)

    response = _vote(client, auth_headers, locked.id, "UP")
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "Submission is locked for moderation"

    response = client.delete(f"/api/votes/{locked.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_409_CONFLICT


def test_summary_is_public(client, submission, make_votes) -> None:
    """Test the vote summary is readable without a token."""
    make_votes(submission.id, VoteType.UP, 4)
    make_votes(submission.id, VoteType.DOWN, 2)

    response = client.get(f"/api/votes/{submission.id}/summary")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["upvotes"] == 4
    assert body["downvotes"] == 2
    assert body["score"] == 2
    assert body["threshold"] == 3
    assert body["thresholdProgress"] == 2
    assert body["currentUserVote"] is None


def test_summary_of_locked_submission(client, make_submission) -> None:
    """Test the summary reports the lock flag of a locked submission."""
    locked = make_submission(is_locked=True, is_hidden=True)
    body = client.get(f"/api/votes/{locked.id}/summary").json()
    assert body["isLocked"] is True
    assert body["isHidden"] is True
    assert body["score"] == 0


def test_summary_includes_callers_vote(client, auth_headers, submission) -> None:
    """Test the summary includes the caller's own vote when authenticated."""
    _vote(client, auth_headers, submission.id, "DOWN")
    body = client.get(f"/api/votes/{submission.id}/summary", headers=auth_headers).json()
    assert body["currentUserVote"] == "DOWN"


def test_summary_ignores_invalid_token(client, submission) -> None:
    """Test an invalid token on the summary is ignored rather than rejected."""
    response = client.get(
        f"/api/votes/{submission.id}/summary",
        headers={"Authorization": "Bearer broken"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["currentUserVote"] is None


def test_summary_of_unknown_submission(client) -> None:
    """Test the summary of a missing submission returns not found."""
    response = client.get(f"/api/votes/{uuid.uuid4()}/summary")
    assert response.status_code == status.HTTP_404_NOT_FOUND
