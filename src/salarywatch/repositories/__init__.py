"""Repositories wrapping SQLAlchemy access for each aggregate."""

from .report_repo import ReportRepository
from .submission_repo import SubmissionRepository
from .vote_repo import VoteRepository

__all__ = ["ReportRepository", "SubmissionRepository", "VoteRepository"]
