# src/salarywatch/models/__init__.py
"""SQLAlchemy models for the SalaryWatch application."""

from .report import ModerationAction, Report, ReportStatus
from .submission import SalarySubmission, SubmissionStatus
from .vote import Vote, VoteType

__all__ = [
    "ModerationAction", "Report", "ReportStatus",
    "SalarySubmission", "SubmissionStatus",
    "Vote", "VoteType",
]
