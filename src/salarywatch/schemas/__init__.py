# src/salarywatch/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ApiModel, MessageResponse
from .report import (
    ReportCreate,
    ReportDetailResponse,
    ReportHistoryItem,
    ReportListItem,
    ReportListResponse,
    ReportReviewRequest,
    ReportReviewResponse,
    ReportVoteSummary,
)
from .salary import SalaryStatsResponse, SalarySubmissionCreate, SalarySubmissionResponse
from .vote import SubmissionVoteSummary, VoteCreate, VoteSummaryResponse

__all__ = [
    "ApiModel", "MessageResponse",
    "ReportCreate", "ReportDetailResponse", "ReportHistoryItem", "ReportListItem",
    "ReportListResponse", "ReportReviewRequest", "ReportReviewResponse", "ReportVoteSummary",
    "SalaryStatsResponse", "SalarySubmissionCreate", "SalarySubmissionResponse",
    "SubmissionVoteSummary", "VoteCreate", "VoteSummaryResponse",
]
