# src/salarywatch/services/__init__.py
"""Business logic services for the SalaryWatch application."""

from .reports import ReportService
from .salaries import SalaryService
from .voting import VotingService

__all__ = [
    "ReportService",
    "SalaryService",
    "VotingService",
]
