# src/salarywatch/api/__init__.py
"""HTTP API for SalaryWatch."""

from .endpoints import (
    reports_router,
    salaries_router,
    system_router,
    votes_router,
)

__all__ = [
    "reports_router",
    "salaries_router",
    "system_router",
    "votes_router",
]
