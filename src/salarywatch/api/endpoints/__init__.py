# src/salarywatch/api/endpoints/__init__.py
"""API endpoint modules."""

from .reports import router as reports_router
from .salaries import router as salaries_router
from .system import router as system_router
from .votes import router as votes_router

__all__ = [
    "reports_router",
    "salaries_router",
    "system_router",
    "votes_router",
]
