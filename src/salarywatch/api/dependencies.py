"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from salarywatch.core.security import Principal, principal_from_token
from salarywatch.core.settings import settings
from salarywatch.db.session import get_db
from salarywatch.services.errors import ForbiddenError, SalaryWatchError, UnauthenticatedError
from salarywatch.services.reports import ReportService
from salarywatch.services.salaries import SalaryService
from salarywatch.services.voting import VotingService

# HTTP Bearer scheme; missing credentials are reported by get_current_principal.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_vote_threshold() -> int:
    """Return the score at which a submission becomes APPROVED."""
    return settings.vote_approval_score_threshold


ThresholdDep = Annotated[int, Depends(get_vote_threshold)]


def get_current_principal(credentials: CredentialsDep) -> Principal:
    """Resolve the caller from the bearer token.

    Raises:
        UnauthenticatedError: If no token is sent or it fails verification.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Not authenticated")
    return principal_from_token(credentials.credentials)


def get_optional_principal(credentials: CredentialsDep) -> Principal | None:
    """Resolve the caller when a usable token is present, else return None."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return principal_from_token(credentials.credentials)
    except SalaryWatchError:
        return None


CurrentPrincipalDep = Annotated[Principal, Depends(get_current_principal)]
OptionalPrincipalDep = Annotated[Principal | None, Depends(get_optional_principal)]


def require_moderator(principal: CurrentPrincipalDep) -> Principal:
    """Allow only callers holding the ADMIN or MODERATOR role.

    Raises:
        ForbiddenError: If the caller lacks both roles.
    """
    if not principal.is_moderator:
        raise ForbiddenError("Only ADMIN or MODERATOR can access reports.")
    return principal


ModeratorDep = Annotated[Principal, Depends(require_moderator)]


def get_voting_service(db: SessionDep, threshold: ThresholdDep) -> VotingService:
    """Return a voting service bound to this request's session and threshold."""
    return VotingService(db, threshold)


def get_report_service(db: SessionDep, threshold: ThresholdDep) -> ReportService:
    """Return a report service bound to this request's session and threshold."""
    return ReportService(db, threshold)


def get_salary_service(db: SessionDep) -> SalaryService:
    """Return a salary service bound to this request's session."""
    return SalaryService(db)


VotingServiceDep = Annotated[VotingService, Depends(get_voting_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
SalaryServiceDep = Annotated[SalaryService, Depends(get_salary_service)]
