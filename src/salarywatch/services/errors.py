"""Domain exceptions raised by SalaryWatch services.

Every error carries the HTTP status it maps to; the API layer renders them
as ``{"detail": message}`` without further translation.
"""

from __future__ import annotations

from fastapi import status


class SalaryWatchError(RuntimeError):
    """Base exception for failures surfaced directly to the caller."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(SalaryWatchError):
    """Raised when a submission, vote or report does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class UnauthenticatedError(SalaryWatchError):
    """Raised when the caller's identity claim is missing or unusable."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(SalaryWatchError):
    """Raised when an authenticated caller lacks ADMIN or MODERATOR."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidInputError(SalaryWatchError):
    """Raised for malformed vote types and unknown status/action values."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidStateError(SalaryWatchError):
    """Raised when a mutation targets a locked submission."""

    status_code = status.HTTP_409_CONFLICT
