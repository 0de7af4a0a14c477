# src/salarywatch/models/submission.py
"""SQLAlchemy model for salary submissions."""

import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from salarywatch.db.session import Base
from salarywatch.db.time import utcnow

ANONYMOUS_COMPANY = "Anonymous"


class SubmissionStatus(str, Enum):
    """Approval states a submission moves between as votes arrive."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"


class SalarySubmission(Base):
    """A user-contributed compensation record.

    The approval status is driven by community votes; the hidden and locked
    flags are moderator controls and are independent of it.
    """

    __tablename__ = "salary_submission"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=SubmissionStatus.PENDING.value,
    )

    country: Mapped[str | None] = mapped_column(Text, nullable=True)
    company: Mapped[str | None] = mapped_column(Text, nullable=True)
    role: Mapped[str | None] = mapped_column(Text, nullable=True)
    level: Mapped[str | None] = mapped_column(Text, nullable=True)
    experience_years: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    salary_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    currency: Mapped[str | None] = mapped_column(String(8), nullable=True)
    period: Mapped[str | None] = mapped_column(String(16), nullable=True)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Moderation flags.
    is_hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @property
    def display_company(self) -> str | None:
        """Return the company name, masked when the submitter asked for anonymity."""
        return ANONYMOUS_COMPANY if self.is_anonymous else self.company
