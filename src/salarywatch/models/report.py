# src/salarywatch/models/report.py
"""Models tracking abuse reports and their moderation outcome."""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from salarywatch.db.session import Base
from salarywatch.db.time import utcnow

REPORT_REASON_MAX_LENGTH = 500
REPORT_NOTE_MAX_LENGTH = 1000


class ReportStatus(str, Enum):
    """Review workflow: NEW -> IN_REVIEW -> ACTION_TAKEN | DISMISSED."""

    NEW = "NEW"
    IN_REVIEW = "IN_REVIEW"
    ACTION_TAKEN = "ACTION_TAKEN"
    DISMISSED = "DISMISSED"


class ModerationAction(str, Enum):
    """Side effect a moderator applies to the reported submission."""

    NONE = "NONE"
    HIDE = "HIDE"
    UNHIDE = "UNHIDE"
    LOCK = "LOCK"
    UNLOCK = "UNLOCK"
    DELETE_SUBMISSION = "DELETE_SUBMISSION"
    REVERT_APPROVAL = "REVERT_APPROVAL"


class Report(Base):
    """A user-filed flag against a submission.

    Reports reference their submission by id only, so they outlive a
    submission removed through ``DELETE_SUBMISSION``.
    """

    __tablename__ = "report"
    __table_args__ = (Index("ix_report_submission_id", "submission_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    submission_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    reason: Mapped[str] = mapped_column(String(REPORT_REASON_MAX_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=ReportStatus.NEW.value,
    )
    internal_note: Mapped[str | None] = mapped_column(
        String(REPORT_NOTE_MAX_LENGTH),
        nullable=True,
    )
    # Mirrors ModerationAction; NULL when the review applied no action.
    resolution_action: Mapped[str | None] = mapped_column(String(64), nullable=True)
    reviewed_by_user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
