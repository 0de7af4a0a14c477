# src/salarywatch/models/vote.py
"""Models capturing community votes on salary submissions."""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Index, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from salarywatch.db.session import Base
from salarywatch.db.time import utcnow


class VoteType(str, Enum):
    """Direction of a community vote."""

    UP = "UP"
    DOWN = "DOWN"


class Vote(Base):
    """Per-user vote on a salary submission."""

    __tablename__ = "vote"
    __table_args__ = (
        # One row per voter per submission; a repeat vote updates this row.
        UniqueConstraint("submission_id", "user_id", name="uq_vote_submission_user"),
        Index("ix_vote_submission_id", "submission_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    submission_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    vote_type: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
