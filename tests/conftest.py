# tests/conftest.py
from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Generator, Iterator
from datetime import datetime
from decimal import Decimal
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("VOTE_APPROVAL_SCORE_THRESHOLD", "3")

from salarywatch.core.security import create_access_token  # noqa: E402
from salarywatch.db.session import Base  # noqa: E402
from salarywatch.db.session import get_db as app_get_session  # noqa: E402
from salarywatch.db.time import utcnow  # noqa: E402
from salarywatch.main import app as fastapi_app  # noqa: E402
from salarywatch.models import Report, ReportStatus, SalarySubmission, Vote, VoteType  # noqa: E402

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def bearer(user_id: uuid.UUID, roles: Any = None) -> dict[str, str]:
    """Return an Authorization header for ``user_id`` holding ``roles``."""
    token = create_access_token(user_id, roles=roles)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers_for() -> Callable[..., dict[str, str]]:
    """Expose :func:`bearer` to tests that need several callers."""
    return bearer


@pytest.fixture()
def user_id() -> uuid.UUID:
    """Identity of the primary (non-moderator) caller."""
    return uuid.uuid4()


@pytest.fixture()
def moderator_id() -> uuid.UUID:
    """Identity of the moderator caller."""
    return uuid.uuid4()


@pytest.fixture()
def auth_headers(user_id: uuid.UUID) -> dict[str, str]:
    """Return authorization headers for a plain user."""
    return bearer(user_id)


@pytest.fixture()
def moderator_headers(moderator_id: uuid.UUID) -> dict[str, str]:
    """Return authorization headers for a MODERATOR."""
    return bearer(moderator_id, roles="MODERATOR")


@pytest.fixture()
def make_submission(db_session: Session) -> Callable[..., SalarySubmission]:
    """Factory persisting a submission; keyword arguments override defaults."""

    def _make(**overrides: Any) -> SalarySubmission:
        fields: dict[str, Any] = {
            "country": "Serbia",
            "company": "Acme",
            "role": "Backend Engineer",
            "level": "Senior",
            "experience_years": 6,
            "salary_amount": Decimal("4200.00"),
            "currency": "EUR",
            "period": "MONTHLY",
            "is_anonymous": False,
            "status": "PENDING",
            "submitted_at": utcnow(),
            "is_hidden": False,
            "is_locked": False,
        }
        fields.update(overrides)
        submission = SalarySubmission(**fields)
        db_session.add(submission)
        db_session.flush()
        return submission

    return _make


@pytest.fixture()
def submission(make_submission: Callable[..., SalarySubmission]) -> SalarySubmission:
    """A baseline PENDING submission."""
    return make_submission()


@pytest.fixture()
def make_votes(db_session: Session) -> Callable[..., list[Vote]]:
    """Factory adding ``count`` votes of one type from distinct random users."""

    def _make(submission_id: uuid.UUID, vote_type: VoteType, count: int) -> list[Vote]:
        votes = [
            Vote(
                submission_id=submission_id,
                user_id=uuid.uuid4(),
                vote_type=vote_type.value,
                created_at=utcnow(),
            )
            for _ in range(count)
        ]
        db_session.add_all(votes)
        db_session.flush()
        return votes

    return _make


@pytest.fixture()
def make_report(db_session: Session) -> Callable[..., Report]:
    """Factory persisting a report with an explicit ``created_at``."""

    def _make(
        submission_id: uuid.UUID,
        *,
        reason: str = "Looks fabricated",
        created_at: datetime | None = None,
        status: ReportStatus = ReportStatus.NEW,
        user_id: uuid.UUID | None = None,
    ) -> Report:
        report = Report(
            submission_id=submission_id,
            user_id=user_id or uuid.uuid4(),
            reason=reason,
            created_at=created_at or utcnow(),
            status=status.value,
        )
        db_session.add(report)
        db_session.flush()
        return report

    return _make
