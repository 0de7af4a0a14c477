"""In-memory filtering, ordering and paging of the report queue.

Everything here works on already-loaded rows and precomputed counts, so the
rules can be exercised without a database.
"""

from __future__ import annotations

import uuid
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Protocol, TypeVar

from salarywatch.db.time import as_utc, end_of_day, start_of_day

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

T = TypeVar("T")


class ReportLike(Protocol):
    """Attributes of a report the filters look at."""

    submission_id: uuid.UUID
    reason: str
    status: str
    created_at: Any


class ReportSort(str, Enum):
    """Orderings offered by the moderator list."""

    LATEST = "latest"
    MOST_REPORTED = "most_reported"
    MOST_DOWNVOTED = "most_downvoted"

    @classmethod
    def parse(cls, raw: str | None) -> ReportSort:
        """Return the matching ordering; unknown or empty values mean LATEST."""
        if not raw:
            return cls.LATEST
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.LATEST


@dataclass(frozen=True)
class ReportQuery:
    """Normalized filters for the moderator report list."""

    status: str | None = None
    reason: str | None = None
    q: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    sort: ReportSort = ReportSort.LATEST
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def build(
        cls,
        *,
        status: str | None = None,
        reason: str | None = None,
        q: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        sort: str | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ReportQuery:
        """Trim text filters, drop blank ones and clamp paging values."""
        return cls(
            status=_clean(status),
            reason=_clean(reason),
            q=_clean(q),
            date_from=date_from,
            date_to=date_to,
            sort=ReportSort.parse(sort),
            page=max(page, 1),
            page_size=min(max(page_size, 1), MAX_PAGE_SIZE),
        )


def _clean(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle.lower() in haystack.lower()


def _matches_text(report: ReportLike, needle: str, submission: Any | None) -> bool:
    if _contains(str(report.submission_id), needle) or _contains(report.reason, needle):
        return True
    if submission is None:
        return False
    return any(
        _contains(getattr(submission, attr, None), needle)
        for attr in ("company", "role", "country")
    )


def filter_reports(reports: Sequence[T], query: ReportQuery) -> list[T]:
    """Return the reports that pass the status, reason and date filters.

    The free-text ``q`` filter is applied separately by :func:`search_reports`
    so per-submission counts can be taken between the two stages.
    """
    result = list(reports)

    if query.status:
        wanted = query.status.upper()
        result = [r for r in result if r.status.upper() == wanted]

    if query.reason:
        result = [r for r in result if _contains(r.reason, query.reason)]

    if query.date_from is not None:
        lower = start_of_day(query.date_from)
        result = [r for r in result if as_utc(r.created_at) >= lower]

    if query.date_to is not None:
        upper = end_of_day(query.date_to)
        result = [r for r in result if as_utc(r.created_at) <= upper]

    return result


def count_by_submission(reports: Iterable[ReportLike]) -> dict[uuid.UUID, int]:
    """Return how many of ``reports`` target each submission."""
    return dict(Counter(report.submission_id for report in reports))


def search_reports(
    reports: Sequence[T],
    needle: str | None,
    submissions: Mapping[uuid.UUID, Any],
) -> list[T]:
    """Keep reports whose submission id, reason, company, role or country contain ``needle``.

    Reports whose submission is gone can still match on id or reason.
    """
    if not needle:
        return list(reports)
    return [r for r in reports if _matches_text(r, needle, submissions.get(r.submission_id))]


def sort_reports(
    reports: Sequence[T],
    sort: ReportSort,
    report_counts: Mapping[uuid.UUID, int],
    downvote_counts: Mapping[uuid.UUID, int],
) -> list[T]:
    """Order reports for display.

    ``latest`` is newest first. The count-based orderings put the highest
    count first and break ties by newest ``created_at``.
    """
    ordered = sorted(reports, key=lambda r: as_utc(r.created_at), reverse=True)
    if sort is ReportSort.MOST_REPORTED:
        ordered.sort(key=lambda r: report_counts.get(r.submission_id, 0), reverse=True)
    elif sort is ReportSort.MOST_DOWNVOTED:
        ordered.sort(key=lambda r: downvote_counts.get(r.submission_id, 0), reverse=True)
    return ordered


def paginate(items: Sequence[T], page: int, page_size: int) -> list[T]:
    """Return the 1-based ``page`` of ``items``."""
    start = (page - 1) * page_size
    return list(items[start:start + page_size])
