"""Normalization of list query parameters into filter and pagination requests."""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 1000
# Keeps (page - 1) * limit within DuckDB's BIGINT OFFSET.
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE


class SoilDataFilter(BaseModel):
    """Independent equality and range bounds over measurement fields.

    Every bound is optional and constrains only its own side. Contradictory
    bounds (min above max) are accepted and match nothing.
    """

    plot_id: UUID | None = None
    from_date: datetime | None = None
    to_date: datetime | None = None
    min_moisture: float | None = None
    max_moisture: float | None = None
    min_ph: float | None = None
    max_ph: float | None = None
    min_temperature: float | None = None
    max_temperature: float | None = None


class Pagination(BaseModel):
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class SoilDataQuery(BaseModel):
    filter: SoilDataFilter
    pagination: Pagination


def to_utc_naive(value: datetime | None) -> datetime | None:
    """Convert to naive UTC, the representation stored in DuckDB."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def normalize_page(page: int | None) -> int:
    if page is None or page <= 0:
        return DEFAULT_PAGE
    return min(page, MAX_PAGE)


def normalize_limit(limit: int | None) -> int:
    if limit is None or limit <= 0:
        return DEFAULT_PAGE_SIZE
    return min(limit, MAX_PAGE_SIZE)


def resolve_query(
    plot_id: UUID | None = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    min_moisture: float | None = None,
    max_moisture: float | None = None,
    min_ph: float | None = None,
    max_ph: float | None = None,
    min_temperature: float | None = None,
    max_temperature: float | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> SoilDataQuery:
    """Build a bounded query descriptor from raw, optional list parameters.

    ``page`` falls back to 1 and ``limit`` to 50 when absent or non-positive;
    ``limit`` is clamped to 1000 and ``page`` so the offset fits a BIGINT.
    Filter combinations are not validated.
    """
    query_filter = SoilDataFilter(
        plot_id=plot_id,
        from_date=to_utc_naive(from_date),
        to_date=to_utc_naive(to_date),
        min_moisture=min_moisture,
        max_moisture=max_moisture,
        min_ph=min_ph,
        max_ph=max_ph,
        min_temperature=min_temperature,
        max_temperature=max_temperature,
    )
    pagination = Pagination(page=normalize_page(page), limit=normalize_limit(limit))
    return SoilDataQuery(filter=query_filter, pagination=pagination)
