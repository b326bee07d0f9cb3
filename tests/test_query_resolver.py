from datetime import datetime, timedelta, timezone
from uuid import uuid4

from backend.models.query import DEFAULT_PAGE_SIZE, MAX_PAGE, MAX_PAGE_SIZE, resolve_query


def test_defaults_when_nothing_supplied():
    query = resolve_query()
    assert query.pagination.page == 1
    assert query.pagination.limit == DEFAULT_PAGE_SIZE == 50
    assert query.pagination.offset == 0
    assert query.filter.model_dump() == {key: None for key in query.filter.model_dump()}


def test_non_positive_page_and_limit_fall_back_to_defaults():
    query = resolve_query(page=0, limit=-3)
    assert query.pagination.page == 1
    assert query.pagination.limit == 50

    query = resolve_query(page=-7, limit=0)
    assert query.pagination.page == 1
    assert query.pagination.limit == 50


def test_limit_is_clamped():
    query = resolve_query(limit=5000)
    assert query.pagination.limit == MAX_PAGE_SIZE


def test_offset_from_page_and_limit():
    query = resolve_query(page=3, limit=20)
    assert query.pagination.offset == 40


def test_one_sided_bounds_stay_one_sided():
    query = resolve_query(min_moisture=10, max_temperature=0)
    assert query.filter.min_moisture == 10
    assert query.filter.max_moisture is None
    assert query.filter.min_temperature is None
    assert query.filter.max_temperature == 0


def test_contradictory_bounds_are_accepted():
    query = resolve_query(min_ph=9, max_ph=3)
    assert query.filter.min_ph == 9
    assert query.filter.max_ph == 3


def test_aware_dates_become_naive_utc():
    plus_two = timezone(timedelta(hours=2))
    query = resolve_query(from_date=datetime(2024, 5, 1, 14, 0, tzinfo=plus_two))
    assert query.filter.from_date == datetime(2024, 5, 1, 12, 0)
    assert query.filter.from_date.tzinfo is None


def test_plot_id_passes_through():
    plot_id = uuid4()
    assert resolve_query(plot_id=plot_id).filter.plot_id == plot_id


def test_huge_page_keeps_offset_within_bigint():
    query = resolve_query(page=2**62, limit=MAX_PAGE_SIZE)
    assert query.pagination.page == MAX_PAGE
    assert query.pagination.offset + query.pagination.limit <= 2**63 - 1

    assert resolve_query(page=10**30).pagination.page == MAX_PAGE
