"""Pagination and audit query bounds."""

from datetime import datetime

from fantasy_api.core.pagination import normalize_pagination, page_offset, total_pages
from fantasy_api.core.validate_audit import (
    validate_log_query, validate_retention_days, validate_stats_days,
)


def test_normalize_pagination_defaults():
    assert normalize_pagination(None, None) == (1, 50)


def test_normalize_pagination_clamps():
    assert normalize_pagination(-3, 1000) == (1, 100)
    assert normalize_pagination(2, 1, min_size=10) == (2, 10)


def test_total_pages_and_offset():
    assert total_pages(0, 10) == 0
    assert total_pages(21, 10) == 3
    assert page_offset(3, 10) == 20


def test_log_query_bounds():
    assert validate_log_query(100, None, None) == []
    assert validate_log_query(501, None, None)
    errors = validate_log_query(10, datetime(2026, 2, 1), datetime(2026, 1, 1))
    assert errors == ["Start date cannot be after end date."]


def test_stats_and_retention_bounds():
    assert validate_stats_days(365) == []
    assert validate_stats_days(0)
    assert validate_retention_days(180) == []
    assert validate_retention_days(181)
