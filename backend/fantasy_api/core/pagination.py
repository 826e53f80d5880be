"""Pagination — clamp page parameters and compute page counts."""

import math

DEFAULT_PAGE_SIZE: int = 50
MAX_PAGE_SIZE: int = 100


def normalize_pagination(
    page: int | None, page_size: int | None,
    min_size: int = 1, max_size: int = MAX_PAGE_SIZE,
) -> tuple[int, int]:
    """Clamp page to >= 1 and page_size into [min_size, max_size]."""
    page = page if page and page > 0 else 1
    if page_size is None:
        page_size = DEFAULT_PAGE_SIZE
    page_size = max(min_size, min(page_size, max_size))
    return page, page_size


def total_pages(total_records: int, page_size: int) -> int:
    if total_records <= 0 or page_size <= 0:
        return 0
    return math.ceil(total_records / page_size)


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size
