# smart_sac/core/pagination.py

"""
Core pagination helpers.

This module provides:
- `normalize_pagination` to clean up page/page_size inputs using defaults
  and clamping.
- `count_pages` to derive the number of pages for a total.

These helpers unify pagination semantics across the project.
"""

from __future__ import annotations

import math

from smart_sac.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from smart_sac.schemas.common.pagination import PaginationParams


def normalize_pagination(
    page: int | None,
    page_size: int | None = None,
) -> PaginationParams:
    """
    Normalize raw page & page_size inputs into a PaginationParams object
    with sane defaults and a clamped max page size.

    Rules:
        - page < 1 or None -> DEFAULT_PAGE
        - page_size < 1 or None -> DEFAULT_PAGE_SIZE
        - page_size > MAX_PAGE_SIZE -> MAX_PAGE_SIZE
    """
    if page is None or page < 1:
        page = DEFAULT_PAGE

    if page_size is None or page_size < 1:
        page_size = DEFAULT_PAGE_SIZE

    if page_size > MAX_PAGE_SIZE:
        page_size = MAX_PAGE_SIZE

    return PaginationParams(page=page, page_size=page_size)


def count_pages(total_items: int, page_size: int) -> int:
    """Number of pages needed for `total_items`; zero when there are none."""
    if page_size <= 0 or total_items <= 0:
        return 0
    return math.ceil(total_items / page_size)
