from __future__ import annotations

import math
from typing import Tuple

from .view_state import Pagination


def total_pages(pagination: Pagination) -> int:
    return math.ceil(pagination.total / pagination.page_size)


def last_page_index(pagination: Pagination) -> int:
    return max(total_pages(pagination) - 1, 0)


def has_previous_page(pagination: Pagination) -> bool:
    return pagination.page > 0


def has_next_page(pagination: Pagination) -> bool:
    return pagination.page < total_pages(pagination) - 1


def page_range(pagination: Pagination) -> Tuple[int, int]:
    """
    1-based (start, end) row numbers shown on the current page, as in
    "Showing 11 to 20 of 42". (0, 0) when the page is empty.
    """
    start = pagination.page * pagination.page_size
    end = min(start + pagination.page_size, pagination.total)
    if start >= end:
        return 0, 0
    return start + 1, end


def page_summary(pagination: Pagination) -> str:
    start, end = page_range(pagination)
    return f"Showing {start} to {end} of {pagination.total}"


def page_label(pagination: Pagination) -> str:
    return f"Page {pagination.page + 1} of {max(total_pages(pagination), 1)}"
