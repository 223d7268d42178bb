import pytest

from portfolio_admin.core.pagination import (
    has_next_page,
    has_previous_page,
    page_label,
    page_range,
    page_summary,
    total_pages,
)
from portfolio_admin.core.view_state import Pagination


@pytest.mark.parametrize(
    "total, page_size, expected",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (42, 5, 9)],
)
def test_total_pages(total, page_size, expected):
    assert total_pages(Pagination(page_size=page_size, total=total)) == expected


def test_page_summary_and_label_for_middle_page():
    pagination = Pagination(page=1, page_size=10, total=42)
    assert page_range(pagination) == (11, 20)
    assert page_summary(pagination) == "Showing 11 to 20 of 42"
    assert page_label(pagination) == "Page 2 of 5"


def test_page_summary_for_last_partial_page():
    assert page_summary(Pagination(page=4, page_size=10, total=42)) == "Showing 41 to 42 of 42"


def test_empty_collection():
    pagination = Pagination(page=0, page_size=10, total=0)
    assert page_summary(pagination) == "Showing 0 to 0 of 0"
    assert page_label(pagination) == "Page 1 of 1"
    assert not has_previous_page(pagination)
    assert not has_next_page(pagination)


def test_navigation_flags():
    assert has_next_page(Pagination(page=0, page_size=2, total=3))
    assert not has_next_page(Pagination(page=1, page_size=2, total=3))
    assert has_previous_page(Pagination(page=1, page_size=2, total=3))
