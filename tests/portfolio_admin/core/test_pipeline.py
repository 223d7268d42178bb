from __future__ import annotations

import pytest

from portfolio_admin.core.columns import ColumnDescriptor
from portfolio_admin.core.pipeline import (
    apply_filters,
    apply_search,
    compute_visible_rows,
    paginate,
    process_rows,
    sort_rows,
    strict_equals,
    to_number,
)
from portfolio_admin.core.view_state import FilterEntry, Pagination, SortEntry, ViewState


@pytest.fixture()
def rows():
    return [
        {"id": "a", "level": 90, "name": "Zeta"},
        {"id": "b", "level": 90, "name": "Alpha"},
        {"id": "c", "level": 50, "name": "Beta"},
    ]


@pytest.fixture()
def columns():
    return [
        ColumnDescriptor(id="name", header="Name", accessor="name"),
        ColumnDescriptor(id="level", header="Level", accessor="level"),
        ColumnDescriptor(id="actions", header="Actions", sortable=False, filterable=False),
    ]


def _ids(rows):
    return [r["id"] for r in rows]


# ---------------------------------------------------------
# Search
# ---------------------------------------------------------
def test_search_is_case_insensitive_across_accessor_columns(rows, columns):
    assert _ids(apply_search(rows, "ALP", columns)) == ["b"]
    assert _ids(apply_search(rows, "90", columns)) == ["a", "b"]


def test_empty_search_keeps_everything(rows, columns):
    assert _ids(apply_search(rows, "", columns)) == ["a", "b", "c"]


def test_columns_without_accessor_are_not_searched(columns):
    rows = [{"id": "x", "name": "n", "actions": "secret"}]
    assert apply_search(rows, "secret", columns) == []


def test_search_ignores_missing_fields(columns):
    rows = [{"id": "x"}, {"id": "y", "name": "none"}]
    assert _ids(apply_search(rows, "none", columns)) == ["y"]


# ---------------------------------------------------------
# Filters
# ---------------------------------------------------------
def test_gt_filter_coerces_numbers(rows, columns):
    kept = apply_filters(rows, [FilterEntry(column="level", operator="gt", value="60")], columns)
    assert _ids(kept) == ["a", "b"]


def test_lt_filter_excludes_non_numeric_values(columns):
    rows = [
        {"id": "x", "level": "abc"},
        {"id": "y", "level": 10},
        {"id": "z"},
    ]
    kept = apply_filters(rows, [FilterEntry(column="level", operator="lt", value=50)], columns)
    assert _ids(kept) == ["y"]


def test_gt_with_non_numeric_operand_excludes_all(rows, columns):
    assert apply_filters(rows, [FilterEntry(column="level", operator="gt", value="lots")], columns) == []


def test_equals_is_strict(rows, columns):
    assert _ids(apply_filters(rows, [FilterEntry(column="level", value=90)], columns)) == ["a", "b"]
    assert apply_filters(rows, [FilterEntry(column="level", value="90")], columns) == []


@pytest.mark.parametrize(
    "operator, value, expected",
    [
        ("contains", "ET", ["a", "c"]),
        ("startsWith", "al", ["b"]),
        ("endsWith", "A", ["a", "b", "c"]),
    ],
)
def test_text_operators(rows, columns, operator, value, expected):
    kept = apply_filters(rows, [FilterEntry(column="name", operator=operator, value=value)], columns)
    assert _ids(kept) == expected


def test_unknown_operator_is_a_no_op(rows, columns):
    kept = apply_filters(rows, [FilterEntry(column="name", operator="regex", value="^Z")], columns)
    assert _ids(kept) == ["a", "b", "c"]


def test_filters_combine_with_and(rows, columns):
    filters = [
        FilterEntry(column="level", operator="gt", value=60),
        FilterEntry(column="name", operator="contains", value="z"),
    ]
    assert _ids(apply_filters(rows, filters, columns)) == ["a"]


def test_filter_on_field_without_column(rows):
    rows = [dict(r, published=(r["id"] != "c")) for r in rows]
    kept = apply_filters(rows, [FilterEntry(column="published", value=True)])
    assert _ids(kept) == ["a", "b"]


def test_strict_equals_does_not_mix_bool_and_int():
    assert not strict_equals(True, 1)
    assert strict_equals(1, 1.0)
    assert not strict_equals("1", 1)


def test_to_number():
    assert to_number(" 60 ") == 60.0
    assert to_number("") == 0.0
    assert to_number(True) == 1.0
    assert to_number(None) != to_number(None)  # NaN


# ---------------------------------------------------------
# Sorting
# ---------------------------------------------------------
def test_multi_key_sort_level_desc_then_name_asc(rows, columns):
    sorting = [SortEntry("level", "desc"), SortEntry("name", "asc")]
    assert _ids(sort_rows(rows, sorting, columns)) == ["b", "a", "c"]


def test_desc_only_inverts_its_own_key(rows, columns):
    sorting = [SortEntry("level", "asc"), SortEntry("name", "desc")]
    assert _ids(sort_rows(rows, sorting, columns)) == ["c", "a", "b"]


def test_sort_is_stable_for_equal_keys(columns):
    rows = [{"id": str(i), "level": i % 2} for i in range(6)]
    result = sort_rows(rows, [SortEntry("level", "asc")], columns)
    assert _ids(result) == ["0", "2", "4", "1", "3", "5"]


def test_missing_values_compare_equal_and_never_raise(columns):
    rows = [
        {"id": "x", "level": 3},
        {"id": "y"},
        {"id": "z", "level": "text"},
        {"id": "w", "level": None},
    ]
    result = sort_rows(rows, [SortEntry("level", "asc")], columns)
    assert sorted(_ids(result)) == ["w", "x", "y", "z"]


def test_sort_does_not_mutate_input(rows, columns):
    before = list(rows)
    sort_rows(rows, [SortEntry("name", "asc")], columns)
    assert rows == before


# ---------------------------------------------------------
# Pagination + full pipeline
# ---------------------------------------------------------
def test_paginate_second_page_is_partial(rows):
    assert _ids(paginate(rows, Pagination(page=1, page_size=2))) == ["c"]


def test_paginate_out_of_range_is_empty(rows):
    assert paginate(rows, Pagination(page=5, page_size=2)) == []


def test_pipeline_is_deterministic(rows, columns):
    state = ViewState(
        pagination=Pagination(page=0, page_size=2),
        sorting=(SortEntry("name", "asc"),),
        search_query="a",
    )
    first = compute_visible_rows(rows, state, columns)
    second = compute_visible_rows(rows, state, columns)
    assert first == second
    assert _ids(first) == ["b", "c"]


def test_process_rows_runs_search_before_filters(rows, columns):
    state = ViewState(
        filtering=(FilterEntry(column="level", operator="lt", value=95),),
        search_query="zeta",
    )
    assert _ids(process_rows(rows, state, columns)) == ["a"]
