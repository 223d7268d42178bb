"""
Search, filter, sort and paginate stages for the admin table.

Every stage is a pure function over a sequence of rows and never raises on
malformed input: values that can't be compared or coerced simply fail the
predicate (filters) or compare as equal (sort).
"""

from __future__ import annotations

import math
from functools import cmp_to_key
from numbers import Number
from typing import Any, Iterable, List, Sequence

from .columns import MISSING, ColumnDescriptor, Row, resolve_value
from .view_state import (
    DESC,
    OP_CONTAINS,
    OP_ENDS_WITH,
    OP_EQUALS,
    OP_GT,
    OP_LT,
    OP_STARTS_WITH,
    FilterEntry,
    Pagination,
    SortEntry,
    ViewState,
)


# ------------------------------------------------------------------
# Coercion helpers
# ------------------------------------------------------------------
def to_text(value: Any) -> str:
    """
    String form used by search and the text filter operators.
    Missing and None become "", booleans "true"/"false", integral floats drop ".0".
    """
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_number(value: Any) -> float:
    """
    Numeric form used by the gt/lt operators. Anything that is not a number or a
    numeric string becomes NaN. A blank string counts as 0.
    """
    if value is MISSING or value is None:
        return math.nan
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, Number):
        try:
            return float(value)
        except (TypeError, ValueError):
            return math.nan
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without coercion: "90" != 90 and True != 1."""
    if left is MISSING or right is MISSING:
        return False
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if isinstance(left, Number) and isinstance(right, Number):
        return left == right
    if type(left) is not type(right):
        return False
    return left == right


# ------------------------------------------------------------------
# Stages
# ------------------------------------------------------------------
def apply_search(rows: Iterable[Row], query: str, columns: Sequence[ColumnDescriptor]) -> List[Row]:
    if not query:
        return list(rows)

    needle = query.lower()
    searchable = [c for c in columns if c.has_accessor]
    return [
        row for row in rows
        if any(needle in to_text(c.value(row)).lower() for c in searchable)
    ]


def matches_filter(row: Row, entry: FilterEntry, columns: Sequence[ColumnDescriptor] = ()) -> bool:
    value = resolve_value(row, entry.column, columns)
    op = entry.operator

    if op == OP_EQUALS:
        return strict_equals(value, entry.value)
    if op == OP_CONTAINS:
        return to_text(entry.value).lower() in to_text(value).lower()
    if op == OP_STARTS_WITH:
        return to_text(value).lower().startswith(to_text(entry.value).lower())
    if op == OP_ENDS_WITH:
        return to_text(value).lower().endswith(to_text(entry.value).lower())
    if op == OP_GT:
        return to_number(value) > to_number(entry.value)
    if op == OP_LT:
        return to_number(value) < to_number(entry.value)

    # Unknown operators let every row through
    return True


def apply_filters(
        rows: Iterable[Row],
        filtering: Sequence[FilterEntry],
        columns: Sequence[ColumnDescriptor] = (),
) -> List[Row]:
    result = list(rows)
    for entry in filtering:
        result = [row for row in result if matches_filter(row, entry, columns)]
    return result


def _compare_values(left: Any, right: Any) -> int:
    if left is MISSING or right is MISSING or left is None or right is None:
        return 0
    try:
        if left < right:
            return -1
        if left > right:
            return 1
    except TypeError:
        return 0
    return 0


def sort_rows(
        rows: Iterable[Row],
        sorting: Sequence[SortEntry],
        columns: Sequence[ColumnDescriptor] = (),
) -> List[Row]:
    """
    Stable multi-key sort. The first entry is the primary key, later entries break
    ties. 'desc' inverts only its own key.
    """
    result = list(rows)
    if not sorting:
        return result

    def compare(a: Row, b: Row) -> int:
        for entry in sorting:
            outcome = _compare_values(
                resolve_value(a, entry.column, columns),
                resolve_value(b, entry.column, columns),
            )
            if outcome:
                return -outcome if entry.direction == DESC else outcome
        return 0

    # list.sort is stable: rows comparing equal on every key keep their input order
    result.sort(key=cmp_to_key(compare))
    return result


def paginate(rows: Sequence[Row], pagination: Pagination) -> List[Row]:
    start = pagination.page * pagination.page_size
    return list(rows[start:start + pagination.page_size])


# ------------------------------------------------------------------
# Whole pipeline
# ------------------------------------------------------------------
def process_rows(rows: Iterable[Row], state: ViewState, columns: Sequence[ColumnDescriptor]) -> List[Row]:
    """Search, filter and sort; the result's length is the pagination total."""
    result = apply_search(rows, state.search_query, columns)
    result = apply_filters(result, state.filtering, columns)
    return sort_rows(result, state.sorting, columns)


def compute_visible_rows(rows: Iterable[Row], state: ViewState, columns: Sequence[ColumnDescriptor]) -> List[Row]:
    return paginate(process_rows(rows, state, columns), state.pagination)
