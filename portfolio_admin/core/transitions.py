"""
Pure ViewState transitions.

Each function takes the current state (plus arguments) and returns the next one
without touching its input. TableViewEngine wraps these with recomputation and
change notification; hosts and tests may also use them directly.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Sequence, Tuple

from .pagination import last_page_index
from .view_state import ASC, DESC, OP_EQUALS, FilterEntry, SortEntry, ViewState


# ------------------------------------------------------------------
# Sorting
# ------------------------------------------------------------------
def toggle_sort(sorting: Sequence[SortEntry], column: str) -> Tuple[SortEntry, ...]:
    """
    Next sort sequence after the user clicks 'column'.

    Each column cycles unsorted -> asc -> desc -> unsorted:
    - not sorted yet: appended as asc, as the lowest-priority key
    - asc: flipped to desc in place
    - desc: removed; remaining entries keep their relative order
    Entries for other columns are never touched.
    """
    result = []
    found = False
    for entry in sorting:
        if entry.column != column:
            result.append(entry)
            continue
        found = True
        if entry.direction == ASC:
            result.append(SortEntry(column=column, direction=DESC))
        # desc: dropped

    if not found:
        result.append(SortEntry(column=column, direction=ASC))

    return tuple(result)


def apply_sort_toggle(state: ViewState, column: str) -> ViewState:
    return replace(state, sorting=toggle_sort(state.sorting, column))


# ------------------------------------------------------------------
# Search + filters
# ------------------------------------------------------------------
def set_search_query(state: ViewState, query: str | None) -> ViewState:
    return replace(state, search_query=query or "")


def add_filter(state: ViewState, column: str, value: Any, operator: str = OP_EQUALS) -> ViewState:
    """
    Add a filter entry. An identical entry already present is not duplicated.
    """
    entry = FilterEntry(column=column, value=value, operator=operator)
    if any(_same_filter(entry, existing) for existing in state.filtering):
        return state
    return replace(state, filtering=state.filtering + (entry,))


def _same_filter(left: FilterEntry, right: FilterEntry) -> bool:
    # 1 == True in Python, but "equals 1" and "equals True" match different rows
    return (
        left.column == right.column
        and left.operator == right.operator
        and type(left.value) is type(right.value)
        and left.value == right.value
    )


def remove_filter(state: ViewState, column: str, operator: str | None = None) -> ViewState:
    """
    Remove the filters on 'column' (only those using 'operator' when given).
    """
    kept = tuple(
        f for f in state.filtering
        if not (f.column == column and (operator is None or f.operator == operator))
    )
    return replace(state, filtering=kept)


def remove_filter_at(state: ViewState, index: int) -> ViewState:
    """
    Remove the single filter at position 'index'. Out-of-range positions leave the state as is.
    """
    if not 0 <= index < len(state.filtering):
        return state
    return replace(state, filtering=state.filtering[:index] + state.filtering[index + 1:])


def clear_filters(state: ViewState) -> ViewState:
    return replace(state, filtering=())


# ------------------------------------------------------------------
# Pagination
# ------------------------------------------------------------------
def go_to_page(state: ViewState, page: int) -> ViewState:
    """
    Navigate to 'page' as requested, even past the last page (renders empty).
    Negative pages are floored at 0 since Pagination can't hold them.
    """
    return replace(state, pagination=replace(state.pagination, page=max(int(page), 0)))


def set_page_size(state: ViewState, page_size: int) -> ViewState:
    """
    Change the page size and jump back to the first page.

    :raises ValueError: if page_size is not positive
    """
    return replace(state, pagination=replace(state.pagination, page_size=int(page_size), page=0))


def with_total(state: ViewState, total: int) -> ViewState:
    if state.pagination.total == total:
        return state
    return replace(state, pagination=replace(state.pagination, total=total))


def clamp_page(state: ViewState) -> ViewState:
    """
    Pull 'page' back onto the last existing page. Never applied implicitly: hosts
    call it when they want shrinking result sets to land on a non-empty page.
    """
    last = last_page_index(state.pagination)
    if state.pagination.page <= last:
        return state
    return go_to_page(state, last)


# ------------------------------------------------------------------
# Selection
# ------------------------------------------------------------------
def toggle_row(state: ViewState, row_id: str) -> ViewState:
    return replace(state, selection=state.selection ^ {row_id})


def is_page_selected(state: ViewState, visible_ids: Iterable[str]) -> bool:
    """True iff the page has rows and every one of them is selected."""
    ids = list(visible_ids)
    return bool(ids) and all(i in state.selection for i in ids)


def toggle_all_on_page(state: ViewState, visible_ids: Iterable[str]) -> ViewState:
    """
    If the whole page is selected, deselect exactly the page's rows; otherwise add
    the page's rows to the selection. Off-page selections are never dropped.
    """
    ids = frozenset(visible_ids)
    if not ids:
        return state
    if ids <= state.selection:
        return replace(state, selection=state.selection - ids)
    return replace(state, selection=state.selection | ids)


def deselect_rows(state: ViewState, row_ids: Iterable[str]) -> ViewState:
    return replace(state, selection=state.selection - frozenset(row_ids))


def clear_selection(state: ViewState) -> ViewState:
    return replace(state, selection=frozenset())
