from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from . import transitions
from .columns import ColumnDescriptor, Row, find_column
from .pagination import page_label, page_summary, total_pages
from .pipeline import paginate, process_rows
from .view_state import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_PAGE_SIZE_OPTIONS,
    OP_EQUALS,
    ViewState,
    initial_view_state,
)

logger = logging.getLogger(__name__)

ChangeListener = Callable[[ViewState], None]


class TableViewEngine:
    """
    Search / filter / sort / paginate / select over an in-memory row collection.

    Purpose:
    - Owns exactly one ViewState and the rows + column configuration it applies to
    - Every mutating call runs the pipeline synchronously, refreshes pagination.total
      from the post-filter row count, then calls 'on_change' with the new state

    Design Notes:
    - Rows are never mutated; the engine keeps its own tuple of references
    - 'page' is never clamped implicitly. Call clamp_page() to pull it back in range.
    - Selection is keyed by row id and survives page, search and filter changes
    """

    def __init__(
            self,
            rows: Iterable[Row],
            columns: Sequence[ColumnDescriptor],
            *,
            initial_state: Optional[Mapping[str, Any] | ViewState] = None,
            page_size_options: Sequence[int] = DEFAULT_PAGE_SIZE_OPTIONS,
            on_change: Optional[ChangeListener] = None,
    ):
        self._rows: Tuple[Row, ...] = tuple(rows)
        self._columns: Tuple[ColumnDescriptor, ...] = tuple(columns)
        self.page_size_options: Tuple[int, ...] = tuple(page_size_options)
        self._on_change = on_change

        if isinstance(initial_state, ViewState):
            state = initial_state
        else:
            default_size = DEFAULT_PAGE_SIZE
            if self.page_size_options and DEFAULT_PAGE_SIZE not in self.page_size_options:
                default_size = self.page_size_options[0]
            state = initial_view_state(initial_state, page_size=default_size)

        self._state = state
        self._processed: List[Row] = []
        self._visible: List[Row] = []
        self._recompute()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def rows(self) -> Tuple[Row, ...]:
        return self._rows

    @property
    def columns(self) -> Tuple[ColumnDescriptor, ...]:
        return self._columns

    @property
    def processed_rows(self) -> List[Row]:
        """Rows after search, filter and sort, before pagination."""
        return list(self._processed)

    @property
    def visible_rows(self) -> List[Row]:
        return list(self._visible)

    @property
    def visible_ids(self) -> List[str]:
        return [str(row["id"]) for row in self._visible]

    @property
    def total_pages(self) -> int:
        return total_pages(self._state.pagination)

    @property
    def is_page_selected(self) -> bool:
        """State of the "select all" checkbox."""
        return transitions.is_page_selected(self._state, self.visible_ids)

    @property
    def selected_rows(self) -> List[Row]:
        """Selected rows in collection order, including rows hidden by search/filter/page."""
        return [row for row in self._rows if str(row.get("id")) in self._state.selection]

    def page_summary(self) -> str:
        return page_summary(self._state.pagination)

    def page_label(self) -> str:
        return page_label(self._state.pagination)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------
    def set_rows(self, rows: Iterable[Row]) -> None:
        """Swap in a freshly materialised collection. Selection is left as is."""
        self._rows = tuple(rows)
        self._commit(self._state)

    # ------------------------------------------------------------------
    # Search / filter / sort
    # ------------------------------------------------------------------
    def set_search_query(self, query: Optional[str]) -> None:
        self._commit(transitions.set_search_query(self._state, query))

    def add_filter(self, column: str, value: Any, operator: str = OP_EQUALS) -> None:
        col = find_column(self._columns, column)
        if col is not None and not col.filterable:
            logger.debug("Ignoring filter on non-filterable column %r", column)
            return
        self._commit(transitions.add_filter(self._state, column, value, operator))

    def remove_filter(self, column: str, operator: Optional[str] = None) -> None:
        self._commit(transitions.remove_filter(self._state, column, operator))

    def remove_filter_at(self, index: int) -> None:
        self._commit(transitions.remove_filter_at(self._state, index))

    def clear_filters(self) -> None:
        self._commit(transitions.clear_filters(self._state))

    def toggle_sort(self, column: str) -> None:
        col = find_column(self._columns, column)
        if col is not None and not col.sortable:
            logger.debug("Ignoring sort toggle on non-sortable column %r", column)
            return
        self._commit(transitions.apply_sort_toggle(self._state, column))

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------
    def go_to_page(self, page: int) -> None:
        self._commit(transitions.go_to_page(self._state, page))

    def first_page(self) -> None:
        self.go_to_page(0)

    def previous_page(self) -> None:
        self.go_to_page(max(self._state.pagination.page - 1, 0))

    def next_page(self) -> None:
        self.go_to_page(self._state.pagination.page + 1)

    def last_page(self) -> None:
        self.go_to_page(max(self.total_pages - 1, 0))

    def set_page_size(self, page_size: int) -> None:
        self._commit(transitions.set_page_size(self._state, page_size))

    def clamp_page(self) -> None:
        self._commit(transitions.clamp_page(self._state))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def toggle_row(self, row_id: str) -> None:
        self._commit(transitions.toggle_row(self._state, row_id))

    def toggle_all_on_page(self) -> None:
        self._commit(transitions.toggle_all_on_page(self._state, self.visible_ids))

    def deselect_rows(self, row_ids: Iterable[str]) -> None:
        self._commit(transitions.deselect_rows(self._state, row_ids))

    def clear_selection(self) -> None:
        self._commit(transitions.clear_selection(self._state))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _recompute(self) -> None:
        self._processed = process_rows(self._rows, self._state, self._columns)
        self._state = transitions.with_total(self._state, len(self._processed))
        self._visible = paginate(self._processed, self._state.pagination)

    def _commit(self, state: ViewState) -> None:
        self._state = state
        self._recompute()
        logger.debug(
            "Table state updated: page=%d size=%d total=%d sort=%d filters=%d selected=%d",
            self._state.pagination.page,
            self._state.pagination.page_size,
            self._state.pagination.total,
            len(self._state.sorting),
            len(self._state.filtering),
            len(self._state.selection),
        )
        if self._on_change is not None:
            self._on_change(self._state)
