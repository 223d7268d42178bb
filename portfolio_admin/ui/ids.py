from __future__ import annotations

__all__ = ["IDs", "sort_header_id", "row_select_id", "select_all_id", "filter_remove_id"]


class IDs:
    class Store:
        TABLE_STATE = "table-state"

    class Control:
        COLLECTION_SELECT = "collection-select"

        # Toolbar
        SEARCH_INPUT = "table-search-input"
        FILTER_COLUMN = "table-filter-column"
        FILTER_OPERATOR = "table-filter-operator"
        FILTER_VALUE = "table-filter-value"
        FILTER_ADD_BTN = "table-filter-add-btn"
        FILTER_CLEAR_BTN = "table-filter-clear-btn"
        FILTER_CHIPS = "table-filter-chips"

        # Table
        TABLE_TITLE = "table-title"
        TABLE_DESCRIPTION = "table-description"
        TABLE_CONTAINER = "table-container"

        # Pagination
        PAGE_FIRST_BTN = "table-page-first-btn"
        PAGE_PREV_BTN = "table-page-prev-btn"
        PAGE_NEXT_BTN = "table-page-next-btn"
        PAGE_LAST_BTN = "table-page-last-btn"
        PAGE_SIZE_SELECT = "table-page-size-select"
        PAGE_SUMMARY = "table-page-summary"
        PAGE_LABEL = "table-page-label"

        # Bulk actions / export
        SELECTION_COUNT = "table-selection-count"
        CLEAR_SELECTION_BTN = "table-clear-selection-btn"
        DELETE_SELECTED_BTN = "table-delete-selected-btn"
        EXPORT_CSV_BTN = "table-export-csv-btn"
        EXPORT_JSON_BTN = "table-export-json-btn"
        EXPORT_SELECTED_BTN = "table-export-selected-btn"
        DOWNLOAD = "table-download"
        STATUS_BAR = "table-status-bar"

    class Pattern:
        # pattern-matching "type" strings
        SORT_HEADER = "table-sort-header"
        ROW_SELECT = "table-row-select"
        FILTER_REMOVE = "table-filter-remove"
        SELECT_ALL = "table-select-all"


def sort_header_id(column_id: str) -> dict:
    return {"type": IDs.Pattern.SORT_HEADER, "index": column_id}


def row_select_id(row_id: str) -> dict:
    return {"type": IDs.Pattern.ROW_SELECT, "index": row_id}


def filter_remove_id(position: int) -> dict:
    return {"type": IDs.Pattern.FILTER_REMOVE, "index": position}


def select_all_id() -> dict:
    return {"type": IDs.Pattern.SELECT_ALL, "index": "page"}
