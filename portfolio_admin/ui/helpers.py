from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Tuple

import dash_bootstrap_components as dbc
from dash import html

from portfolio_admin.collections.base_collection import BaseCollection
from portfolio_admin.core.columns import ColumnDescriptor
from portfolio_admin.core.engine import TableViewEngine
from portfolio_admin.core.view_state import (
    ASC,
    FILTER_OPERATORS,
    OP_CONTAINS,
    OP_ENDS_WITH,
    OP_EQUALS,
    OP_GT,
    OP_LT,
    OP_STARTS_WITH,
    ViewState,
)
from portfolio_admin.ui.ids import filter_remove_id, row_select_id, select_all_id, sort_header_id

if TYPE_CHECKING:
    from portfolio_admin.ui.config import AppConfig

OPERATOR_LABELS = {
    OP_EQUALS: "equals",
    OP_CONTAINS: "contains",
    OP_STARTS_WITH: "starts with",
    OP_ENDS_WITH: "ends with",
    OP_GT: "greater than",
    OP_LT: "less than",
}

EMPTY_STATE_MESSAGE = "No data found"
EMPTY_STATE_DESCRIPTION = "Try adjusting your search or filter criteria"

FONT_FAMILY = 'system-ui, -apple-system, BlinkMacSystemFont, "SF Pro Text", "Segoe UI", sans-serif'

HEADER_STYLE = {
    "fontFamily": FONT_FAMILY,
    "fontSize": "12px",
    "fontWeight": "600",
    "backgroundColor": "#f3f4f6",
    "borderBottom": "1px solid #e5e7eb",
    "color": "#111827",
    "padding": "8px 12px",
    "whiteSpace": "nowrap",
}

CELL_STYLE = {
    "fontFamily": FONT_FAMILY,
    "fontSize": "12px",
    "padding": "6px 12px",
    "borderBottom": "1px solid #e5e7eb",
    "color": "#374151",
    "verticalAlign": "middle",
}


# ---------------------------------------------------------
# Store payload <-> engine
# ---------------------------------------------------------
def table_store_payload(collection_id: str, state: ViewState) -> Dict[str, Any]:
    return {"collection": collection_id, "state": state.to_dict()}


def state_for_collection(store_data: Optional[Mapping[str, Any]], collection_id: str) -> Optional[Dict[str, Any]]:
    """
    The stored view state, but only when it belongs to 'collection_id'.
    Switching collection starts from a fresh state.
    """
    if not isinstance(store_data, Mapping) or store_data.get("collection") != collection_id:
        return None
    state = store_data.get("state")
    return state if isinstance(state, Mapping) else None


def load_engine(
        ctx: AppConfig,
        collection_id: str,
        store_data: Optional[Mapping[str, Any]],
) -> Tuple[BaseCollection, TableViewEngine]:
    """
    Rebuild the table engine for one request from the record store and the
    client-side view state.

    :raises UnknownCollectionError: if collection_id isn't registered
    :raises RecordStoreError: if the collection document can't be read
    """
    collection = ctx.registry.create(collection_id)
    rows = ctx.record_store.list_records(collection_id)

    raw_state = state_for_collection(store_data, collection_id)
    if raw_state is not None:
        initial: Any = ViewState.from_dict(raw_state)
    else:
        initial = {"pagination": {"page_size": ctx.global_config.page_size}}

    engine = TableViewEngine(
        rows,
        collection.build_columns(),
        initial_state=initial,
        page_size_options=ctx.global_config.page_size_options,
    )
    return collection, engine


def parse_filter_value(text: Any, operator: str) -> Any:
    """
    Filter inputs arrive as strings. For 'equals', turn number and boolean literals into
    the matching Python value so they can equal typed record fields.
    """
    if operator != OP_EQUALS or not isinstance(text, str):
        return text

    stripped = text.strip()
    lowered = stripped.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        return float(stripped)
    except ValueError:
        return text


# ---------------------------------------------------------
# Component builders
# ---------------------------------------------------------
def filter_column_options(columns: Sequence[ColumnDescriptor]) -> List[dict]:
    return [
        {"label": c.header, "value": c.id}
        for c in columns
        if c.filterable and c.has_accessor
    ]


def filter_operator_options() -> List[dict]:
    return [{"label": OPERATOR_LABELS[op], "value": op} for op in FILTER_OPERATORS]


def sort_indicator(state: ViewState, column_id: str) -> str:
    for priority, entry in enumerate(state.sorting, start=1):
        if entry.column == column_id:
            arrow = "▲" if entry.direction == ASC else "▼"
            return f"{arrow}{priority}" if len(state.sorting) > 1 else arrow
    return "↕"


def build_filter_chips(engine: TableViewEngine) -> List[Any]:
    headers = {c.id: c.header for c in engine.columns}
    chips = []
    for position, entry in enumerate(engine.state.filtering):
        label = OPERATOR_LABELS.get(entry.operator, entry.operator)
        chips.append(
            dbc.Badge(
                [
                    f"{headers.get(entry.column, entry.column)} {label} {entry.value!r} ",
                    html.Span(
                        "×",
                        id=filter_remove_id(position),
                        n_clicks=0,
                        role="button",
                        style={"cursor": "pointer"},
                        title="Remove filter",
                    ),
                ],
                color="light",
                text_color="dark",
                className="me-1 border",
            )
        )
    return chips


def build_empty_state() -> html.Div:
    return html.Div(
        [
            html.Div(EMPTY_STATE_MESSAGE, className="fw-semibold"),
            html.Div(EMPTY_STATE_DESCRIPTION, className="text-muted small mt-1"),
        ],
        className="text-center py-4",
    )


def _header_cell(column: ColumnDescriptor, state: ViewState) -> html.Th:
    style = dict(HEADER_STYLE)
    if column.width:
        style["width"] = f"{column.width}px"
    if column.min_width:
        style["minWidth"] = f"{column.min_width}px"
    if column.max_width:
        style["maxWidth"] = f"{column.max_width}px"

    if not column.sortable:
        return html.Th(column.header, style=style)

    return html.Th(
        html.Button(
            [column.header, html.Span(sort_indicator(state, column.id), className="ms-1 text-muted")],
            id=sort_header_id(column.id),
            n_clicks=0,
            className="btn btn-link btn-sm p-0 text-reset text-decoration-none fw-semibold",
        ),
        style=style,
    )


def build_data_table(engine: TableViewEngine, *, selectable: bool = True):
    """
    Build a styled dbc.Table for the current page. Cells go through each column's
    renderer; sortable headers are buttons carrying a pattern-matching id.
    """
    rows = engine.visible_rows
    state = engine.state
    header_cells = []
    if selectable:
        header_cells.append(
            html.Th(
                dbc.Checkbox(id=select_all_id(), value=engine.is_page_selected),
                style={**HEADER_STYLE, "width": "40px"},
            )
        )
    header_cells.extend(_header_cell(c, state) for c in engine.columns)

    body = []
    if not rows:
        body.append(
            html.Tr(html.Td(build_empty_state(), colSpan=len(header_cells), style=CELL_STYLE))
        )

    for row in rows:
        row_id = str(row["id"])
        cells = []
        if selectable:
            cells.append(
                html.Td(
                    dbc.Checkbox(id=row_select_id(row_id), value=row_id in state.selection),
                    style=CELL_STYLE,
                )
            )
        cells.extend(html.Td(c.render(row), style=CELL_STYLE) for c in engine.columns)
        body.append(
            html.Tr(cells, className="table-active" if row_id in state.selection else None)
        )

    return dbc.Table(
        [html.Thead(html.Tr(header_cells)), html.Tbody(body)],
        bordered=False,
        hover=True,
        responsive=True,
        className="mb-0",
        style={"border": "1px solid #e5e7eb", "borderRadius": "4px"},
    )
