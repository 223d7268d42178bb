from __future__ import annotations

from typing import Sequence

import dash_bootstrap_components as dbc
from dash import dcc, html

from portfolio_admin.ui.helpers import filter_operator_options
from portfolio_admin.ui.ids import IDs


def _build_toolbar() -> html.Div:
    search = dbc.Input(
        id=IDs.Control.SEARCH_INPUT,
        type="search",
        placeholder="Search...",
        debounce=True,
        size="sm",
        style={"width": "240px"},
    )

    filter_builder = html.Div(
        [
            dcc.Dropdown(
                id=IDs.Control.FILTER_COLUMN,
                placeholder="Column",
                clearable=False,
                style={"width": "150px"},
            ),
            dcc.Dropdown(
                id=IDs.Control.FILTER_OPERATOR,
                options=filter_operator_options(),
                value="contains",
                clearable=False,
                style={"width": "140px"},
            ),
            dbc.Input(
                id=IDs.Control.FILTER_VALUE,
                placeholder="Value",
                size="sm",
                style={"width": "140px"},
            ),
            dbc.Button("Add filter", id=IDs.Control.FILTER_ADD_BTN, size="sm", color="primary", outline=True),
            dbc.Button("Clear filters", id=IDs.Control.FILTER_CLEAR_BTN, size="sm", color="secondary", outline=True),
        ],
        className="d-flex align-items-center gap-2 flex-wrap",
    )

    export_actions = html.Div(
        [
            dbc.Button("Export CSV", id=IDs.Control.EXPORT_CSV_BTN, size="sm", color="secondary", outline=True),
            dbc.Button("Export JSON", id=IDs.Control.EXPORT_JSON_BTN, size="sm", color="secondary", outline=True),
            dcc.Download(id=IDs.Control.DOWNLOAD),
        ],
        className="d-flex align-items-center gap-2 ms-auto",
    )

    return html.Div(
        [
            html.Div([search, filter_builder], className="d-flex align-items-center gap-2 flex-wrap"),
            export_actions,
        ],
        className="d-flex flex-column flex-lg-row gap-3 align-items-start align-items-lg-center p-3 border-bottom",
    )


def _build_bulk_bar(enable_bulk_delete: bool) -> html.Div:
    actions = [
        html.Span(id=IDs.Control.SELECTION_COUNT, className="text-muted small me-2"),
        dbc.Button("Export selected", id=IDs.Control.EXPORT_SELECTED_BTN, size="sm", color="secondary", outline=True),
        dbc.Button("Clear selection", id=IDs.Control.CLEAR_SELECTION_BTN, size="sm", color="link"),
    ]
    # The button always exists so callbacks can bind to it; it is only shown when enabled
    actions.append(
        dbc.Button(
            "Delete selected",
            id=IDs.Control.DELETE_SELECTED_BTN,
            size="sm",
            color="danger",
            outline=True,
            style={} if enable_bulk_delete else {"display": "none"},
        )
    )
    return html.Div(actions, className="d-flex align-items-center gap-2 px-3 pt-2")


def _build_pagination_bar(page_size: int, page_size_options: Sequence[int]) -> html.Div:
    return html.Div(
        [
            html.Div(id=IDs.Control.PAGE_SUMMARY, className="text-muted small"),
            html.Div(
                [
                    html.Span("Rows per page", className="small text-muted me-2"),
                    dcc.Dropdown(
                        id=IDs.Control.PAGE_SIZE_SELECT,
                        options=[{"label": str(n), "value": n} for n in page_size_options],
                        value=page_size,
                        clearable=False,
                        style={"width": "80px"},
                    ),
                    dbc.ButtonGroup(
                        [
                            dbc.Button("«", id=IDs.Control.PAGE_FIRST_BTN, size="sm", outline=True, color="secondary"),
                            dbc.Button("‹", id=IDs.Control.PAGE_PREV_BTN, size="sm", outline=True, color="secondary"),
                            dbc.Button("›", id=IDs.Control.PAGE_NEXT_BTN, size="sm", outline=True, color="secondary"),
                            dbc.Button("»", id=IDs.Control.PAGE_LAST_BTN, size="sm", outline=True, color="secondary"),
                        ],
                        className="ms-3",
                    ),
                    html.Span(id=IDs.Control.PAGE_LABEL, className="small ms-3"),
                ],
                className="d-flex align-items-center",
            ),
        ],
        className="d-flex justify-content-between align-items-center p-3 border-top",
    )


def build_table_panel(
    *,
    page_size: int,
    page_size_options: Sequence[int],
    enable_bulk_delete: bool = False,
) -> dbc.Card:
    """
    Admin table card:
    - search box, filter builder, export buttons
    - bulk action bar for the current selection
    - the table itself (populated via callbacks in table-container)
    - pagination controls
    """
    return dbc.Card(
        [
            dbc.CardHeader(
                [
                    html.H5(id=IDs.Control.TABLE_TITLE, className="mb-0"),
                    html.Div(id=IDs.Control.TABLE_DESCRIPTION, className="text-muted small"),
                ]
            ),
            dbc.CardBody(
                [
                    _build_toolbar(),
                    html.Div(id=IDs.Control.FILTER_CHIPS, className="px-3 pt-2"),
                    _build_bulk_bar(enable_bulk_delete),
                    html.Div(id=IDs.Control.STATUS_BAR, className="px-3 pt-2 small"),
                    html.Div(
                        id=IDs.Control.TABLE_CONTAINER,
                        className="p-3",
                        style={"overflowX": "auto"},
                    ),
                    _build_pagination_bar(page_size, page_size_options),
                ],
                className="p-0",
            ),
        ],
        className="shadow-sm",
    )
