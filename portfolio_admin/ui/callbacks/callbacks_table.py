from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import ALL, Input, Output, State, no_update

from portfolio_admin.core.engine import TableViewEngine
from portfolio_admin.core.exceptions import PortfolioAdminError
from portfolio_admin.ui.helpers import (
    build_data_table,
    build_filter_chips,
    filter_column_options,
    load_engine,
    parse_filter_value,
    table_store_payload,
)
from portfolio_admin.ui.ids import IDs

if TYPE_CHECKING:
    from portfolio_admin.ui.config import AppConfig

logger = logging.getLogger(__name__)

# Actions that can shrink the result set; the page is clamped after them
_SHRINKING_ACTIONS = {
    IDs.Control.SEARCH_INPUT,
    IDs.Control.FILTER_ADD_BTN,
}


def dispatch_table_action(
        engine: TableViewEngine,
        triggered_id: Any,
        triggered_value: Any,
        *,
        search_value: Optional[str] = None,
        page_size: Optional[int] = None,
        filter_column: Optional[str] = None,
        filter_operator: Optional[str] = None,
        filter_value: Any = None,
) -> bool:
    """
    Apply the user action identified by a Dash triggered id to the engine.

    Checkbox triggers are applied against the current selection, so a checkbox that
    re-fires with an unchanged value is a no-op.

    :return: True if the action was recognised and applied
    """
    if isinstance(triggered_id, dict):
        kind = triggered_id.get("type")
        index = triggered_id.get("index")

        if kind == IDs.Pattern.SORT_HEADER:
            if not triggered_value:
                return False
            engine.toggle_sort(str(index))
            return True

        if kind == IDs.Pattern.ROW_SELECT:
            row_id = str(index)
            if bool(triggered_value) != (row_id in engine.state.selection):
                engine.toggle_row(row_id)
            return True

        if kind == IDs.Pattern.SELECT_ALL:
            if bool(triggered_value) != engine.is_page_selected:
                engine.toggle_all_on_page()
            return True

        if kind == IDs.Pattern.FILTER_REMOVE:
            if not triggered_value:
                return False
            if not isinstance(index, int) or not 0 <= index < len(engine.state.filtering):
                return False
            engine.remove_filter_at(index)
            return True

        return False

    if triggered_id == IDs.Control.SEARCH_INPUT:
        engine.set_search_query(search_value)
    elif triggered_id == IDs.Control.PAGE_SIZE_SELECT:
        if not page_size:
            return False
        engine.set_page_size(int(page_size))
    elif triggered_id == IDs.Control.PAGE_FIRST_BTN:
        engine.first_page()
    elif triggered_id == IDs.Control.PAGE_PREV_BTN:
        engine.previous_page()
    elif triggered_id == IDs.Control.PAGE_NEXT_BTN:
        engine.next_page()
    elif triggered_id == IDs.Control.PAGE_LAST_BTN:
        engine.last_page()
    elif triggered_id == IDs.Control.FILTER_ADD_BTN:
        if not filter_column or not filter_operator or filter_value in (None, ""):
            return False
        engine.add_filter(filter_column, parse_filter_value(filter_value, filter_operator), filter_operator)
    elif triggered_id == IDs.Control.FILTER_CLEAR_BTN:
        engine.clear_filters()
    elif triggered_id == IDs.Control.CLEAR_SELECTION_BTN:
        engine.clear_selection()
    else:
        return False

    if triggered_id in _SHRINKING_ACTIONS:
        engine.clamp_page()
    return True


def register_table_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Reset per-collection controls when the collection changes
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.SEARCH_INPUT, "value"),
        Output(IDs.Control.SEARCH_INPUT, "placeholder"),
        Output(IDs.Control.FILTER_COLUMN, "options"),
        Output(IDs.Control.FILTER_COLUMN, "value"),
        Output(IDs.Control.FILTER_VALUE, "value"),
        Input(IDs.Control.COLLECTION_SELECT, "value"),
    )
    def reset_collection_controls(collection_id: str | None):
        if not collection_id or collection_id not in ctx.registry:
            return "", "Search...", [], None, ""
        collection = ctx.registry.create(collection_id)
        return "", collection.search_placeholder, filter_column_options(collection.build_columns()), None, ""

    # ---------------------------------------------------------
    # Controller: every table interaction -> new view state
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.TABLE_STATE, "data"),
        Input(IDs.Control.COLLECTION_SELECT, "value"),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        Input(IDs.Control.PAGE_SIZE_SELECT, "value"),
        Input(IDs.Control.PAGE_FIRST_BTN, "n_clicks"),
        Input(IDs.Control.PAGE_PREV_BTN, "n_clicks"),
        Input(IDs.Control.PAGE_NEXT_BTN, "n_clicks"),
        Input(IDs.Control.PAGE_LAST_BTN, "n_clicks"),
        Input(IDs.Control.FILTER_ADD_BTN, "n_clicks"),
        Input(IDs.Control.FILTER_CLEAR_BTN, "n_clicks"),
        Input(IDs.Control.CLEAR_SELECTION_BTN, "n_clicks"),
        Input({"type": IDs.Pattern.SORT_HEADER, "index": ALL}, "n_clicks"),
        Input({"type": IDs.Pattern.ROW_SELECT, "index": ALL}, "value"),
        Input({"type": IDs.Pattern.SELECT_ALL, "index": ALL}, "value"),
        Input({"type": IDs.Pattern.FILTER_REMOVE, "index": ALL}, "n_clicks"),
        State(IDs.Control.FILTER_COLUMN, "value"),
        State(IDs.Control.FILTER_OPERATOR, "value"),
        State(IDs.Control.FILTER_VALUE, "value"),
        State(IDs.Store.TABLE_STATE, "data"),
    )
    def update_table_state(
            collection_id, search_value, page_size,
            _first, _prev, _next, _last, _add, _clear, _clear_sel,
            _sort_clicks, _row_values, _all_values, _remove_clicks,
            filter_column, filter_operator, filter_value, store_data,
    ):
        if not collection_id:
            raise dash.exceptions.PreventUpdate

        try:
            _collection, engine = load_engine(ctx, collection_id, store_data)
        except PortfolioAdminError:
            logger.exception("Failed to load collection %r", collection_id)
            raise dash.exceptions.PreventUpdate

        triggered_id = dash.ctx.triggered_id
        triggered_value = dash.ctx.triggered[0]["value"] if dash.ctx.triggered else None

        if triggered_id is not None and triggered_id != IDs.Control.COLLECTION_SELECT:
            dispatch_table_action(
                engine,
                triggered_id,
                triggered_value,
                search_value=search_value,
                page_size=page_size,
                filter_column=filter_column,
                filter_operator=filter_operator,
                filter_value=filter_value,
            )

        payload = table_store_payload(collection_id, engine.state)
        # Re-rendered checkboxes and headers fire this callback too; skip no-op writes
        # so the store -> render -> controller cycle settles
        if payload == store_data:
            raise dash.exceptions.PreventUpdate
        return payload

    # ---------------------------------------------------------
    # Render the table + pagination from the view state
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.TABLE_TITLE, "children"),
        Output(IDs.Control.TABLE_DESCRIPTION, "children"),
        Output(IDs.Control.TABLE_CONTAINER, "children"),
        Output(IDs.Control.FILTER_CHIPS, "children"),
        Output(IDs.Control.SELECTION_COUNT, "children"),
        Output(IDs.Control.PAGE_SUMMARY, "children"),
        Output(IDs.Control.PAGE_LABEL, "children"),
        Output(IDs.Control.PAGE_FIRST_BTN, "disabled"),
        Output(IDs.Control.PAGE_PREV_BTN, "disabled"),
        Output(IDs.Control.PAGE_NEXT_BTN, "disabled"),
        Output(IDs.Control.PAGE_LAST_BTN, "disabled"),
        Input(IDs.Store.TABLE_STATE, "data"),
    )
    def render_table(store_data):
        collection_id = (store_data or {}).get("collection")
        if not collection_id:
            raise dash.exceptions.PreventUpdate

        try:
            collection, engine = load_engine(ctx, collection_id, store_data)
        except PortfolioAdminError as e:
            logger.exception("Failed to render collection %r", collection_id)
            return (
                collection_id, no_update, f"Could not load '{collection_id}': {e}",
                [], "", "", "", True, True, True, True,
            )

        cfg = ctx.global_config.collection(collection_id)
        title = ctx.collection_title(collection_id)
        description = cfg.description if cfg is not None else None

        n_selected = len(engine.state.selection)
        selection_text = f"{n_selected} selected" if n_selected else ""

        pagination = engine.state.pagination
        at_start = pagination.page == 0
        at_end = pagination.page >= engine.total_pages - 1

        return (
            title,
            description,
            build_data_table(engine),
            build_filter_chips(engine),
            selection_text,
            engine.page_summary(),
            engine.page_label(),
            at_start,
            at_start,
            at_end,
            at_end,
        )
