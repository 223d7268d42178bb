from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple

import dash
from dash import Input, Output, State, dcc, no_update

from portfolio_admin.core.exceptions import PortfolioAdminError
from portfolio_admin.ui.helpers import load_engine, table_store_payload
from portfolio_admin.ui.ids import IDs

if TYPE_CHECKING:
    from portfolio_admin.ui.config import AppConfig

logger = logging.getLogger(__name__)

_EXPORT_BUTTONS = {
    IDs.Control.EXPORT_CSV_BTN: ("csv", False),
    IDs.Control.EXPORT_JSON_BTN: ("json", False),
    IDs.Control.EXPORT_SELECTED_BTN: ("json", True),
}


def export_table_rows(
        ctx: AppConfig,
        store_data: Mapping[str, Any],
        *,
        fmt: str,
        selected_only: bool = False,
) -> Tuple[Optional[bytes], Optional[str], str]:
    """
    Export the processed rows (search + filter + sort, all pages) or the selected rows
    of the collection held in 'store_data'. Selected rows hidden by the current view
    are included.

    :return: (payload, file_name, status message); payload is None when nothing was exported
    """
    collection_id = store_data.get("collection")
    try:
        collection, engine = load_engine(ctx, collection_id, store_data)
    except PortfolioAdminError:
        logger.exception("Failed to load collection %r for export", collection_id)
        return None, None, "Export failed: the collection could not be loaded."

    rows = engine.selected_rows if selected_only else engine.processed_rows
    if not rows:
        return None, None, "Nothing to export."

    payload, file_name = ctx.export_service.export(
        rows,
        title=ctx.collection_title(collection_id),
        fmt=fmt,
        selected_only=selected_only,
        transform=collection.export_record,
    )
    return payload, file_name, f"Exported {len(rows)} row(s) to {file_name}."


def delete_selected_records(
        ctx: AppConfig,
        store_data: Mapping[str, Any],
) -> Tuple[Optional[Dict[str, Any]], str]:
    """
    Delete the selected records from the record store. The deleted ids leave the
    selection and the page is clamped onto the shrunken result set.

    :return: (new store payload or None if nothing changed, status message)
    """
    if not ctx.enable_bulk_delete:
        logger.warning("Bulk delete requested while disabled")
        return None, "Bulk delete is disabled."

    collection_id = store_data.get("collection")
    try:
        _collection, engine = load_engine(ctx, collection_id, store_data)
        selected = sorted(engine.state.selection)
        if not selected:
            return None, "No rows selected."

        removed = ctx.record_store.delete_records(collection_id, selected)
        engine.set_rows(ctx.record_store.list_records(collection_id))
    except PortfolioAdminError:
        logger.exception("Bulk delete failed for collection %r", collection_id)
        return None, "Delete failed; see server logs."

    engine.deselect_rows(selected)
    engine.clamp_page()
    return table_store_payload(collection_id, engine.state), f"Deleted {removed} record(s)."


def register_bulk_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Export processed rows / selected rows
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD, "data"),
        Output(IDs.Control.STATUS_BAR, "children"),
        Input(IDs.Control.EXPORT_CSV_BTN, "n_clicks"),
        Input(IDs.Control.EXPORT_JSON_BTN, "n_clicks"),
        Input(IDs.Control.EXPORT_SELECTED_BTN, "n_clicks"),
        State(IDs.Store.TABLE_STATE, "data"),
        prevent_initial_call=True,
    )
    def export_rows(_csv, _json, _selected, store_data):
        button = dash.ctx.triggered_id
        if button not in _EXPORT_BUTTONS or not store_data:
            raise dash.exceptions.PreventUpdate

        fmt, selected_only = _EXPORT_BUTTONS[button]
        payload, file_name, message = export_table_rows(
            ctx, store_data, fmt=fmt, selected_only=selected_only
        )
        if payload is None:
            return no_update, message
        return dcc.send_bytes(payload, file_name), message

    # ---------------------------------------------------------
    # Delete selected records
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.TABLE_STATE, "data", allow_duplicate=True),
        Output(IDs.Control.STATUS_BAR, "children", allow_duplicate=True),
        Input(IDs.Control.DELETE_SELECTED_BTN, "n_clicks"),
        State(IDs.Store.TABLE_STATE, "data"),
        prevent_initial_call=True,
    )
    def delete_selected(n_clicks, store_data):
        if not n_clicks or not store_data:
            raise dash.exceptions.PreventUpdate

        payload, message = delete_selected_records(ctx, store_data)
        return (payload if payload is not None else no_update), message
