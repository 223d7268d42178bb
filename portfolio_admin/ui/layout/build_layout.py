from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from portfolio_admin.ui.ids import IDs
from portfolio_admin.ui.layout.build_navbar import build_navbar
from portfolio_admin.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from portfolio_admin.ui.config import AppConfig


def build_layout(ctx: AppConfig):
    collection_options = [
        {"label": ctx.collection_title(cid), "value": cid}
        for cid in ctx.collection_ids()
    ]

    navbar = build_navbar(
        ctx.global_config.ui_title,
        collection_options,
        ctx.default_collection_id(),
    )

    table_panel = build_table_panel(
        page_size=ctx.global_config.page_size,
        page_size_options=ctx.global_config.page_size_options,
        enable_bulk_delete=ctx.enable_bulk_delete,
    )

    return dbc.Container(
        fluid=True,
        children=[
            navbar,
            # Per-tab view state; each browser session gets its own copy
            dcc.Store(id=IDs.Store.TABLE_STATE, storage_type="session"),
            dbc.Row(dbc.Col(table_panel, md=12, className="mt-3"), className="gx-3"),
        ],
    )
