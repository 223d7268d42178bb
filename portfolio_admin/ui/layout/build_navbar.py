from __future__ import annotations

from typing import List, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from portfolio_admin.ui.ids import IDs


def build_navbar(
    title: str,
    collection_options: List[dict],
    default_collection: Optional[str],
) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(title, className="mb-0"),
                        html.Small("Content dashboard", className="text-muted"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    [
                        html.Div("Collection", className="small fw-semibold text-muted"),
                        dcc.Dropdown(
                            id=IDs.Control.COLLECTION_SELECT,
                            options=collection_options,
                            value=default_collection,
                            clearable=False,
                            placeholder="Select collection",
                            className="mt-1",
                        ),
                    ],
                    className="ms-auto",
                    style={"minWidth": "240px", "maxWidth": "320px", "marginRight": "24px"},
                ),
            ],
        ),
        dark=False,
        className="shadow-sm",
    )
