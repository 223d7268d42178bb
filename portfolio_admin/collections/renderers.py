"""
Cell renderers shared by the collection column configs.
Each takes (value, row) and returns something Dash can render.
"""
from __future__ import annotations

from typing import Any, Mapping

import dash_bootstrap_components as dbc
from dash import html

STATUS_COLOURS = {
    "published": "success",
    "draft": "secondary",
    "archived": "dark",
}


def status_badge(value: Any, _row: Mapping[str, Any]):
    if not value:
        return ""
    return dbc.Badge(str(value).capitalize(), color=STATUS_COLOURS.get(str(value).lower(), "info"))


def yes_no(value: Any, _row: Mapping[str, Any]):
    return "Yes" if value else "No"


def tag_list(value: Any, _row: Mapping[str, Any]):
    if not value:
        return ""
    if isinstance(value, (list, tuple)):
        return html.Span(
            [dbc.Badge(str(v), color="light", text_color="dark", className="me-1") for v in value]
        )
    return str(value)


def external_link(value: Any, _row: Mapping[str, Any]):
    if not value:
        return ""
    return html.A("Open", href=str(value), target="_blank", rel="noopener noreferrer")


def level_bar(value: Any, _row: Mapping[str, Any]):
    try:
        level = max(0, min(100, int(value)))
    except (TypeError, ValueError):
        return ""
    return dbc.Progress(value=level, label=f"{level}%", style={"height": "14px", "minWidth": "90px"})
