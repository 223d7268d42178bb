from __future__ import annotations

import logging
import os
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from portfolio_admin.collections import build_default_registry
from portfolio_admin.config.loader import load_global_config
from portfolio_admin.services.export_service import ExportService
from portfolio_admin.services.record_store import JsonRecordStore
from portfolio_admin.services.storage import LocalFileSystemStorage
from portfolio_admin.ui.callbacks.callbacks_bulk import register_bulk_callbacks
from portfolio_admin.ui.callbacks.callbacks_table import register_table_callbacks
from portfolio_admin.ui.config import AppConfig
from portfolio_admin.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Collections + config
    registry = build_default_registry()
    known_ids = [cls.id for cls in registry.all_classes()]
    global_config = load_global_config(config_root, known_collections=known_ids)

    # 2) Services
    # LocalFileSystemStorage creates the data directory if needed
    storage_backend = LocalFileSystemStorage(global_config.data_root)
    record_store = JsonRecordStore(storage_backend)

    # 3) App context
    ctx = AppConfig(
        global_config=global_config,
        registry=registry,
        record_store=record_store,
        export_service=ExportService(),
        enable_bulk_delete=os.getenv("ENABLE_BULK_DELETE", "0") == "1",
    )
    ctx.validate()

    logger.info(
        "Admin app configured",
        extra={
            "config_root": str(config_root),
            "data_root": str(global_config.data_root),
            "collections": known_ids,
            "bulk_delete": ctx.enable_bulk_delete,
        },
    )

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        title=global_config.ui_title,
    )

    app.layout = build_layout(ctx)

    register_table_callbacks(app, ctx)
    register_bulk_callbacks(app, ctx)

    return app
