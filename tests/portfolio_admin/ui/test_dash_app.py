import json
import logging

from dash import Dash

from portfolio_admin.logging_config import configure_logging
from portfolio_admin.ui.dash_app import create_dash_app


def _write_config(root):
    (root / "collections").mkdir(parents=True)
    (root / "global.json").write_text(
        json.dumps({"ui_title": "Test Admin", "default_collection": "skills", "page_size": 5}),
        encoding="utf-8",
    )
    (root / "collections" / "skills.json").write_text(
        json.dumps({"id": "skills", "title": "Skills"}),
        encoding="utf-8",
    )


def test_create_dash_app_builds_layout(tmp_path):
    _write_config(tmp_path)

    app = create_dash_app(tmp_path)

    assert isinstance(app, Dash)
    assert app.title == "Test Admin"
    assert app.layout is not None
    assert (tmp_path / "data").is_dir()


def test_configure_logging_replaces_root_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging(logging.DEBUG, force_format="plain")
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert not type(root.handlers[0].formatter).__module__.startswith("pythonjsonlogger")

        configure_logging(force_format="json")
        assert len(root.handlers) == 1
        assert type(root.handlers[0].formatter).__module__.startswith("pythonjsonlogger")
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
