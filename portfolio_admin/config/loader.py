from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple

from portfolio_admin.core.exceptions import ConfigError
from portfolio_admin.core.view_state import DEFAULT_PAGE_SIZE, DEFAULT_PAGE_SIZE_OPTIONS
from .model import CollectionConfig, GlobalConfig

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e


def _page_size_options(raw: Any) -> Tuple[int, ...]:
    if raw is None:
        return DEFAULT_PAGE_SIZE_OPTIONS
    if not isinstance(raw, list) or not raw:
        raise ConfigError("page_size_options must be a non-empty list of positive integers")
    try:
        options = tuple(int(v) for v in raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"page_size_options must be integers: {raw!r}") from e
    if any(v <= 0 for v in options):
        raise ConfigError(f"page_size_options must be positive: {raw!r}")
    return options


def load_global_config(root: Path | str, known_collections: Optional[List[str]] = None) -> GlobalConfig:
    """
    Load configuration from a directory using the multi-file layout.

    Expected structure:

        root/
            global.json
            collections/
                projects.json
                skills.json
                ...

    - ui_title: title for UI, defaults to 'Portfolio Admin'
    - default_collection: collection shown first, defaults to the first configured one
    - data_root: directory holding the collection documents; relative paths are resolved
                 against the config root, defaults to root/data
    - page_size / page_size_options: table pagination defaults

    :param root: Directory containing 'global.json' and optionally 'collections/'.
    :param known_collections: when given, collection entries with other ids are skipped
    :return: A GlobalConfig instance.
    :raises ConfigError: if global.json is missing or invalid.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise ConfigError(f"File not found at {global_path}")

    raw_global = _read_json(global_path)
    if not isinstance(raw_global, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    collections: List[CollectionConfig] = []
    collections_dir = root / "collections"
    if collections_dir.is_dir():
        for idx, config_file in enumerate(sorted(collections_dir.glob("*.json"))):
            raw = _read_json(config_file)
            if not isinstance(raw, dict) or not raw.get("id"):
                logger.warning("Skipping collection config without an id", extra={"path": str(config_file)})
                continue
            cfg = CollectionConfig.from_raw(raw, source_path=config_file, index=idx)
            if known_collections is not None and cfg.id not in known_collections:
                logger.warning(
                    "Skipping config for unknown collection",
                    extra={"collection": cfg.id, "path": str(config_file)},
                )
                continue
            collections.append(cfg)

    # Absolute paths are used as-is, relative ones resolve against the config root
    data_root_path = Path(raw_global.get("data_root") or "data")
    data_root = data_root_path if data_root_path.is_absolute() else (root / data_root_path).resolve()

    page_size_options = _page_size_options(raw_global.get("page_size_options"))
    try:
        page_size = int(raw_global.get("page_size", DEFAULT_PAGE_SIZE))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"page_size must be an integer: {raw_global.get('page_size')!r}") from e
    if page_size <= 0:
        raise ConfigError(f"page_size must be positive, got {page_size}")

    default_collection = raw_global.get("default_collection")
    if default_collection is None and collections:
        default_collection = collections[0].id

    return GlobalConfig(
        ui_title=raw_global.get("ui_title", "Portfolio Admin"),
        default_collection=default_collection,
        data_root=data_root,
        page_size=page_size,
        page_size_options=page_size_options,
        collections=collections,
    )
