from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from portfolio_admin.core.view_state import DEFAULT_PAGE_SIZE, DEFAULT_PAGE_SIZE_OPTIONS


@dataclass
class CollectionConfig:
    """
    Parsed config entry for a single admin collection.
    """
    raw: Dict[str, Any]
    source_path: Path
    index: int

    @property
    def id(self) -> str:
        return str(self.raw.get("id", ""))

    @property
    def title(self) -> str:
        return self.raw.get("title") or self.id.replace("_", " ").title()

    @property
    def description(self) -> Optional[str]:
        return self.raw.get("description")

    @property
    def search_placeholder(self) -> Optional[str]:
        return self.raw.get("search_placeholder")

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], source_path: Path, index: int) -> CollectionConfig:
        return cls(raw=raw, source_path=source_path, index=index)


@dataclass
class GlobalConfig:
    ui_title: str = "Portfolio Admin"
    default_collection: Optional[str] = None
    data_root: Optional[Path] = None
    page_size: int = DEFAULT_PAGE_SIZE
    page_size_options: Tuple[int, ...] = DEFAULT_PAGE_SIZE_OPTIONS
    collections: List[CollectionConfig] = field(default_factory=list)

    def collection(self, collection_id: str) -> Optional[CollectionConfig]:
        return next((c for c in self.collections if c.id == collection_id), None)
