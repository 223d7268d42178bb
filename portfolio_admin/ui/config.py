from dataclasses import dataclass
from typing import Optional

from portfolio_admin.collections.registry import CollectionRegistry
from portfolio_admin.config.model import GlobalConfig
from portfolio_admin.services.export_service import ExportService
from portfolio_admin.services.record_store import RecordStore


@dataclass
class AppConfig:
    """
    Shared services for the Dash app, passed into layout + callback registration
    functions instead of using module-level globals.
    """
    global_config: GlobalConfig
    registry: Optional[CollectionRegistry] = None
    record_store: Optional[RecordStore] = None
    export_service: Optional[ExportService] = None
    enable_bulk_delete: bool = False

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")
        if self.record_store is None:
            raise RuntimeError("AppConfig.record_store must be initialized.")
        if self.export_service is None:
            raise RuntimeError("AppConfig.export_service must be initialized.")

    def collection_ids(self) -> list[str]:
        return [cls.id for cls in self.registry.all_classes()]

    def default_collection_id(self) -> Optional[str]:
        ids = self.collection_ids()
        preferred = self.global_config.default_collection
        if preferred in ids:
            return preferred
        return ids[0] if ids else None

    def collection_title(self, collection_id: str) -> str:
        cfg = self.global_config.collection(collection_id)
        if cfg is not None:
            return cfg.title
        return self.registry.create(collection_id).label
