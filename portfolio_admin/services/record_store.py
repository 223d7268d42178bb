from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

from portfolio_admin.core.exceptions import RecordStoreError
from .storage import StorageBackend

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class RecordStore(ABC):
    """
    Boundary to the document store holding the portfolio content.

    The admin table only consumes materialised lists of records, each with a unique
    string 'id'. It never caches or edits records through this interface except for
    bulk deletes.
    """

    @abstractmethod
    def list_records(self, collection_id: str) -> List[Record]:
        pass

    @abstractmethod
    def delete_records(self, collection_id: str, record_ids: Iterable[str]) -> int:
        """Delete records by id; returns how many were removed."""
        pass


class JsonRecordStore(RecordStore):
    """
    Stores each collection as one JSON document '<collection_id>.json' holding a list of records.
    """

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    @staticmethod
    def _path(collection_id: str) -> str:
        return f"{collection_id}.json"

    def list_records(self, collection_id: str) -> List[Record]:
        """
        Load the records of a collection. A collection with no document yet is empty.

        :raises RecordStoreError: if the document isn't valid JSON, isn't a list of objects,
            or contains a record without a string 'id'
        """
        path = self._path(collection_id)
        if not self.storage.exists(path):
            logger.info("No document for collection; treating as empty", extra={"collection": collection_id})
            return []

        try:
            raw = json.loads(self.storage.read_bytes(path))
        except (OSError, ValueError) as e:
            raise RecordStoreError(f"Could not read collection '{collection_id}': {e}") from e

        if not isinstance(raw, list):
            raise RecordStoreError(f"Collection '{collection_id}' must be a JSON list of records")

        records: List[Record] = []
        for idx, item in enumerate(raw):
            if not isinstance(item, dict):
                raise RecordStoreError(f"Collection '{collection_id}' entry {idx} is not an object")
            if not isinstance(item.get("id"), str) or not item["id"]:
                raise RecordStoreError(f"Collection '{collection_id}' entry {idx} has no string 'id'")
            records.append(item)

        return records

    def replace_records(self, collection_id: str, records: List[Record]) -> None:
        data = json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")
        try:
            self.storage.write_bytes(self._path(collection_id), data)
        except OSError as e:
            raise RecordStoreError(f"Could not write collection '{collection_id}': {e}") from e

    def delete_records(self, collection_id: str, record_ids: Iterable[str]) -> int:
        ids = set(record_ids)
        if not ids:
            return 0

        records = self.list_records(collection_id)
        kept = [r for r in records if r["id"] not in ids]
        removed = len(records) - len(kept)

        if removed:
            self.replace_records(collection_id, kept)
            logger.info(
                "Deleted records",
                extra={"collection": collection_id, "n_deleted": removed},
            )
        return removed
