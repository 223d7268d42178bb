from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import pandas as pd

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "json")

RecordTransform = Callable[[Mapping[str, Any]], Dict[str, Any]]


def slugify(title: str) -> str:
    return re.sub(r"\s+", "-", title.strip().lower()) or "table"


def export_file_name(title: str, fmt: str, *, selected_only: bool = False) -> str:
    suffix = "selected-data" if selected_only else "export"
    return f"{slugify(title)}-{suffix}.{fmt}"


class ExportService:
    """
    Responsible for:
    - turning table rows (processed or selected) into CSV / JSON bytes
    - naming the exported file after the table title
    """

    def __init__(self, transform: Optional[RecordTransform] = None):
        self._transform = transform

    def _records(
            self,
            rows: Sequence[Mapping[str, Any]],
            transform: Optional[RecordTransform] = None,
    ) -> List[Dict[str, Any]]:
        transform = transform or self._transform
        if transform is None:
            return [dict(r) for r in rows]
        return [transform(r) for r in rows]

    def to_csv_bytes(
            self,
            rows: Sequence[Mapping[str, Any]],
            transform: Optional[RecordTransform] = None,
    ) -> bytes:
        """
        CSV with one column per field seen in any row (first-seen order). Empty input
        yields empty bytes.
        """
        records = self._records(rows, transform)
        if not records:
            return b""
        df = pd.DataFrame.from_records(records)
        return df.to_csv(index=False).encode("utf-8")

    def to_json_bytes(
            self,
            rows: Sequence[Mapping[str, Any]],
            transform: Optional[RecordTransform] = None,
    ) -> bytes:
        records = self._records(rows, transform)
        return json.dumps(records, indent=2, ensure_ascii=False, default=str).encode("utf-8")

    def export(
            self,
            rows: Sequence[Mapping[str, Any]],
            *,
            title: str,
            fmt: str,
            selected_only: bool = False,
            transform: Optional[RecordTransform] = None,
    ) -> tuple[bytes, str]:
        """
        Export rows and return (payload, file_name).

        :raises ValueError: for a format outside EXPORT_FORMATS
        """
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format '{fmt}'")

        if fmt == "csv":
            payload = self.to_csv_bytes(rows, transform)
        else:
            payload = self.to_json_bytes(rows, transform)
        file_name = export_file_name(title, fmt, selected_only=selected_only)

        logger.info(
            "Exported table rows",
            extra={"file_name": file_name, "n_rows": len(rows), "format": fmt},
        )
        return payload, file_name
