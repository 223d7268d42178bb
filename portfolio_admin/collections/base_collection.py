from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping

from portfolio_admin.core.columns import ColumnDescriptor


class BaseCollection(ABC):
    """
    Abstract base class for the admin dashboard's content collections.

    Defines the contract every collection follows
    - expose an 'id' - used for the record store document and registry lookups
    - expose a 'label' - used for UI/human-readable applications
    - implement 'build_columns' - the table's column configuration
    """

    id: str = None
    label: str = None
    search_placeholder: str = "Search..."

    @abstractmethod
    def build_columns(self) -> List[ColumnDescriptor]:
        """
        Column configuration for this collection's table. Built once per table instance.
        :return: the ordered list of {@link ColumnDescriptor}
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Common helpers for all collections
    # ------------------------------------------------------------------
    def export_record(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Flatten a record for CSV/JSON export. Lists are joined so they fit in one cell.
        """
        out: Dict[str, Any] = {}
        for key, value in record.items():
            if isinstance(value, (list, tuple)):
                out[key] = ", ".join(str(v) for v in value)
            else:
                out[key] = value
        return out
