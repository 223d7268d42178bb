from __future__ import annotations

from typing import List

from portfolio_admin.core.columns import ColumnDescriptor
from .base_collection import BaseCollection
from .renderers import yes_no


def _period(row) -> str:
    start = row.get("start_date") or ""
    end = "Present" if row.get("current") else (row.get("end_date") or "")
    return f"{start} - {end}".strip(" -")


class ExperienceCollection(BaseCollection):
    """
    Work history entries. 'period' is derived from start/end dates; sort it by start date.
    """
    id = "experience"
    label = "Experience"
    search_placeholder = "Search experience..."

    def build_columns(self) -> List[ColumnDescriptor]:
        return [
            ColumnDescriptor(id="company", header="Company", accessor="company", min_width=140),
            ColumnDescriptor(id="position", header="Position", accessor="position"),
            ColumnDescriptor(id="location", header="Location", accessor="location"),
            ColumnDescriptor(id="period", header="Period", accessor=_period, sortable=False),
            ColumnDescriptor(id="start_date", header="Start", accessor="start_date", width=110),
            ColumnDescriptor(id="current", header="Current", accessor="current", cell=yes_no, width=90),
        ]
