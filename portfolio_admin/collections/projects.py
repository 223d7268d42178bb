from __future__ import annotations

from typing import List

from portfolio_admin.core.columns import ColumnDescriptor
from .base_collection import BaseCollection
from .renderers import external_link, status_badge, tag_list, yes_no


class ProjectsCollection(BaseCollection):
    """
    Portfolio projects: title, category, publication status and tech stack.
    """
    id = "projects"
    label = "Projects"
    search_placeholder = "Search projects..."

    def build_columns(self) -> List[ColumnDescriptor]:
        return [
            ColumnDescriptor(id="title", header="Title", accessor="title", min_width=160),
            ColumnDescriptor(id="category", header="Category", accessor="category"),
            ColumnDescriptor(id="status", header="Status", accessor="status", cell=status_badge),
            ColumnDescriptor(id="featured", header="Featured", accessor="featured", cell=yes_no, width=90),
            ColumnDescriptor(
                id="technologies",
                header="Technologies",
                accessor=lambda row: ", ".join(str(t) for t in row.get("technologies") or []),
                cell=lambda _value, row: tag_list(row.get("technologies"), row),
                sortable=False,
                max_width=260,
            ),
            ColumnDescriptor(id="created_at", header="Created", accessor="created_at", width=120),
            ColumnDescriptor(
                id="live_url",
                header="Live",
                cell=lambda _value, row: external_link(row.get("live_url"), row),
                sortable=False,
                filterable=False,
                width=70,
            ),
        ]
