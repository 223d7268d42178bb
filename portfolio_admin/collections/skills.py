from __future__ import annotations

from typing import List

from portfolio_admin.core.columns import ColumnDescriptor
from .base_collection import BaseCollection
from .renderers import level_bar


class SkillsCollection(BaseCollection):
    id = "skills"
    label = "Skills"
    search_placeholder = "Search skills..."

    def build_columns(self) -> List[ColumnDescriptor]:
        return [
            ColumnDescriptor(id="name", header="Name", accessor="name", min_width=140),
            ColumnDescriptor(id="category", header="Category", accessor="category"),
            ColumnDescriptor(id="level", header="Level", accessor="level", cell=level_bar, width=140),
            ColumnDescriptor(id="years", header="Years", accessor="years", width=80),
        ]
