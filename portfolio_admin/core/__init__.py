"""
Core domain layer: column descriptors, view state, the search/filter/sort/paginate
pipeline, pure state transitions and the table view engine
"""

from .columns import ColumnDescriptor
from .view_state import FilterEntry, Pagination, SortEntry, ViewState
from .engine import TableViewEngine

__all__ = ["ColumnDescriptor", "FilterEntry", "Pagination", "SortEntry", "ViewState", "TableViewEngine"]
