from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Union

Row = Mapping[str, Any]
Accessor = Union[str, Callable[[Row], Any]]
CellRenderer = Callable[[Any, Row], Any]


class _Missing:
    """Sentinel for a field the row does not carry."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Static configuration for one table column.

    Fields:

    - id: column identifier, referenced by sort and filter entries
    - header: human-readable header label
    - accessor: field name or a callable taking the row. Columns without an
      accessor (e.g. action columns) are never searched.
    - cell: optional renderer (value, row) -> display value. Opaque to the engine,
      only the UI layer calls it.
    - sortable / filterable: whether the host may sort / filter on this column
    - width, min_width, max_width: display width hints in pixels
    """

    id: str
    header: str
    accessor: Optional[Accessor] = None
    cell: Optional[CellRenderer] = None
    sortable: bool = True
    filterable: bool = True
    width: Optional[int] = None
    min_width: Optional[int] = None
    max_width: Optional[int] = None

    def __post_init__(self) -> None:
        if self.accessor is not None and not (isinstance(self.accessor, str) or callable(self.accessor)):
            raise TypeError(
                f"Column '{self.id}' accessor must be a field name or a callable, "
                f"got {type(self.accessor).__name__}"
            )

    @property
    def has_accessor(self) -> bool:
        return self.accessor is not None

    def value(self, row: Row) -> Any:
        """
        Read this column's value from a row. Returns MISSING when the row has no such
        field or the accessor fails on it.
        """
        if self.accessor is None:
            return row.get(self.id, MISSING)
        if isinstance(self.accessor, str):
            return row.get(self.accessor, MISSING)
        try:
            return self.accessor(row)
        except (KeyError, AttributeError, TypeError, IndexError):
            return MISSING

    def render(self, row: Row) -> Any:
        value = self.value(row)
        if self.cell is not None:
            return self.cell(None if value is MISSING else value, row)
        return "" if value is MISSING or value is None else value


def find_column(columns: Sequence[ColumnDescriptor], column_id: str) -> Optional[ColumnDescriptor]:
    return next((c for c in columns if c.id == column_id), None)


def resolve_value(row: Row, column_id: str, columns: Sequence[ColumnDescriptor] = ()) -> Any:
    """
    Value used by sort and filter entries for 'column_id'.

    A configured column with an accessor wins; otherwise the raw field of the same name
    is read, so entries may also target fields that have no column.
    """
    column = find_column(columns, column_id)
    if column is not None and column.has_accessor:
        return column.value(row)
    return row.get(column_id, MISSING)
