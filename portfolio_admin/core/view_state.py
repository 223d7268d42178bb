from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

ASC = "asc"
DESC = "desc"
SORT_DIRECTIONS = (ASC, DESC)

OP_EQUALS = "equals"
OP_CONTAINS = "contains"
OP_STARTS_WITH = "startsWith"
OP_ENDS_WITH = "endsWith"
OP_GT = "gt"
OP_LT = "lt"
FILTER_OPERATORS = (OP_EQUALS, OP_CONTAINS, OP_STARTS_WITH, OP_ENDS_WITH, OP_GT, OP_LT)

DEFAULT_PAGE_SIZE = 10
DEFAULT_PAGE_SIZE_OPTIONS = (5, 10, 20, 50, 100)


@dataclass(frozen=True)
class Pagination:
    page: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = 0

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.page < 0:
            raise ValueError(f"page must be non-negative, got {self.page}")
        if self.total < 0:
            raise ValueError(f"total must be non-negative, got {self.total}")


@dataclass(frozen=True)
class SortEntry:
    column: str
    direction: str = ASC


@dataclass(frozen=True)
class FilterEntry:
    """
    One column filter. 'operator' is kept as given: an operator outside
    FILTER_OPERATORS is a no-op when the pipeline runs, never an error.
    """
    column: str
    value: Any
    operator: str = OP_EQUALS


@dataclass(frozen=True)
class ViewState:
    """
    The admin table's complete view state.

    Fields:

    - pagination: page index (0-based), page size and the post-filter row total
    - sorting: ordered sort entries, primary key first
    - filtering: column filters, combined with logical AND
    - selection: selected row ids; may include rows that are not on the current page
    - search_query: free text matched against every column with an accessor

    Instances are immutable; transitions return a new ViewState.
    """

    pagination: Pagination = field(default_factory=Pagination)
    sorting: Tuple[SortEntry, ...] = ()
    filtering: Tuple[FilterEntry, ...] = ()
    selection: FrozenSet[str] = frozenset()
    search_query: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pagination": asdict(self.pagination),
            "sorting": [asdict(s) for s in self.sorting],
            "filtering": [asdict(f) for f in self.filtering],
            "selection": sorted(self.selection),
            "search_query": self.search_query,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> ViewState:
        """
        Rebuild a ViewState from its dict form (e.g. a dcc.Store payload).
        Malformed entries are dropped rather than raising.
        """
        data = data or {}
        raw_pag = data.get("pagination") or {}

        page = _as_int(raw_pag.get("page"), 0)
        page_size = _as_int(raw_pag.get("page_size"), DEFAULT_PAGE_SIZE)
        total = _as_int(raw_pag.get("total"), 0)
        pagination = Pagination(
            page=max(page, 0),
            page_size=page_size if page_size > 0 else DEFAULT_PAGE_SIZE,
            total=max(total, 0),
        )

        sorting = []
        for raw in data.get("sorting") or []:
            if not isinstance(raw, Mapping) or not raw.get("column"):
                logger.warning("Dropping malformed sort entry: %r", raw)
                continue
            direction = raw.get("direction", ASC)
            if direction not in SORT_DIRECTIONS:
                logger.warning("Dropping sort entry with unknown direction: %r", raw)
                continue
            sorting.append(SortEntry(column=str(raw["column"]), direction=direction))

        filtering = []
        for raw in data.get("filtering") or []:
            if not isinstance(raw, Mapping) or not raw.get("column"):
                logger.warning("Dropping malformed filter entry: %r", raw)
                continue
            filtering.append(
                FilterEntry(
                    column=str(raw["column"]),
                    value=raw.get("value"),
                    operator=str(raw.get("operator") or OP_EQUALS),
                )
            )

        selection = frozenset(str(i) for i in data.get("selection") or [])

        return cls(
            pagination=pagination,
            sorting=tuple(sorting),
            filtering=tuple(filtering),
            selection=selection,
            search_query=str(data.get("search_query") or ""),
        )


def initial_view_state(
        overrides: Optional[Mapping[str, Any]] = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
) -> ViewState:
    """
    Build the ViewState a table starts with.

    'overrides' may carry any of the ViewState fields, either as value objects or in
    their dict form. Pagination overrides are merged over the defaults, so passing
    {"pagination": {"page": 2}} keeps the default page size.

    :raises ValueError: if the resulting page size is not positive or the page is negative
    """
    overrides = dict(overrides or {})
    state = ViewState(pagination=Pagination(page_size=page_size))

    raw_pag = overrides.pop("pagination", None)
    if isinstance(raw_pag, Pagination):
        state = replace(state, pagination=raw_pag)
    elif isinstance(raw_pag, Mapping):
        state = replace(state, pagination=replace(state.pagination, **dict(raw_pag)))

    if "sorting" in overrides:
        state = replace(state, sorting=tuple(_coerce_sort(s) for s in overrides.pop("sorting") or ()))
    if "filtering" in overrides:
        state = replace(state, filtering=tuple(_coerce_filter(f) for f in overrides.pop("filtering") or ()))
    if "selection" in overrides:
        state = replace(state, selection=frozenset(overrides.pop("selection") or ()))
    if "search_query" in overrides:
        state = replace(state, search_query=str(overrides.pop("search_query") or ""))

    if overrides:
        raise ValueError(f"Unknown view state fields: {sorted(overrides)}")

    return state


def _coerce_sort(raw: Any) -> SortEntry:
    if isinstance(raw, SortEntry):
        return raw
    return SortEntry(**dict(raw))


def _coerce_filter(raw: Any) -> FilterEntry:
    if isinstance(raw, FilterEntry):
        return raw
    return FilterEntry(**dict(raw))


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
