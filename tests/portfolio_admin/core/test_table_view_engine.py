import pytest

from portfolio_admin.core.columns import ColumnDescriptor
from portfolio_admin.core.engine import TableViewEngine
from portfolio_admin.core.view_state import Pagination, SortEntry, ViewState


def _make_rows(n):
    return [{"id": str(i), "name": f"item {i:02d}", "level": i % 3} for i in range(n)]


COLUMNS = [
    ColumnDescriptor(id="name", header="Name", accessor="name"),
    ColumnDescriptor(id="level", header="Level", accessor="level"),
    ColumnDescriptor(id="actions", header="", sortable=False, filterable=False),
]


@pytest.fixture()
def engine():
    return TableViewEngine(_make_rows(25), COLUMNS)


def test_initial_total_and_visible_rows(engine):
    assert engine.state.pagination.total == 25
    assert engine.total_pages == 3
    assert engine.visible_ids == [str(i) for i in range(10)]
    assert engine.page_summary() == "Showing 1 to 10 of 25"
    assert engine.page_label() == "Page 1 of 3"


def test_total_tracks_filtered_count(engine):
    engine.add_filter("level", 0)
    assert engine.state.pagination.total == 9
    assert len(engine.processed_rows) == 9

    engine.set_search_query("item 0")
    assert engine.state.pagination.total == len(engine.processed_rows) == 4

    engine.clear_filters()
    engine.set_search_query("")
    assert engine.state.pagination.total == 25


def test_navigation(engine):
    engine.last_page()
    assert engine.state.pagination.page == 2
    assert engine.visible_ids == [str(i) for i in range(20, 25)]

    engine.next_page()
    assert engine.state.pagination.page == 3
    assert engine.visible_rows == []

    engine.first_page()
    engine.previous_page()
    assert engine.state.pagination.page == 0


def test_page_is_not_clamped_until_asked(engine):
    engine.go_to_page(2)
    engine.set_search_query("item 01")
    assert engine.state.pagination.page == 2
    assert engine.visible_rows == []

    engine.clamp_page()
    assert engine.state.pagination.page == 0
    assert engine.visible_ids == ["1"]


def test_set_page_size_resets_to_first_page(engine):
    engine.go_to_page(2)
    engine.set_page_size(20)
    assert engine.state.pagination.page == 0
    assert engine.state.pagination.page_size == 20
    assert engine.total_pages == 2


def test_sort_toggle_cycle_through_engine(engine):
    engine.toggle_sort("name")
    engine.toggle_sort("name")
    assert engine.state.sorting == (SortEntry("name", "desc"),)
    assert engine.visible_ids[0] == "24"

    engine.toggle_sort("name")
    assert engine.state.sorting == ()
    assert engine.visible_ids[0] == "0"


def test_non_sortable_and_non_filterable_columns_are_ignored(engine):
    engine.toggle_sort("actions")
    engine.add_filter("actions", "x")
    assert engine.state.sorting == ()
    assert engine.state.filtering == ()


def test_selection_survives_search_and_paging(engine):
    engine.toggle_row("3")
    engine.set_search_query("item 2")
    assert "3" in engine.state.selection
    engine.next_page()
    assert "3" in engine.state.selection
    assert [r["id"] for r in engine.selected_rows] == ["3"]


def test_select_all_only_affects_current_page(engine):
    engine.toggle_row("22")
    engine.toggle_all_on_page()
    assert engine.is_page_selected
    assert engine.state.selection == {str(i) for i in range(10)} | {"22"}

    engine.toggle_all_on_page()
    assert engine.state.selection == {"22"}
    assert not engine.is_page_selected


def test_deselect_and_clear_selection(engine):
    engine.toggle_all_on_page()
    engine.deselect_rows(["0", "1"])
    assert len(engine.state.selection) == 8
    engine.clear_selection()
    assert engine.state.selection == frozenset()


def test_on_change_called_after_each_mutation():
    seen = []
    engine = TableViewEngine(_make_rows(3), COLUMNS, on_change=seen.append)
    assert seen == []

    engine.toggle_sort("level")
    engine.toggle_row("1")

    assert len(seen) == 2
    assert seen[-1] is engine.state
    assert seen[-1].selection == {"1"}


def test_set_rows_refreshes_total_and_keeps_selection(engine):
    engine.toggle_row("24")
    engine.set_rows(_make_rows(5))
    assert engine.state.pagination.total == 5
    assert engine.state.selection == {"24"}
    assert engine.selected_rows == []


def test_initial_state_overrides():
    engine = TableViewEngine(
        _make_rows(25),
        COLUMNS,
        initial_state={"pagination": {"page": 1, "page_size": 5}, "selection": ["0"]},
    )
    assert engine.visible_ids == [str(i) for i in range(5, 10)]
    assert engine.state.pagination.total == 25
    assert engine.state.selection == {"0"}


def test_initial_state_as_view_state_gets_total_refreshed():
    state = ViewState(pagination=Pagination(page=0, page_size=5, total=999))
    engine = TableViewEngine(_make_rows(7), COLUMNS, initial_state=state)
    assert engine.state.pagination.total == 7


def test_default_page_size_follows_options():
    engine = TableViewEngine(_make_rows(30), COLUMNS, page_size_options=(25, 50))
    assert engine.state.pagination.page_size == 25


def test_engine_does_not_mutate_rows():
    rows = _make_rows(4)
    snapshot = [dict(r) for r in rows]
    engine = TableViewEngine(rows, COLUMNS)
    engine.toggle_sort("name")
    engine.toggle_sort("name")
    engine.add_filter("level", 1)
    assert rows == snapshot


def test_selection_kept_when_search_hides_and_reveals_row(engine):
    engine.toggle_row("7")
    engine.set_search_query("item 1")
    assert "7" not in engine.visible_ids
    assert engine.state.selection == {"7"}

    engine.set_search_query("")
    assert engine.state.selection == {"7"}
    assert "7" in engine.visible_ids
