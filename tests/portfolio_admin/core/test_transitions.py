from portfolio_admin.core import transitions
from portfolio_admin.core.view_state import FilterEntry, Pagination, SortEntry, ViewState


def test_toggle_sort_cycles_asc_desc_off():
    s1 = transitions.toggle_sort((), "a")
    assert s1 == (SortEntry("a", "asc"),)

    s2 = transitions.toggle_sort(s1, "a")
    assert s2 == (SortEntry("a", "desc"),)

    s3 = transitions.toggle_sort(s2, "a")
    assert s3 == ()


def test_toggle_sort_appends_new_column_as_lowest_priority():
    sorting = (SortEntry("a", "desc"),)
    assert transitions.toggle_sort(sorting, "b") == (SortEntry("a", "desc"), SortEntry("b", "asc"))


def test_toggle_sort_keeps_position_and_other_entries():
    sorting = (SortEntry("a", "asc"), SortEntry("b", "asc"), SortEntry("c", "desc"))

    flipped = transitions.toggle_sort(sorting, "b")
    assert flipped == (SortEntry("a", "asc"), SortEntry("b", "desc"), SortEntry("c", "desc"))

    removed = transitions.toggle_sort(flipped, "b")
    assert removed == (SortEntry("a", "asc"), SortEntry("c", "desc"))


def test_transitions_do_not_mutate_input():
    state = ViewState(selection=frozenset({"1"}))
    transitions.toggle_row(state, "2")
    transitions.apply_sort_toggle(state, "name")
    assert state.selection == frozenset({"1"})
    assert state.sorting == ()


def test_add_filter_skips_identical_entry():
    state = transitions.add_filter(ViewState(), "level", 5, "gt")
    again = transitions.add_filter(state, "level", 5, "gt")
    assert again.filtering == (FilterEntry("level", 5, "gt"),)


def test_remove_filter_by_column_and_operator():
    state = ViewState(
        filtering=(
            FilterEntry("level", 5, "gt"),
            FilterEntry("level", 9, "lt"),
            FilterEntry("name", "x", "contains"),
        )
    )
    assert transitions.remove_filter(state, "level", "lt").filtering == (
        FilterEntry("level", 5, "gt"),
        FilterEntry("name", "x", "contains"),
    )
    assert transitions.remove_filter(state, "level").filtering == (FilterEntry("name", "x", "contains"),)


def test_set_search_query_treats_none_as_empty():
    assert transitions.set_search_query(ViewState(search_query="x"), None).search_query == ""


def test_set_page_size_resets_page():
    state = ViewState(pagination=Pagination(page=3, page_size=10, total=100))
    new = transitions.set_page_size(state, 20)
    assert new.pagination == Pagination(page=0, page_size=20, total=100)


def test_go_to_page_does_not_clamp_upwards():
    state = ViewState(pagination=Pagination(page=0, page_size=10, total=5))
    assert transitions.go_to_page(state, 7).pagination.page == 7
    assert transitions.go_to_page(state, -2).pagination.page == 0


def test_clamp_page_lands_on_last_page():
    state = ViewState(pagination=Pagination(page=7, page_size=10, total=25))
    assert transitions.clamp_page(state).pagination.page == 2

    empty = ViewState(pagination=Pagination(page=3, page_size=10, total=0))
    assert transitions.clamp_page(empty).pagination.page == 0


def test_toggle_row_twice_restores_selection():
    state = ViewState(selection=frozenset({"a"}))
    once = transitions.toggle_row(state, "b")
    assert once.selection == {"a", "b"}
    assert transitions.toggle_row(once, "b").selection == {"a"}


def test_toggle_all_on_page_adds_page_rows():
    state = ViewState(selection=frozenset({"x"}))
    new = transitions.toggle_all_on_page(state, ["a", "b"])
    assert new.selection == {"x", "a", "b"}


def test_toggle_all_on_page_removes_only_page_rows():
    state = ViewState(selection=frozenset({"x", "a", "b"}))
    new = transitions.toggle_all_on_page(state, ["a", "b"])
    assert new.selection == {"x"}


def test_toggle_all_on_empty_page_is_a_no_op():
    state = ViewState(selection=frozenset({"x"}))
    assert transitions.toggle_all_on_page(state, []) is state
    assert not transitions.is_page_selected(state, [])


def test_is_page_selected_requires_every_row():
    state = ViewState(selection=frozenset({"a"}))
    assert transitions.is_page_selected(state, ["a"])
    assert not transitions.is_page_selected(state, ["a", "b"])


def test_add_filter_keeps_bool_and_int_values_apart():
    state = transitions.add_filter(ViewState(), "flag", 1, "equals")
    state = transitions.add_filter(state, "flag", True, "equals")
    assert state.filtering == (FilterEntry("flag", 1, "equals"), FilterEntry("flag", True, "equals"))
    assert type(state.filtering[1].value) is bool


def test_remove_filter_at_drops_only_that_position():
    state = ViewState(
        filtering=(
            FilterEntry("level", 20, "gt"),
            FilterEntry("level", 80, "lt"),
            FilterEntry("level", 40, "gt"),
        )
    )
    assert transitions.remove_filter_at(state, 0).filtering == (
        FilterEntry("level", 80, "lt"),
        FilterEntry("level", 40, "gt"),
    )
    assert transitions.remove_filter_at(state, 3) is state
    assert transitions.remove_filter_at(state, -1) is state
