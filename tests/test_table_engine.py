from datetime import date

import pytest

from app.safari.tables.columns import BulkAction, Column
from app.safari.tables.engine import TableEngine
from app.safari.tables.pagination import ELLIPSIS


def _records(count: int) -> list[dict]:
    return [{"id": index, "name": f"Lodge {index:02d}", "rooms": index % 7} for index in range(1, count + 1)]


COLUMNS = [Column("name", "Name", sortable=True), Column("rooms", "Rooms", sortable=True)]


def test_empty_data_has_one_empty_page() -> None:
    engine = TableEngine([], COLUMNS)

    assert engine.visible_rows == []
    assert engine.total_pages == 1
    assert engine.current_page == 1
    assert engine.page_window == [1]
    assert engine.has_pagination is False
    assert engine.showing() == (0, 0, 0)


def test_default_items_per_page_is_ten() -> None:
    engine = TableEngine(_records(25), COLUMNS)

    assert engine.items_per_page == 10
    assert engine.total_pages == 3
    assert [row["id"] for row in engine.visible_rows] == list(range(1, 11))


def test_rejects_non_positive_items_per_page() -> None:
    with pytest.raises(ValueError):
        TableEngine([], COLUMNS, items_per_page=0)


def test_end_to_end_sort_and_paginate() -> None:
    data = [{"id": 1, "name": "Zebra"}, {"id": 2, "name": "Apple"}, {"id": 3, "name": "Mango"}]
    engine = TableEngine(data, [Column("name", "Name", sortable=True)], items_per_page=2)

    engine.request_sort("name")

    assert engine.total_pages == 2
    assert [row["name"] for row in engine.visible_rows] == ["Apple", "Mango"]
    engine.set_page(2)
    assert [row["name"] for row in engine.visible_rows] == ["Zebra"]


def test_pages_concatenate_to_full_sorted_sequence() -> None:
    engine = TableEngine(_records(23), COLUMNS, items_per_page=4)
    engine.request_sort("rooms")

    collected = []
    for page in range(1, engine.total_pages + 1):
        engine.set_page(page)
        collected.extend(engine.visible_rows)

    assert collected == engine.sorted_rows
    assert len({row["id"] for row in collected}) == 23


@pytest.mark.parametrize("requested", [0, -3])
def test_page_below_range_clamps_to_first(requested: int) -> None:
    engine = TableEngine(_records(25), COLUMNS)

    engine.set_page(requested)

    assert engine.current_page == 1


def test_page_past_end_clamps_to_last() -> None:
    engine = TableEngine(_records(25), COLUMNS)

    engine.set_page(engine.total_pages + 5)
    past_end = engine.visible_rows
    engine.set_page(engine.total_pages)

    assert engine.current_page == 3
    assert past_end == engine.visible_rows


def test_items_per_page_change_resets_page() -> None:
    engine = TableEngine(_records(50), COLUMNS)
    engine.set_page(4)

    engine.set_items_per_page(20)

    assert engine.current_page == 1
    assert engine.total_pages == 3


def test_search_change_resets_page_and_shrinking_data_clamps() -> None:
    engine = TableEngine(_records(50), COLUMNS)
    engine.set_page(5)

    engine.set_search_query("lodge 1")
    assert engine.current_page == 1

    engine.set_search_query("")
    engine.set_page(5)
    engine.set_data(_records(12))
    assert engine.current_page == 2
    assert [row["id"] for row in engine.visible_rows] == [11, 12]


def test_page_window_follows_current_page() -> None:
    engine = TableEngine(_records(100), COLUMNS)

    engine.set_page(5)
    assert engine.page_window == [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]

    engine.next_page()
    assert engine.current_page == 6
    engine.prev_page()
    engine.prev_page()
    assert engine.current_page == 4


def test_showing_range_on_last_page() -> None:
    engine = TableEngine(_records(25), COLUMNS)

    engine.set_page(3)

    assert engine.showing() == (21, 25, 25)


def test_request_sort_toggles_and_resets_direction() -> None:
    engine = TableEngine(_records(3), COLUMNS)

    assert engine.request_sort("name").direction == "asc"
    assert engine.request_sort("name").direction == "desc"
    assert engine.request_sort("name").direction == "asc"
    engine.request_sort("name")
    state = engine.request_sort("rooms")
    assert (state.key, state.direction) == ("rooms", "asc")


def test_sort_descending_orders_dates_chronologically() -> None:
    data = [
        {"id": 1, "start": date(2025, 6, 1)},
        {"id": 2, "start": date(2024, 1, 15)},
        {"id": 3, "start": date(2025, 1, 1)},
    ]
    engine = TableEngine(data, [Column("start", "Start", sortable=True)])

    engine.set_sort("start", "desc")

    assert [row["id"] for row in engine.visible_rows] == [1, 3, 2]


def test_records_are_not_mutated() -> None:
    data = [{"id": 2, "name": "b"}, {"id": 1, "name": "a"}]
    snapshot = [dict(row) for row in data]
    engine = TableEngine(data, COLUMNS, search_query="a")

    engine.request_sort("name")
    engine.visible_rows

    assert data == snapshot


def test_select_all_selects_only_current_page() -> None:
    engine = TableEngine(_records(25), COLUMNS)
    engine.set_page(2)

    engine.toggle_select_all()

    assert engine.selection == frozenset(range(11, 21))
    assert engine.is_all_selected

    engine.toggle_select_all()
    assert engine.selection == frozenset()


def test_select_all_replaces_selection_from_other_page() -> None:
    engine = TableEngine(_records(25), COLUMNS)
    engine.toggle_select_row(1)
    engine.set_page(3)

    engine.toggle_select_all()

    assert engine.selected_ids == [21, 22, 23, 24, 25]


def test_select_all_on_empty_table_selects_nothing() -> None:
    engine = TableEngine([], COLUMNS)

    engine.toggle_select_all()

    assert engine.selection == frozenset()
    assert engine.is_all_selected is False


def test_toggle_select_row_keeps_selection_order() -> None:
    engine = TableEngine(_records(5), COLUMNS)

    engine.toggle_select_row(4)
    engine.toggle_select_row(2)
    engine.toggle_select_row(5)
    engine.toggle_select_row(2)

    assert engine.selected_ids == [4, 5]
    assert engine.is_selected(4)
    assert not engine.is_selected(2)


def test_dispatch_bulk_action_passes_ids_and_clears_selection() -> None:
    calls = []
    engine = TableEngine(
        _records(5),
        COLUMNS,
        bulk_actions=[BulkAction("Delete", "delete", "destructive")],
        on_bulk_action=lambda action, ids: calls.append((action, ids)),
    )
    engine.toggle_select_row(3)
    engine.toggle_select_row(1)

    assert engine.dispatch_bulk_action("delete") is True

    assert calls == [("delete", [3, 1])]
    assert engine.selection == frozenset()


def test_dispatch_bulk_action_clears_selection_when_handler_fails() -> None:
    def _handler(action, ids):
        raise RuntimeError("constraint violation")

    engine = TableEngine(_records(5), COLUMNS, on_bulk_action=_handler)
    engine.toggle_select_all()

    with pytest.raises(RuntimeError):
        engine.dispatch_bulk_action("delete")

    assert engine.selection == frozenset()


def test_dispatch_bulk_action_with_empty_selection_is_noop() -> None:
    calls = []
    engine = TableEngine(_records(5), COLUMNS, on_bulk_action=lambda action, ids: calls.append(ids))

    assert engine.dispatch_bulk_action("delete") is False
    assert calls == []


def test_clear_selection() -> None:
    engine = TableEngine(_records(5), COLUMNS)
    engine.toggle_select_all()

    engine.clear_selection()

    assert engine.selected_ids == []


def test_duplicate_ids_are_not_validated() -> None:
    # Non-unique ids are undefined behavior: the engine neither rejects nor
    # merges them, and select-all collapses them into a single selected id.
    data = [{"id": 1, "name": "a"}, {"id": 1, "name": "b"}]
    engine = TableEngine(data, COLUMNS)

    engine.toggle_select_all()

    assert len(engine.visible_rows) == 2
    assert engine.selected_ids == [1]


def test_render_row_uses_column_renderers() -> None:
    columns = [
        Column("name", "Name"),
        Column("is_active", "Status", render=lambda value, record: "Active" if value else "Inactive"),
        Column("label", "Label", render=lambda value, record: f"{record['name']} #{record['id']}"),
    ]
    engine = TableEngine([{"id": 7, "name": "Serengeti", "is_active": False}], columns)

    assert engine.rendered_rows() == [{"name": "Serengeti", "is_active": "Inactive", "label": "Serengeti #7"}]
