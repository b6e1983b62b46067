from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Sequence, TypeVar

from app.safari.tables.columns import BulkAction, Column, Record, RecordId
from app.safari.tables.filtering import filter_records
from app.safari.tables.pagination import (
    PageMarker,
    clamp_page,
    page_slice,
    page_window,
    showing_range,
    total_pages,
)
from app.safari.tables.sorting import SortDirection, SortState, normalize_direction, sort_records, toggle_sort

R = TypeVar("R", bound=Record)

BulkActionHandler = Callable[[str, list[RecordId]], Any]

DEFAULT_ITEMS_PER_PAGE = 10

logger = logging.getLogger(__name__)


class TableEngine(Generic[R]):
    """Search, sort, paginate and bulk-select over records already in memory.

    Derived views are recomputed from ``data`` on every read; the engine only
    owns sort, page and selection state. Records are never mutated and ids are
    not checked for uniqueness.
    """

    def __init__(
        self,
        data: Sequence[R],
        columns: Sequence[Column],
        *,
        search_query: str | None = None,
        search_fields: Sequence[str] = (),
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
        bulk_actions: Sequence[BulkAction] = (),
        on_bulk_action: BulkActionHandler | None = None,
    ) -> None:
        if items_per_page < 1:
            raise ValueError("items_per_page must be a positive integer")
        self._data: list[R] = list(data or [])
        self.columns = list(columns)
        self.search_fields = list(search_fields)
        self.bulk_actions = list(bulk_actions)
        self.on_bulk_action = on_bulk_action
        self._search_query = search_query or ""
        self._items_per_page = items_per_page
        self._page = 1
        self._sort: SortState | None = None
        self._selection: dict[RecordId, None] = {}

    def set_data(self, data: Sequence[R]) -> None:
        self._data = list(data or [])
        self._page = clamp_page(self._page, self.total_pages)

    @property
    def search_query(self) -> str:
        return self._search_query

    def set_search_query(self, query: str | None) -> None:
        query = query or ""
        if query != self._search_query:
            self._search_query = query
            self._page = 1

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    def set_items_per_page(self, items_per_page: int) -> None:
        if items_per_page < 1:
            raise ValueError("items_per_page must be a positive integer")
        self._items_per_page = items_per_page
        self._page = 1

    @property
    def filtered_rows(self) -> list[R]:
        return filter_records(self._data, self._search_query, self.search_fields)

    @property
    def sorted_rows(self) -> list[R]:
        return sort_records(self.filtered_rows, self._sort)

    @property
    def total_items(self) -> int:
        return len(self.filtered_rows)

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_items, self._items_per_page)

    @property
    def current_page(self) -> int:
        return clamp_page(self._page, self.total_pages)

    @property
    def visible_rows(self) -> list[R]:
        return page_slice(self.sorted_rows, self.current_page, self._items_per_page)

    @property
    def page_window(self) -> list[PageMarker]:
        return page_window(self.current_page, self.total_pages)

    @property
    def has_pagination(self) -> bool:
        return self.total_pages > 1

    def showing(self) -> tuple[int, int, int]:
        return showing_range(self.current_page, self._items_per_page, self.total_items)

    def set_page(self, page: int) -> None:
        self._page = clamp_page(page, self.total_pages)

    def next_page(self) -> None:
        self.set_page(self.current_page + 1)

    def prev_page(self) -> None:
        self.set_page(self.current_page - 1)

    @property
    def sort_state(self) -> SortState | None:
        return self._sort

    def request_sort(self, key: str) -> SortState:
        self._sort = toggle_sort(self._sort, key)
        return self._sort

    def set_sort(self, key: str | None, direction: SortDirection | str = "asc") -> None:
        self._sort = SortState(key=key, direction=normalize_direction(direction)) if key else None

    @property
    def selection(self) -> frozenset[RecordId]:
        return frozenset(self._selection)

    @property
    def selected_ids(self) -> list[RecordId]:
        return list(self._selection)

    def is_selected(self, record_id: RecordId) -> bool:
        return record_id in self._selection

    @property
    def is_all_selected(self) -> bool:
        page_ids = [row["id"] for row in self.visible_rows]
        return bool(page_ids) and set(page_ids) == set(self._selection)

    def toggle_select_all(self) -> None:
        # Scope is the current page only.
        if self.is_all_selected:
            self._selection = {}
            return
        self._selection = dict.fromkeys(row["id"] for row in self.visible_rows)

    def toggle_select_row(self, record_id: RecordId) -> None:
        if record_id in self._selection:
            del self._selection[record_id]
        else:
            self._selection[record_id] = None

    def clear_selection(self) -> None:
        self._selection = {}

    def dispatch_bulk_action(self, action_value: str) -> bool:
        """Hand the selected ids to the bulk handler, then clear the selection.

        Returns False without calling the handler when there is no handler or
        nothing is selected. Handler errors propagate after the selection has
        been cleared.
        """
        if self.on_bulk_action is None or not self._selection:
            return False
        ids = list(self._selection)
        logger.debug("bulk action %s dispatched for %d ids", action_value, len(ids))
        try:
            self.on_bulk_action(action_value, ids)
        finally:
            self.clear_selection()
        return True

    def render_row(self, record: R) -> dict[str, Any]:
        return {column.key: column.render_cell(record) for column in self.columns}

    def rendered_rows(self) -> list[dict[str, Any]]:
        return [self.render_row(record) for record in self.visible_rows]
