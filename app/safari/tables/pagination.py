from __future__ import annotations

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

ELLIPSIS = "…"
WINDOW_SIZE = 5

PageMarker = int | str


def total_pages(total_items: int, items_per_page: int) -> int:
    """Number of pages for display; an empty set still shows one page."""
    return max(1, math.ceil(total_items / items_per_page))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def page_slice(items: Sequence[T], page: int, items_per_page: int) -> list[T]:
    start = (page - 1) * items_per_page
    if start < 0:
        return []
    return list(items[start:start + items_per_page])


def page_window(current_page: int, pages: int) -> list[PageMarker]:
    if pages <= WINDOW_SIZE:
        return list(range(1, pages + 1))
    if current_page <= 3:
        return [1, 2, 3, 4, 5, ELLIPSIS, pages]
    if current_page >= pages - 2:
        return [1, ELLIPSIS, *range(pages - 4, pages + 1)]
    return [1, ELLIPSIS, current_page - 1, current_page, current_page + 1, ELLIPSIS, pages]


def showing_range(page: int, items_per_page: int, total_items: int) -> tuple[int, int, int]:
    """(first, last, total) for a "Showing X to Y of Z" label."""
    if total_items == 0:
        return (0, 0, 0)
    first = (page - 1) * items_per_page + 1
    last = min(page * items_per_page, total_items)
    return (first, last, total_items)
