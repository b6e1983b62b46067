import pytest

from app.safari.tables.pagination import ELLIPSIS, clamp_page, page_slice, page_window, showing_range, total_pages


@pytest.mark.parametrize(
    ("current", "pages", "expected"),
    [
        (1, 10, [1, 2, 3, 4, 5, ELLIPSIS, 10]),
        (3, 10, [1, 2, 3, 4, 5, ELLIPSIS, 10]),
        (4, 10, [1, ELLIPSIS, 3, 4, 5, ELLIPSIS, 10]),
        (5, 10, [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]),
        (8, 10, [1, ELLIPSIS, 6, 7, 8, 9, 10]),
        (9, 10, [1, ELLIPSIS, 6, 7, 8, 9, 10]),
        (10, 10, [1, ELLIPSIS, 6, 7, 8, 9, 10]),
        (4, 6, [1, ELLIPSIS, 2, 3, 4, 5, 6]),
    ],
)
def test_page_window_with_ellipses(current: int, pages: int, expected: list) -> None:
    assert page_window(current, pages) == expected


@pytest.mark.parametrize("current", [1, 2, 3, 4])
def test_page_window_small_totals_show_every_page(current: int) -> None:
    assert page_window(current, 4) == [1, 2, 3, 4]
    assert page_window(current, 5) == [1, 2, 3, 4, 5]


def test_total_pages_rounds_up_and_never_drops_below_one() -> None:
    assert total_pages(25, 10) == 3
    assert total_pages(20, 10) == 2
    assert total_pages(0, 10) == 1


def test_clamp_page() -> None:
    assert clamp_page(0, 3) == 1
    assert clamp_page(9, 3) == 3
    assert clamp_page(2, 0) == 1


def test_page_slice_past_end_is_empty() -> None:
    items = list(range(7))

    assert page_slice(items, 2, 5) == [5, 6]
    assert page_slice(items, 3, 5) == []


def test_showing_range() -> None:
    assert showing_range(1, 10, 25) == (1, 10, 25)
    assert showing_range(3, 10, 25) == (21, 25, 25)
    assert showing_range(1, 10, 0) == (0, 0, 0)
