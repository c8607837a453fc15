"""
Tests for incremental result reveal.

Run with: pytest tests/test_pagination.py -v
"""

import pytest

from core.context import ChipsItem, Chip, HeaderItem, Product, ProductRowItem
from core.pagination import (
    Paginator,
    count_product_rows,
    has_more,
    is_near_bottom,
    visible_items,
    visible_product_count,
)


def product_row(i, cat_id="1"):
    product = Product(
        id=str(i), name=f"Widget {i}", url=f"widget-{i}",
        cat_id=cat_id, cat_name=f"Cat {cat_id}", cat_url=f"cat-{cat_id}",
        sub_id="s", sub_name="Sub", sub_url="sub",
    )
    return ProductRowItem(key=f"p-{i}", product=product)


def grouped_view(*group_sizes):
    """Header + chips + N product rows per group."""
    items = []
    n = 0
    for g, size in enumerate(group_sizes, start=1):
        items.append(HeaderItem(key=f"cat-{g}", text=f"Cat {g}"))
        items.append(ChipsItem(key=f"chips-{g}", chips=(Chip(text="Sub"),)))
        for _ in range(size):
            n += 1
            items.append(product_row(n, str(g)))
    return items


class TestVisibleItems:
    """Slicing by product-row count."""

    def test_headers_do_not_count(self):
        items = grouped_view(3)
        assert visible_items(items, 2) == items[:4]

    def test_stops_at_first_product_past_limit(self):
        items = grouped_view(2, 2)
        # Cursor at 2: the second group's header and chips still show
        visible = visible_items(items, 2)
        assert [i.key for i in visible] == ["cat-1", "chips-1", "p-1", "p-2", "cat-2", "chips-2"]

    def test_limit_beyond_length(self):
        items = grouped_view(3)
        assert visible_items(items, 100) == items

    def test_zero(self):
        items = grouped_view(3)
        assert visible_items(items, 0) == items[:2]

    def test_empty(self):
        assert visible_items([], 20) == []

    def test_prefix(self):
        items = grouped_view(5, 7, 9)
        for cursor in range(0, 25):
            visible = visible_items(items, cursor)
            assert visible == items[:len(visible)]
            assert count_product_rows(visible) == min(cursor, 21)


class TestCounts:
    """Row counting helpers."""

    def test_count_product_rows(self):
        assert count_product_rows(grouped_view(3, 4)) == 7

    def test_visible_product_count_clamped(self):
        items = grouped_view(5)
        assert visible_product_count(items, 3) == 3
        assert visible_product_count(items, 20) == 5
        assert visible_product_count(items, -1) == 0

    def test_has_more(self):
        items = grouped_view(5)
        assert has_more(items, 3)
        assert not has_more(items, 5)


class TestNearBottom:
    """Scroll threshold."""

    def test_within_threshold(self):
        assert is_near_bottom(scroll_top=560, client_height=400, scroll_height=1000)

    def test_exactly_at_threshold(self):
        assert is_near_bottom(scroll_top=560, client_height=400, scroll_height=1000, threshold_px=40)

    def test_far_from_bottom(self):
        assert not is_near_bottom(scroll_top=100, client_height=400, scroll_height=1000)


class TestPaginator:
    """Cursor lifecycle."""

    def test_pages_of_45(self):
        items = grouped_view(45)
        paginator = Paginator(page_size=20)

        assert paginator.visible_product_count(items) == 20
        assert paginator.has_more(items)

        assert paginator.next_page() == 40
        assert paginator.visible_product_count(items) == 40

        paginator.next_page()
        assert paginator.visible_product_count(items) == 45
        assert not paginator.has_more(items)
        assert paginator.visible(items) == items

    def test_reset(self):
        paginator = Paginator(page_size=20)
        paginator.next_page()
        paginator.next_page()
        paginator.reset()
        assert paginator.loaded_count == 20

    def test_on_scroll(self):
        paginator = Paginator(page_size=20, near_bottom_px=40)
        assert not paginator.on_scroll(0, 400, 1000)
        assert paginator.loaded_count == 20
        assert paginator.on_scroll(600, 400, 1000)
        assert paginator.loaded_count == 40

    @pytest.mark.parametrize("page_size", [0, -5])
    def test_invalid_page_size(self, page_size):
        with pytest.raises(ValueError):
            Paginator(page_size=page_size)

    def test_repr(self):
        assert repr(Paginator(page_size=10)) == "Paginator(page_size=10, loaded_count=10)"
