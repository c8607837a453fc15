"""
Tests for response formatting module.

Run with: pytest tests/test_responses.py -v
"""

import pytest

from core.context import Chip, ChipsItem, HeaderItem, IntentType, ProductRowItem
from core.search import search
from ui.responses import ResponseFormatter, get_response_formatter


@pytest.fixture
def formatter():
    return ResponseFormatter(show_images=False)


@pytest.fixture
def red_mug_row(store_catalog):
    return ProductRowItem(
        key="pc-100",
        product=store_catalog.products[0],
        href="/home/mugs/coffee-mugs/products/100",
        image_url="https://cdn.example.com/red-mug.png",
    )


class TestRows:
    """Per-row formatting."""

    def test_header_with_link(self, formatter):
        item = HeaderItem(key="cat-1", text="Mugs", href="/home/mugs")
        assert formatter.format_header(item) == "### [Mugs](/home/mugs)"

    def test_header_without_link(self, formatter):
        assert formatter.format_header(HeaderItem(key="cat-1", text="Mugs")) == "### Mugs"

    def test_chips(self, formatter):
        item = ChipsItem(key="chips", chips=(
            Chip(text="Coffee Mugs", href="/home/mugs/coffee-mugs"),
            Chip(text="Travel Mugs"),
        ))
        assert formatter.format_chips(item) == "[`Coffee Mugs`](/home/mugs/coffee-mugs) `Travel Mugs`"

    def test_product_row(self, formatter, red_mug_row):
        line = formatter.format_product_row(red_mug_row)
        assert line == "- **[Red Mug](/home/mugs/coffee-mugs/products/100)** · Coffee Mugs"

    def test_product_row_with_image(self, red_mug_row):
        line = ResponseFormatter(show_images=True, image_width=32).format_product_row(red_mug_row)
        assert '<img src="https://cdn.example.com/red-mug.png" width="32"/>' in line
        assert "Red Mug" in line


class TestFormatItems:
    """Whole-view formatting."""

    def test_category_view(self, formatter, store_catalog):
        result = search("mugs", store_catalog)
        text = formatter.format_items(result.items)
        blocks = text.split("\n\n")
        assert len(blocks) == len(result.items)
        assert blocks[0] == "### [Mugs](/home/mugs)"
        assert "Steel Travel Mug" in blocks[-1]

    def test_empty(self, formatter):
        assert formatter.format_items([]) == ""


class TestMessages:
    """Suggestions, empty state and summary lines."""

    def test_suggestions(self, formatter):
        assert formatter.format_suggestions(["Mugs", "Mug Sets"]) == "Did you mean: *Mugs*, *Mug Sets*?"

    def test_no_suggestions(self, formatter):
        assert formatter.format_suggestions([]) == ""

    def test_no_matches(self, formatter):
        assert "xyzzy" in formatter.format_no_matches("xyzzy")

    def test_summary_all_shown(self, formatter):
        assert formatter.format_summary(IntentType.CATEGORY, 3, 3) == "**Category** · 3 products"

    def test_summary_partial(self, formatter):
        text = formatter.format_summary(IntentType.BROAD, 20, 45)
        assert text == "**Best matches** · showing 20 of 45 products"

    def test_summary_unknown_intent(self, formatter):
        assert formatter.format_summary(None, 0, 0).startswith("**Results**")


class TestTruncate:

    def test_short_text_unchanged(self, formatter):
        assert formatter.truncate_text("Red Mug") == "Red Mug"

    def test_long_text(self, formatter):
        text = formatter.truncate_text("x" * 100, max_length=20)
        assert len(text) == 20
        assert text.endswith("...")


def test_singleton():
    assert get_response_formatter() is get_response_formatter()
