"""
Incremental reveal of result rows.

Only product rows count toward the page limit. Headers and chip groups are
shown as soon as the walk reaches them, so a section never loses its header
once its first product is visible.

The cursor is an explicit value owned by the host; scroll listeners just
translate "near the bottom" into next_page() calls.
"""

from typing import Sequence

from core.context import ProductRowItem, ViewItem
from config.settings import NEAR_BOTTOM_PX, PAGE_SIZE


def visible_items(items: Sequence[ViewItem], loaded_count: int) -> list[ViewItem]:
    """
    Slice a view down to the first `loaded_count` product rows.

    Walks the sequence in order and stops at the first product row past the
    limit; every header/chips row before that point is kept.
    """
    visible: list[ViewItem] = []
    count = 0
    for item in items:
        if isinstance(item, ProductRowItem):
            count += 1
            if count > loaded_count:
                break
        visible.append(item)
    return visible


def count_product_rows(items: Sequence[ViewItem]) -> int:
    """Number of product rows in a view."""
    return sum(1 for item in items if isinstance(item, ProductRowItem))


def visible_product_count(items: Sequence[ViewItem], loaded_count: int) -> int:
    """Product rows shown for a cursor value (clamped to what exists)."""
    return min(count_product_rows(items), max(0, loaded_count))


def has_more(items: Sequence[ViewItem], loaded_count: int) -> bool:
    """Check if advancing the cursor would reveal more rows."""
    return count_product_rows(items) > loaded_count


def is_near_bottom(
    scroll_top: float,
    client_height: float,
    scroll_height: float,
    threshold_px: float = NEAR_BOTTOM_PX,
) -> bool:
    """Check if a scroll container is within `threshold_px` of its bottom."""
    return scroll_top + client_height >= scroll_height - threshold_px


class Paginator:
    """
    Pagination cursor for the results panel.

    Example:
        paginator = Paginator(page_size=20)
        rows = paginator.visible(result.items)      # first 20 product rows
        paginator.next_page()
        rows = paginator.visible(result.items)      # first 40
        paginator.reset()                           # new query -> back to 20
    """

    def __init__(self, page_size: int = PAGE_SIZE, near_bottom_px: int = NEAR_BOTTOM_PX):
        """
        Initialize the cursor.

        Args:
            page_size: Product rows revealed per page (must be positive)
            near_bottom_px: Scroll threshold for on_scroll()

        Raises:
            ValueError: If page_size is not positive
        """
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size
        self.near_bottom_px = near_bottom_px
        self.loaded_count = page_size

    def reset(self) -> None:
        """Back to the first page (call on every new query)."""
        self.loaded_count = self.page_size

    def next_page(self) -> int:
        """Reveal one more page; returns the new cursor."""
        self.loaded_count += self.page_size
        return self.loaded_count

    def on_scroll(
        self,
        scroll_top: float,
        client_height: float,
        scroll_height: float,
    ) -> bool:
        """
        Advance the cursor if the container is scrolled near its bottom.

        Returns:
            True if a page was added
        """
        if is_near_bottom(scroll_top, client_height, scroll_height, self.near_bottom_px):
            self.next_page()
            return True
        return False

    def visible(self, items: Sequence[ViewItem]) -> list[ViewItem]:
        """Visible slice of a view at the current cursor."""
        return visible_items(items, self.loaded_count)

    def visible_product_count(self, items: Sequence[ViewItem]) -> int:
        """Product rows visible at the current cursor."""
        return visible_product_count(items, self.loaded_count)

    def has_more(self, items: Sequence[ViewItem]) -> bool:
        """Check if next_page() would reveal more rows."""
        return has_more(items, self.loaded_count)

    def __repr__(self) -> str:
        return f"Paginator(page_size={self.page_size}, loaded_count={self.loaded_count})"
