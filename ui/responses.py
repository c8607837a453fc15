"""
Response formatting for catalog search UI.

Renders view rows, suggestions and empty states as Markdown for the
demo host. The engine never produces UI text; everything user-facing
lives here.
"""

from typing import List, Optional, Sequence

from core.context import (
    ChipsItem,
    HeaderItem,
    IntentType,
    ProductRowItem,
    ViewItem,
)


# Short labels for the intent badge
INTENT_LABELS = {
    IntentType.CATEGORY: "Category",
    IntentType.SUBCATEGORY: "Subcategory",
    IntentType.PRODUCT: "Product",
    IntentType.BROAD: "Best matches",
}


class ResponseFormatter:
    """
    Formats search results for display.

    Example:
        formatter = ResponseFormatter()
        markdown = formatter.format_items(session.visible_items())
    """

    def __init__(self, show_images: bool = True, image_width: int = 48):
        """
        Initialize response formatter.

        Args:
            show_images: Include product thumbnails
            image_width: Thumbnail width in pixels
        """
        self.show_images = show_images
        self.image_width = image_width

    def format_items(self, items: Sequence[ViewItem]) -> str:
        """
        Format a (paginated) row sequence as Markdown.

        Args:
            items: Visible rows

        Returns:
            Markdown string; one block per row
        """
        lines: List[str] = []
        for item in items:
            if isinstance(item, HeaderItem):
                lines.append(self.format_header(item))
            elif isinstance(item, ChipsItem):
                lines.append(self.format_chips(item))
            elif isinstance(item, ProductRowItem):
                lines.append(self.format_product_row(item))
        return "\n\n".join(lines)

    def format_header(self, item: HeaderItem) -> str:
        """Section header."""
        if item.href:
            return f"### [{item.text}]({item.href})"
        return f"### {item.text}"

    def format_chips(self, item: ChipsItem) -> str:
        """Chip group as inline links."""
        chips = [f"[`{c.text}`]({c.href})" if c.href else f"`{c.text}`" for c in item.chips]
        return " ".join(chips)

    def format_product_row(self, item: ProductRowItem) -> str:
        """One product line, with thumbnail when enabled."""
        product = item.product
        label = self.truncate_text(product.name)
        name = f"[{label}]({item.href})" if item.href else label
        line = f"- **{name}** · {product.sub_name}"
        if self.show_images and item.image_url:
            line = (
                f'- <img src="{item.image_url}" width="{self.image_width}"/> '
                f"**{name}** · {product.sub_name}"
            )
        return line

    def format_suggestions(self, suggestions: Sequence[str]) -> str:
        """Suggestion line; empty string when there is nothing to suggest."""
        if not suggestions:
            return ""
        quoted = ", ".join(f"*{s}*" for s in suggestions)
        return f"Did you mean: {quoted}?"

    def format_no_matches(self, query: str) -> str:
        """Empty-state message for a query with no results."""
        return f"No matches for **{query}**. Try a shorter or different term."

    def format_summary(
        self,
        intent_type: Optional[IntentType],
        shown: int,
        total: int,
    ) -> str:
        """Result count line with the intent badge."""
        label = INTENT_LABELS.get(intent_type, "Results")
        if total == shown:
            return f"**{label}** · {total} products"
        return f"**{label}** · showing {shown} of {total} products"

    def truncate_text(self, text: str, max_length: int = 60) -> str:
        """Truncate text to a maximum length with an ellipsis."""
        if len(text) <= max_length:
            return text
        return text[:max_length - 3] + "..."


# Singleton instance
_response_formatter = ResponseFormatter()


def get_response_formatter() -> ResponseFormatter:
    """
    Get the response formatter instance.

    Returns:
        ResponseFormatter instance
    """
    return _response_formatter
