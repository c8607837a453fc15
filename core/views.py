"""
Result view building for catalog search.

Expands a classified intent into the ordered row sequence the results panel
renders: section headers, subcategory chip groups and product rows.

- CATEGORY: the category, its chips, all its products
- SUBCATEGORY: parent category, sibling chips, own products then the rest
  of the category
- PRODUCT: parent category, sibling chips, the product, its subcategory,
  then the rest of the category
- BROAD: loose product sweep grouped by category in first-seen order
"""

from typing import Iterable, Optional, Sequence

from core.context import (
    Catalog,
    Category,
    Chip,
    ChipsItem,
    HeaderItem,
    Image,
    Intent,
    IntentType,
    Product,
    ProductRowItem,
    SearchConfig,
    Subcategory,
    ViewItem,
)
from core.similarity import top_matches
from core.structured_logging import get_logger
from config.settings import MEDIA_PATH_PREFIXES

# Module-level logger
_logger = get_logger("core.views")


# =============================================================================
# Links & images
# =============================================================================

def resolve_image_url(
    images: Sequence[Image],
    placeholder: str,
    media_base_url: str = "",
) -> str:
    """
    Resolve the display URL of an entity's first image.

    Args:
        images: Entity images in catalog order
        placeholder: URL used when there is no usable first image
        media_base_url: Prefix for "media/..." and "uploads/..." paths

    Returns:
        Absolute, protocol-relative and root-relative URLs unchanged;
        backend media paths prefixed when a base URL is configured;
        anything else as-is.
    """
    if not images:
        return placeholder

    first = images[0]
    raw = (getattr(first, "url", "") or "").strip()
    if not raw:
        return placeholder

    lowered = raw.lower()
    if lowered.startswith(("http://", "https://")) or raw.startswith("/"):
        return raw
    if raw.startswith(MEDIA_PATH_PREFIXES) and media_base_url:
        return f"{media_base_url.rstrip('/')}/{raw.lstrip('/')}"
    return raw


def category_href(prefix: str, cat_url: str) -> str:
    """Storefront link to a category page."""
    return f"{prefix}/{cat_url}"


def subcategory_href(prefix: str, cat_url: str, sub_url: str) -> str:
    """Storefront link to a subcategory page."""
    return f"{prefix}/{cat_url}/{sub_url}"


def product_href(prefix: str, product: Product) -> str:
    """Storefront link to a product page."""
    return f"{prefix}/{product.cat_url}/{product.sub_url}/products/{product.id}"


# =============================================================================
# View builder
# =============================================================================

class ResultViewBuilder:
    """
    Builds the hierarchical result sequence for an intent.

    Example:
        builder = ResultViewBuilder()
        items = builder.build(intent, catalog, query="mugs")
        # Returns: [HeaderItem("Mugs"), ChipsItem(["Coffee Mugs"]), ProductRowItem(...), ...]
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        """
        Initialize the view builder.

        Args:
            config: Search configuration (uses defaults if None)
        """
        self.config = config or SearchConfig()

    def build(self, intent: Intent, catalog: Catalog, query: str = "") -> list[ViewItem]:
        """
        Build the full (unpaginated) view for an intent.

        Args:
            intent: Classified intent
            catalog: Snapshot the intent was classified against
            query: Search text (only used for the BROAD sweep)

        Returns:
            Ordered ViewItem list; empty for a blank query
        """
        if not (query or "").strip() and intent.type == IntentType.BROAD:
            return []

        if intent.type == IntentType.CATEGORY and isinstance(intent.target, Category):
            items = self._build_category(intent.target, catalog)
        elif intent.type == IntentType.SUBCATEGORY and isinstance(intent.target, Subcategory):
            items = self._build_subcategory(intent.target, catalog)
        elif intent.type == IntentType.PRODUCT and isinstance(intent.target, Product):
            items = self._build_product(intent.target, catalog)
        else:
            items = self._build_broad(query, catalog)

        _logger.debug(
            f"View built: {len(items)} items",
            extra={"event": "view_built", "intent": intent.type.value, "items_built": len(items)}
        )
        return items

    # === Per-intent layouts ===

    def _build_category(self, cat: Category, catalog: Catalog) -> list[ViewItem]:
        items: list[ViewItem] = [self._header(cat.id, cat.name, cat.url)]
        chips = self._chips(f"chips-cat-{cat.id}", catalog.subcategories_of(cat.id))
        if chips:
            items.append(chips)

        seen: set[str] = set()
        self._push_products(items, seen, catalog.products_in_category(cat.id), "pc")
        return items

    def _build_subcategory(self, sub: Subcategory, catalog: Catalog) -> list[ViewItem]:
        items: list[ViewItem] = [self._header(sub.cat_id, sub.cat_name, sub.cat_url)]
        chips = self._chips(f"chips-sub-{sub.id}", catalog.subcategories_of(sub.cat_id))
        if chips:
            items.append(chips)

        seen: set[str] = set()
        self._push_products(items, seen, catalog.products_in_subcategory(sub.id), "ps")
        remainder = [p for p in catalog.products_in_category(sub.cat_id) if p.sub_id != sub.id]
        self._push_products(items, seen, remainder, "pr")
        return items

    def _build_product(self, hit: Product, catalog: Catalog) -> list[ViewItem]:
        items: list[ViewItem] = [self._header(hit.cat_id, hit.cat_name, hit.cat_url)]
        chips = self._chips(f"chips-prod-{hit.id}", catalog.subcategories_of(hit.cat_id))
        if chips:
            items.append(chips)

        seen: set[str] = set()
        own = [hit] + [p for p in catalog.products_in_subcategory(hit.sub_id) if p.id != hit.id]
        self._push_products(items, seen, own, "pp")
        remainder = [p for p in catalog.products_in_category(hit.cat_id) if p.sub_id != hit.sub_id]
        self._push_products(items, seen, remainder, "pr")
        return items

    def _build_broad(self, query: str, catalog: Catalog) -> list[ViewItem]:
        scored = top_matches(
            catalog.products, query, self.config.broad_min_score, self.config.broad_limit
        )

        # dict keeps first-seen category order
        groups: dict[str, list[Product]] = {}
        for match in scored:
            groups.setdefault(match.item.cat_id, []).append(match.item)

        items: list[ViewItem] = []
        for cat_id, group in groups.items():
            first = group[0]
            items.append(self._header(cat_id, first.cat_name, first.cat_url))
            chips = self._chips(f"chips-broad-{cat_id}", catalog.subcategories_of(cat_id))
            if chips:
                items.append(chips)
            seen: set[str] = set()
            self._push_products(items, seen, group, f"pb-{cat_id}")
        return items

    # === Row factories ===

    def _header(self, cat_id: str, name: str, cat_url: str) -> HeaderItem:
        return HeaderItem(
            key=f"cat-{cat_id}",
            text=name,
            href=category_href(self.config.href_prefix, cat_url),
        )

    def _chips(self, key: str, subs: list[Subcategory]) -> Optional[ChipsItem]:
        if not subs:
            return None
        return ChipsItem(
            key=key,
            chips=tuple(
                Chip(text=s.name, href=subcategory_href(self.config.href_prefix, s.cat_url, s.url))
                for s in subs
            ),
        )

    def _push_products(
        self,
        items: list[ViewItem],
        seen: set[str],
        products: Iterable[Product],
        key_prefix: str,
    ) -> None:
        """Append product rows, skipping ids already emitted in this group."""
        for product in products:
            if product.id in seen:
                continue
            seen.add(product.id)
            items.append(ProductRowItem(
                key=f"{key_prefix}-{product.id}",
                product=product,
                href=product_href(self.config.href_prefix, product),
                image_url=resolve_image_url(
                    product.images,
                    self.config.placeholder_image_url,
                    self.config.media_base_url,
                ),
            ))


def build_view(
    intent: Intent,
    catalog: Catalog,
    query: str = "",
    config: Optional[SearchConfig] = None,
) -> list[ViewItem]:
    """Build the result view for an intent (functional wrapper)."""
    return ResultViewBuilder(config).build(intent, catalog, query)
