"""
Core data models for catalog search.

Defines all data structures used throughout the application.
These are pure Python dataclasses with no external dependencies.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional, Union
from enum import Enum

from config import settings


@dataclass
class SearchConfig:
    """
    Tunables for the search pipeline.

    Defaults come from config/settings.py.

    Attributes:
        debounce_ms: Quiet period before a keystroke triggers a recompute
        page_size: Product rows revealed per page
        near_bottom_px: Scroll distance from bottom that loads the next page
        category_pool_min_score: Floor for collecting category candidates
        category_min_score: Bar the best category must clear to win
        subcategory_pool_min_score: Floor for collecting subcategory candidates
        subcategory_min_score: Bar the best subcategory must clear to win
        product_pool_min_score: Floor for collecting product candidates
        product_min_score: Bar the best product must clear to win
        pool_limit: Candidates kept per pool
        broad_min_score: Floor for the broad product sweep
        broad_limit: Maximum products in the broad sweep
        includes_boost: Bonus when a name literally contains the query
        suggestion_count: "Did you mean" entries to show
        placeholder_image_url: Image used when a product has none
        media_base_url: Prefix for media/ and uploads/ image paths
        href_prefix: Storefront route prefix for links
    """
    debounce_ms: int = settings.DEBOUNCE_MS
    page_size: int = settings.PAGE_SIZE
    near_bottom_px: int = settings.NEAR_BOTTOM_PX
    category_pool_min_score: float = settings.CATEGORY_POOL_MIN_SCORE
    category_min_score: float = settings.CATEGORY_MIN_SCORE
    subcategory_pool_min_score: float = settings.SUBCATEGORY_POOL_MIN_SCORE
    subcategory_min_score: float = settings.SUBCATEGORY_MIN_SCORE
    product_pool_min_score: float = settings.PRODUCT_POOL_MIN_SCORE
    product_min_score: float = settings.PRODUCT_MIN_SCORE
    pool_limit: int = settings.POOL_LIMIT
    broad_min_score: float = settings.BROAD_MIN_SCORE
    broad_limit: int = settings.BROAD_LIMIT
    includes_boost: float = settings.INCLUDES_BOOST
    suggestion_count: int = settings.SUGGESTION_COUNT
    placeholder_image_url: str = settings.PLACEHOLDER_IMAGE_URL
    media_base_url: str = settings.MEDIA_BASE_URL
    href_prefix: str = settings.HREF_PREFIX

    @property
    def debounce_seconds(self) -> float:
        """Debounce window in seconds (for timer APIs)."""
        return self.debounce_ms / 1000.0

    @classmethod
    def from_dict(cls, values: Optional[Mapping[str, Any]]) -> "SearchConfig":
        """
        Build a config from a plain mapping (e.g. Streamlit secrets).

        Unknown keys are ignored; values are coerced to the field's type.

        Raises:
            ValueError: If a value can't be coerced or is out of range
        """
        config = cls()
        if not values:
            return config

        for f in fields(cls):
            if f.name not in values:
                continue
            default = getattr(config, f.name)
            raw = values[f.name]
            try:
                value = type(default)(raw)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid value for {f.name}: {raw!r}") from e
            setattr(config, f.name, value)
        config.validate()
        return config

    def validate(self) -> None:
        """
        Check that sizes and thresholds are usable.

        Raises:
            ValueError: On the first out-of-range value
        """
        for name in ("page_size", "pool_limit", "broad_limit"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in (
            "debounce_ms", "near_bottom_px", "suggestion_count", "includes_boost",
            "category_pool_min_score", "category_min_score",
            "subcategory_pool_min_score", "subcategory_min_score",
            "product_pool_min_score", "product_min_score", "broad_min_score",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")


@dataclass(frozen=True)
class Image:
    """
    Image reference attached to a catalog entity.

    Attributes:
        url: Raw URL as delivered by the catalog (may be relative)
        alt_text: Optional alt text
    """
    url: str = ""
    alt_text: Optional[str] = None


@dataclass(frozen=True)
class Category:
    """Top-level catalog section."""
    id: str
    name: str
    url: str
    images: tuple[Image, ...] = ()


@dataclass(frozen=True)
class Subcategory:
    """
    Subcategory row with denormalized parent fields.

    Attributes:
        cat_id: Parent category id (same flattening pass)
        cat_name: Parent category name
        cat_url: Parent category url slug
    """
    id: str
    name: str
    url: str
    cat_id: str
    cat_name: str
    cat_url: str
    images: tuple[Image, ...] = ()


@dataclass(frozen=True)
class Product:
    """
    Product row with denormalized parent fields.

    A product linked to several subcategories upstream appears once per
    linkage, each copy carrying its own sub_id/cat_id pair.
    """
    id: str
    name: str
    url: str
    cat_id: str
    cat_name: str
    cat_url: str
    sub_id: str
    sub_name: str
    sub_url: str
    images: tuple[Image, ...] = ()


# Anything the matcher can score
Entity = Union[Category, Subcategory, Product]


@dataclass(frozen=True)
class Catalog:
    """
    One immutable flattened catalog snapshot.

    Rebuilt in full for every catalog tree; never mutated afterwards.

    Attributes:
        categories: Categories in catalog order
        subcategories: Subcategories in catalog order
        products: Products in catalog order (one row per linkage)
        snapshot_id: Identifier of the flattening pass that built it
    """
    categories: tuple[Category, ...] = ()
    subcategories: tuple[Subcategory, ...] = ()
    products: tuple[Product, ...] = ()
    snapshot_id: str = ""

    def is_empty(self) -> bool:
        """Check if the snapshot has nothing to search."""
        return not (self.categories or self.subcategories or self.products)

    def subcategories_of(self, cat_id: str) -> list[Subcategory]:
        """Subcategories belonging to a category, in catalog order."""
        return [s for s in self.subcategories if s.cat_id == cat_id]

    def products_in_category(self, cat_id: str) -> list[Product]:
        """Products belonging to a category, in catalog order."""
        return [p for p in self.products if p.cat_id == cat_id]

    def products_in_subcategory(self, sub_id: str) -> list[Product]:
        """Products belonging to a subcategory, in catalog order."""
        return [p for p in self.products if p.sub_id == sub_id]

    def quick_badges(self) -> list[str]:
        """Category names for the quick-filter badge row."""
        return [c.name for c in self.categories]


class IntentType(Enum):
    """
    What the user is most likely looking for.

    Priority order on ties:
    1. CATEGORY - A whole top-level section
    2. SUBCATEGORY - One subcategory
    3. PRODUCT - A specific product
    4. BROAD - Nothing stands out; show a grouped product sweep
    """
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"
    PRODUCT = "product"
    BROAD = "broad"


@dataclass(frozen=True)
class ScoredMatch:
    """An entity paired with its similarity score."""
    item: Entity
    score: float


@dataclass
class Intent:
    """
    Classified search intent.

    Attributes:
        type: Intent classification
        target: Winning entity (None for BROAD)
        suggestions: Runner-up candidates in score order
        confidence: Winning boosted score (0.0 for BROAD)
    """
    type: IntentType
    target: Optional[Entity] = None
    suggestions: list[ScoredMatch] = field(default_factory=list)
    confidence: float = 0.0

    @classmethod
    def broad(cls, suggestions: Optional[list[ScoredMatch]] = None) -> "Intent":
        """Build a BROAD intent."""
        return cls(type=IntentType.BROAD, suggestions=suggestions or [])

    def __str__(self) -> str:
        target = getattr(self.target, "name", None)
        return f"Intent({self.type.value}, target={target!r}, confidence={self.confidence:.2f})"


@dataclass(frozen=True)
class Chip:
    """Quick-filter chip (a subcategory shortcut)."""
    text: str
    href: str = ""


@dataclass(frozen=True)
class HeaderItem:
    """Section header (a category name)."""
    key: str
    text: str
    href: str = ""


@dataclass(frozen=True)
class ChipsItem:
    """Group of subcategory chips under a header."""
    key: str
    chips: tuple[Chip, ...] = ()

    @property
    def items(self) -> list[str]:
        """Chip labels."""
        return [c.text for c in self.chips]


@dataclass(frozen=True)
class ProductRowItem:
    """One product entry with its resolved link and image."""
    key: str
    product: Product
    href: str = ""
    image_url: str = ""


ViewItem = Union[HeaderItem, ChipsItem, ProductRowItem]


@dataclass
class SearchResult:
    """
    Output of one search pipeline run.

    Attributes:
        query: Query as received (untrimmed)
        intent: Classified intent
        items: Full (unpaginated) view sequence
        suggestions: "Did you mean" names
        total_products: Number of ProductRow items in `items`
        snapshot_id: Catalog snapshot the result was computed from
    """
    query: str
    intent: Intent
    items: list[ViewItem] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    total_products: int = 0
    snapshot_id: str = ""

    @property
    def intent_type(self) -> IntentType:
        """Intent tag (for telemetry)."""
        return self.intent.type

    def has_results(self) -> bool:
        """Check if anything would be rendered."""
        return bool(self.items)
