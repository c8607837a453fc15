"""Core search engine for catalog search."""

from core.context import (
    Image,
    Category,
    Subcategory,
    Product,
    Catalog,
    IntentType,
    Intent,
    ScoredMatch,
    Chip,
    HeaderItem,
    ChipsItem,
    ProductRowItem,
    SearchConfig,
    SearchResult,
)
from core.catalog import flatten_catalog
from core.normalize import normalize
from core.similarity import similarity, top_matches
from core.intent import IntentClassifier
from core.views import ResultViewBuilder, build_view
from core.pagination import Paginator, visible_items
from core.suggestions import extract_suggestions
from core.search import SearchEngine, search

__all__ = [
    "Image",
    "Category",
    "Subcategory",
    "Product",
    "Catalog",
    "IntentType",
    "Intent",
    "ScoredMatch",
    "Chip",
    "HeaderItem",
    "ChipsItem",
    "ProductRowItem",
    "SearchConfig",
    "SearchResult",
    "flatten_catalog",
    "normalize",
    "similarity",
    "top_matches",
    "IntentClassifier",
    "ResultViewBuilder",
    "build_view",
    "Paginator",
    "visible_items",
    "extract_suggestions",
    "SearchEngine",
    "search",
]
