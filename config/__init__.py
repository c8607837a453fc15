"""Configuration for catalog search."""

from config.settings import (
    DEBOUNCE_MS,
    PAGE_SIZE,
    NEAR_BOTTOM_PX,
    CATEGORY_POOL_MIN_SCORE,
    CATEGORY_MIN_SCORE,
    SUBCATEGORY_POOL_MIN_SCORE,
    SUBCATEGORY_MIN_SCORE,
    PRODUCT_POOL_MIN_SCORE,
    PRODUCT_MIN_SCORE,
    POOL_LIMIT,
    BROAD_MIN_SCORE,
    BROAD_LIMIT,
    INCLUDES_BOOST,
    SUGGESTION_COUNT,
    PLACEHOLDER_IMAGE_URL,
    MEDIA_BASE_URL,
    HREF_PREFIX,
    MEDIA_PATH_PREFIXES,
)

__all__ = [
    "DEBOUNCE_MS",
    "PAGE_SIZE",
    "NEAR_BOTTOM_PX",
    "CATEGORY_POOL_MIN_SCORE",
    "CATEGORY_MIN_SCORE",
    "SUBCATEGORY_POOL_MIN_SCORE",
    "SUBCATEGORY_MIN_SCORE",
    "PRODUCT_POOL_MIN_SCORE",
    "PRODUCT_MIN_SCORE",
    "POOL_LIMIT",
    "BROAD_MIN_SCORE",
    "BROAD_LIMIT",
    "INCLUDES_BOOST",
    "SUGGESTION_COUNT",
    "PLACEHOLDER_IMAGE_URL",
    "MEDIA_BASE_URL",
    "HREF_PREFIX",
    "MEDIA_PATH_PREFIXES",
]
