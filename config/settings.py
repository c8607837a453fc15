"""
Tunable defaults for catalog search.

Every threshold the engine uses lives here so hosts can see (and override)
them instead of hunting for magic numbers inside the matcher.
Override per host via core.search.SearchConfig.
"""

# === Timing ===

# Debounce window between the last keystroke and a recompute
DEBOUNCE_MS = 250


# === Pagination ===

# Product rows revealed per page (headers/chips don't count)
PAGE_SIZE = 20

# Distance from the bottom of the results panel that counts as "near bottom"
NEAR_BOTTOM_PX = 40


# === Matcher pools ===
# Each pool has a floor used while collecting candidates (POOL_MIN_SCORE)
# and a higher bar the best candidate must clear to win (MIN_SCORE).

CATEGORY_POOL_MIN_SCORE = 0.55
CATEGORY_MIN_SCORE = 0.58

SUBCATEGORY_POOL_MIN_SCORE = 0.5
SUBCATEGORY_MIN_SCORE = 0.55

PRODUCT_POOL_MIN_SCORE = 0.5
PRODUCT_MIN_SCORE = 0.55

# Candidates kept per pool during classification
POOL_LIMIT = 5

# Broad fallback: loose product sweep grouped by category
BROAD_MIN_SCORE = 0.45
BROAD_LIMIT = 200

# Bonus for a name that literally contains the query
INCLUDES_BOOST = 0.05


# === Suggestions ===

SUGGESTION_COUNT = 3


# === Rendering ===

PLACEHOLDER_IMAGE_URL = "https://i.ibb.co/ynT1dLc/image-not-found.png"

# Prepended to "media/..." and "uploads/..." image paths (empty = leave as-is)
MEDIA_BASE_URL = ""

# Storefront route prefix for category/subcategory/product links
HREF_PREFIX = "/home"

# Relative image paths served by the backend media store
MEDIA_PATH_PREFIXES = ("media/", "uploads/")
