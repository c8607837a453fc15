"""
Intent classification for catalog search.

Decides whether a query is after a whole category, a subcategory, a
specific product, or nothing in particular ("broad").
Runs the fuzzy matcher over the three catalog pools and compares the
best hit of each.
"""

from typing import Optional

from core.context import Catalog, Intent, IntentType, ScoredMatch, SearchConfig
from core.similarity import best_of, contains_query, top_matches
from core.structured_logging import get_logger

# Module-level logger
_logger = get_logger("core.intent")


class IntentClassifier:
    """
    Classifies search intent.

    Priority order (first satisfied wins, so ties favour the broader level):
    1. CATEGORY - best category beats both other pools and clears its bar
    2. SUBCATEGORY - best subcategory beats products and clears its bar
    3. PRODUCT - best product clears its bar
    4. BROAD - nothing clears a bar

    Example:
        classifier = IntentClassifier()
        intent = classifier.classify("mugs", catalog)
        # Returns: Intent(type=CATEGORY, target=Category(name="Mugs"), ...)
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        """
        Initialize the intent classifier.

        Args:
            config: Search configuration (uses defaults if None)
        """
        self.config = config or SearchConfig()

    def classify(self, query: str, catalog: Catalog) -> Intent:
        """
        Classify a query against a catalog snapshot.

        Args:
            query: Search text
            catalog: Flattened catalog

        Returns:
            Intent with type, target, runner-up suggestions and confidence
        """
        if not (query or "").strip():
            return Intent.broad()

        cfg = self.config
        cat_matches = top_matches(
            catalog.categories, query, cfg.category_pool_min_score, cfg.pool_limit
        )
        sub_matches = top_matches(
            catalog.subcategories, query, cfg.subcategory_pool_min_score, cfg.pool_limit
        )
        prod_matches = top_matches(
            catalog.products, query, cfg.product_pool_min_score, cfg.pool_limit
        )

        best_cat = best_of(cat_matches)
        best_sub = best_of(sub_matches)
        best_prod = best_of(prod_matches)

        cat_score = self._boosted(best_cat, query)
        sub_score = self._boosted(best_sub, query)
        prod_score = self._boosted(best_prod, query)

        _logger.debug(
            "Pool scores",
            extra={
                "event": "intent_pool_scores",
                "context": {
                    "category": round(cat_score, 3),
                    "subcategory": round(sub_score, 3),
                    "product": round(prod_score, 3),
                },
            }
        )

        if (
            best_cat
            and cat_score >= sub_score
            and cat_score >= prod_score
            and cat_score >= cfg.category_min_score
        ):
            return self._winner(IntentType.CATEGORY, cat_matches, cat_score)

        if best_sub and sub_score >= prod_score and sub_score >= cfg.subcategory_min_score:
            return self._winner(IntentType.SUBCATEGORY, sub_matches, sub_score)

        if best_prod and prod_score >= cfg.product_min_score:
            return self._winner(IntentType.PRODUCT, prod_matches, prod_score)

        return Intent.broad(self._broad_suggestions(cat_matches, sub_matches, prod_matches))

    # === Scoring helpers ===

    def _boosted(self, match: Optional[ScoredMatch], query: str) -> float:
        """Best-of-pool score plus the includes boost (0.0 if the pool is empty)."""
        if match is None:
            return 0.0
        boost = self.config.includes_boost if contains_query(match.item.name, query) else 0.0
        return match.score + boost

    def _winner(
        self,
        intent_type: IntentType,
        matches: list[ScoredMatch],
        score: float,
    ) -> Intent:
        """Build a non-broad intent; suggestions are ranks 2-4 of the winning pool."""
        return Intent(
            type=intent_type,
            target=matches[0].item,
            suggestions=matches[1:1 + self.config.suggestion_count],
            confidence=score,
        )

    def _broad_suggestions(
        self,
        cat_matches: list[ScoredMatch],
        sub_matches: list[ScoredMatch],
        prod_matches: list[ScoredMatch],
    ) -> list[ScoredMatch]:
        """Top candidates across all three pools, by score."""
        pooled = [*cat_matches, *sub_matches, *prod_matches]
        pooled.sort(key=lambda m: m.score, reverse=True)
        return pooled[:self.config.suggestion_count]
