"""
Search pipeline for catalog search.

One pure, synchronous entry point shared by every host screen:

    search(query, catalog, config) -> SearchResult

Pipeline: classify intent → build the hierarchical view → extract
"did you mean" suggestions. The engine holds no state between calls;
pagination and the current query belong to the host (see ui/state.py).
"""

from typing import Optional

from core.context import Catalog, Intent, SearchConfig, SearchResult
from core.intent import IntentClassifier
from core.pagination import count_product_rows
from core.structured_logging import Timer, get_logger, log_error, log_intent, log_search
from core.suggestions import extract_suggestions
from core.views import ResultViewBuilder

# Module-level logger
_logger = get_logger("core.search")

__all__ = ["SearchConfig", "SearchEngine", "search"]


class SearchEngine:
    """
    Runs the search pipeline against catalog snapshots.

    Example:
        engine = SearchEngine()
        result = engine.search("coffe mugs", catalog)
        # result.intent.type == IntentType.SUBCATEGORY
        # result.items -> [HeaderItem("Mugs"), ChipsItem([...]), ProductRowItem(...), ...]
        # result.suggestions -> ["Travel Mugs", ...]
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Search configuration (uses defaults if None)
        """
        self.config = config or SearchConfig()
        self.classifier = IntentClassifier(self.config)
        self.view_builder = ResultViewBuilder(self.config)

    def search(self, query: str, catalog: Catalog) -> SearchResult:
        """
        Run classification, view building and suggestion extraction.

        Never raises: a failure anywhere in the pipeline is logged and an
        empty broad result is returned so the host can keep rendering.

        Args:
            query: Search text (blank yields an empty broad result)
            catalog: Flattened catalog snapshot

        Returns:
            SearchResult with the full, unpaginated view
        """
        query = query if isinstance(query, str) else ""
        snapshot_id = getattr(catalog, "snapshot_id", "")

        if not query.strip():
            _logger.debug("Blank query; nothing to search", extra={"event": "search_skipped"})
            return SearchResult(query=query, intent=Intent.broad(), snapshot_id=snapshot_id)

        try:
            with Timer() as total:
                with Timer() as classify_timer:
                    intent = self.classifier.classify(query, catalog)

                log_intent(
                    query=query,
                    intent=intent.type.value,
                    confidence=intent.confidence,
                    target=getattr(intent.target, "name", None),
                    classification_time_ms=classify_timer.elapsed_ms,
                    snapshot_id=snapshot_id,
                )

                items = self.view_builder.build(intent, catalog, query)
                suggestions = extract_suggestions(intent, self.config.suggestion_count)

            result = SearchResult(
                query=query,
                intent=intent,
                items=items,
                suggestions=suggestions,
                total_products=count_product_rows(items),
                snapshot_id=snapshot_id,
            )
        except Exception as e:
            log_error(e, context="search_pipeline", snapshot_id=snapshot_id)
            return SearchResult(query=query, intent=Intent.broad(), snapshot_id=snapshot_id)

        log_search(
            intent=result.intent.type.value,
            products_found=result.total_products,
            search_time_ms=total.elapsed_ms,
            snapshot_id=snapshot_id,
            suggestion_count=len(result.suggestions),
        )
        return result


def search(query: str, catalog: Catalog, config: Optional[SearchConfig] = None) -> SearchResult:
    """
    Run the search pipeline once.

    Args:
        query: Search text
        catalog: Flattened catalog snapshot
        config: Search configuration (uses defaults if None)

    Returns:
        SearchResult
    """
    return SearchEngine(config).search(query, catalog)
