"""
Search session state for catalog search hosts.

Owns the only mutable state around the engine: the raw and debounced
query, the pagination cursor and the current catalog snapshot.
The engine gets these as plain values and never writes back.
"""

import threading
from datetime import datetime
from typing import Any, Callable, List, Optional, Union

from core.catalog import flatten_catalog
from core.context import Catalog, IntentType, SearchConfig, SearchResult, ViewItem
from core.debounce import Debouncer
from core.pagination import Paginator
from core.search import SearchEngine
from core.structured_logging import get_logger

# Module logger
_logger = get_logger("ui.state")


class SearchSession:
    """
    Manages search state for one results panel.

    Tracks:
    - Raw query (every keystroke) and debounced query (what was searched)
    - Pagination cursor (reset on every new debounced query)
    - Current catalog snapshot (replaced atomically on refetch)
    - Last SearchResult

    Example:
        session = SearchSession(catalog)
        session.commit_query("mugs")          # what the debouncer calls
        rows = session.visible_items()        # first page
        session.load_more()                   # scroll hit the bottom
        session.select_suggestion("Mug Sets") # re-runs the whole search
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        config: Optional[SearchConfig] = None,
        session_id: Optional[str] = None,
    ):
        """
        Initialize search session.

        Args:
            catalog: Initial catalog snapshot (empty if None)
            config: Search configuration (uses defaults if None)
            session_id: Optional session identifier
        """
        self.session_id = session_id or self._generate_session_id()
        self.config = config or SearchConfig()
        self.engine = SearchEngine(self.config)
        self.paginator = Paginator(self.config.page_size, self.config.near_bottom_px)
        self.catalog = catalog or Catalog()

        self.query = ""
        self.debounced_query = ""
        self.result: Optional[SearchResult] = None
        self.updated_at = datetime.now()

        self._lock = threading.RLock()
        self._debouncer: Optional[Debouncer] = None
        # Bumped by every keystroke, selection and clear
        self._input_generation = 0

    def _generate_session_id(self) -> str:
        """Generate a unique session ID."""
        return f"search_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}"

    # === Query lifecycle ===

    def set_query(self, text: str) -> None:
        """Record the raw input value (no recompute)."""
        with self._lock:
            self.query = text or ""

    def commit_query(self, text: Optional[str] = None) -> SearchResult:
        """
        Search for a settled query.

        Called when the debounce window elapses. Resets pagination first,
        even if the previous query had paged further.

        Args:
            text: Query to commit (defaults to the current raw query)

        Returns:
            The new SearchResult
        """
        with self._lock:
            if text is not None:
                self.query = text
            self.debounced_query = (self.query or "").strip()
            self.paginator.reset()
            return self._recompute()

    def on_keystroke(
        self,
        text: str,
        timer_factory: Optional[Callable[..., Any]] = None,
    ) -> None:
        """
        Record a keystroke and (re)start the debounce window.

        Args:
            text: Current input value
            timer_factory: Timer builder override (tests)
        """
        with self._lock:
            self.query = text or ""
            self._input_generation += 1
            generation = self._input_generation
        self._get_debouncer(timer_factory).trigger((generation, text))

    def _commit_keystroke(self, pending: tuple) -> Optional[SearchResult]:
        """Debouncer callback; drops a keystroke overtaken by newer input."""
        generation, text = pending
        with self._lock:
            if generation != self._input_generation:
                _logger.debug(
                    "Stale keystroke dropped", extra={"event": "keystroke_superseded"}
                )
                return None
            return self.commit_query(text)

    def _get_debouncer(self, timer_factory: Optional[Callable[..., Any]] = None) -> Debouncer:
        if self._debouncer is None or timer_factory is not None:
            if self._debouncer is not None:
                self._debouncer.cancel()
            self._debouncer = Debouncer(
                self.config.debounce_seconds, self._commit_keystroke, timer_factory=timer_factory
            )
        return self._debouncer

    def select_suggestion(self, text: str) -> SearchResult:
        """Run a fresh search for a "did you mean" entry."""
        return self._select(text)

    def select_chip(self, text: str) -> SearchResult:
        """Run a fresh search for a chip (or quick badge) label."""
        return self._select(text)

    def _select(self, text: str) -> SearchResult:
        with self._lock:
            self._input_generation += 1
            if self._debouncer is not None:
                self._debouncer.cancel()
            return self.commit_query(text)

    def clear(self) -> None:
        """Clear the query and results."""
        with self._lock:
            self._input_generation += 1
            if self._debouncer is not None:
                self._debouncer.cancel()
            self.query = ""
            self.debounced_query = ""
            self.result = None
            self.paginator.reset()
            self.updated_at = datetime.now()

    # === Pagination ===

    def load_more(self) -> int:
        """Reveal the next page; returns the new cursor."""
        with self._lock:
            return self.paginator.next_page()

    def on_scroll(self, scroll_top: float, client_height: float, scroll_height: float) -> bool:
        """Translate a scroll position into a page advance."""
        with self._lock:
            return self.paginator.on_scroll(scroll_top, client_height, scroll_height)

    @property
    def loaded_count(self) -> int:
        """Current pagination cursor."""
        return self.paginator.loaded_count

    # === Catalog snapshots ===

    def replace_catalog(self, catalog: Union[Catalog, Any]) -> Optional[SearchResult]:
        """
        Swap in a new catalog snapshot and recompute from scratch.

        Args:
            catalog: A Catalog, or a raw tree to flatten

        Returns:
            Result for the current debounced query (None if there is none)
        """
        snapshot = catalog if isinstance(catalog, Catalog) else flatten_catalog(catalog)
        with self._lock:
            self.catalog = snapshot
            self.result = None
            self.paginator.reset()
            _logger.info(
                "Catalog snapshot replaced",
                extra={"event": "catalog_replaced", "snapshot_id": snapshot.snapshot_id}
            )
            if not self.debounced_query:
                return None
            return self._recompute()

    def _recompute(self) -> SearchResult:
        self.result = self.engine.search(self.debounced_query, self.catalog)
        self.updated_at = datetime.now()
        return self.result

    # === Read side ===

    def _current_result(self) -> Optional[SearchResult]:
        # A result from a replaced snapshot is never shown
        if self.result is None or self.result.snapshot_id != self.catalog.snapshot_id:
            return None
        return self.result

    def visible_items(self) -> List[ViewItem]:
        """Rows to render at the current cursor."""
        with self._lock:
            result = self._current_result()
            return self.paginator.visible(result.items) if result else []

    def has_more(self) -> bool:
        """Check if another page would reveal more rows."""
        with self._lock:
            result = self._current_result()
            return bool(result) and self.paginator.has_more(result.items)

    def visible_product_count(self) -> int:
        """Product rows currently shown."""
        with self._lock:
            result = self._current_result()
            return self.paginator.visible_product_count(result.items) if result else 0

    @property
    def suggestions(self) -> List[str]:
        """Suggestion names for the current result."""
        result = self._current_result()
        return list(result.suggestions) if result else []

    @property
    def intent_type(self) -> Optional[IntentType]:
        """Intent tag of the current result."""
        result = self._current_result()
        return result.intent.type if result else None

    def to_dict(self) -> dict:
        """Summary for debugging panels and logs."""
        result = self._current_result()
        return {
            'session_id': self.session_id,
            'query': self.query,
            'debounced_query': self.debounced_query,
            'loaded_count': self.loaded_count,
            'snapshot_id': self.catalog.snapshot_id,
            'intent': result.intent.type.value if result else None,
            'total_products': result.total_products if result else 0,
            'updated_at': self.updated_at.isoformat(),
        }
