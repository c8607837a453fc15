"""
Structured logging for catalog search.

Everything logs under the "catsearch" namespace with machine-readable
fields passed through `extra`:

- Console: one readable line per record, key fields appended
- catsearch.log: every record as a JSON line (daily rotation, 30 days kept)
- errors.log: ERROR and above only, same format

Nothing is installed until the host calls setup_logging(); library code only
asks for loggers.

Usage:
    from core.structured_logging import get_logger, log_search

    _logger = get_logger("core.catalog")
    _logger.info("Catalog flattened", extra={"event": "catalog_flattened", "products": 120})

    log_search(intent="category", products_found=12, search_time_ms=1.4)
"""

import json
import logging
import sys
import time
import traceback
from datetime import datetime, timezone
from functools import wraps
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Optional


# Root namespace for every logger handed out by get_logger()
LOGGER_NAMESPACE = "catsearch"

LOG_FILE = "catsearch.log"
ERROR_LOG_FILE = "errors.log"
RETENTION_DAYS = 30


# =============================================================================
# Formatters
# =============================================================================

class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    {"timestamp": "2025-03-01T09:12:44.100231Z", "level": "INFO",
     "logger": "catsearch.search", "message": "...", "event": "search_complete", ...}

    Only attributes listed in EXTRA_FIELDS are copied from the record, and
    None values are left out.
    """

    EXTRA_FIELDS = (
        # Pipeline
        "event", "snapshot_id", "query", "query_length",
        "intent", "confidence", "target", "suggestion_count",
        "products_found", "items_built", "loaded_count",
        # Catalog
        "categories", "subcategories", "products", "dropped",
        # Timing
        "elapsed_ms", "search_latency_ms", "intent_classification_ms",
        "view_build_ms", "function",
        # Failures
        "error_type", "stack_trace", "context",
    )

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload = {
            "timestamp": created.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (name, getattr(record, name))
            for name in self.EXTRA_FIELDS
            if getattr(record, name, None) is not None
        )

        if record.exc_info and record.exc_info[0] is not None:
            payload["error_type"] = record.exc_info[0].__name__
            payload["stack_trace"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Readable single-line output for terminals and `streamlit run`.

    09:12:44 INFO     catsearch.search  Search complete: 12 products  [event=search_complete]
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    # Appended as key=value when present on the record
    CONTEXT_FIELDS = ("event", "intent", "search_latency_ms")

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        clock = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        level = f"{record.levelname:<8}"
        if self.use_color and record.levelno in self.LEVEL_COLORS:
            level = f"{self.LEVEL_COLORS[record.levelno]}{level}{self.RESET}"

        line = f"{clock} {level} {record.name}  {record.getMessage()}"

        context = [
            f"{name}={getattr(record, name)}"
            for name in self.CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        ]
        if context:
            line = f"{line}  [{' '.join(context)}]"

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


# =============================================================================
# Setup
# =============================================================================

_initialized = False


def _rotating_json_handler(path: Path, level: int) -> logging.Handler:
    handler = TimedRotatingFileHandler(
        filename=str(path),
        when="midnight",
        backupCount=RETENTION_DAYS,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(
    log_dir: str = "logs",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    enable_console: bool = True,
    enable_file: bool = False,
    enable_error_log: bool = False,
    force: bool = False,
) -> None:
    """
    Install handlers on the catsearch namespace logger.

    Runs once per process unless `force` is set; a forced call first removes
    (and closes) whatever an earlier call installed.

    Args:
        log_dir: Where catsearch.log / errors.log go (created on demand)
        console_level: Threshold for the stdout handler
        file_level: Threshold for catsearch.log
        enable_console: Attach the stdout handler
        enable_file: Attach catsearch.log
        enable_error_log: Attach errors.log
        force: Reconfigure even if already set up
    """
    global _initialized
    if _initialized and not force:
        return

    namespace = logging.getLogger(LOGGER_NAMESPACE)
    namespace.setLevel(logging.DEBUG)  # handlers do the filtering
    for handler in list(namespace.handlers):
        namespace.removeHandler(handler)
        handler.close()

    if enable_console:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(console_level)
        console.setFormatter(ConsoleFormatter())
        namespace.addHandler(console)

    if enable_file or enable_error_log:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        if enable_file:
            namespace.addHandler(_rotating_json_handler(directory / LOG_FILE, file_level))
        if enable_error_log:
            namespace.addHandler(_rotating_json_handler(directory / ERROR_LOG_FILE, logging.ERROR))

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Logger under the catsearch namespace.

    "core.search" becomes "catsearch.core.search"; names already inside the
    namespace are used as-is.
    """
    if name != LOGGER_NAMESPACE and not name.startswith(LOGGER_NAMESPACE + "."):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


# =============================================================================
# Event helpers
# =============================================================================

def _emit(logger_name: str, level: int, message: str, event: str, **fields: Any) -> None:
    get_logger(logger_name).log(level, message, extra={"event": event, **fields})


def log_intent(
    query: str,
    intent: str,
    confidence: float,
    target: Optional[str],
    classification_time_ms: float,
    **extra
) -> None:
    """
    Record a classification.

    The INFO record carries only the query length; the text itself goes out
    in a separate DEBUG record.
    """
    _emit(
        "intent", logging.INFO, f"Query classified as {intent}", "intent_classified",
        query_length=len(query or ""),
        intent=intent,
        confidence=round(confidence, 3),
        target=target,
        intent_classification_ms=round(classification_time_ms, 2),
        **extra
    )
    _emit("intent", logging.DEBUG, "Classified query text", "intent_query", query=query, intent=intent)


def log_search(
    intent: str,
    products_found: int,
    search_time_ms: float,
    snapshot_id: Optional[str] = None,
    suggestion_count: int = 0,
    **extra
) -> None:
    """
    Record a finished pipeline run.

    Args:
        intent: Intent type of the result
        products_found: Product rows in the full (unpaginated) view
        search_time_ms: End-to-end latency
        snapshot_id: Catalog snapshot searched
        suggestion_count: Suggestion names produced
    """
    _emit(
        "search", logging.INFO,
        f"Search complete: {products_found} products ({intent})", "search_complete",
        intent=intent,
        products_found=products_found,
        suggestion_count=suggestion_count,
        snapshot_id=snapshot_id,
        search_latency_ms=round(search_time_ms, 2),
        **extra
    )


def log_error(error: Exception, context: Optional[str] = None, **extra) -> None:
    """Record a caught exception; call from inside the except block."""
    get_logger("error").error(
        f"{type(error).__name__} during {context or 'search'}: {error}",
        extra={
            "event": "error",
            "error_type": type(error).__name__,
            "stack_trace": traceback.format_exc(),
            "context": context,
            **extra
        },
        exc_info=True
    )


# =============================================================================
# Timing
# =============================================================================

class Timer:
    """
    Wall-clock timer for a `with` block.

    Usage:
        with Timer() as t:
            items = builder.build(intent, catalog, query)
        _logger.debug("View built", extra={"view_build_ms": t.elapsed_ms})
    """

    def __init__(self):
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *exc) -> bool:
        self.end_time = time.perf_counter()
        self.elapsed_ms = (self.end_time - self.start_time) * 1000
        return False


def timed(event_name: str, logger_name: str = "performance"):
    """
    Log how long each call of the decorated function takes.

    Success goes out at DEBUG as "<event_name>_timing"; an exception is logged
    at ERROR as "<event_name>_error" and re-raised.

    Usage:
        @timed("catalog_flatten")
        def flatten_catalog(tree) -> Catalog:
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            timer = Timer()
            try:
                with timer:
                    result = func(*args, **kwargs)
            except Exception as e:
                get_logger(logger_name).error(
                    f"{event_name} raised after {timer.elapsed_ms:.2f}ms",
                    extra={
                        "event": f"{event_name}_error",
                        "elapsed_ms": round(timer.elapsed_ms, 2),
                        "function": func.__name__,
                        "error_type": type(e).__name__,
                    },
                    exc_info=True
                )
                raise
            _emit(
                logger_name, logging.DEBUG, f"{event_name} took {timer.elapsed_ms:.2f}ms",
                f"{event_name}_timing",
                elapsed_ms=round(timer.elapsed_ms, 2),
                function=func.__name__,
            )
            return result
        return wrapper
    return decorator
