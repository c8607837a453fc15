"""
Keystroke debouncing for search hosts.

Each trigger cancels the pending timer and starts a new one, so only the
last value inside the window reaches the callback and recomputes never
overlap. The engine itself is synchronous; this is the host's only
asynchronous piece.

Usage:
    debouncer = Debouncer(0.25, session.commit_query)
    debouncer.trigger("mu")
    debouncer.trigger("mug")   # "mu" is cancelled, "mug" fires after 250ms
"""

import threading
from typing import Any, Callable, Optional

from core.structured_logging import get_logger

# Module logger
_logger = get_logger("core.debounce")


class Debouncer:
    """
    Restartable one-shot timer.

    Attributes:
        wait_seconds: Quiet period before the callback fires
        callback: Called with the last triggered value
        timer_factory: Builds timers with threading.Timer's signature
                       (interval, function, args); injectable for tests
    """

    def __init__(
        self,
        wait_seconds: float,
        callback: Callable[[Any], None],
        timer_factory: Optional[Callable[..., Any]] = None,
    ):
        if wait_seconds < 0:
            raise ValueError(f"wait_seconds must be >= 0, got {wait_seconds}")
        self.wait_seconds = wait_seconds
        self.callback = callback
        self.timer_factory = timer_factory or threading.Timer
        self._lock = threading.Lock()
        self._timer = None
        self._pending_value: Any = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        """Check if a timer is waiting to fire."""
        with self._lock:
            return self._timer is not None

    def trigger(self, value: Any) -> None:
        """Restart the window with a new value."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._pending_value = value
            self._timer = self.timer_factory(
                self.wait_seconds, self._fire, args=(self._generation,)
            )
            if hasattr(self._timer, "daemon"):
                self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        """Drop the pending value without firing."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending_value = None
            self._generation += 1

    def flush(self) -> bool:
        """
        Fire the pending value now (e.g. on Enter).

        Returns:
            True if there was something to fire
        """
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            generation = self._generation
        self._fire(generation)
        return True

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer trigger or a cancel supersedes this timer
            if generation != self._generation or self._timer is None:
                return
            value = self._pending_value
            self._timer = None
            self._pending_value = None

        _logger.debug("Debounce window elapsed", extra={"event": "debounce_fire"})
        self.callback(value)
