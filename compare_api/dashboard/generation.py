"""Generation tokens for discarding stale responses.

Each mutable view (selected sector, comparison chart) owns one
ViewGeneration. Starting a request advances the generation and keeps the
returned token; when the response arrives, it is applied only if the token
is still current. Any later request makes earlier tokens stale.
"""

import threading


class ViewGeneration:
    """Monotonically increasing request counter for one view."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = 0

    @property
    def current(self) -> int:
        with self._lock:
            return self._current

    def advance(self) -> int:
        """Start a new request and return its token."""
        with self._lock:
            self._current += 1
            return self._current

    def is_current(self, token: int) -> bool:
        """True if no newer request has started since `token` was issued."""
        with self._lock:
            return token == self._current
