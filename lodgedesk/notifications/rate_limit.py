"""In-memory sliding-window rate limiter."""

import time
from collections import deque
from collections.abc import Callable


class SlidingWindowRateLimiter:
    """Allow at most ``max_events`` per key in any rolling ``window_seconds``.

    State lives in process memory and is lost on restart. Attempts that are
    refused do not count towards the window.
    """

    def __init__(
        self,
        max_events: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_events = max_events
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, deque[float]] = {}

    def _prune(self, key: str, now: float) -> deque[float]:
        """Drop expired attempts; keys with nothing left are forgotten."""
        window = self._windows.get(key)
        if window is None:
            return deque()
        while window and now - window[0] >= self.window_seconds:
            window.popleft()
        if not window:
            del self._windows[key]
        return window

    def allow(self, key: str) -> bool:
        """Record an attempt for ``key`` and say whether it fits in the window."""
        now = self._clock()
        window = self._prune(key, now)
        if len(window) >= self.max_events:
            return False
        window.append(now)
        self._windows[key] = window
        return True

    def remaining(self, key: str) -> int:
        return max(0, self.max_events - len(self._prune(key, self._clock())))

    def tracked_keys(self) -> int:
        """Number of keys with attempts still inside their window."""
        return len(self._windows)

    def reset(self) -> None:
        self._windows.clear()
