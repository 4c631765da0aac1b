from __future__ import annotations

import threading
import time


class FixedWindowRateLimiter:
    """Allow at most ``max_requests`` per client within each ``window_s`` window.

    Expired windows are swept at most once per window length, so the table only
    holds clients seen during the last window.
    """

    def __init__(self, max_requests: int, window_s: float) -> None:
        if max_requests <= 0:
            raise ValueError("max_requests must be > 0")
        if window_s <= 0:
            raise ValueError("window_s must be > 0")
        self._max_requests = max_requests
        self._window_s = window_s
        self._lock = threading.Lock()
        self._windows: dict[str, tuple[float, int]] = {}
        self._last_sweep: float | None = None

    def allow(self, client: str, now: float | None = None) -> bool:
        now = time.monotonic() if now is None else now
        with self._lock:
            self._sweep(now)
            started, count = self._windows.get(client, (now, 0))
            if now - started >= self._window_s:
                started, count = now, 0
            if count >= self._max_requests:
                self._windows[client] = (started, count)
                return False
            self._windows[client] = (started, count + 1)
            return True

    def retry_after(self, client: str, now: float | None = None) -> int:
        now = time.monotonic() if now is None else now
        with self._lock:
            started, _ = self._windows.get(client, (now, 0))
        return max(0, int(self._window_s - (now - started)) + 1)

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._windows)

    def _sweep(self, now: float) -> None:
        # Caller holds the lock.
        if self._last_sweep is None:
            self._last_sweep = now
            return
        if now - self._last_sweep < self._window_s:
            return
        self._last_sweep = now
        expired = [client for client, (started, _) in self._windows.items() if now - started >= self._window_s]
        for client in expired:
            del self._windows[client]
