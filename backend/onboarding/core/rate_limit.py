"""In-memory rate limiting dependency."""

from __future__ import annotations

import time
from collections import deque
from threading import Lock
from typing import Deque

from fastapi import Request, Response

from onboarding.core.config import settings
from onboarding.core.exceptions import RateLimitExceeded


class SlidingWindowLimiter:
    def __init__(self) -> None:
        self._store: dict[str, Deque[float]] = {}
        self._lock = Lock()
        self._longest_window = 0
        self._last_sweep = 0.0

    def hit(self, key: str, *, limit: int, window_seconds: int) -> tuple[bool, int, int]:
        if limit <= 0:
            return True, limit, 0
        now = time.time()
        cutoff = now - window_seconds
        with self._lock:
            self._longest_window = max(self._longest_window, window_seconds)
            if now - self._last_sweep >= self._longest_window:
                self._sweep(now - self._longest_window)
                self._last_sweep = now
            queue = self._store.get(key)
            if queue is not None:
                while queue and queue[0] <= cutoff:
                    queue.popleft()
            if not queue:
                queue = self._store[key] = deque()
            if len(queue) >= limit:
                retry_after = max(int(queue[0] + window_seconds - now), 1)
                return False, 0, retry_after
            queue.append(now)
            return True, max(limit - len(queue), 0), 0

    def _sweep(self, cutoff: float) -> None:
        # Keys whose newest hit is past every window are dropped.
        stale = [key for key, queue in self._store.items() if not queue or queue[-1] <= cutoff]
        for key in stale:
            del self._store[key]

    def reset(self) -> None:
        with self._lock:
            self._store.clear()
            self._last_sweep = 0.0


_limiter = SlidingWindowLimiter()

_SCOPE_LIMITS = {
    "signup": "RATE_LIMIT_SIGNUP_MAX_REQUESTS",
    "verification": "RATE_LIMIT_VERIFICATION_MAX_REQUESTS",
    "search": "RATE_LIMIT_SEARCH_MAX_REQUESTS",
}


def _client_key(request: Request, scope: str) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip = forwarded.split(",")[0].strip()
    else:
        ip = request.client.host if request.client else "unknown"
    return f"{scope}:{ip}"


def _scope_limit(scope: str) -> int:
    return getattr(settings, _SCOPE_LIMITS.get(scope, "RATE_LIMIT_MAX_REQUESTS"))


def rate_limit(scope: str = "default"):
    def _dependency(request: Request, response: Response) -> None:
        if not settings.RATE_LIMIT_ENABLED:
            return
        limit = _scope_limit(scope)
        ok, remaining, retry_after = _limiter.hit(
            _client_key(request, scope),
            limit=limit,
            window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        )
        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(max(remaining, 0))
        response.headers["X-RateLimit-Window"] = str(settings.RATE_LIMIT_WINDOW_SECONDS)
        if not ok:
            raise RateLimitExceeded(
                retry_after=retry_after,
                limit=limit,
                window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
            )

    return _dependency
