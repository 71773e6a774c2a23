from __future__ import annotations

import pytest

from onboarding.core import rate_limit
from onboarding.core.config import settings
from onboarding.core.rate_limit import SlidingWindowLimiter


@pytest.fixture
def limited(monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", True)
    monkeypatch.setattr(settings, "RATE_LIMIT_VERIFICATION_MAX_REQUESTS", 2)
    rate_limit._limiter.reset()
    yield
    rate_limit._limiter.reset()


def test_sliding_window_blocks_after_limit(monkeypatch) -> None:
    clock = iter([100.0, 101.0, 102.0, 161.5])
    monkeypatch.setattr(rate_limit.time, "time", lambda: next(clock))
    limiter = SlidingWindowLimiter()

    assert limiter.hit("k", limit=2, window_seconds=60) == (True, 1, 0)
    assert limiter.hit("k", limit=2, window_seconds=60) == (True, 0, 0)
    assert limiter.hit("k", limit=2, window_seconds=60) == (False, 0, 58)
    assert limiter.hit("k", limit=2, window_seconds=60)[0] is True


def test_idle_client_keys_are_dropped_after_the_window(monkeypatch) -> None:
    clock = iter([100.0, 101.0, 130.0, 170.0])
    monkeypatch.setattr(rate_limit.time, "time", lambda: next(clock))
    limiter = SlidingWindowLimiter()

    limiter.hit("verification:10.0.0.1", limit=5, window_seconds=60)
    limiter.hit("verification:10.0.0.2", limit=5, window_seconds=60)
    limiter.hit("verification:10.0.0.3", limit=5, window_seconds=60)
    assert len(limiter._store) == 3

    limiter.hit("search:10.0.0.4", limit=5, window_seconds=60)

    assert set(limiter._store) == {"verification:10.0.0.3", "search:10.0.0.4"}


def test_verification_scope_returns_429_with_retry_after(client, limited) -> None:
    for _ in range(2):
        assert client.get("/verify-email").status_code == 400

    response = client.get("/verify-email")

    assert response.status_code == 429
    assert response.json()["data"]["error_code"] == "RATE_LIMIT"
    assert int(response.headers["Retry-After"]) >= 1


def test_scopes_are_counted_separately(client, limited) -> None:
    for _ in range(3):
        client.get("/verify-email")

    assert client.get("/search-lenders", params={"query": "td"}).status_code == 200
