"""Tests for the memoizing cache."""

from unittest.mock import AsyncMock

import pytest

from rds_health_core.cache import Cache


class TestCache:
    @pytest.mark.asyncio
    async def test_hit_does_not_call_getter(self):
        getter = AsyncMock(return_value="r5.large")
        cache = Cache(getter)

        assert await cache.lookup("db.r5.large") == "r5.large"
        assert await cache.lookup("db.r5.large") == "r5.large"

        getter.assert_awaited_once_with("db.r5.large")
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_failure_returns_none_and_is_not_cached(self):
        getter = AsyncMock(side_effect=[RuntimeError("boom"), "r5.large"])
        cache = Cache(getter)

        assert await cache.lookup("db.r5.large") is None
        assert len(cache) == 0
        assert await cache.lookup("db.r5.large") == "r5.large"
        assert getter.await_count == 2
