"""Tests for DeferredPool — keyed registry of Deferreds."""

from __future__ import annotations

import asyncio

import pytest

from alis_utils.core.errors import DeferredCancelledError, DuplicateKeyError
from alis_utils.execution.deferred import Deferred
from alis_utils.execution.pool import DeferredPool, PoolStats


@pytest.fixture
def pool() -> DeferredPool:
    return DeferredPool()


class TestCreateAndGet:
    def test_create_returns_pending(self, pool):
        d = pool.create("req-1")
        assert isinstance(d, Deferred)
        assert d.is_pending
        assert pool.get("req-1") is d

    def test_duplicate_key_raises(self, pool):
        pool.create("req-1")
        with pytest.raises(DuplicateKeyError, match='Deferred with key "req-1" already exists'):
            pool.create("req-1")

    def test_duplicate_key_raises_even_when_settled(self, pool):
        """A settled entry still owns its key."""
        pool.create("req-1").resolve("done")
        with pytest.raises(DuplicateKeyError):
            pool.create("req-1")

    def test_get_missing_returns_none(self, pool):
        assert pool.get("nope") is None

    def test_remove_frees_key(self, pool):
        first = pool.create("req-1")
        assert pool.remove("req-1") is first
        assert pool.get("req-1") is None
        second = pool.create("req-1")
        assert second is not first

    def test_remove_missing(self, pool):
        assert pool.remove("nope") is None

    def test_container_protocol(self, pool):
        pool.create("a")
        pool.create("b")
        assert len(pool) == 2
        assert "a" in pool
        assert "z" not in pool
        assert pool.keys() == ["a", "b"]


class TestResolveReject:
    def test_resolve(self, pool):
        d = pool.create("req-1")
        assert pool.resolve("req-1", {"ok": True}) is True
        assert d.value == {"ok": True}

    def test_resolve_missing_key(self, pool):
        assert pool.resolve("nope", 1) is False

    def test_resolve_settled(self, pool):
        pool.create("req-1")
        pool.resolve("req-1", 1)
        assert pool.resolve("req-1", 2) is False
        assert pool.get("req-1").value == 1

    def test_reject(self, pool):
        d = pool.create("req-1")
        error = RuntimeError("upstream failed")
        assert pool.reject("req-1", error) is True
        assert d.error is error

    def test_reject_missing_key(self, pool):
        assert pool.reject("nope", RuntimeError()) is False

    def test_reject_settled(self, pool):
        pool.create("req-1").cancel()
        assert pool.reject("req-1", RuntimeError()) is False


class TestCancelAll:
    def test_cancels_only_pending(self, pool):
        pool.create("resolved").resolve(1)
        pool.create("rejected").reject(ValueError("x"))
        pending_a = pool.create("pending-a")
        pending_b = pool.create("pending-b")

        assert pool.cancel_all("shutdown") == 2

        assert pool.get("resolved").is_resolved
        assert pool.get("rejected").is_rejected
        for d in (pending_a, pending_b):
            assert d.is_cancelled
            assert isinstance(d.error, DeferredCancelledError)
            assert str(d.error) == "shutdown"

    def test_five_entries_one_resolved(self, pool):
        """Only the four pending entries are cancelled; the resolved one is kept."""
        entries = [pool.create(f"req-{i}") for i in range(5)]
        entries[0].resolve("early")

        assert pool.cancel_all() == 4

        assert entries[0].is_resolved
        assert entries[0].value == "early"
        assert all(d.is_cancelled for d in entries[1:])
        assert pool.get_stats() == PoolStats(
            total=5, pending=0, resolved=1, rejected=0, cancelled=4
        )

    def test_runs_cancel_callbacks(self, pool):
        calls: list[str] = []
        pool.create("a").on_cancel(lambda: calls.append("a"))
        pool.cancel_all()
        assert calls == ["a"]

    def test_empty_pool(self, pool):
        assert pool.cancel_all() == 0

    def test_second_call_cancels_nothing(self, pool):
        pool.create("a")
        pool.cancel_all()
        assert pool.cancel_all() == 0


class TestWaitAll:
    @pytest.mark.asyncio
    async def test_waits_for_every_outcome(self, pool):
        loop = asyncio.get_running_loop()
        a = pool.create("a")
        b = pool.create("b")
        c = pool.create("c")
        loop.call_later(0.01, a.resolve, 1)
        loop.call_later(0.02, b.reject, ValueError("x"))
        loop.call_later(0.03, c.cancel)

        await asyncio.wait_for(pool.wait_all(), timeout=1.0)

        assert all(d.is_settled for d in (a, b, c))

    @pytest.mark.asyncio
    async def test_empty_pool(self, pool):
        await asyncio.wait_for(pool.wait_all(), timeout=1.0)

    @pytest.mark.asyncio
    async def test_with_timeouts(self, pool):
        pool.create("a").set_timeout(0.01)
        pool.create("b").set_timeout(0.02)
        await asyncio.wait_for(pool.wait_all(), timeout=1.0)
        assert pool.get_stats().rejected == 2


class TestStats:
    def test_empty(self, pool):
        assert pool.get_stats() == PoolStats()

    def test_counts_by_state(self, pool):
        pool.create("p")
        pool.create("r").resolve(1)
        pool.create("x").reject(ValueError())
        pool.create("c1").cancel()
        pool.create("c2").cancel()

        stats = pool.get_stats()
        assert stats == PoolStats(total=5, pending=1, resolved=1, rejected=1, cancelled=2)
        assert stats.total == stats.pending + stats.resolved + stats.rejected + stats.cancelled

    def test_two_pending_one_of_each_other(self, pool):
        pool.create("resolved").resolve(1)
        pool.create("rejected").reject(ValueError())
        pool.create("cancelled").cancel()
        pool.create("pending-a")
        pool.create("pending-b")

        assert pool.get_stats() == PoolStats(
            total=5, pending=2, resolved=1, rejected=1, cancelled=1
        )

    def test_snapshot_not_live(self, pool):
        """Stats reflect the moment they were taken."""
        d = pool.create("a")
        before = pool.get_stats()
        d.resolve(1)
        assert before.pending == 1
        assert pool.get_stats().resolved == 1

    def test_to_dict(self, pool):
        pool.create("a")
        assert pool.get_stats().to_dict() == {
            "total": 1,
            "pending": 1,
            "resolved": 0,
            "rejected": 0,
            "cancelled": 0,
        }

    def test_repr(self, pool):
        pool.create("a")
        assert repr(pool) == "<DeferredPool size=1>"
