"""Keyed registry of Deferreds.

A :class:`DeferredPool` hands out one :class:`Deferred` per key so that the
party creating a request and the party answering it only need to share the
key (a request id, a correlation id, ...).

Example::

    pool = DeferredPool()
    reply = pool.create("req-42")
    ...
    pool.resolve("req-42", payload)      # from the response handler
    payload = await reply

Keys are never reused implicitly: a settled entry keeps its key until
:meth:`DeferredPool.remove` evicts it.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import asdict, dataclass
from typing import Any

from alis_utils.core.errors import DuplicateKeyError
from alis_utils.core.logging import get_logger
from alis_utils.execution.deferred import Deferred, DeferredState

logger = get_logger(__name__)


@dataclass(frozen=True)
class PoolStats:
    """Point-in-time counts of pool entries by state."""

    total: int = 0
    pending: int = 0
    resolved: int = 0
    rejected: int = 0
    cancelled: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


class DeferredPool:
    """Thread-safe map of key → :class:`Deferred`."""

    def __init__(self) -> None:
        self._pool: dict[str, Deferred[Any]] = {}
        self._lock = threading.Lock()

    def _snapshot(self) -> list[Deferred[Any]]:
        with self._lock:
            return list(self._pool.values())

    # ── Entries ──────────────────────────────────────────────────────

    def create(self, key: str) -> Deferred[Any]:
        """Create and register a new pending Deferred under ``key``.

        Raises:
            DuplicateKeyError: If ``key`` is already registered, settled or not.
        """
        with self._lock:
            if key in self._pool:
                raise DuplicateKeyError(key).with_context(operation="create")
            deferred: Deferred[Any] = Deferred()
            self._pool[key] = deferred
        return deferred

    def get(self, key: str) -> Deferred[Any] | None:
        with self._lock:
            return self._pool.get(key)

    def remove(self, key: str) -> Deferred[Any] | None:
        """Evict ``key`` and return its Deferred (left in whatever state it is in)."""
        with self._lock:
            return self._pool.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._pool)

    def __len__(self) -> int:
        with self._lock:
            return len(self._pool)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._pool

    # ── Settling ─────────────────────────────────────────────────────

    def resolve(self, key: str, value: Any) -> bool:
        """Resolve the entry for ``key``.

        Returns:
            True only if the key exists and its Deferred was still pending.
        """
        deferred = self.get(key)
        if deferred is None:
            return False
        return deferred.resolve(value)

    def reject(self, key: str, error: BaseException) -> bool:
        """Reject the entry for ``key``. Same return contract as :meth:`resolve`."""
        deferred = self.get(key)
        if deferred is None:
            return False
        return deferred.reject(error)

    def cancel_all(self, reason: str | None = None) -> int:
        """Cancel every pending entry; settled entries are left alone.

        Returns:
            Number of entries this call cancelled.
        """
        cancelled = sum(1 for d in self._snapshot() if d.cancel(reason))
        logger.info("deferred_pool.cancel_all", cancelled=cancelled, reason=reason)
        return cancelled

    async def wait_all(self) -> None:
        """Wait until every current entry has settled, whatever the outcome."""
        await asyncio.gather(*(d.wait() for d in self._snapshot()))

    def get_stats(self) -> PoolStats:
        counts = {state: 0 for state in DeferredState}
        entries = self._snapshot()
        for deferred in entries:
            counts[deferred.state] += 1
        return PoolStats(
            total=len(entries),
            pending=counts[DeferredState.PENDING],
            resolved=counts[DeferredState.RESOLVED],
            rejected=counts[DeferredState.REJECTED],
            cancelled=counts[DeferredState.CANCELLED],
        )

    def __repr__(self) -> str:
        return f"<DeferredPool size={len(self)}>"


__all__ = [
    "DeferredPool",
    "PoolStats",
]
