"""Deferred — a settleable, awaitable single-shot value container.

WHY
───
``asyncio.Future`` is bound to one loop at creation, cannot carry a
timeout, and has no notion of cancellation callbacks or a settled-at
timestamp. A :class:`Deferred` is created anywhere (no running loop
needed), is settled exactly once by whoever holds it, and can be awaited
from any loop.

ARCHITECTURE
────────────
::

    Deferred
      ├── .resolve(value) / .reject(error)  ─ first call wins, rest are no-ops
      ├── .set_timeout(seconds)             ─ loop.call_later alarm → reject
      ├── .cancel(reason) / .on_cancel(cb)  ─ cancellation path + callbacks
      ├── await deferred / .wait()          ─ raise on failure / swallow it
      └── .reset()                          ─ fresh pending Deferred

    PENDING ──resolve──► RESOLVED
       │────reject────► REJECTED   (also: timeout fired)
       └────cancel────► CANCELLED  (error = DeferredCancelledError)

Waiters are plain ``asyncio.Future`` objects created on the awaiting loop
the first time someone awaits. Settling from another thread wakes them
through ``loop.call_soon_threadsafe``.

Related modules:
    retry.py  — RetryableDeferred (drives a Deferred from an async operation)
    pool.py   — DeferredPool (keyed registry of Deferreds)

Example::

    d: Deferred[int] = Deferred()
    d.set_timeout(5.0)
    d.on_cancel(lambda: print("cancelled"))
    d.resolve(42)
    assert await d == 42
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable, Generator
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Generic, TypeVar

from alis_utils.core.errors import (
    DeferredCancelledError,
    DeferredError,
    DeferredTimeoutError,
    ValidationError,
)
from alis_utils.core.logging import get_logger
from alis_utils.core.timestamps import to_iso8601, utc_now

logger = get_logger(__name__)

T = TypeVar("T")

CancelCallback = Callable[[], Any]


class DeferredState(str, Enum):
    """Lifecycle state of a :class:`Deferred`."""

    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class Deferred(Generic[T]):
    """A value that will be provided later, exactly once.

    State transitions are guarded by a lock, so concurrent ``resolve`` /
    ``reject`` / ``cancel`` calls (even from different threads) produce a
    single winner. Errors are stored as exception instances and raised as-is
    when the deferred is awaited.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = DeferredState.PENDING
        self._value: T | None = None
        self._error: BaseException | None = None
        self._created_at: datetime = utc_now()
        self._settled_at: datetime | None = None
        self._cancel_callbacks: list[CancelCallback] = []
        self._waiters: list[tuple[asyncio.AbstractEventLoop, asyncio.Future[None]]] = []
        self._timeout: tuple[asyncio.AbstractEventLoop, asyncio.TimerHandle] | None = None

    # ── Read-only state ──────────────────────────────────────────────

    @property
    def state(self) -> DeferredState:
        return self._state

    @property
    def value(self) -> T | None:
        """The resolved value (``None`` unless RESOLVED)."""
        return self._value

    @property
    def error(self) -> BaseException | None:
        """The stored error (``None`` unless REJECTED or CANCELLED)."""
        return self._error

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def settled_at(self) -> datetime | None:
        return self._settled_at

    @property
    def duration(self) -> timedelta | None:
        """Time from creation to settlement, ``None`` while pending."""
        if self._settled_at is None:
            return None
        return self._settled_at - self._created_at

    @property
    def duration_seconds(self) -> float | None:
        duration = self.duration
        return duration.total_seconds() if duration is not None else None

    @property
    def is_pending(self) -> bool:
        return self._state is DeferredState.PENDING

    @property
    def is_resolved(self) -> bool:
        return self._state is DeferredState.RESOLVED

    @property
    def is_rejected(self) -> bool:
        return self._state is DeferredState.REJECTED

    @property
    def is_cancelled(self) -> bool:
        return self._state is DeferredState.CANCELLED

    @property
    def is_settled(self) -> bool:
        return self._state is not DeferredState.PENDING

    # ── Settling ─────────────────────────────────────────────────────

    def resolve(self, value: T) -> bool:
        """Settle successfully with ``value``.

        Returns:
            True if this call settled the deferred, False if it was already
            settled (the call is then ignored).
        """
        return self._settle(DeferredState.RESOLVED, value=value)

    def reject(self, error: BaseException) -> bool:
        """Settle with ``error``. Same first-call-wins rule as :meth:`resolve`."""
        return self._settle(DeferredState.REJECTED, error=error)

    def cancel(self, reason: str | None = None) -> bool:
        """Cancel a pending deferred.

        Stores a :class:`DeferredCancelledError` as the error, runs every
        registered cancel callback in registration order (once each), then
        wakes awaiting parties, who observe the error.

        Returns:
            True if this call cancelled the deferred.
        """
        settled = self._settle(DeferredState.CANCELLED, error=DeferredCancelledError(reason))
        if settled:
            logger.debug("deferred.cancelled", reason=reason)
        return settled

    def on_cancel(self, callback: CancelCallback) -> None:
        """Register ``callback`` to run if this deferred is cancelled.

        Already cancelled: the callback runs immediately. Settled any other
        way: the callback is dropped.
        """
        with self._lock:
            if self._state is DeferredState.PENDING:
                self._cancel_callbacks.append(callback)
                return
            cancelled = self._state is DeferredState.CANCELLED
        if cancelled:
            self._run_cancel_callback(callback)

    def _settle(
        self,
        state: DeferredState,
        *,
        value: T | None = None,
        error: BaseException | None = None,
    ) -> bool:
        with self._lock:
            if self._state is not DeferredState.PENDING:
                return False
            self._state = state
            self._value = value
            self._error = error
            self._settled_at = utc_now()
            callbacks, self._cancel_callbacks = self._cancel_callbacks, []
            waiters, self._waiters = self._waiters, []

        self.clear_timeout()
        try:
            if state is DeferredState.CANCELLED:
                for callback in callbacks:
                    self._run_cancel_callback(callback)
        finally:
            self._wake(waiters)
        return True

    def _run_cancel_callback(self, callback: CancelCallback) -> None:
        try:
            callback()
        except Exception as e:
            logger.warning(
                "deferred.cancel_callback_error",
                callback=getattr(callback, "__name__", repr(callback)),
                error=str(e),
            )

    # ── Timeout ──────────────────────────────────────────────────────

    def set_timeout(self, seconds: float, error: BaseException | None = None) -> Deferred[T]:
        """Reject with ``error`` (default :class:`DeferredTimeoutError`) if
        still pending after ``seconds``.

        Replaces any previously armed timeout. Must be called from inside a
        running event loop.

        Raises:
            ValidationError: If ``seconds`` is negative.
        """
        if seconds < 0:
            raise ValidationError(
                "Timeout must be non-negative",
                field="seconds",
                value=seconds,
                constraint=">= 0",
            )
        loop = asyncio.get_running_loop()
        self.clear_timeout()
        if self.is_settled:
            return self

        handle = loop.call_later(seconds, self._on_timeout, seconds, error)
        with self._lock:
            self._timeout = (loop, handle)
            settled = self._state is not DeferredState.PENDING
        if settled:
            # Settled from another thread before the alarm was stored.
            self.clear_timeout()
        return self

    def clear_timeout(self) -> None:
        """Disarm the pending timeout, if any."""
        with self._lock:
            armed, self._timeout = self._timeout, None
        if armed is None:
            return
        loop, handle = armed
        if _running_loop() is loop:
            handle.cancel()
        elif not loop.is_closed():
            loop.call_soon_threadsafe(handle.cancel)

    def _on_timeout(self, seconds: float, error: BaseException | None) -> None:
        if not self.is_pending:
            return
        if self.reject(error if error is not None else DeferredTimeoutError(seconds)):
            logger.debug("deferred.timeout", timeout=seconds)

    # ── Awaiting ─────────────────────────────────────────────────────

    def _wake(self, waiters: list[tuple[asyncio.AbstractEventLoop, asyncio.Future[None]]]) -> None:
        current = _running_loop()
        for loop, fut in waiters:
            if loop is current:
                _release(fut)
            elif not loop.is_closed():
                loop.call_soon_threadsafe(_release, fut)

    async def _settled(self) -> None:
        if self.is_settled:
            return
        loop = asyncio.get_running_loop()
        fut: asyncio.Future[None] = loop.create_future()
        with self._lock:
            if self._state is DeferredState.PENDING:
                self._waiters.append((loop, fut))
            else:
                fut.set_result(None)
        try:
            await fut
        finally:
            if not fut.done() or fut.cancelled():
                with self._lock:
                    if (loop, fut) in self._waiters:
                        self._waiters.remove((loop, fut))

    async def _result(self) -> T:
        await self._settled()
        if self._state is DeferredState.RESOLVED:
            return self._value  # type: ignore[return-value]
        if self._error is None:
            raise DeferredError(f"Deferred settled as {self._state.value} without an error")
        raise self._error

    def __await__(self) -> Generator[Any, None, T]:
        return self._result().__await__()

    async def wait(self) -> T | None:
        """Wait for settlement; return the value, or None on failure."""
        await self._settled()
        if self._state is DeferredState.RESOLVED:
            return self._value
        return None

    # ── Misc ─────────────────────────────────────────────────────────

    def reset(self) -> Deferred[T]:
        """Return a brand-new pending Deferred. ``self`` is left untouched."""
        return Deferred()

    def to_dict(self) -> dict[str, Any]:
        """Serialise for logging."""
        return {
            "state": self._state.value,
            "value": self._value,
            "error": str(self._error) if self._error is not None else None,
            "created_at": to_iso8601(self._created_at),
            "settled_at": to_iso8601(self._settled_at),
            "duration_seconds": self.duration_seconds,
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} state={self._state.value}>"


def _release(fut: asyncio.Future[None]) -> None:
    if not fut.done():
        fut.set_result(None)


__all__ = [
    "Deferred",
    "DeferredState",
]
