"""alis_utils.execution - settleable futures.

ARCHITECTURE
────────────
::

    Deferred            ─ single-shot value: resolve / reject / cancel / timeout
      └── RetryableDeferred ─ settles itself by retrying an async operation
    DeferredPool        ─ key → Deferred registry (request/response correlation)
    RetryStrategy       ─ constant / linear / exponential backoff
"""

from alis_utils.execution.deferred import Deferred, DeferredState
from alis_utils.execution.pool import DeferredPool, PoolStats
from alis_utils.execution.retry import (
    ConstantBackoff,
    ExponentialBackoff,
    LinearBackoff,
    RetryableDeferred,
    RetryStrategy,
)

__all__ = [
    "Deferred",
    "DeferredState",
    "DeferredPool",
    "PoolStats",
    "RetryableDeferred",
    "RetryStrategy",
    "ConstantBackoff",
    "LinearBackoff",
    "ExponentialBackoff",
]
