"""
Structured error types for alis-build-utils.

Provides a small hierarchy of typed errors with metadata for retry decisions,
categorization, and structured logging.

Instead of bare exceptions that lose context, UtilsError and its subclasses
carry:
- **Category:** What kind of error (validation, timeout, cancellation, ...)
- **Retryable:** Whether the failed operation may succeed if attempted again
- **Context:** Metadata such as the pool key or attempt number
- **Cause:** Chained underlying exception for root cause analysis

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                         UtilsError                              │
        │           (category, retryable, context, cause)                 │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                 │
        │  ValidationError     ConfigError        DeferredError           │
        │  (VALIDATION)        (CONFIG)           (STATE)                 │
        │                                              │                  │
        │                       DeferredTimeoutError (TIMEOUT, retryable) │
        │                       DeferredCancelledError (CANCELLED)        │
        │                       DuplicateKeyError (CONFLICT)              │
        │                       InvalidRetryError (STATE)                 │
        └─────────────────────────────────────────────────────────────────┘

Timeouts and cancellations surface as the rejection error of a Deferred,
on the same channel as an operation failure. Callers that need to tell them
apart inspect the Deferred's state or the error type.

Examples:
    >>> error = DeferredTimeoutError(timeout=5.0)
    >>> error.retryable
    True
    >>> str(error)
    'Deferred timed out after 5.0s'

    >>> error = DuplicateKeyError("req-1")
    >>> error.to_dict()["category"]
    'CONFLICT'

Tags:
    error-handling, exception-hierarchy, deferred, retry-logic, alis-utils
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and logging.

    Attributes:
        VALIDATION: Bad input to a conversion or constructor
        CONFIG: Missing or invalid settings
        TIMEOUT: A deferred was not settled in time
        CANCELLED: A deferred was cancelled explicitly
        CONFLICT: Key collisions in a keyed registry
        STATE: Operation not valid in the current lifecycle state
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    TIMEOUT = "TIMEOUT"
    CANCELLED = "CANCELLED"
    CONFLICT = "CONFLICT"
    STATE = "STATE"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        key: Pool key of the deferred involved, if any
        operation: Name of the operation that failed
        attempt: Attempt number for retried operations
        metadata: Additional key-value pairs
    """

    key: str | None = None
    operation: str | None = None
    attempt: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for name in ("key", "operation", "attempt"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class UtilsError(Exception):
    """
    Base exception for all alis-build-utils errors.

    Subclasses set ``default_category`` and ``default_retryable`` to give
    sensible defaults for their domain.

    Examples:
        >>> error = UtilsError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(key="req-1").context.key
        'req-1'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> UtilsError:
        """
        Add context to this error (fluent API).

        Usage:
            raise DuplicateKeyError(key).with_context(operation="create")
        """
        for name, value in kwargs.items():
            if name != "metadata" and hasattr(self.context, name):
                setattr(self.context, name, value)
            else:
                self.context.metadata[name] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# VALIDATION / CONFIGURATION ERRORS
# =============================================================================


class ValidationError(UtilsError):
    """
    Invalid input to a conversion or constructor.

    Never retryable - the input must be fixed.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.constraint:
            result["constraint"] = self.constraint
        return result


class ConfigError(UtilsError):
    """Configuration error. Never retryable."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


# =============================================================================
# DEFERRED ERRORS
# =============================================================================


class DeferredError(UtilsError):
    """Base class for errors raised by the deferred family."""

    default_category = ErrorCategory.STATE
    default_retryable = False


class DeferredTimeoutError(DeferredError):
    """A deferred was still pending when its timeout fired."""

    default_category = ErrorCategory.TIMEOUT
    default_retryable = True

    def __init__(self, timeout: float, message: str | None = None, **kwargs: Any):
        self.timeout = timeout
        super().__init__(message or f"Deferred timed out after {timeout}s", **kwargs)


class DeferredCancelledError(DeferredError):
    """A deferred was cancelled before it settled."""

    default_category = ErrorCategory.CANCELLED

    def __init__(self, reason: str | None = None, **kwargs: Any):
        self.reason = reason
        super().__init__(reason or "Deferred was cancelled", **kwargs)


class DuplicateKeyError(DeferredError):
    """A keyed pool already holds a deferred under this key."""

    default_category = ErrorCategory.CONFLICT

    def __init__(self, key: str, **kwargs: Any):
        self.key = key
        super().__init__(f'Deferred with key "{key}" already exists', **kwargs)
        self.context.key = key


class InvalidRetryError(DeferredError):
    """retry() was called on a deferred that has already settled."""

    def __init__(self, message: str = "Cannot retry a settled deferred", **kwargs: Any):
        super().__init__(message, **kwargs)


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: BaseException) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, UtilsError):
        return error.retryable
    return isinstance(error, (ConnectionError, TimeoutError))


def categorize_error(error: BaseException) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, UtilsError):
        return error.category
    if isinstance(error, TimeoutError):
        return ErrorCategory.TIMEOUT
    if isinstance(error, (ValueError, TypeError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "UtilsError",
    "ValidationError",
    "ConfigError",
    "DeferredError",
    "DeferredTimeoutError",
    "DeferredCancelledError",
    "DuplicateKeyError",
    "InvalidRetryError",
    "is_retryable",
    "categorize_error",
]
