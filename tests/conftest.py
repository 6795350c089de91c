"""
Shared pytest fixtures and configuration for alis-build-utils tests.

This module provides:
- Auto-marking of tests by location
- Settings cache isolation between tests
- Small helpers for deferred / retry tests

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments
    (pytest injects them automatically).
"""

import sys
from collections.abc import Awaitable, Callable, Generator
from pathlib import Path
from typing import Any

import pytest

# Ensure alis_utils package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from alis_utils.core.settings import clear_settings_cache


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        # Mark all tests without explicit markers as unit tests
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings_cache() -> Generator[None, None, None]:
    """
    Clear cached settings before and after each test.

    Tests that set ALIS_UTILS_* variables via monkeypatch see them on the
    next get_settings() call, and leave nothing behind.
    """
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Operation Fixtures
# =============================================================================


class FlakyOperation:
    """Async operation that fails a fixed number of times, then succeeds."""

    def __init__(self, failures: int, result: Any = "ok", error: type[Exception] = RuntimeError):
        self.failures = failures
        self.result = result
        self.error = error
        self.calls = 0

    async def __call__(self) -> Any:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error(f"failure {self.calls}")
        return self.result


@pytest.fixture
def flaky_operation() -> Callable[..., FlakyOperation]:
    """
    Factory for FlakyOperation instances.

        op = flaky_operation(failures=2, result=42)
    """
    return FlakyOperation


@pytest.fixture
def always_failing() -> Callable[[], Awaitable[Any]]:
    """Async operation that always raises ValueError."""
    calls = {"count": 0}

    async def operation() -> Any:
        calls["count"] += 1
        raise ValueError(f"boom {calls['count']}")

    operation.calls = calls  # type: ignore[attr-defined]
    return operation
