"""
Shared fixtures for API limiter tests.
"""

import pytest

from api_limiter.registry import ApiLimiter, reset_api_limiter


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def api_limiter(clock):
    """Create an empty ApiLimiter driven by the fake clock."""
    return ApiLimiter(clock=clock)


@pytest.fixture
def default_api_limiter():
    """Reset the process-wide limiter around a test."""
    limiter = reset_api_limiter()
    yield limiter
    reset_api_limiter()
