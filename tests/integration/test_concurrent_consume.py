"""
Concurrency tests for the API limiter.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from api_limiter.config import ApiConfig
from api_limiter.limiter import Limiter
from api_limiter.registry import ApiLimiter


def _run_concurrently(func, callers: int):
    barrier = threading.Barrier(callers)

    def call():
        barrier.wait()
        return func()

    with ThreadPoolExecutor(max_workers=callers) as executor:
        futures = [executor.submit(call) for _ in range(callers)]
        return [future.result() for future in futures]


class TestConcurrentConsume:
    """Test cases for concurrent callers."""

    @pytest.mark.parametrize("max_calls,callers", [(1, 8), (5, 32), (20, 64)])
    def test_limiter_admits_exactly_max_calls(self, clock, max_calls, callers):
        """Test that concurrent callers never over- or under-admit."""
        limiter = Limiter(ApiConfig("orders", max_calls, 60.0, "alice"), clock)

        results = _run_concurrently(lambda: limiter.consume("alice"), callers)

        assert results.count(True) == max_calls
        assert results.count(False) == callers - max_calls
        assert limiter.get_state()["clients"]["alice"]["number_of_calls"] == max_calls

    def test_registry_root_api_admits_exactly_max_calls(self, clock):
        """Test concurrent calls through the registry onto a shared root API limit."""
        api_limiter = ApiLimiter(clock=clock)
        api_limiter.register_apis(ApiConfig("orders*", 10, 60.0))
        counter = iter(range(1000))
        lock = threading.Lock()

        def consume():
            with lock:
                path = f"orders/{next(counter)}"
            return api_limiter.consume(path, "alice")

        results = _run_concurrently(consume, 40)

        assert results.count(True) == 10

    def test_concurrent_registration(self, clock):
        """Test that concurrent registrations are all recorded."""
        api_limiter = ApiLimiter(clock=clock)

        configs = iter([ApiConfig(f"api-{i:02d}/*", 1, 1.0) for i in range(16)])
        lock = threading.Lock()

        def register():
            with lock:
                config = next(configs)
            api_limiter.register_apis(config)

        _run_concurrently(register, 16)

        assert len(api_limiter.get_configured_apis_names()) == 16
        for i in range(16):
            assert api_limiter.consume(f"api-{i:02d}/x") is True
