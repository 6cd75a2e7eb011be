"""
Fixed-window call limiter for a single registered rule.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict

from api_limiter.config import ApiConfig
from api_limiter.logging import get_logger


@dataclass(frozen=True)
class ApiCall:
    """Calls made by a client to an API since the window opened at ``time``."""
    number_of_calls: int
    time: float
    client: str
    api: str


class Limiter:
    """Limits the calls clients can make under one ``ApiConfig``.

    Every client gets its own fixed window. Records are replaced, never
    mutated, and only while holding this limiter's lock.
    """

    def __init__(self, api_config: ApiConfig, clock: Callable[[], float] = time.monotonic):
        self.api_config = api_config
        self._clock = clock
        self._clients: Dict[str, ApiCall] = {}
        self._lock = threading.Lock()
        self.logger = get_logger(f"api_limiter.limiter.{api_config.api_name}")

    def consume(self, client: str) -> bool:
        """Consume one call on behalf of a client.

        Returns False if the call would exceed the configured maximum calls
        within the configured timeframe. A denied call is not counted.
        """
        with self._lock:
            now = self._clock()
            api_call = self._clients.get(client)

            if api_call is None or self._timeframe_expired(api_call, now):
                self._clients[client] = ApiCall(1, now, client, self.api_config.api_name)
                return True

            if self._call_limit_exceeded(api_call):
                self.logger.debug(
                    "API call limit exceeded",
                    api_name=api_call.api,
                    client=client,
                    number_of_calls=api_call.number_of_calls,
                    max_calls=self.api_config.max_calls
                )
                return False

            self._clients[client] = ApiCall(
                api_call.number_of_calls + 1, api_call.time, api_call.client, api_call.api
            )
            return True

    def _call_limit_exceeded(self, api_call: ApiCall) -> bool:
        return api_call.number_of_calls + 1 > self.api_config.max_calls

    def _timeframe_expired(self, api_call: ApiCall, now: float) -> bool:
        return now - api_call.time > self.api_config.timeframe

    def get_state(self) -> Dict[str, Any]:
        """Get current limiter state."""
        with self._lock:
            clients = {
                client: {
                    "number_of_calls": api_call.number_of_calls,
                    "window_start": api_call.time
                }
                for client, api_call in self._clients.items()
            }

        return {
            "api_name": self.api_config.api_name,
            "client": self.api_config.client,
            "max_calls": self.api_config.max_calls,
            "timeframe": self.api_config.timeframe,
            "clients": clients
        }
