"""
API limiter registry.

Maps API names to per-client limiters and resolves each call to the limiter
that governs it:

- an API name starting with a registered root prefix is collapsed onto the
  root API (first registered prefix wins);
- a rule registered for all clients (``*``) applies to every client of the
  API, shadowing any rule registered for a specific client.
"""

import threading
import time
from typing import Any, Callable, Dict, List, Optional

from api_limiter.config import ALL_CLIENTS, ROOT_API_MARKER, ApiConfig
from api_limiter.errors import ApiNotRegisteredError, ClientNotFoundError, InvalidArgumentError
from api_limiter.limiter import Limiter
from api_limiter.logging import get_logger


class ApiLimiter:
    """Consumes API calls on behalf of clients, within the registered limits."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._api_limiters: Dict[str, Dict[str, Limiter]] = {}
        self._root_apis: List[str] = []
        self._lock = threading.RLock()
        self.logger = get_logger("api_limiter.registry")

    def register_apis(self, *apis: ApiConfig) -> None:
        """Register the APIs to limit.

        Registering the same API name and client again replaces the previous
        limiter, and with it all tracked calls.
        """
        with self._lock:
            for api in apis:
                self._api_limiters.setdefault(api.api_name, {})[api.client] = Limiter(api, self._clock)
                if api.is_root_api and api.root_prefix not in self._root_apis:
                    self._root_apis.append(api.root_prefix)

                self.logger.info(
                    "Registered API limit",
                    api_name=api.api_name,
                    client=api.client,
                    max_calls=api.max_calls,
                    timeframe=api.timeframe,
                    root_api=api.is_root_api
                )

    def get_configured_apis_names(self) -> List[str]:
        """Get the names of the configured APIs."""
        with self._lock:
            return list(self._api_limiters.keys())

    def is_api_configured(self, api_name: Optional[str]) -> bool:
        """Check whether an API name is registered as is, without root API matching."""
        if api_name is None:
            return False

        with self._lock:
            return api_name in self._api_limiters

    def consume(self, api_name: Optional[str], client: Optional[str] = ALL_CLIENTS) -> bool:
        """Consume one API call on behalf of a client.

        Returns False if the call exceeds the configured maximum calls within
        the configured timeframe. The client is ignored when the API is
        configured for all clients.

        Raises InvalidArgumentError if the API name is None, or the client is
        None for an API without an all-clients rule. Raises NotFoundError if
        the API is not registered or the client is not found for it.
        """
        if api_name is None:
            self.logger.warning("API name cannot be null", client=client)
            raise InvalidArgumentError("API name cannot be null")

        limiter, client = self._resolve(api_name, client)
        return limiter.consume(client)

    def _resolve(self, api_name: str, client: Optional[str]):
        with self._lock:
            for root_api in self._root_apis:
                if api_name.startswith(root_api):
                    api_name = root_api + ROOT_API_MARKER
                    break

            client_limiters = self._api_limiters.get(api_name)
            if client_limiters is None:
                self.logger.warning("API not registered", api_name=api_name)
                raise ApiNotRegisteredError(api_name)

            if ALL_CLIENTS in client_limiters:
                return client_limiters[ALL_CLIENTS], ALL_CLIENTS
            if client is None:
                self.logger.warning("Client cannot be null", api_name=api_name)
                raise InvalidArgumentError("Client cannot be null", {"api_name": api_name})
            if client in client_limiters:
                return client_limiters[client], client

        self.logger.warning("Client not found for API", api_name=api_name, client=client)
        raise ClientNotFoundError(api_name, client)

    def get_state(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """Get the state of every registered limiter, by API name and client."""
        with self._lock:
            limiters = {
                api_name: dict(client_limiters)
                for api_name, client_limiters in self._api_limiters.items()
            }

        return {
            api_name: {client: limiter.get_state() for client, limiter in client_limiters.items()}
            for api_name, client_limiters in limiters.items()
        }


# Process-wide limiter, created on first use
_api_limiter: Optional[ApiLimiter] = None
_api_limiter_lock = threading.Lock()


def get_api_limiter() -> ApiLimiter:
    """Get the process-wide API limiter."""
    global _api_limiter
    with _api_limiter_lock:
        if _api_limiter is None:
            _api_limiter = ApiLimiter()
        return _api_limiter


def reset_api_limiter() -> ApiLimiter:
    """Replace the process-wide API limiter with an empty one (intended for tests)."""
    global _api_limiter
    with _api_limiter_lock:
        _api_limiter = ApiLimiter()
        return _api_limiter


def register_apis(*apis: ApiConfig) -> None:
    """Register APIs on the process-wide limiter."""
    get_api_limiter().register_apis(*apis)


def get_configured_apis_names() -> List[str]:
    """Get the API names configured on the process-wide limiter."""
    return get_api_limiter().get_configured_apis_names()


def is_api_configured(api_name: Optional[str]) -> bool:
    """Check whether an API is configured on the process-wide limiter."""
    return get_api_limiter().is_api_configured(api_name)


def consume(api_name: Optional[str], client: Optional[str] = ALL_CLIENTS) -> bool:
    """Consume an API call on the process-wide limiter."""
    return get_api_limiter().consume(api_name, client)
