"""
In-process API call limiter.

Decides whether a client may make one more call to an API, given a maximum
number of calls per fixed time window:

- config: Rate limit rules (ApiConfig) and settings via pydantic-settings
- limiter: Per-rule fixed-window call tracking
- registry: API limiter registry and the process-wide instance
- decorators: rate_limited guard for sync and async callables
- errors: Error types and responses
- logging: Structured logging via structlog
"""

from api_limiter.config import ALL_CLIENTS, ApiConfig, LimiterSettings, get_settings
from api_limiter.decorators import rate_limited
from api_limiter.errors import (
    ApiLimiterException,
    ApiNotRegisteredError,
    ClientNotFoundError,
    InvalidArgumentError,
    NotFoundError,
    RateLimitError,
)
from api_limiter.registry import (
    ApiLimiter,
    consume,
    get_api_limiter,
    get_configured_apis_names,
    is_api_configured,
    register_apis,
    reset_api_limiter,
)

__all__ = [
    "ALL_CLIENTS",
    "ApiConfig",
    "ApiLimiter",
    "ApiLimiterException",
    "ApiNotRegisteredError",
    "ClientNotFoundError",
    "InvalidArgumentError",
    "LimiterSettings",
    "NotFoundError",
    "RateLimitError",
    "consume",
    "get_api_limiter",
    "get_configured_apis_names",
    "get_settings",
    "is_api_configured",
    "rate_limited",
    "register_apis",
    "reset_api_limiter",
]
