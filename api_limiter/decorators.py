"""
Decorators guarding callables with an API limit.
"""

import functools
import inspect
from typing import Any, Callable, Optional, Union

from api_limiter.config import ALL_CLIENTS
from api_limiter.errors import RateLimitError
from api_limiter.logging import get_logger
from api_limiter.registry import ApiLimiter, get_api_limiter

ClientSource = Union[str, Callable[..., Optional[str]], None]


def rate_limited(api_name: str,
                 client: ClientSource = None,
                 limiter: Optional[ApiLimiter] = None) -> Callable:
    """Consume a call to ``api_name`` before each invocation of the decorated function.

    ``client`` is either a fixed client id or a callable receiving the
    decorated function's arguments and returning the client id. When omitted
    the call is made on behalf of all clients. ``limiter`` defaults to the
    process-wide limiter, looked up at call time.

    Raises RateLimitError, without calling the function, when the call is
    denied.
    """

    def _check(func: Callable, args: tuple, kwargs: dict) -> None:
        if callable(client):
            client_id = client(*args, **kwargs)
        else:
            client_id = ALL_CLIENTS if client is None else client

        api_limiter = limiter or get_api_limiter()
        if not api_limiter.consume(api_name, client_id):
            get_logger(f"rate_limited.{func.__name__}").info(
                "Call rejected by rate limit",
                api_name=api_name,
                client=client_id,
                function=func.__name__
            )
            raise RateLimitError(
                f"Rate limit exceeded for API {api_name}",
                {"api_name": api_name, "client": client_id}
            )

    def decorator(func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs) -> Any:
                _check(func, args, kwargs)
                return await func(*args, **kwargs)

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            _check(func, args, kwargs)
            return func(*args, **kwargs)

        return wrapper

    return decorator
