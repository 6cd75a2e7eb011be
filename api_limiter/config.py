"""
Rate limit rules and limiter settings.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from api_limiter.errors import InvalidArgumentError

DEFAULT_MAX_CALLS = 5
DEFAULT_TIMEFRAME = 10.0

# Client token meaning "every client".
ALL_CLIENTS = "*"
# Suffix marking an API name as a root API.
ROOT_API_MARKER = "*"


class LimiterSettings(BaseSettings):
    """Settings for the API limiter, read from API_LIMITER_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="API_LIMITER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    default_max_calls: int = Field(default=DEFAULT_MAX_CALLS, gt=0)
    default_timeframe: float = Field(default=DEFAULT_TIMEFRAME, gt=0)
    log_level: str = Field(default="info")


@lru_cache()
def get_settings() -> LimiterSettings:
    """Get the cached limiter settings."""
    return LimiterSettings()


@dataclass(frozen=True)
class ApiConfig:
    """Maximum number of calls a client may make to an API within a timeframe.

    ``api_name`` ending with ``*`` marks a root API: the rule covers every API
    name starting with the rest of it. ``client`` is a client id, or ``*`` for
    all clients. ``timeframe`` is in seconds.
    """

    api_name: str
    max_calls: int = DEFAULT_MAX_CALLS
    timeframe: float = DEFAULT_TIMEFRAME
    client: str = ALL_CLIENTS

    @property
    def is_root_api(self) -> bool:
        return self.api_name.endswith(ROOT_API_MARKER)

    @property
    def root_prefix(self) -> str:
        """API name without the root marker."""
        if self.is_root_api:
            return self.api_name[:-len(ROOT_API_MARKER)]
        return self.api_name

    @property
    def is_all_clients(self) -> bool:
        return self.client == ALL_CLIENTS

    @classmethod
    def of(cls,
           api_name: str,
           max_calls: int,
           timeframe: float,
           clients: Optional[Iterable[str]]) -> List["ApiConfig"]:
        """Build one config per client, sharing name, max calls and timeframe."""
        if clients is None:
            raise InvalidArgumentError("Clients cannot be null")
        if isinstance(clients, str):
            clients = [clients]

        return [cls(api_name, max_calls, timeframe, client) for client in clients]

    @classmethod
    def from_settings(cls,
                      api_name: str,
                      client: str = ALL_CLIENTS,
                      settings: Optional[LimiterSettings] = None) -> "ApiConfig":
        """Build a config using the configured default max calls and timeframe."""
        settings = settings or get_settings()
        return cls(api_name, settings.default_max_calls, settings.default_timeframe, client)
