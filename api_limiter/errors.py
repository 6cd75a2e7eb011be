"""
Error types for the API limiter.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class ApiLimiterException(Exception):
    """Base exception for API limiter errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidArgumentError(ApiLimiterException):
    """A required argument was missing or malformed."""

    def __init__(self, message: str = "Invalid argument", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_ARGUMENT", message, details)


class NotFoundError(ApiLimiterException):
    """A requested API or client has no registered rule."""

    def __init__(self, message: str = "Not found", details: Optional[Dict[str, Any]] = None):
        super().__init__("NOT_FOUND", message, details)


class ApiNotRegisteredError(NotFoundError):
    """No rule is registered for the API."""

    def __init__(self, api_name: str):
        super().__init__(f"API {api_name} not registered", {"api_name": api_name})
        self.api_name = api_name


class ClientNotFoundError(NotFoundError):
    """The API is registered, but not for this client."""

    def __init__(self, api_name: str, client: str):
        super().__init__(
            f"Client {client} not found for API {api_name}",
            {"api_name": api_name, "client": client}
        )
        self.api_name = api_name
        self.client = client


class RateLimitError(ApiLimiterException):
    """Rate limiting errors."""

    def __init__(self, message: str = "Rate limit exceeded", details: Optional[Dict[str, Any]] = None):
        super().__init__("RATE_LIMIT_ERROR", message, details)
