"""
Unit tests for API limiter errors.
"""

from api_limiter.errors import (
    ApiLimiterException,
    ApiNotRegisteredError,
    ClientNotFoundError,
    ErrorResponse,
    InvalidArgumentError,
    NotFoundError,
    RateLimitError,
)


class TestErrors:
    """Test cases for the error hierarchy."""

    def test_hierarchy(self):
        """Test error base classes."""
        assert issubclass(InvalidArgumentError, ApiLimiterException)
        assert issubclass(ApiNotRegisteredError, NotFoundError)
        assert issubclass(ClientNotFoundError, NotFoundError)
        assert issubclass(RateLimitError, ApiLimiterException)

    def test_api_not_registered(self):
        """Test API not registered error details."""
        error = ApiNotRegisteredError("orders")

        assert str(error) == "API orders not registered"
        assert error.code == "NOT_FOUND"
        assert error.api_name == "orders"

    def test_client_not_found(self):
        """Test client not found error details."""
        error = ClientNotFoundError("pay", "bob")

        assert str(error) == "Client bob not found for API pay"
        assert error.details == {"api_name": "pay", "client": "bob"}

    def test_to_response(self):
        """Test conversion to an error response."""
        response = RateLimitError(details={"api_name": "search"}).to_response()

        assert isinstance(response, ErrorResponse)
        assert response.code == "RATE_LIMIT_ERROR"
        assert response.message == "Rate limit exceeded"
        assert response.details == {"api_name": "search"}

    def test_details_default_to_empty(self):
        """Test that details are never None."""
        assert InvalidArgumentError("API name cannot be null").details == {}
