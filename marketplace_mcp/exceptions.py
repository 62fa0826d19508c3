"""
Exception hierarchy for marketplace-mcp-server.

Errors raised by the infrastructure layer (credential loading, request
construction, HTTP transport) so the MCP layer can map each category to a
stable JSON-RPC error code.
"""

from typing import Optional


class MarketplaceError(Exception):
    """Base class for all marketplace errors."""


class InvalidBaseURLError(MarketplaceError):
    """Raised when the configured API base URL cannot be used."""

    def __init__(self, base_url: str):
        super().__init__(f"failed to parse URL: invalid base URL {base_url!r}")
        self.base_url = base_url


class RequestFailedError(MarketplaceError):
    """
    Raised when the marketplace answers with an unexpected status code,
    or when the request could not be executed at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_status(cls, status_code: int, body: str) -> 'RequestFailedError':
        return cls(
            f"API request failed with status {status_code}: {body}",
            status_code=status_code,
            body=body,
        )


class AuthenticationRequiredError(MarketplaceError):
    """Raised on 401/403 responses."""

    def __init__(self, status_code: int = 401):
        super().__init__("authentication required for this endpoint")
        self.status_code = status_code


class ResponseDecodeError(MarketplaceError):
    """Raised when a response body is not the JSON shape we expect."""


class CredentialError(MarketplaceError):
    """Raised when the up CLI configuration is missing or incomplete."""
