"""
Infrastructure layer for marketplace-mcp-server.

Contains abstractions for external systems:
- MarketplaceClient: marketplace REST API access
- CredentialManager: up CLI configuration (session token, API domain)
- request_translator: pure query-to-request translation

These provide clean interfaces that can be mocked for testing.
"""

from .marketplace_client import MarketplaceClient, ClientSettings
from .credentials import CredentialManager, get_up_config_path, DEFAULT_API_URL
from .request_translator import OutboundRequest

__all__ = [
    'MarketplaceClient',
    'ClientSettings',
    'CredentialManager',
    'get_up_config_path',
    'DEFAULT_API_URL',
    'OutboundRequest',
]
