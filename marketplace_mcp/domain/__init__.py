"""
Domain layer for marketplace-mcp-server.

Immutable value objects:
- SearchQuery, RepositoryQuery: one logical lookup each
- Token, Profile: credentials from the up CLI configuration
- Package, PackageMetadata, Asset, Repository, ...: API responses
"""

from .query import SearchQuery, RepositoryQuery, DEFAULT_PAGE_SIZE, DEFAULT_PAGE
from .profile import Token, Profile
from .package import (
    Package,
    SearchResponse,
    PackageMetadata,
    Asset,
    Repository,
    RepositoryResponse,
    PackageResources,
    Examples,
)

__all__ = [
    'SearchQuery',
    'RepositoryQuery',
    'DEFAULT_PAGE_SIZE',
    'DEFAULT_PAGE',
    'Token',
    'Profile',
    'Package',
    'SearchResponse',
    'PackageMetadata',
    'Asset',
    'Repository',
    'RepositoryResponse',
    'PackageResources',
    'Examples',
]
