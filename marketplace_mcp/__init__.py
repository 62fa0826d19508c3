"""
marketplace_mcp - MCP server for the Upbound Marketplace.

Lets LLM tools like Claude Code search packages, read package metadata
and assets, and browse repositories, reusing the session of the ``up`` CLI.

Quick Start:
    from marketplace_mcp.infra import MarketplaceClient
    from marketplace_mcp.domain import SearchQuery

    client = MarketplaceClient(base_url="https://api.upbound.io")
    for pkg in client.search_packages(SearchQuery(query="aws")).packages:
        print(pkg.account, pkg.repository)

Running the server:
    marketplace-mcp serve                    # stdio, for Claude Code
    marketplace-mcp serve --transport http   # HTTP, for testing
"""

__version__ = "1.0.0"

from .config import load_config

__all__ = [
    "__version__",
    "load_config",
]
