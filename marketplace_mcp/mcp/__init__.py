"""
MCP (Model Context Protocol) server for the Upbound Marketplace.

Resources (read-only data):
    marketplace://packages                  - Popular official public packages
    marketplace://repositories              - How to browse repositories
    marketplace://repositories/{account}    - Repositories of one account

Tools (actions):
    search_packages(query?, family?, ...)                 - Search packages
    get_package_metadata(account, repository, version?)   - Package metadata
    get_package_assets(account, repository, version, asset_type)
    get_repositories(account, filter?, size?, page?)      - List repositories
    reload_auth()                                         - Re-read the up CLI profile
    get_package_resources(account, repository, version)   - CRDs, XRDs, compositions
    get_package_resource(..., resource_group, resource_kind)
    get_package_resource_examples(..., resource_group, resource_kind)
    get_package_composition(..., resource_kind, composition_name)
"""

from .server import create_mcp_server, run_mcp_server, MCPServer, MCPContext
from .errors import ToolError, ERROR_CODES

__all__ = [
    'create_mcp_server',
    'run_mcp_server',
    'MCPServer',
    'MCPContext',
    'ToolError',
    'ERROR_CODES',
]
