"""
MCP server command.

Starts the marketplace MCP (Model Context Protocol) server for integration
with LLM tools like Claude Code.
"""

import click
import logging
import sys

from ..config import load_config, setup_logging
from ..exit_codes import get_exit_code_for_exception

logger = logging.getLogger(__name__)


@click.command('serve')
@click.option('--transport', '-t', default='stdio',
              type=click.Choice(['stdio', 'http']),
              help='Transport type (stdio for Claude Code, http for testing)')
@click.option('--host', default=None,
              help='Interface for HTTP transport (default: from config, localhost)')
@click.option('--port', '-p', default=None, type=int,
              help='Port for HTTP transport (default: from config, 8765)')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def serve_handler(transport, host, port, debug):
    """Start the marketplace MCP server.

    Credentials come from the default profile of the up CLI
    (run 'up login' first for private packages).

    \b
    Resources (read-only):
      marketplace://packages                - Official public packages
      marketplace://repositories/{account}  - Repositories of an account

    \b
    Tools (actions):
      search_packages           - Search packages
      get_package_metadata      - Package metadata
      get_package_assets        - Docs, readme, icon, release notes, SBOM
      get_repositories          - Repositories of an account
      get_package_resources     - CRDs, XRDs and compositions of a package
      get_package_resource      - Definition of one resource kind
      get_package_resource_examples - Example manifests for one resource kind
      get_package_composition   - One composition of a resource kind
      reload_auth               - Re-read the up CLI profile

    \b
    Examples:
      marketplace-mcp serve                    # Start stdio server (for Claude Code)
      marketplace-mcp serve --transport http   # Start HTTP server (for testing)
    """
    config = load_config()
    setup_logging('DEBUG' if debug else config['logging']['level'])

    from ..mcp import run_mcp_server

    if transport == 'http':
        host = host or config['server']['host']
        port = port or config['server']['port']
        # stdout stays clean for the stdio transport only
        click.echo(f"Starting marketplace MCP server on http://{host}:{port}")
        click.echo("Press Ctrl+C to stop")

    try:
        run_mcp_server(transport=transport, host=host, port=port, config=config)
    except OSError as e:
        click.echo(f"Error starting server: {e}", err=True)
        sys.exit(get_exit_code_for_exception(e))
