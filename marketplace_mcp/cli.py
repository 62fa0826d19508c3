#!/usr/bin/env python3

import click

from marketplace_mcp import __version__
from marketplace_mcp.commands.serve import serve_handler
from marketplace_mcp.commands.profiles import profiles_handler


@click.group()
@click.version_option(version=__version__)
def cli():
    """marketplace-mcp - MCP server for the Upbound Marketplace.

    Exposes marketplace search, package metadata, assets and repositories
    to LLM tools like Claude Code, using the session of the up CLI.
    """
    pass


cli.add_command(serve_handler, name='serve')
cli.add_command(profiles_handler, name='profiles')


def main():
    cli()

if __name__ == "__main__":
    main()
