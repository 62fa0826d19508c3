"""
Profiles command.

Shows the up CLI profiles the server can take credentials from.
"""

import click
import json
import sys

from ..exceptions import CredentialError
from ..exit_codes import CONFIG_ERROR
from ..infra import CredentialManager
from ..render import render_profiles_table


@click.command('profiles')
@click.option('--json', 'json_output', is_flag=True, help='Output as JSONL')
def profiles_handler(json_output):
    """List up CLI profiles.

    The default profile (marked with *) is the one the server uses.
    Session tokens are never printed.

    \b
    Examples:
      marketplace-mcp profiles
      marketplace-mcp profiles --json
    """
    creds = CredentialManager()

    try:
        profiles = creds.list_profiles()
    except CredentialError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(CONFIG_ERROR)

    try:
        default = creds.default_profile_name()
    except CredentialError:
        default = None

    if json_output:
        for name in sorted(profiles):
            record = {'name': name, 'default': name == default}
            record.update(profiles[name].to_dict())
            print(json.dumps(record), flush=True)
        return

    render_profiles_table(profiles, default)
