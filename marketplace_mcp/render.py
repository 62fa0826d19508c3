"""
Rendering functions for marketplace-mcp command output.

Everything here prints to the terminal; the MCP server itself never uses
rich, since stdout carries the JSON-RPC stream.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import Dict, Optional

from .domain.profile import Profile

console = Console()


def render_profiles_table(profiles: Dict[str, Profile], default: Optional[str] = None) -> None:
    """
    Render up CLI profiles as a table.

    Args:
        profiles: Profiles keyed by name
        default: Name of the default profile, marked with an asterisk
    """
    if not profiles:
        console.print("[yellow]No profiles found. Run 'up login' to create one.[/yellow]")
        return

    table = Table(
        title="UP CLI Profiles",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    table.add_column("", width=1)
    table.add_column("Profile", style="cyan")
    table.add_column("Organization")
    table.add_column("Type")
    table.add_column("Domain")
    table.add_column("Session")

    for name in sorted(profiles):
        profile = profiles[name]
        table.add_row(
            "*" if name == default else "",
            name,
            profile.organization or profile.account or "-",
            profile.type or profile.profile_type or "-",
            profile.domain or "upbound.io",
            "[green]yes[/green]" if profile.has_session else "[red]no[/red]",
        )

    console.print(table)
