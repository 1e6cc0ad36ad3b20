"""``snapseal interfaces`` -- List built-in interfaces and capability types.

Exit Codes:
    0 -- Always (informational command).
"""

from __future__ import annotations

import click
from rich.table import Table

from snapseal.cli.output import console
from snapseal.core.repository import default_repository


@click.command("interfaces")
def interfaces_command() -> None:
    """List the registered interfaces and capability types."""
    repo = default_repository()

    table = Table(title="Registered Interfaces", show_header=True, header_style="bold")
    table.add_column("Interface", style="bold")
    table.add_column("Implementation", style="dim")
    for iface in repo.interfaces():
        table.add_row(iface.name(), type(iface).__name__)
    console.print(table)

    types = ", ".join(cap_type.name for cap_type in repo.types())
    console.print(f"[bold]Capability types:[/bold] {types}")
