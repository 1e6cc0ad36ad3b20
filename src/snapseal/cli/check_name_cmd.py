"""``snapseal check-name <name>`` -- Validate an identifier.

Exit Codes:
    0 -- The name is valid.
    1 -- The name is invalid; the reason is printed.
"""

from __future__ import annotations

import sys

import click

from snapseal.exceptions import InvalidNameError
from snapseal.naming import validate_name


@click.command("check-name")
@click.argument("name")
@click.option(
    "--kind",
    type=click.Choice(["snap", "plug", "slot", "interface", "type"]),
    default="snap",
    help="Kind of entity the name identifies (default: snap).",
)
def check_name_command(name: str, kind: str) -> None:
    """Check that NAME is a valid identifier."""
    try:
        validate_name(name, kind=kind)
    except InvalidNameError as exc:
        click.echo(f"Error: {exc}")
        sys.exit(1)
    click.echo(f'"{name}" is a valid {kind} name')
