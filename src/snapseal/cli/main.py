"""snapseal CLI -- Compile interface connections into sandbox policy.

Entry point for the ``snapseal`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    check-name -- Validate a snap, plug, slot or interface name.
    interfaces -- List registered interfaces and capability types.
    sanitize   -- Sanitize every plug and slot of one or more manifests.
    policy     -- Emit per-app policy snippets for one backend.

Usage::

    snapseal check-name my-snap
    snapseal interfaces
    snapseal sanitize plugger.yaml slotter.yaml
    snapseal policy plugger.yaml slotter.yaml --backend apparmor
    snapseal policy slotter.yaml --backend dbus --format json
"""

from __future__ import annotations

import logging

import click

from snapseal import __version__
from snapseal.cli.check_name_cmd import check_name_command
from snapseal.cli.interfaces_cmd import interfaces_command
from snapseal.cli.policy_cmd import policy_command
from snapseal.cli.sanitize_cmd import sanitize_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """snapseal: Compile interface connections into sandbox policy.

    Validate plug and slot declarations, match plugs to slots, and emit
    the AppArmor or D-Bus policy each confined app needs.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


# Register all subcommands
cli.add_command(check_name_command)
cli.add_command(interfaces_command)
cli.add_command(sanitize_command)
cli.add_command(policy_command)
