"""``snapseal policy <manifest>...`` -- Emit per-app policy for a backend.

Loads and sanitizes the manifests, pairs every plug with every slot of the
same interface in another package, and runs one specification pass:
permanent slots first, then the slot and plug side of each candidate
connection. Pairs the interface does not match produce no policy.

Exit Codes:
    0 -- Policy was produced (possibly empty).
    1 -- A plug or slot failed sanitization; no policy is printed.
    2 -- A manifest could not be loaded.
"""

from __future__ import annotations

import contextlib
import json
import sys

import click

from snapseal import release
from snapseal.cli.output import print_sanitize_results, print_specification
from snapseal.cli.sanitize_cmd import load_packages, sanitize_packages
from snapseal.core.interfaces import (
    Connection,
    SecuritySystem,
    Slot,
    build_specification,
)
from snapseal.core.repository import default_repository
from snapseal.manifest import PackageInfo


def candidate_connections(packages: list[PackageInfo]) -> list[Connection]:
    """Pair each plug with each slot of the same interface in another package."""
    slots = [
        package.slot(name) for package in packages for name in sorted(package.slots)
    ]
    connections: list[Connection] = []
    for package in packages:
        for name in sorted(package.plugs):
            plug = package.plug(name)
            for slot in slots:
                if slot.snap != plug.snap and slot.interface == plug.interface:
                    connections.append(Connection(plug, slot))
    return connections


@click.command("policy")
@click.argument("manifests", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--backend",
    type=click.Choice([system.value for system in SecuritySystem]),
    default=SecuritySystem.APPARMOR.value,
    help="Security system to emit policy for (default: apparmor).",
)
@click.option(
    "--classic/--core",
    default=None,
    help="Override classic-system detection from /etc/os-release.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def policy_command(
    manifests: tuple[str, ...],
    backend: str,
    classic: bool | None,
    output_format: str,
) -> None:
    """Emit the BACKEND policy of every app declared in MANIFESTS."""
    repo = default_repository()
    packages = load_packages(manifests, output_format)

    results = sanitize_packages(repo, packages)
    if not all(r.ok for r in results):
        if output_format == "json":
            click.echo(json.dumps({
                "error": "sanitization failed",
                "invalid": [
                    f"{r.snap}:{r.name}: {r.error}" for r in results if not r.ok
                ],
            }))
        else:
            print_sanitize_results(results)
        sys.exit(1)

    slots: list[Slot] = [
        package.slot(name) for package in packages for name in sorted(package.slots)
    ]
    override = (
        release.mock_on_classic(classic)
        if classic is not None
        else contextlib.nullcontext()
    )
    with override:
        spec = build_specification(
            repo, backend, slots=slots, connections=candidate_connections(packages)
        )

    if output_format == "json":
        click.echo(json.dumps({
            "backend": spec.system.value,
            "security_tags": spec.security_tags(),
            "snippets": spec.snippets(),
        }, indent=2))
    else:
        print_specification(spec)
