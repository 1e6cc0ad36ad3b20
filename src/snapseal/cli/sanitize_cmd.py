"""``snapseal sanitize <manifest>...`` -- Validate plug and slot attributes.

Loads each manifest, resolves every plug and slot to its interface, and
runs the interface's sanitizer.

Exit Codes:
    0 -- Every plug and slot is valid.
    1 -- One or more plugs or slots failed sanitization.
    2 -- A manifest could not be loaded.
"""

from __future__ import annotations

import json
import sys

import click

from snapseal.cli.output import SanitizeResult, print_sanitize_results
from snapseal.core.interfaces import Plug, Slot
from snapseal.core.repository import Repository, default_repository
from snapseal.exceptions import NotFoundError, SnapSealError, ValidationError
from snapseal.manifest import PackageInfo, load_manifest_file


def load_packages(paths: tuple[str, ...], output_format: str) -> list[PackageInfo]:
    """Load every manifest, exiting with code 2 on the first failure."""
    packages: list[PackageInfo] = []
    for path in paths:
        try:
            packages.append(load_manifest_file(path))
        except SnapSealError as exc:
            if output_format == "json":
                click.echo(json.dumps({"error": f"{path}: {exc}"}))
            else:
                click.echo(f"Error: {path}: {exc}")
            sys.exit(2)
    return packages


def sanitize_packages(
    repo: Repository, packages: list[PackageInfo]
) -> list[SanitizeResult]:
    """Sanitize every plug and slot of *packages* against *repo*.

    Endpoints naming an unknown interface are reported as invalid rather
    than aborting the run.
    """
    results: list[SanitizeResult] = []
    for package in packages:
        for name in sorted(package.plugs):
            plug = package.plug(name)
            results.append(_sanitize(repo, "plug", plug))
        for name in sorted(package.slots):
            slot = package.slot(name)
            results.append(_sanitize(repo, "slot", slot))
    return results


def _sanitize(repo: Repository, kind: str, endpoint: Plug | Slot) -> SanitizeResult:
    error: str | None = None
    try:
        iface = repo.interface(endpoint.interface)
        if kind == "plug":
            iface.sanitize_plug(endpoint)
        else:
            iface.sanitize_slot(endpoint)
    except (NotFoundError, ValidationError) as exc:
        error = str(exc)
    return SanitizeResult(
        snap=endpoint.snap,
        kind=kind,
        name=endpoint.name,
        interface=endpoint.interface,
        error=error,
    )


@click.command("sanitize")
@click.argument("manifests", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def sanitize_command(manifests: tuple[str, ...], output_format: str) -> None:
    """Sanitize every plug and slot declared in MANIFESTS."""
    packages = load_packages(manifests, output_format)
    results = sanitize_packages(default_repository(), packages)

    if output_format == "json":
        click.echo(json.dumps([
            {
                "snap": r.snap,
                "kind": r.kind,
                "name": r.name,
                "interface": r.interface,
                "ok": r.ok,
                "error": r.error,
            }
            for r in results
        ], indent=2))
    else:
        print_sanitize_results(results)

    sys.exit(0 if all(r.ok for r in results) else 1)
