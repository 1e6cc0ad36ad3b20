"""Rich output formatting helpers for the snapseal CLI.

Sanitization results are shown as a table with a colored status column;
policy output is printed per security tag, tags in lexicographic order so
that the backend compiler sees a deterministic sequence.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from snapseal.core.interfaces import Specification

console = Console()


@dataclass(frozen=True)
class SanitizeResult:
    """Outcome of sanitizing one plug or slot.

    Attributes:
        snap: Owning package name.
        kind: "plug" or "slot".
        name: Plug or slot name.
        interface: Interface name the endpoint declares.
        error: Error message, or None when the endpoint is valid.
    """

    snap: str
    kind: str
    name: str
    interface: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def print_sanitize_results(results: list[SanitizeResult]) -> None:
    """Print a table of sanitization outcomes and a one-line summary."""
    if not results:
        console.print("[dim]No plugs or slots declared.[/dim]")
        return

    table = Table(title="Sanitization Results", show_header=True, header_style="bold")
    table.add_column("Package", style="bold")
    table.add_column("Kind", style="dim")
    table.add_column("Name")
    table.add_column("Interface")
    table.add_column("Status", justify="center")
    table.add_column("Error", style="dim")

    for r in results:
        status = Text("OK", style="bold green") if r.ok else Text("INVALID", style="bold red")
        table.add_row(r.snap, r.kind, r.name, r.interface, status, r.error or "-")

    console.print(table)
    failed = sum(1 for r in results if not r.ok)
    parts = [f"[bold]{len(results)}[/bold] endpoints checked"]
    if failed:
        parts.append(f"[red]{failed} invalid[/red]")
    else:
        parts.append("[green]all valid[/green]")
    console.print(" | ".join(parts))


def print_specification(spec: Specification) -> None:
    """Print every security tag of *spec* followed by its policy text."""
    tags = spec.security_tags()
    if not tags:
        console.print(f"[dim]No {spec.system.value} policy produced.[/dim]")
        return

    for tag in tags:
        snippet = spec.snippet_for_tag(tag)
        body = Text(snippet) if snippet else Text("(no rules for this tag)", style="dim")
        console.print(Panel(body, title=f"{spec.system.value}: {tag}"))
