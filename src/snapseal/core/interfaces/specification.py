"""Per-backend aggregation of policy snippets by security tag.

A ``Specification`` collects, for one security system, the policy text each
confined app needs. It is created empty for every compilation pass, filled
through the three ``add_*`` operations, then read by the backend compiler
through ``security_tags()`` and ``snippet_for_tag()``.

Semantics
---------
- Snippets are appended per tag in processing order and never reordered.
- A tag block never holds the same fragment twice, and repeating an
  ``add_*`` call for the same endpoints is a no-op.
- Snippets are computed before any state changes, so an interface error
  aborts only the current call and leaves earlier results intact.
- A connection affects both packages: once a connected snippet is emitted,
  the tags of both sides become visible in ``security_tags()``, while the
  text itself only goes to the side it was requested for.
- A plug/slot pair the interface does not match is a silent no-op. Callers
  probe candidate pairs by attribute scanning, so mismatches are expected.

Specifications share no state with each other; build one per backend to
compile backends in parallel.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from snapseal.core.interfaces.base import Interface, SecuritySystem
from snapseal.core.interfaces.model import Connection, Plug, Slot

if TYPE_CHECKING:
    from snapseal.core.repository import Repository

logger = logging.getLogger(__name__)


def _endpoint_key(endpoint: Plug | Slot) -> tuple[str, str]:
    return (endpoint.snap, endpoint.name)


class Specification:
    """Mapping of security tag to accumulated policy text for one backend.

    Attributes:
        system: The security system this specification is built for.

    Examples:
        >>> spec = Specification(SecuritySystem.APPARMOR)
        >>> spec.security_tags()
        []
        >>> spec.snippet_for_tag("snap.unknown.app")
        ''
    """

    def __init__(self, system: SecuritySystem | str) -> None:
        self.system = SecuritySystem(system)
        self._snippets: dict[str, list[str]] = {}
        self._tags: set[str] = set()
        self._seen: set[tuple] = set()

    # -- entry operations ---------------------------------------------------

    def add_permanent_slot(self, iface: Interface, slot: Slot) -> None:
        """Record the permanent policy of *slot* for every app bound to it.

        Raises:
            SnapSealError: Whatever the interface raises; nothing is recorded.
        """
        key = ("permanent-slot", iface.name(), _endpoint_key(slot))
        if key in self._seen:
            logger.debug("Permanent slot %s already added", slot)
            return
        snippet = iface.permanent_slot_snippet(slot, self.system)
        self._seen.add(key)
        if not snippet:
            return
        tags = slot.security_tags()
        self._append(tags, snippet)
        self._tags.update(tags)

    def add_connected_slot(self, iface: Interface, plug: Plug, slot: Slot) -> None:
        """Record the slot side of a connection.

        The snippet goes to the slot owner's tags; the plug owner's tags
        become visible as well.
        """
        self._add_connected("connected-slot", iface, plug, slot)

    def add_connected_plug(self, iface: Interface, plug: Plug, slot: Slot) -> None:
        """Record the plug side of a connection.

        The snippet goes to the plug owner's tags; the slot owner's tags
        become visible as well.
        """
        self._add_connected("connected-plug", iface, plug, slot)

    def _add_connected(
        self, kind: str, iface: Interface, plug: Plug, slot: Slot
    ) -> None:
        if not iface.connection_matches(plug, slot):
            logger.debug(
                "Skipping %s: %s does not match %s for interface %s",
                kind, plug, slot, iface.name(),
            )
            return
        key = (kind, iface.name(), _endpoint_key(plug), _endpoint_key(slot))
        if key in self._seen:
            logger.debug("Connection %s -> %s already added as %s", plug, slot, kind)
            return

        if kind == "connected-slot":
            snippet = iface.connected_slot_snippet(plug, slot, self.system)
            owner_tags = slot.security_tags()
        else:
            snippet = iface.connected_plug_snippet(plug, slot, self.system)
            owner_tags = plug.security_tags()
        self._seen.add(key)
        if not snippet:
            return

        affected = sorted(set(slot.security_tags()) | set(plug.security_tags()))
        self._append(owner_tags, snippet)
        self._tags.update(affected)

    def _append(self, tags: Iterable[str], snippet: str) -> None:
        for tag in tags:
            block = self._snippets.setdefault(tag, [])
            if snippet not in block:
                block.append(snippet)

    # -- read side ------------------------------------------------------------

    def security_tags(self) -> list[str]:
        """Return the affected security tags in lexicographic order."""
        return sorted(self._tags)

    def snippet_for_tag(self, tag: str) -> str:
        """Return the newline-joined snippets of *tag*, or "" if unknown."""
        return "\n".join(self._snippets.get(tag, ()))

    def snippets(self) -> dict[str, str]:
        """Return every affected tag mapped to its text, in tag order."""
        return {tag: self.snippet_for_tag(tag) for tag in self.security_tags()}

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"Specification(system={self.system.value!r}, tags={self.security_tags()!r})"


def build_specification(
    repository: Repository,
    system: SecuritySystem | str,
    slots: Iterable[Slot] = (),
    connections: Iterable[Connection] = (),
) -> Specification:
    """Run one compilation pass for *system*.

    Permanent slots are processed first, then for each connection its slot
    side followed by its plug side. Interfaces are resolved by name through
    *repository*. Inputs are expected to be sanitized already.

    Args:
        repository: A ``Repository`` holding the interface implementations.
        system: The backend to build for.
        slots: Slots whose permanent policy should be emitted.
        connections: Active plug/slot connections.

    Returns:
        A fresh, fully populated Specification.

    Raises:
        NotFoundError: If a slot or connection names an unknown interface.
    """
    spec = Specification(system)
    for slot in slots:
        spec.add_permanent_slot(repository.interface(slot.interface), slot)
    for conn in connections:
        iface = repository.interface(conn.interface)
        spec.add_connected_slot(iface, conn.plug, conn.slot)
        spec.add_connected_plug(iface, conn.plug, conn.slot)
    return spec
