"""The interface contract implemented once per resource class.

Every interface type (D-Bus names, files, devices, ...) implements the
``Interface`` abstract base class. An implementation is stateless: one
instance is registered per interface name in a ``Repository`` and shared,
read-only, by every plug and slot of that type.

The contract has three phases:

- ``sanitize_slot`` / ``sanitize_plug`` -- validate and narrow the
  attributes declared in a manifest, failing fast with a
  ``ValidationError`` subclass.
- ``permanent_slot_snippet`` -- policy the slot owner needs whenever the
  slot exists.
- ``connected_slot_snippet`` / ``connected_plug_snippet`` -- policy each
  side needs while a specific connection is active.

Snippet methods return ``None`` when a backend needs no rule for the case.
That is a normal outcome: most interfaces only produce rules for some of
the security systems.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from snapseal.core.interfaces.model import Plug, Slot


class SecuritySystem(str, Enum):
    """Enforcement backends that consume policy snippets."""

    APPARMOR = "apparmor"
    SECCOMP = "seccomp"
    DBUS = "dbus"
    UDEV = "udev"
    MOUNT = "mount"


class Interface(ABC):
    """Abstract contract for one interface type."""

    @abstractmethod
    def name(self) -> str:
        """Return the stable identifier used as the manifest ``interface:``."""

    @abstractmethod
    def sanitize_slot(self, slot: Slot) -> None:
        """Validate a slot's attributes.

        Raises:
            ValidationError: If the slot is not well formed.
        """

    @abstractmethod
    def sanitize_plug(self, plug: Plug) -> None:
        """Validate a plug's attributes.

        Raises:
            ValidationError: If the plug is not well formed.
        """

    @abstractmethod
    def permanent_slot_snippet(
        self, slot: Slot, system: SecuritySystem
    ) -> str | None:
        """Return policy for the slot owner, independent of connections."""

    @abstractmethod
    def connected_slot_snippet(
        self, plug: Plug, slot: Slot, system: SecuritySystem
    ) -> str | None:
        """Return policy for the slot owner's side of a connection."""

    @abstractmethod
    def connected_plug_snippet(
        self, plug: Plug, slot: Slot, system: SecuritySystem
    ) -> str | None:
        """Return policy for the plug owner's side of a connection."""

    def connection_matches(self, plug: Plug, slot: Slot) -> bool:
        """Decide whether a plug and slot are compatible for this interface.

        The base rule only requires both endpoints to speak this interface.
        Interfaces whose endpoints carry identifying attributes narrow it.
        """
        return plug.interface == slot.interface == self.name()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name()!r})"
