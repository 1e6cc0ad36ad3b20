"""The ``dbus`` interface: owning and talking to a well-known D-Bus name.

A slot declares a well-known name on the session or system bus that the
providing app may own. A plug declares the same name to talk to it::

    slots:
      dbus-slot:
        interface: dbus
        bus: session
        name: org.example.session

Policy produced
---------------
- **Permanent slot, apparmor**: the bus abstraction, rules for registering
  with the bus daemon, ``bind`` on the name (and on ``<name>-PID``, which is
  why names ending in ``-NUMBER`` are rejected), and rules for the
  transliterated object path. On classic systems session services may
  additionally answer unconfined desktop clients.
- **Permanent slot, dbus**: for the system bus, a bus policy document
  allowing root to own the name and everyone to send to it.
- **Connected slot / plug, apparmor**: introspection between the two
  packages plus receive/send rules scoped to the name's interface and path
  patterns. Binding is never granted on a connection.

Every other backend gets no rules.

References:
    D-Bus Specification, "Valid Bus Names".
    https://dbus.freedesktop.org/doc/dbus-specification.html#message-protocol-names-bus
"""

from __future__ import annotations

import re

from snapseal import release
from snapseal.core.interfaces.base import Interface, SecuritySystem
from snapseal.core.interfaces.model import Plug, Slot, security_tag_glob
from snapseal.exceptions import InvalidBusError, InvalidBusNameError

_BUSES = ("session", "system")

_ABSTRACTIONS: dict[str, str] = {
    "session": "dbus-session-strict",
    "system": "dbus-strict",
}

# Dot-separated elements of [A-Za-z0-9_-], no element starting with a digit.
_BUS_NAME_PATTERN = re.compile(r"[A-Za-z_-][A-Za-z0-9_-]*(?:\.[A-Za-z_-][A-Za-z0-9_-]*)*")

# <name>-PID is reserved for the alternation bind rule below.
_TRAILING_NUMBER_PATTERN = re.compile(r"-[0-9]+\Z")

_MAX_BUS_NAME_LENGTH = 255

# ---------------------------------------------------------------------------
# Policy templates
# ---------------------------------------------------------------------------

PERMANENT_SLOT_APPARMOR = """
# Description: Allow owning a name on DBus public bus

#include <abstractions/{{ABSTRACTION}}>

# register on DBus
dbus (send)
    bus={{BUS}}
    path=/org/freedesktop/DBus
    interface=org.freedesktop.DBus
    member="{Request,Release}Name"
    peer=(name=org.freedesktop.DBus, label=unconfined),

dbus (send)
    bus={{BUS}}
    path=/org/freedesktop/DBus
    interface=org.freedesktop.DBus
    member="GetConnectionUnix{ProcessID,User}"
    peer=(name=org.freedesktop.DBus, label=unconfined),

# bind to a well-known DBus name: {{NAME}}
dbus (bind)
    bus={{BUS}}
    name={{NAME}},

# Some services use {{NAME}}-PID as their well-known name. Names ending
# in -NUMBER are rejected at sanitization so this cannot overlap another
# package's name.
dbus (bind)
    bus={{BUS}}
    name={{NAME}}-[1-9]{,[0-9]}{,[0-9]}{,[0-9]}{,[0-9]}{,[0-9]},

# Allow us to talk to dbus-daemon
dbus (receive)
    bus={{BUS}}
    path={{PATH}}
    peer=(name=org.freedesktop.DBus, label=unconfined),
dbus (send)
    bus={{BUS}}
    path={{PATH}}
    interface=org.freedesktop.DBus.Properties
    peer=(name=org.freedesktop.DBus, label=unconfined),
"""

PERMANENT_SLOT_APPARMOR_CLASSIC = """
# allow unconfined clients to introspect us on classic
dbus (receive)
    bus={{BUS}}
    interface=org.freedesktop.DBus.Introspectable
    member=Introspect
    peer=(label=unconfined),

# allow us to respond to unconfined clients via {{INTERFACE}}
# on classic (send should be handled via another interface).
dbus (receive)
    bus={{BUS}}
    interface={{INTERFACE}}
    peer=(label=unconfined),

# allow us to respond to unconfined clients via {{PATH}} (eg,
# org.freedesktop.*, org.gtk.Application, etc) on classic.
dbus (receive)
    bus={{BUS}}
    path={{PATH}}
    peer=(label=unconfined),
"""

PERMANENT_SLOT_DBUS = """
<policy user="root">
    <allow own="{{NAME}}"/>
    <allow send_destination="{{NAME}}"/>
</policy>
<policy context="default">
    <allow send_destination="{{NAME}}"/>
</policy>
"""

CONNECTED_SLOT_APPARMOR = """
# allow snaps to introspect us. This allows clients to introspect all
# DBus interfaces of this service (but not use them).
dbus (receive)
    bus={{BUS}}
    interface=org.freedesktop.DBus.Introspectable
    member=Introspect
    peer=(label={{PEER_LABEL}}),

# allow connected snaps to all paths via {{INTERFACE}}
dbus (receive, send)
    bus={{BUS}}
    interface={{INTERFACE}}
    peer=(label={{PEER_LABEL}}),

# allow connected snaps to all interfaces via {{PATH}}
dbus (receive, send)
    bus={{BUS}}
    path={{PATH}}
    peer=(label={{PEER_LABEL}}),
"""

CONNECTED_PLUG_APPARMOR = """
#include <abstractions/{{ABSTRACTION}}>

# allow snaps to introspect the slot service. This allows us to introspect
# all DBus interfaces of the service (but not use them).
dbus (send)
    bus={{BUS}}
    interface=org.freedesktop.DBus.Introspectable
    member=Introspect
    peer=(label={{PEER_LABEL}}),

# allow connected snaps to {{NAME}}
dbus (receive, send)
    bus={{BUS}}
    peer=(name={{NAME}}, label={{PEER_LABEL}}),

# allow connected snaps to all paths via {{INTERFACE}}
dbus (receive, send)
    bus={{BUS}}
    interface={{INTERFACE}}
    peer=(label={{PEER_LABEL}}),

# allow connected snaps to all interfaces via {{PATH}}
dbus (receive, send)
    bus={{BUS}}
    path={{PATH}}
    peer=(label={{PEER_LABEL}}),
"""


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def validate_bus(bus: object) -> str:
    """Check that *bus* is ``session`` or ``system`` and return it.

    Raises:
        InvalidBusError: For any other value, including a missing one.
    """
    if bus not in _BUSES:
        raise InvalidBusError(f"bus '{bus}' must be one of 'session' or 'system'")
    return bus  # type: ignore[return-value]


def validate_bus_name(name: object) -> str:
    """Check that *name* is an acceptable well-known bus name and return it.

    Raises:
        InvalidBusNameError: If the name is not a string, is too long,
            violates the element grammar, or ends in ``-NUMBER``.
    """
    if not isinstance(name, str):
        raise InvalidBusNameError(f"DBus bus name must be set (got {name!r})")
    if len(name) > _MAX_BUS_NAME_LENGTH:
        raise InvalidBusNameError(
            f"DBus bus name is too long (must be <= {_MAX_BUS_NAME_LENGTH})"
        )
    if not _BUS_NAME_PATTERN.fullmatch(name):
        raise InvalidBusNameError(
            f'invalid DBus bus name: "{name}" (must be dot-separated elements '
            f"of [A-Za-z0-9_-], none empty or starting with a digit)"
        )
    if _TRAILING_NUMBER_PATTERN.search(name):
        raise InvalidBusNameError("DBus bus name must not end with -NUMBER")
    return name


def path_pattern(name: str) -> str:
    """Return the object-path pattern for a bus name.

    >>> path_pattern("org.example.session")
    '"/org/example/session{,/**}"'
    """
    return '"/' + name.replace(".", "/") + '{,/**}"'


def interface_pattern(name: str) -> str:
    """Return the D-Bus interface pattern for a bus name.

    >>> interface_pattern("org.example.session")
    '"org.example.session{,.*}"'
    """
    return '"' + name + '{,.*}"'


def _render(template: str, **values: str) -> str:
    text = template
    for key, value in values.items():
        text = text.replace("{{" + key + "}}", value)
    return text


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------


class DbusInterface(Interface):
    """Interface granting ownership of, and access to, a D-Bus name."""

    def name(self) -> str:
        return "dbus"

    def _bus_and_name(self, endpoint: Plug | Slot) -> tuple[str, str]:
        bus = validate_bus(endpoint.attr("bus"))
        name = validate_bus_name(endpoint.attr("name"))
        return bus, name

    def sanitize_slot(self, slot: Slot) -> None:
        self._bus_and_name(slot)

    def sanitize_plug(self, plug: Plug) -> None:
        self._bus_and_name(plug)

    def connection_matches(self, plug: Plug, slot: Slot) -> bool:
        """Require identical ``bus`` and ``name`` on both sides."""
        if not super().connection_matches(plug, slot):
            return False
        plug_bus, plug_name = plug.attr("bus"), plug.attr("name")
        if plug_bus is None or plug_name is None:
            return False
        return plug_bus == slot.attr("bus") and plug_name == slot.attr("name")

    def permanent_slot_snippet(
        self, slot: Slot, system: SecuritySystem
    ) -> str | None:
        bus, name = self._bus_and_name(slot)
        if system == SecuritySystem.APPARMOR:
            values = {
                "ABSTRACTION": _ABSTRACTIONS[bus],
                "BUS": bus,
                "NAME": name,
                "PATH": path_pattern(name),
                "INTERFACE": interface_pattern(name),
            }
            snippet = _render(PERMANENT_SLOT_APPARMOR, **values)
            if bus == "session" and release.on_classic():
                snippet += _render(PERMANENT_SLOT_APPARMOR_CLASSIC, **values)
            return snippet
        if system == SecuritySystem.DBUS and bus == "system":
            return _render(PERMANENT_SLOT_DBUS, NAME=name)
        return None

    def connected_slot_snippet(
        self, plug: Plug, slot: Slot, system: SecuritySystem
    ) -> str | None:
        if system != SecuritySystem.APPARMOR:
            return None
        bus, name = self._bus_and_name(slot)
        return _render(
            CONNECTED_SLOT_APPARMOR,
            BUS=bus,
            PATH=path_pattern(name),
            INTERFACE=interface_pattern(name),
            PEER_LABEL=f'"{security_tag_glob(plug.snap)}"',
        )

    def connected_plug_snippet(
        self, plug: Plug, slot: Slot, system: SecuritySystem
    ) -> str | None:
        if system != SecuritySystem.APPARMOR:
            return None
        bus, name = self._bus_and_name(slot)
        return _render(
            CONNECTED_PLUG_APPARMOR,
            ABSTRACTION=_ABSTRACTIONS[bus],
            BUS=bus,
            NAME=name,
            PATH=path_pattern(name),
            INTERFACE=interface_pattern(name),
            PEER_LABEL=f'"{security_tag_glob(slot.snap)}"',
        )
