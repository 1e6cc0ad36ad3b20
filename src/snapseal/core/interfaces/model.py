"""Plugs, slots and connections: the declared capability endpoints.

A *plug* consumes a resource and a *slot* provides it. Both are declared in
a package manifest with an interface name and a bag of attributes, and are
bound to one or more of the package's apps. Each bound app is one confined
execution unit, identified by its security tag ``snap.<package>.<app>``.

``PlugInfo`` / ``SlotInfo`` are the parsed declarations. ``Plug`` / ``Slot``
are the runtime wrappers handed to interfaces and to the specification
builder; they add no state of their own. A ``Connection`` pairs a plug with
a slot of the same interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Union

AttrValue = Union[str, bool, int, list]
"""Attribute values accepted in manifests: scalars or lists of scalars."""

SECURITY_TAG_PREFIX = "snap"


def security_tag(snap_name: str, app_name: str) -> str:
    """Return the security tag of an app, e.g. ``snap.plugger.app``."""
    return f"{SECURITY_TAG_PREFIX}.{snap_name}.{app_name}"


def security_tag_glob(snap_name: str) -> str:
    """Return a label pattern matching every app of a package."""
    return f"{SECURITY_TAG_PREFIX}.{snap_name}.*"


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _EndpointInfo:
    """Fields shared by plug and slot declarations.

    Attributes:
        snap: Name of the owning package.
        name: Name of the plug or slot, unique within its package.
        interface: Name of the interface type this endpoint speaks.
        attrs: Read-only attribute mapping from the manifest.
        apps: Names of the package's apps bound to this endpoint.
        label: Optional human-readable description.
    """

    snap: str
    name: str
    interface: str
    attrs: Mapping[str, AttrValue] = field(default_factory=dict, hash=False)
    apps: frozenset[str] = frozenset()
    label: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))
        object.__setattr__(self, "apps", frozenset(self.apps))

    def security_tags(self) -> list[str]:
        """Return the sorted security tags of every bound app."""
        return sorted(security_tag(self.snap, app) for app in self.apps)


@dataclass(frozen=True)
class PlugInfo(_EndpointInfo):
    """A plug as declared in a package manifest."""


@dataclass(frozen=True)
class SlotInfo(_EndpointInfo):
    """A slot as declared in a package manifest."""


# ---------------------------------------------------------------------------
# Runtime wrappers
# ---------------------------------------------------------------------------


class _Endpoint:
    """Delegating accessors shared by Plug and Slot."""

    info: _EndpointInfo

    @property
    def snap(self) -> str:
        return self.info.snap

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def interface(self) -> str:
        return self.info.interface

    @property
    def attrs(self) -> Mapping[str, AttrValue]:
        return self.info.attrs

    @property
    def apps(self) -> frozenset[str]:
        return self.info.apps

    def attr(self, key: str, default: Any = None) -> Any:
        """Return one attribute value, or *default* when it is absent."""
        return self.info.attrs.get(key, default)

    def security_tags(self) -> list[str]:
        return self.info.security_tags()

    def __str__(self) -> str:
        return f"{self.info.snap}:{self.info.name}"


@dataclass(frozen=True)
class Plug(_Endpoint):
    """Runtime view of a declared plug."""

    info: PlugInfo


@dataclass(frozen=True)
class Slot(_Endpoint):
    """Runtime view of a declared slot."""

    info: SlotInfo


@dataclass(frozen=True)
class Connection:
    """An edge from a plug to a slot of the same interface.

    Raises:
        ValueError: If the plug and slot name different interfaces.
    """

    plug: Plug
    slot: Slot

    def __post_init__(self) -> None:
        if self.plug.interface != self.slot.interface:
            raise ValueError(
                f"cannot connect {self.plug} ({self.plug.interface!r}) "
                f"to {self.slot} ({self.slot.interface!r}): interfaces differ"
            )

    @property
    def interface(self) -> str:
        return self.plug.interface

    def __str__(self) -> str:
        return f"{self.plug} -> {self.slot}"
