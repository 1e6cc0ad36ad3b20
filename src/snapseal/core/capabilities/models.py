"""Capability type descriptors and named capability grants.

A ``CapabilityType`` names a class of resource (for example ``file``).
A ``Capability`` is a concrete, labelled grant of one such type. Both are
immutable: types are registered once into a ``Repository`` and live for the
lifetime of the process, capabilities are created by manifest loading.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CapabilityType:
    """An immutable descriptor for a class of capabilities.

    Attributes:
        name: Unique identifier of the type, validated on registration.
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Capability:
    """A named, typed resource grant.

    Attributes:
        name: Identifier of the grant; also its string form.
        label: Human-readable description.
        type: The capability type this grant belongs to.

    Examples:
        >>> cap = Capability(name="name", label="label", type=CapabilityType("file"))
        >>> str(cap)
        'name'
    """

    name: str
    label: str
    type: CapabilityType

    def __str__(self) -> str:
        return self.name
