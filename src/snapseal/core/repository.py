"""Registry of interface implementations and capability types.

The ``Repository`` is the single registration point for the polymorphic
interface types and the capability-type descriptors. It is populated once
at startup (``load_builtin_types`` / ``load_builtin_interfaces``) and read
thereafter. There is no removal API.

Concurrency
-----------
Reads after the load phase need no locking because nothing mutates the
registry any more. Registration is not synchronized: callers populating a
Repository from several threads must serialize those calls themselves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from snapseal.core.capabilities.builtin import load_builtin_types
from snapseal.core.capabilities.models import CapabilityType
from snapseal.core.interfaces.builtin import load_builtin_interfaces
from snapseal.exceptions import DuplicateNameError, NotFoundError
from snapseal.naming import validate_name

if TYPE_CHECKING:
    from snapseal.core.interfaces.base import Interface


class Repository:
    """Keyed registry of interface implementations and capability types.

    Names are unique per kind: a second type named ``file`` or a second
    interface named ``dbus`` is rejected with ``DuplicateNameError``.

    Examples:
        >>> repo = Repository()
        >>> repo.add_type(CapabilityType("file"))
        >>> repo.type("file").name
        'file'
    """

    def __init__(self) -> None:
        self._types: dict[str, CapabilityType] = {}
        self._interfaces: dict[str, Interface] = {}

    # -- capability types ---------------------------------------------------

    def add_type(self, cap_type: CapabilityType) -> None:
        """Register a capability type.

        Raises:
            InvalidNameError: If the type name is not a valid identifier.
            DuplicateNameError: If a type with the same name exists.
        """
        validate_name(cap_type.name, kind="type")
        if cap_type.name in self._types:
            raise DuplicateNameError(
                f'cannot add type "{cap_type.name}": name already exists'
            )
        self._types[cap_type.name] = cap_type

    def type(self, name: str) -> CapabilityType:
        """Return the capability type registered under *name*.

        Raises:
            NotFoundError: If no such type is registered.
        """
        try:
            return self._types[name]
        except KeyError:
            raise NotFoundError(f'cannot find type "{name}"') from None

    def types(self) -> list[CapabilityType]:
        """Return all registered capability types, sorted by name."""
        return [self._types[name] for name in sorted(self._types)]

    # -- interfaces ---------------------------------------------------------

    def add_interface(self, iface: Interface) -> None:
        """Register an interface implementation under its ``name()``.

        Raises:
            InvalidNameError: If the interface name is not a valid identifier.
            DuplicateNameError: If an interface with the same name exists.
        """
        name = iface.name()
        validate_name(name, kind="interface")
        if name in self._interfaces:
            raise DuplicateNameError(
                f'cannot add interface "{name}": name already exists'
            )
        self._interfaces[name] = iface

    def interface(self, name: str) -> Interface:
        """Return the interface implementation registered under *name*.

        Raises:
            NotFoundError: If no such interface is registered.
        """
        try:
            return self._interfaces[name]
        except KeyError:
            raise NotFoundError(f'cannot find interface "{name}"') from None

    def interfaces(self) -> list[Interface]:
        """Return all registered interfaces, sorted by name."""
        return [self._interfaces[name] for name in sorted(self._interfaces)]

    def __contains__(self, name: object) -> bool:
        """Check whether an interface of the given name is registered."""
        return name in self._interfaces

    def __repr__(self) -> str:
        return (
            f"Repository(types={sorted(self._types)!r}, "
            f"interfaces={sorted(self._interfaces)!r})"
        )


def default_repository() -> Repository:
    """Create a Repository pre-loaded with all built-in types and interfaces.

    Returns:
        A Repository holding the ``file`` capability type and the ``dbus``
        interface.
    """
    repo = Repository()
    load_builtin_types(repo)
    load_builtin_interfaces(repo)
    return repo
