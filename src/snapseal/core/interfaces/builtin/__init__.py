"""Built-in interface implementations and their one-shot registration.

Submodules
----------
- ``dbus``: DbusInterface (well-known names on the session/system bus).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from snapseal.core.interfaces.base import Interface
from snapseal.core.interfaces.builtin.dbus import DbusInterface

if TYPE_CHECKING:
    from snapseal.core.repository import Repository


def builtin_interfaces() -> list[Interface]:
    """Return a fresh instance of every built-in interface."""
    return [DbusInterface()]


def load_builtin_interfaces(repo: Repository) -> None:
    """Register every built-in interface into *repo*.

    Like ``load_builtin_types``, this must run once per Repository.

    Raises:
        DuplicateNameError: If a built-in interface is already registered.
    """
    for iface in builtin_interfaces():
        repo.add_interface(iface)


__all__ = [
    "DbusInterface",
    "builtin_interfaces",
    "load_builtin_interfaces",
]
