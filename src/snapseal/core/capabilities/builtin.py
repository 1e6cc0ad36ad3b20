"""Built-in capability types and their one-shot registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from snapseal.core.capabilities.models import CapabilityType

if TYPE_CHECKING:
    from snapseal.core.repository import Repository

FILE_TYPE = CapabilityType(name="file")
"""Access to a single file path."""

BUILTIN_TYPES: tuple[CapabilityType, ...] = (FILE_TYPE,)


def load_builtin_types(repo: Repository) -> None:
    """Register every built-in capability type into *repo*.

    Must be called exactly once per Repository: a second call fails on the
    first type it tries to add again.

    Raises:
        DuplicateNameError: If a built-in type is already registered.
    """
    for cap_type in BUILTIN_TYPES:
        repo.add_type(cap_type)
