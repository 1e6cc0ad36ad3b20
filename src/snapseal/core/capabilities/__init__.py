"""Capability types and grants.

Submodules
----------
- ``models``: CapabilityType and Capability dataclasses.
- ``builtin``: FILE_TYPE, BUILTIN_TYPES and ``load_builtin_types()``.

All public names are re-exported here::

    from snapseal.core.capabilities import Capability, FILE_TYPE
"""

from snapseal.core.capabilities.builtin import (
    BUILTIN_TYPES,
    FILE_TYPE,
    load_builtin_types,
)
from snapseal.core.capabilities.models import Capability, CapabilityType

__all__ = [
    "BUILTIN_TYPES",
    "Capability",
    "CapabilityType",
    "FILE_TYPE",
    "load_builtin_types",
]
