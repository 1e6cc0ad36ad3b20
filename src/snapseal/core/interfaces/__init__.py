"""Interface types, the plug/slot data model, and the policy builder.

Submodules
----------
- ``model``: PlugInfo, SlotInfo, Plug, Slot, Connection, security tags.
- ``base``: SecuritySystem enum and the Interface abstract contract.
- ``specification``: Specification builder and ``build_specification()``.
- ``builtin``: concrete interfaces shipped with snapseal.

All public names are re-exported here::

    from snapseal.core.interfaces import Plug, Slot, Specification
"""

from snapseal.core.interfaces.base import Interface, SecuritySystem
from snapseal.core.interfaces.model import (
    AttrValue,
    Connection,
    Plug,
    PlugInfo,
    Slot,
    SlotInfo,
    security_tag,
    security_tag_glob,
)
from snapseal.core.interfaces.specification import Specification, build_specification

__all__ = [
    "AttrValue",
    "Connection",
    "Interface",
    "Plug",
    "PlugInfo",
    "SecuritySystem",
    "Slot",
    "SlotInfo",
    "Specification",
    "build_specification",
    "security_tag",
    "security_tag_glob",
]
