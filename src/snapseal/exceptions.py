"""snapseal exception hierarchy.

All public exceptions inherit from SnapSealError, giving callers a single
base class to catch when they want to handle any snapseal-specific failure
without swallowing unrelated errors.
"""


class SnapSealError(Exception):
    """Base exception for all snapseal errors."""


class InvalidNameError(SnapSealError, ValueError):
    """Raised when an identifier violates the name grammar.

    Covers snap, plug, slot, interface and capability-type names. The
    message embeds the offending string and the kind of entity.
    """


class DuplicateNameError(SnapSealError):
    """Raised when a name is registered twice in a Repository."""


class NotFoundError(SnapSealError, LookupError):
    """Raised when a Repository lookup names an unknown entry."""


class ValidationError(SnapSealError, ValueError):
    """Raised when a plug or slot fails attribute sanitization.

    Interfaces subclass this for their own attribute families so that
    callers can either catch the family or the specific violation.
    """


class InvalidBusError(ValidationError):
    """Raised when a D-Bus plug or slot names a bus other than session/system."""


class InvalidBusNameError(ValidationError):
    """Raised when a D-Bus well-known name violates the bus naming rules."""


class ManifestError(SnapSealError):
    """Raised when a package manifest cannot be read or is ill-formed."""
