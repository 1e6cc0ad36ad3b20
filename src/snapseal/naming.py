"""Identifier validation for snap, plug, slot and interface names.

Names are lowercase ASCII letters and digits, optionally separated by
single hyphens. A name may not start or end with a hyphen and may not
contain two hyphens in a row::

    >>> validate_name("name-with-3-dashes")
    >>> validate_name("name with space")
    Traceback (most recent call last):
    ...
    snapseal.exceptions.InvalidNameError: "name with space" is not a valid snap name
"""

from __future__ import annotations

import re

from snapseal.exceptions import InvalidNameError

_NAME_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def is_valid_name(name: object) -> bool:
    """Return True if *name* is a string matching the name grammar."""
    return isinstance(name, str) and _NAME_PATTERN.fullmatch(name) is not None


def validate_name(name: str, kind: str = "snap") -> None:
    """Check that *name* is a well-formed identifier.

    Args:
        name: The candidate identifier.
        kind: Entity kind used in the error message ("snap", "plug", ...).

    Raises:
        InvalidNameError: If the name is empty, contains characters outside
            ``[a-z0-9-]``, or has a leading, trailing or doubled hyphen.
    """
    if not is_valid_name(name):
        raise InvalidNameError(f"{_quote(name)} is not a valid {kind} name")


def _quote(value: object) -> str:
    # Go-style %q rendering: double quotes with backslash escapes.
    text = str(value)
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
