"""Platform queries about the running system.

The only question the policy core asks of the host is whether it is a
traditional, full-system ("classic") install or an all-snap core system.
Session-bus services on classic systems must answer unconfined desktop
clients, so the D-Bus interface emits extra rules there.

Detection reads ``/etc/os-release``: a system whose ``ID`` is
``ubuntu-core`` is not classic, every other system is. Tests and the CLI
can pin the answer with ``mock_on_classic()``.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")

_CORE_IDS = frozenset({"ubuntu-core"})

_on_classic_override: bool | None = None


def read_os_release(path: Path = OS_RELEASE_PATH) -> dict[str, str]:
    """Parse an os-release file into a key/value mapping.

    Missing or unreadable files yield an empty mapping. Values are
    unquoted with shell rules, as os-release(5) prescribes.

    Args:
        path: Location of the os-release file.

    Returns:
        Mapping of variable names to their values.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        logger.debug("Cannot read %s, assuming a classic system", path)
        return {}

    values: dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        try:
            parts = shlex.split(raw)
        except ValueError:
            parts = [raw]
        values[key.strip()] = parts[0] if parts else ""
    return values


def on_classic(path: Path = OS_RELEASE_PATH) -> bool:
    """Return True when running on a classic (full-system) install."""
    if _on_classic_override is not None:
        return _on_classic_override
    return read_os_release(path).get("ID", "") not in _CORE_IDS


@contextmanager
def mock_on_classic(value: bool) -> Iterator[None]:
    """Pin the answer of ``on_classic()`` for the duration of the block."""
    global _on_classic_override
    previous = _on_classic_override
    _on_classic_override = value
    try:
        yield
    finally:
        _on_classic_override = previous
