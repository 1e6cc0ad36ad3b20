"""Loader for package manifests declaring apps, plugs and slots.

A manifest is a YAML document:

.. code-block:: yaml

    name: slotter
    version: "1.0"
    apps:
      daemon:
        command: bin/daemon
        slots: [this]
    slots:
      this:
        interface: dbus
        bus: session
        name: org.slotter.session
      that:
        interface: dbus
        bus: system
        name: org.slotter.other-session

Binding rules
-------------
- ``interface`` defaults to the plug/slot name; a bare string value is
  shorthand for the interface name (``plugs: {network: null}`` or
  ``plugs: {net: network}``).
- A plug or slot named in an app's ``plugs``/``slots`` list but not
  declared at the top level is created implicitly with no attributes.
- A plug or slot no app names is bound to every app of the package.
- App names follow the same grammar as package, plug and slot names.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from snapseal.core.interfaces.model import Plug, PlugInfo, Slot, SlotInfo, security_tag
from snapseal.exceptions import InvalidNameError, ManifestError
from snapseal.naming import validate_name

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, bool, int)


@dataclass(frozen=True)
class PackageInfo:
    """A parsed package manifest.

    Attributes:
        name: Package (snap) name.
        version: Version string as declared, or "unknown".
        apps: Sorted app names.
        plugs: Plug declarations keyed by plug name.
        slots: Slot declarations keyed by slot name.
    """

    name: str
    version: str = "unknown"
    apps: tuple[str, ...] = ()
    plugs: dict[str, PlugInfo] = field(default_factory=dict, hash=False)
    slots: dict[str, SlotInfo] = field(default_factory=dict, hash=False)

    def security_tags(self) -> list[str]:
        """Return the security tag of every app in the package."""
        return [security_tag(self.name, app) for app in self.apps]

    def plug(self, name: str) -> Plug:
        """Return a runtime Plug for the named declaration.

        Raises:
            KeyError: If the package declares no such plug.
        """
        return Plug(self.plugs[name])

    def slot(self, name: str) -> Slot:
        """Return a runtime Slot for the named declaration.

        Raises:
            KeyError: If the package declares no such slot.
        """
        return Slot(self.slots[name])


def load_manifest(text: str) -> PackageInfo:
    """Parse manifest YAML text into a PackageInfo.

    Args:
        text: The YAML document.

    Returns:
        The parsed package with every plug and slot bound to its apps.

    Raises:
        ManifestError: If the YAML is malformed or the structure is invalid.
        InvalidNameError: If the package, plug or slot name is invalid.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestError(f"cannot parse manifest: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError("manifest must be a mapping")

    name = data.get("name")
    if not isinstance(name, str):
        raise ManifestError("manifest must declare a 'name'")
    validate_name(name, kind="snap")

    version = data.get("version")
    version_str = "unknown" if version is None else str(version)

    apps = _as_mapping(data.get("apps"), "apps")
    declared_plugs = _as_mapping(data.get("plugs"), "plugs")
    declared_slots = _as_mapping(data.get("slots"), "slots")

    app_plugs: dict[str, list[str]] = {}
    app_slots: dict[str, list[str]] = {}
    for app_name, app_data in apps.items():
        if not isinstance(app_name, str):
            raise ManifestError(f"invalid app name: {app_name!r}")
        try:
            validate_name(app_name, kind="app")
        except InvalidNameError as exc:
            raise ManifestError(f"app {app_name!r}: {exc}") from exc
        app_data = _as_mapping(app_data, f"app {app_name!r}")
        app_plugs[app_name] = _as_name_list(app_data.get("plugs"), app_name, "plugs")
        app_slots[app_name] = _as_name_list(app_data.get("slots"), app_name, "slots")

    plugs = {
        plug_name: PlugInfo(**fields)
        for plug_name, fields in _bind(name, "plug", declared_plugs, app_plugs).items()
    }
    slots = {
        slot_name: SlotInfo(**fields)
        for slot_name, fields in _bind(name, "slot", declared_slots, app_slots).items()
    }
    return PackageInfo(
        name=name,
        version=version_str,
        apps=tuple(sorted(apps)),
        plugs=plugs,
        slots=slots,
    )


def load_manifest_file(path: Path) -> PackageInfo:
    """Read and parse a manifest file.

    Raises:
        ManifestError: If the file cannot be read or parsed.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"cannot read manifest {path}: {exc}") from exc
    return load_manifest(text)


def _bind(
    snap: str,
    kind: str,
    declared: dict[str, Any],
    by_app: dict[str, list[str]],
) -> dict[str, dict[str, Any]]:
    """Build the keyword fields of each plug or slot, including its apps."""
    entries: dict[str, dict[str, Any]] = {}
    for endpoint_name, body in declared.items():
        entries[endpoint_name] = _endpoint_fields(snap, kind, endpoint_name, body)

    for app_name, names in by_app.items():
        for endpoint_name in names:
            if endpoint_name not in entries:
                entries[endpoint_name] = _endpoint_fields(
                    snap, kind, endpoint_name, None
                )

    for endpoint_name, fields in entries.items():
        bound = {app for app, names in by_app.items() if endpoint_name in names}
        if not bound:
            bound = set(by_app)
            logger.debug(
                "Binding %s %s:%s to all apps", kind, snap, endpoint_name
            )
        fields["apps"] = frozenset(bound)
    return entries


def _endpoint_fields(
    snap: str, kind: str, endpoint_name: Any, body: Any
) -> dict[str, Any]:
    if not isinstance(endpoint_name, str):
        raise ManifestError(f"invalid {kind} name: {endpoint_name!r}")
    validate_name(endpoint_name, kind=kind)

    if body is None:
        body = {}
    elif isinstance(body, str):
        body = {"interface": body}
    elif not isinstance(body, dict):
        raise ManifestError(
            f"{kind} {endpoint_name!r} must be a mapping or an interface name"
        )

    attrs = dict(body)
    interface = attrs.pop("interface", endpoint_name)
    label = attrs.pop("label", "")
    if not isinstance(interface, str):
        raise ManifestError(f"{kind} {endpoint_name!r} has an invalid interface")
    try:
        validate_name(interface, kind="interface")
    except InvalidNameError as exc:
        raise ManifestError(f"{kind} {endpoint_name!r}: {exc}") from exc

    for key, value in attrs.items():
        if not _is_attr_value(value):
            raise ManifestError(
                f"{kind} {endpoint_name!r} attribute {key!r} has unsupported value {value!r}"
            )
    return {
        "snap": snap,
        "name": endpoint_name,
        "interface": interface,
        "attrs": attrs,
        "label": str(label),
    }


def _is_attr_value(value: Any) -> bool:
    if isinstance(value, _SCALAR_TYPES):
        return True
    if isinstance(value, list):
        return all(isinstance(item, _SCALAR_TYPES) for item in value)
    return False


def _as_mapping(value: Any, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError(f"{what} must be a mapping")
    return value


def _as_name_list(value: Any, app_name: str, what: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ManifestError(f"app {app_name!r} {what} must be a list of names")
    return list(value)
