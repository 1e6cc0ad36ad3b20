"""Shared fixtures for snapseal tests."""

from __future__ import annotations

import pytest

from snapseal.core.interfaces import Plug, PlugInfo, Slot, SlotInfo
from snapseal.core.interfaces.builtin import DbusInterface
from snapseal.core.repository import Repository, default_repository
from snapseal.manifest import PackageInfo, load_manifest

TEST_DBUS_YAML = """
name: test-dbus
slots:
  test-session-slot:
    interface: dbus
    bus: session
    name: org.test-session-slot
  test-system-slot:
    interface: dbus
    bus: system
    name: org.test-system-slot
  test-system-connected-slot:
    interface: dbus
    bus: system
    name: org.test-system-connected
  test-session-connected-slot:
    interface: dbus
    bus: session
    name: org.test-session-connected

plugs:
  test-session-plug:
    interface: dbus
    bus: session
    name: org.test-session-plug
  test-system-plug:
    interface: dbus
    bus: system
    name: org.test-system-plug
  test-system-connected-plug:
    interface: dbus
    bus: system
    name: org.test-system-connected
  test-session-connected-plug:
    interface: dbus
    bus: session
    name: org.test-session-connected

apps:
  test-session-provider:
    slots:
    - test-session-slot
  test-system-provider:
    slots:
    - test-system-slot
  test-session-consumer:
    plugs:
    - test-session-plug
  test-system-consumer:
    plugs:
    - test-system-plug
"""

PLUGGER_YAML = """
name: plugger
version: 1.0
plugs:
  this:
    interface: dbus
    bus: session
    name: org.slotter.session
  that:
    interface: dbus
    bus: system
    name: org.slotter.other-session
apps:
  app:
    command: foo
"""

SLOTTER_YAML = """
name: slotter
version: 1.0
slots:
  this:
    interface: dbus
    bus: session
    name: org.slotter.session
  that:
    interface: dbus
    bus: system
    name: org.slotter.other-session
"""


def _make_plug(
    snap: str = "consumer",
    endpoint_name: str = "dbus-plug",
    apps: tuple[str, ...] = ("app",),
    interface: str = "dbus",
    **attrs: object,
) -> Plug:
    """Build a Plug directly, without a manifest."""
    return Plug(PlugInfo(snap=snap, name=endpoint_name, interface=interface, attrs=attrs, apps=frozenset(apps)))


def _make_slot(
    snap: str = "provider",
    endpoint_name: str = "dbus-slot",
    apps: tuple[str, ...] = ("app",),
    interface: str = "dbus",
    **attrs: object,
) -> Slot:
    """Build a Slot directly, without a manifest."""
    return Slot(SlotInfo(snap=snap, name=endpoint_name, interface=interface, attrs=attrs, apps=frozenset(apps)))


@pytest.fixture
def make_plug():
    """Factory building a Plug directly, without a manifest."""
    return _make_plug


@pytest.fixture
def make_slot():
    """Factory building a Slot directly, without a manifest."""
    return _make_slot


@pytest.fixture
def iface() -> DbusInterface:
    return DbusInterface()


@pytest.fixture
def repo() -> Repository:
    """A repository with all built-ins registered."""
    return default_repository()


@pytest.fixture
def test_dbus() -> PackageInfo:
    """One package declaring session/system plugs and slots for four apps."""
    return load_manifest(TEST_DBUS_YAML)


@pytest.fixture
def plugger() -> PackageInfo:
    return load_manifest(PLUGGER_YAML)


@pytest.fixture
def slotter() -> PackageInfo:
    return load_manifest(SLOTTER_YAML)
