"""Shared fixtures for CLI tests.

Writes plug-side and slot-side package manifests, plus one with an invalid
bus name, into a temporary directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

PLUGGER_YAML = """\
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

SLOTTER_YAML = """\
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


@pytest.fixture
def plugger_manifest(tmp_path: Path) -> Path:
    path = tmp_path / "plugger.yaml"
    path.write_text(PLUGGER_YAML)
    return path


@pytest.fixture
def slotter_manifest(tmp_path: Path) -> Path:
    path = tmp_path / "slotter.yaml"
    path.write_text(SLOTTER_YAML)
    return path


@pytest.fixture
def invalid_manifest(tmp_path: Path) -> Path:
    path = tmp_path / "broken.yaml"
    path.write_text(
        "name: broken\n"
        "apps:\n"
        "  svc:\n"
        "    command: svc\n"
        "slots:\n"
        "  bad:\n"
        "    interface: dbus\n"
        "    bus: session\n"
        "    name: org.broken.session-42\n"
    )
    return path


@pytest.fixture
def unparseable_manifest(tmp_path: Path) -> Path:
    path = tmp_path / "garbage.yaml"
    path.write_text("name: [unterminated\n")
    return path


@pytest.fixture
def service_manifest(tmp_path: Path) -> Path:
    """A package whose app owns a system-bus name."""
    path = tmp_path / "service.yaml"
    path.write_text(
        "name: service\n"
        "apps:\n"
        "  daemon:\n"
        "    command: bin/daemon\n"
        "    slots: [bus-name]\n"
        "slots:\n"
        "  bus-name:\n"
        "    interface: dbus\n"
        "    bus: system\n"
        "    name: org.service.daemon\n"
    )
    return path
