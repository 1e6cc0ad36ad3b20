"""Tests for the interface and capability-type Repository."""

from __future__ import annotations

import pytest

from snapseal.core.capabilities import CapabilityType
from snapseal.core.interfaces.builtin import DbusInterface, load_builtin_interfaces
from snapseal.core.repository import Repository, default_repository
from snapseal.exceptions import DuplicateNameError, InvalidNameError, NotFoundError


class TestTypes:
    def test_add_and_lookup(self) -> None:
        repo = Repository()
        repo.add_type(CapabilityType("serial-port"))
        assert repo.type("serial-port") == CapabilityType("serial-port")

    def test_duplicate(self) -> None:
        repo = Repository()
        repo.add_type(CapabilityType("file"))
        with pytest.raises(DuplicateNameError, match='cannot add type "file"'):
            repo.add_type(CapabilityType("file"))

    def test_invalid_name(self) -> None:
        with pytest.raises(InvalidNameError):
            Repository().add_type(CapabilityType("Bad Name"))

    def test_not_found(self) -> None:
        with pytest.raises(NotFoundError, match='cannot find type "nope"'):
            Repository().type("nope")

    def test_not_found_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            Repository().type("nope")

    def test_types_sorted(self) -> None:
        repo = Repository()
        for name in ("zeta", "alpha", "mid"):
            repo.add_type(CapabilityType(name))
        assert [t.name for t in repo.types()] == ["alpha", "mid", "zeta"]


class TestInterfaces:
    def test_add_and_lookup(self) -> None:
        repo = Repository()
        iface = DbusInterface()
        repo.add_interface(iface)
        assert repo.interface("dbus") is iface
        assert "dbus" in repo
        assert "network" not in repo

    def test_duplicate(self) -> None:
        repo = Repository()
        repo.add_interface(DbusInterface())
        with pytest.raises(DuplicateNameError) as exc_info:
            repo.add_interface(DbusInterface())
        assert str(exc_info.value) == 'cannot add interface "dbus": name already exists'

    def test_load_builtin_interfaces_twice(self) -> None:
        repo = Repository()
        load_builtin_interfaces(repo)
        with pytest.raises(DuplicateNameError, match='"dbus"'):
            load_builtin_interfaces(repo)

    def test_not_found(self) -> None:
        with pytest.raises(NotFoundError, match='cannot find interface "network"'):
            Repository().interface("network")


class TestDefaultRepository:
    def test_contents(self) -> None:
        repo = default_repository()
        assert [i.name() for i in repo.interfaces()] == ["dbus"]
        assert [t.name for t in repo.types()] == ["file"]

    def test_independent_instances(self) -> None:
        assert default_repository() is not default_repository()
        assert default_repository().interface("dbus") is not default_repository().interface("dbus")
