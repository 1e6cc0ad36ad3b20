"""Tests for ``snapseal check-name`` and ``snapseal interfaces``."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from snapseal.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCheckName:
    def test_valid(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check-name", "name-with-3-dashes"])
        assert result.exit_code == 0
        assert "is a valid snap name" in result.output

    def test_invalid(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check-name", "name with space"])
        assert result.exit_code == 1
        assert '"name with space" is not a valid snap name' in result.output

    def test_kind(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check-name", "--kind", "plug", "bad-"])
        assert result.exit_code == 1
        assert "is not a valid plug name" in result.output


class TestInterfaces:
    def test_lists_builtins(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["interfaces"])
        assert result.exit_code == 0
        assert "dbus" in result.output
        assert "file" in result.output


class TestVerbose:
    def test_verbose_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--verbose", "check-name", "ok"])
        assert result.exit_code == 0
