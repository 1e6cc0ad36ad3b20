"""Tests for ``snapseal sanitize``."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from snapseal.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestSanitize:
    def test_valid_manifests(
        self, runner: CliRunner, plugger_manifest: Path, slotter_manifest: Path
    ) -> None:
        result = runner.invoke(cli, ["sanitize", str(plugger_manifest), str(slotter_manifest)])
        assert result.exit_code == 0
        assert "all valid" in result.output

    def test_json_output(self, runner: CliRunner, slotter_manifest: Path) -> None:
        result = runner.invoke(cli, ["sanitize", str(slotter_manifest), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [(r["kind"], r["name"], r["ok"]) for r in data] == [
            ("slot", "that", True),
            ("slot", "this", True),
        ]

    def test_invalid_bus_name(self, runner: CliRunner, invalid_manifest: Path) -> None:
        result = runner.invoke(cli, ["sanitize", str(invalid_manifest), "--format", "json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data[0]["ok"] is False
        assert data[0]["error"] == "DBus bus name must not end with -NUMBER"

    def test_invalid_text_output(self, runner: CliRunner, invalid_manifest: Path) -> None:
        result = runner.invoke(cli, ["sanitize", str(invalid_manifest)])
        assert result.exit_code == 1
        assert "INVALID" in result.output

    def test_unknown_interface(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "net.yaml"
        path.write_text("name: net\nplugs:\n  network:\n")
        result = runner.invoke(cli, ["sanitize", str(path), "--format", "json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data[0]["error"] == 'cannot find interface "network"'

    def test_unparseable(self, runner: CliRunner, unparseable_manifest: Path) -> None:
        result = runner.invoke(cli, ["sanitize", str(unparseable_manifest), "--format", "json"])
        assert result.exit_code == 2
        assert "cannot parse manifest" in json.loads(result.output)["error"]

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["sanitize", str(tmp_path / "absent.yaml")])
        assert result.exit_code == 2
