"""Tests for the phone CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from subjectid.cli import cli


@pytest.mark.usefixtures("workdir")
class TestPhoneCommand:
    def test_normalizes(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["phone", "12065550100"])
        assert result.exit_code == 0
        assert "+12065550100" in result.output

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "phone", "+12065550100"])
        assert result.exit_code == 0
        assert result.output.strip() == "+12065550100"

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "phone", "12065550100"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["phone_number"] == "+12065550100"

    @pytest.mark.parametrize("number", ["abc", "0000000000000000", "+1 206"])
    def test_invalid(self, cli_runner: CliRunner, number: str) -> None:
        result = cli_runner.invoke(cli, ["phone", "--", number])
        assert result.exit_code == 1
        assert "invalid E.164 formatted phone number" in result.output
