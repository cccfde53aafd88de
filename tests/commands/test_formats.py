"""Tests for the formats CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from subjectid.cli import cli


@pytest.mark.usefixtures("workdir")
class TestFormatsCommand:
    def test_lists_formats(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["formats"])
        assert result.exit_code == 0
        for name in ("account", "email", "iss_sub", "opaque", "phone_number", "did", "uri"):
            assert name in result.output
        assert "aliases" in result.output

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "formats"])
        data = json.loads(result.output)
        assert data["data"]["count"] == 8
