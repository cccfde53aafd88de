"""Tests for the validate CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from subjectid.cli import cli
from tests.conftest import ALIASES_EXAMPLE, ATOMIC_EXAMPLES


@pytest.mark.usefixtures("workdir")
class TestValidateCommand:
    def test_stdin(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate"], input=json.dumps(ALIASES_EXAMPLE))
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "aliases" in result.output

    def test_file(self, cli_runner: CliRunner, workdir: Path) -> None:
        path = workdir / "subject.json"
        path.write_text(json.dumps({"format": "did", "url": "did:example:123"}))
        result = cli_runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 0
        assert "did" in result.output

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "validate"], input=json.dumps({"format": "opaque", "id": "abc"})
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "validate"
        assert data["data"]["identifier"] == {"format": "opaque", "id": "abc"}

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["-q", "validate"], input=json.dumps({"format": "opaque", "id": "abc"})
        )
        assert result.exit_code == 0
        assert result.output.strip() == "opaque"

    def test_array_is_batch(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "validate"], input=json.dumps(ATOMIC_EXAMPLES))
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["op"] == "validate_batch"
        assert data["data"]["valid"] == 7

    def test_lines(self, cli_runner: CliRunner) -> None:
        text = "\n".join(json.dumps(w) for w in ATOMIC_EXAMPLES)
        result = cli_runner.invoke(cli, ["-q", "validate", "--lines"], input=text)
        assert result.exit_code == 0
        assert result.output.split() == [w["format"] for w in ATOMIC_EXAMPLES]

    def test_unknown_format_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["validate"], input=json.dumps({"format": "ssn", "value": "123-45-6789"})
        )
        assert result.exit_code == 1
        assert "ERROR" in result.output
        assert "matches no known subject identifier shape" in result.output

    def test_nested_aliases_fail(self, cli_runner: CliRunner) -> None:
        wire = {"format": "aliases", "identifiers": [{"format": "aliases", "identifiers": []}]}
        result = cli_runner.invoke(cli, ["--json", "validate"], input=json.dumps(wire))
        assert result.exit_code == 1
        assert "NO_MATCHING_SHAPE" in result.output

    def test_invalid_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate"], input="{nope")
        assert result.exit_code == 1
        assert "invalid JSON" in result.output

    def test_invalid_utf8(self, cli_runner: CliRunner, workdir: Path) -> None:
        (workdir / "bad.json").write_bytes(b'{"format": "opaque", "id": "\xff"}')
        result = cli_runner.invoke(cli, ["validate", "bad.json"])
        assert result.exit_code == 1
        assert "invalid UTF-8" in result.output

    def test_config_policy(self, cli_runner: CliRunner, workdir: Path) -> None:
        (workdir / "subjectid.toml").write_text("[decode]\nallow_empty_fields = true\n")
        result = cli_runner.invoke(
            cli, ["validate"], input=json.dumps({"format": "email", "email": ""})
        )
        assert result.exit_code == 0

    def test_explicit_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "strict.toml"
        config.write_text("[decode]\nvalidate_phone_numbers = true\n")
        wire = {"format": "phone_number", "phone_number": "call me"}
        result = cli_runner.invoke(
            cli, ["-c", str(config), "--json", "validate"], input=json.dumps(wire)
        )
        assert result.exit_code == 1
        assert "invalid E.164" in result.output
