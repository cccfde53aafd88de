"""Shared pytest fixtures and wire examples for subjectid tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

# One wire example per atomic format, in registry order.
ATOMIC_EXAMPLES: list[dict[str, Any]] = [
    {"format": "account", "uri": "acct:example.user@service.example.com"},
    {"format": "email", "email": "user@example.com"},
    {"format": "iss_sub", "issuer": "https://issuer.example.com/", "subject": "145234573"},
    {"format": "opaque", "id": "11112222333344445555"},
    {"format": "phone_number", "phone_number": "+12065550100"},
    {"format": "did", "url": "did:example:123456"},
    {"format": "uri", "uri": "urn:uuid:4e851e98-83c4-4743-a5da-150ecb53042f"},
]

ALIASES_EXAMPLE: dict[str, Any] = {
    "format": "aliases",
    "identifiers": [
        {"format": "email", "email": "a@b.com"},
        {"format": "uri", "uri": "urn:x"},
    ],
}


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SUBJECTID_* environment out of the tests."""
    monkeypatch.delenv("SUBJECTID_CONFIG", raising=False)
    monkeypatch.delenv("SUBJECTID_DECODE__ALLOW_EMPTY_FIELDS", raising=False)
    monkeypatch.delenv("SUBJECTID_DECODE__VALIDATE_PHONE_NUMBERS", raising=False)
    monkeypatch.delenv("SUBJECTID_DECODE__REJECT_DUPLICATE_ALIASES", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run inside an empty temp directory so config discovery finds nothing."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
