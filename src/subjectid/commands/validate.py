"""Command: validate Subject Identifiers read from JSON."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO

import click

from subjectid.commands._base import SidCommand

if TYPE_CHECKING:
    from subjectid.commands._context import AppContext


@click.command(
    cls=SidCommand,
    examples="""\
  subjectid validate identifier.json
  echo '{"format": "email", "email": "user@example.com"}' | subjectid validate
  subjectid --json validate batch.json
  subjectid validate --lines events.jsonl""",
)
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--lines", is_flag=True, help="Treat each input line as a separate JSON object.")
@click.pass_obj
def validate(app: AppContext, source: BinaryIO, lines: bool) -> None:
    """Validate a Subject Identifier (or an array of them) from SOURCE or stdin."""
    app.emit(app.service.validate_document(source.read(), lines=lines))
