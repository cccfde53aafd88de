"""Command: normalize an E.164 phone number."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from subjectid.commands._base import SidCommand

if TYPE_CHECKING:
    from subjectid.commands._context import AppContext


@click.command(
    cls=SidCommand,
    examples="""\
  subjectid phone 12065550100
  subjectid -q phone +12065550100""",
)
@click.argument("number")
@click.pass_obj
def phone(app: AppContext, number: str) -> None:
    """Print NUMBER in canonical E.164 form (leading '+')."""
    app.emit(app.service.normalize_phone(number))
