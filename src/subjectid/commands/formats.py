"""Command: list the registered Identifier Formats."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from subjectid.commands._base import SidCommand

if TYPE_CHECKING:
    from subjectid.commands._context import AppContext


@click.command(cls=SidCommand)
@click.pass_obj
def formats(app: AppContext) -> None:
    """List Identifier Formats and the members each one requires."""
    app.emit(app.service.formats())
