"""Subcommand modules for subjectid.

Provides register_commands() which uses deferred imports to keep
``subjectid --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from subjectid.commands.formats import formats
    from subjectid.commands.phone import phone
    from subjectid.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(phone)
    cli.add_command(formats)
