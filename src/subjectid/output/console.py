"""Rich Console factory and theme for subjectid output.

Creates Console instances that render to a StringIO buffer, so renderers
return plain strings.  In non-TTY environments (tests, pipes) Rich
automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SUBJECTID_THEME = Theme(
    {
        "sid.ok": "bold green",
        "sid.error": "bold red",
        "sid.warning": "bold yellow",
        "sid.op": "bold cyan",
        "sid.key": "dim",
        "sid.format": "bold blue",
        "sid.aliases": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SUBJECTID_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_format(fmt: str) -> str:
    """Return the Rich style name for an Identifier Format."""
    return "sid.aliases" if fmt == "aliases" else "sid.format"
