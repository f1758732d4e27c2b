"""
UI helpers for secret-sync terminal output.

Report lines are produced as plain text by secret_sync.core.report; this
module only styles and prints them with Rich.
"""

from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

# Line prefix -> Rich style
_LINE_STYLES: tuple[tuple[str, str], ...] = (
    ("⚠️", "bold yellow"),
    ("❌", "bold red"),
    ("✅", "green"),
    ("✓", "green"),
    ("━", "cyan"),
)


def create_console() -> Console:
    """
    Create the Rich console used for report output.

    Markup, emoji codes and highlighting are disabled so paths such as
    "/dev/null:/workspace/x:ro" are printed verbatim, and soft wrapping
    keeps long paths on one line.
    """
    return Console(markup=False, emoji=False, highlight=False, soft_wrap=True)


def style_for(line: str) -> str | None:
    """Return the Rich style for a report line, or None for plain text."""
    stripped = line.lstrip()
    for prefix, style in _LINE_STYLES:
        if stripped.startswith(prefix):
            return style
    return None


def print_lines(console: Console, lines: Iterable[str]) -> None:
    """
    Print report lines.

    Args:
        console: Rich Console instance for output.
        lines: Plain-text lines.
    """
    for line in lines:
        style = style_for(line)
        console.print(Text(line, style=style) if style else line)
