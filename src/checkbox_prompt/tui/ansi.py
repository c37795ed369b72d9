"""
ANSI escape sequence utilities.

Colour constants, text styling and the handful of cursor/line controls the
inline renderer needs to redraw a prompt in place.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

ESC = "\033"
CSI = f"{ESC}["
RESET = f"{CSI}0m"

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


class FG:
    """Standard ANSI foreground colors."""

    RED = f"{CSI}31m"
    GREEN = f"{CSI}32m"
    CYAN = f"{CSI}36m"


# ---------------------------------------------------------------------------
# Text styling
# ---------------------------------------------------------------------------

_STYLE_CODES: dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "underline": 4,
}


def style(
    text: str,
    *,
    fg: str | None = None,
    bold: bool = False,
    dim: bool = False,
    underline: bool = False,
    enabled: bool = True,
) -> str:
    """
    Apply ANSI styling to *text*.

    Parameters
    ----------
    text:
        The string to style.
    fg:
        Foreground colour sequence, e.g. ``FG.CYAN``.
    bold, dim, underline:
        Attribute flags.
    enabled:
        When ``False`` the text is returned untouched, so callers can honour
        a "no colour" setting without branching.
    """
    if not enabled:
        return text

    parts: list[str] = []
    if fg is not None:
        parts.append(fg)
    for attr_name, on in (("bold", bold), ("dim", dim), ("underline", underline)):
        if on:
            parts.append(f"{CSI}{_STYLE_CODES[attr_name]}m")

    if not parts:
        return text
    return f"{''.join(parts)}{text}{RESET}"


def strip_ansi(text: str) -> str:
    """Remove CSI escape sequences from *text*."""
    return _ANSI_RE.sub("", text)


# ---------------------------------------------------------------------------
# Cursor and line control
# ---------------------------------------------------------------------------

def cursor_up(n: int = 1) -> str:
    """Move cursor up by *n* rows."""
    return f"{CSI}{n}A"


def cursor_column(col: int = 1) -> str:
    """Move cursor to column *col* (1-based) of the current row."""
    return f"{CSI}{col}G"


def clear_line() -> str:
    """Erase the entire current line."""
    return f"{CSI}2K"


def hide_cursor() -> str:
    """Hide the terminal cursor."""
    return f"{CSI}?25l"


def show_cursor() -> str:
    """Show the terminal cursor."""
    return f"{CSI}?25h"
