"""
Inline frame renderer.

``InlineRenderer`` is the terminal side of the prompt's ``write``
collaborator: each frame replaces the one written before it, in place,
below whatever the terminal already shows.  Unchanged frames are skipped.
"""

from __future__ import annotations

import sys
from io import StringIO
from typing import TextIO

from checkbox_prompt.tui.ansi import (
    clear_line,
    cursor_column,
    cursor_up,
    hide_cursor,
    show_cursor,
)


class InlineRenderer:
    """
    Rewrites a multi-line frame in place.

    Parameters
    ----------
    output:
        Writable text stream, defaults to ``sys.stdout``.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        self._output: TextIO = output or sys.stdout
        self._previous_lines: list[str] = []
        self._active: bool = False

    @property
    def previous_lines(self) -> list[str]:
        """The last frame that was written."""
        return list(self._previous_lines)

    def write(self, frame: str) -> InlineRenderer:
        """Replace the previously written frame with *frame*."""
        lines = frame.split("\n")
        if self._active and lines == self._previous_lines:
            return self

        buf = StringIO()
        if not self._active:
            buf.write(hide_cursor())
            self._active = True
        else:
            buf.write(self._erase(len(self._previous_lines)))

        buf.write("\n".join(lines))
        self._previous_lines = lines
        self._emit(buf.getvalue())
        return self

    def finish(self) -> None:
        """Leave the last frame on screen and move below it."""
        if not self._active:
            return
        self._emit("\n" + show_cursor())
        self._previous_lines = []
        self._active = False

    @staticmethod
    def _erase(row_count: int) -> str:
        """Clear *row_count* rows ending at the cursor row, leaving the cursor at the top."""
        parts = [clear_line(), cursor_column(1)]
        for _ in range(max(row_count - 1, 0)):
            parts.append(cursor_up(1))
            parts.append(clear_line())
        return "".join(parts)

    def _emit(self, data: str) -> None:
        self._output.write(data)
        self._output.flush()
