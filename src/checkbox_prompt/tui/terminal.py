"""
Terminal event source.

Reads one key at a time with ``readchar`` on a worker thread so the event
loop stays free, and turns each key into a prompt event.
"""

from __future__ import annotations

import asyncio

import readchar

from checkbox_prompt.events import KeypressEvent, LineEvent, PromptEvent
from checkbox_prompt.logging import get_logger
from checkbox_prompt.tui.keys import parse_key

logger = get_logger("tui.terminal")


class TerminalInput:
    """Event source backed by the controlling terminal."""

    def __init__(self) -> None:
        self._closed = False

    async def get(self) -> PromptEvent | None:
        if self._closed:
            return None
        try:
            raw = await asyncio.to_thread(readchar.readkey)
        except (EOFError, OSError) as e:
            logger.debug("Terminal input closed: %s", e)
            self._closed = True
            return None
        except KeyboardInterrupt:
            # Some platforms raise here instead of delivering ctrl+c as a key
            raw = "\x03"

        key = parse_key(raw.encode("utf-8", errors="replace"))
        if key.name == "enter":
            return LineEvent()
        return KeypressEvent(char=key.char or None, key=key)
