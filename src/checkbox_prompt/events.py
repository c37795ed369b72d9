"""
Input events consumed by the prompt controller.

An input source delivers two kinds of events, one at a time and in order:

* :class:`KeypressEvent` for every key the user presses, and
* :class:`LineEvent` when the user submits (Enter).

Example:
    from checkbox_prompt import CheckboxPrompt, QueueInput

    source = QueueInput()
    source.keypress(" ", "space")
    source.line()

    answer = await CheckboxPrompt("Pick", ["a", "b"]).run(source=source)
    # ["a"]
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Protocol, Union

from checkbox_prompt.tui.keys import Key, key_from_char


@dataclass(frozen=True)
class KeypressEvent:
    """A single key press.  *key* is derived from *char* when omitted."""

    char: str | None = None
    key: Key | None = None

    def resolved_key(self) -> Key:
        if self.key is not None:
            return self.key
        return key_from_char(self.char)


@dataclass(frozen=True)
class LineEvent:
    """The user submitted the prompt."""


PromptEvent = Union[KeypressEvent, LineEvent]


class EventSource(Protocol):
    """Anything the controller can pull events from."""

    async def get(self) -> PromptEvent | None:
        """Return the next event, or ``None`` once the source is closed."""
        ...


class QueueInput:
    """
    In-memory, order-preserving event source.

    Events can be queued before or while the prompt runs.  ``name`` mirrors
    the key descriptor a readline-style source would attach to a key press;
    when omitted the key is derived from ``char``.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[PromptEvent | None] = asyncio.Queue()
        self._closed = False

    def keypress(self, char: str | None = None, name: str | None = None) -> QueueInput:
        key = None
        if name is not None:
            key = Key(name=name, char=char or "")
        self._put(KeypressEvent(char=char, key=key))
        return self

    def line(self) -> QueueInput:
        self._put(LineEvent())
        return self

    def close(self) -> None:
        """Signal end of input; pending events are still delivered first."""
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(None)

    def _put(self, event: PromptEvent) -> None:
        if self._closed:
            raise RuntimeError("QueueInput is closed")
        self._queue.put_nowait(event)

    async def get(self) -> PromptEvent | None:
        return await self._queue.get()

    def pending(self) -> int:
        """Number of queued events not yet consumed."""
        return self._queue.qsize()
