"""
Abstract base for renderable prompt elements.

A ``Component`` turns its state into a list of text lines and may consume
key presses.  It tracks a *dirty* flag so callers only redraw after an
accepted transition.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkbox_prompt.tui.keys import Key


class Component(ABC):
    """
    Base class for renderable elements.

    Subclasses implement :meth:`render`, which returns pre-styled lines.
    """

    def __init__(self) -> None:
        self._dirty: bool = True
        self._focused: bool = True

    @abstractmethod
    def render(self) -> list[str]:
        """
        Render the component into a list of text lines.

        Returns
        -------
        list[str]
            One string per row.
        """
        ...

    def handle_input(self, key: Key) -> bool:
        """
        Handle a keyboard event.

        Returns
        -------
        bool
            ``True`` if the event was consumed and a redraw is due.
        """
        return False

    def invalidate(self) -> None:
        """Mark the component as needing a re-render."""
        self._dirty = True

    @property
    def dirty(self) -> bool:
        """Whether the component needs to be re-rendered."""
        return self._dirty

    @property
    def focused(self) -> bool:
        """Whether the component accepts input."""
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        if self._focused != value:
            self._focused = value
            self._dirty = True
