"""
Terminal plumbing for the checkbox prompt.

Key parsing, keybindings, ANSI styling, the renderable component base, an
inline frame renderer and a terminal event source.
"""
from __future__ import annotations

from checkbox_prompt.tui.component import Component
from checkbox_prompt.tui.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from checkbox_prompt.tui.keys import Key, key_from_char, parse_key
from checkbox_prompt.tui.renderer import InlineRenderer
from checkbox_prompt.tui.terminal import TerminalInput

__all__ = [
    "Component",
    "InlineRenderer",
    "TerminalInput",
    "Key",
    "parse_key",
    "key_from_char",
    "KeybindingsManager",
    "DEFAULT_KEYBINDINGS",
]
