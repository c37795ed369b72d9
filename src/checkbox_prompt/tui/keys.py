"""
Key parsing for terminal input.

Turns the raw bytes of one terminal key press into a ``Key`` the prompt
can dispatch on.  Only the keys a list prompt reacts to get symbolic names;
anything else is reported as ``unknown`` or as the printable character.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key data model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Key:
    """
    Parsed representation of a single key press.

    Attributes
    ----------
    name:
        Symbolic name for special keys (``'up'``, ``'space'``, ``'ctrl+c'``).
        For plain printable characters this equals *char*.
    char:
        The literal character, if printable.  Empty string otherwise.
    ctrl:
        ``True`` when Ctrl was held.
    alt:
        ``True`` when Alt (Meta/Option) was held.
    shift:
        ``True`` when Shift was held (only detectable for certain keys).
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def is_digit(self) -> bool:
        """Whether this is an unmodified ASCII ``0``-``9`` key."""
        return len(self.char) == 1 and "0" <= self.char <= "9" and not (self.ctrl or self.alt)


KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_DELETE = Key(name="delete")
KEY_SPACE = Key(name="space", char=" ")

KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")
KEY_HOME = Key(name="home")
KEY_END = Key(name="end")
KEY_PAGE_UP = Key(name="page_up")
KEY_PAGE_DOWN = Key(name="page_down")

KEY_UNKNOWN = Key(name="unknown")


# Final bytes of ``ESC [ X`` and ``ESC O X`` sequences
_CURSOR_FINALS: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
}

# ``ESC [ <n> ~`` sequences
_TILDE_CODES: dict[int, Key] = {
    1: KEY_HOME,
    3: KEY_DELETE,
    4: KEY_END,
    5: KEY_PAGE_UP,
    6: KEY_PAGE_DOWN,
    7: KEY_HOME,
    8: KEY_END,
}


def _with_modifiers(base: Key, code: int) -> Key:
    """Apply an xterm ``;N`` modifier code (``1 + shift + 2*alt + 4*ctrl``)."""
    bits = code - 1
    return Key(
        name=base.name,
        char=base.char,
        shift=bool(bits & 1),
        alt=bool(bits & 2),
        ctrl=bool(bits & 4),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def key_from_char(char: str | None) -> Key:
    """
    Build a ``Key`` from a bare character, as delivered by input sources
    that report a character without a key descriptor.

    >>> key_from_char("2")
    Key(name='2', char='2', ctrl=False, alt=False, shift=False)
    >>> key_from_char(" ").name
    'space'
    """
    if not char:
        return KEY_UNKNOWN
    if char == " ":
        return KEY_SPACE
    if char in ("\r", "\n"):
        return KEY_ENTER
    if len(char) == 1 and char.isprintable():
        return Key(name=char, char=char)
    return parse_key(char.encode("utf-8", errors="replace"))


def parse_key(data: bytes) -> Key:
    """
    Parse raw terminal input bytes into a ``Key`` object.

    Handles printable UTF-8 characters, Ctrl+letter combinations,
    Alt+character, and the CSI/SS3 sequences for cursor and paging keys
    (including xterm-style modifier suffixes such as ``CSI 1;5A``).
    """
    if not data:
        return KEY_UNKNOWN

    if data[:1] == b"\x1b":
        return _parse_escape(data)

    byte = data[0]

    if byte in (0x0D, 0x0A):
        return KEY_ENTER
    if byte == 0x09:
        return KEY_TAB
    if byte in (0x7F, 0x08):
        return KEY_BACKSPACE
    if 1 <= byte <= 26:
        letter = chr(byte + 96)  # 1 -> 'a'
        return Key(name=f"ctrl+{letter}", char=letter, ctrl=True)

    try:
        ch = data.decode("utf-8")
    except UnicodeDecodeError:
        return KEY_UNKNOWN

    if len(ch) == 1 and ch.isprintable():
        if ch == " ":
            return KEY_SPACE
        return Key(name=ch, char=ch)

    return KEY_UNKNOWN


def _parse_escape(data: bytes) -> Key:
    if len(data) == 1:
        return KEY_ESCAPE

    try:
        tail = data[1:].decode("ascii")
    except UnicodeDecodeError:
        return KEY_UNKNOWN

    # SS3: ESC O <final>
    if tail[:1] == "O" and len(tail) == 2:
        return _CURSOR_FINALS.get(tail[1], KEY_UNKNOWN)

    if tail[:1] == "[" and len(tail) > 1:
        return _parse_csi(tail[1:])

    # Alt+character
    if len(tail) == 1 and tail.isprintable():
        return Key(name=f"alt+{tail}", char=tail, alt=True)

    return KEY_UNKNOWN


def _parse_csi(payload: str) -> Key:
    """Parse what follows ``ESC [``: ``A``, ``1;5A``, ``3~``, ``5;2~``."""
    final = payload[-1]
    params = payload[:-1].split(";") if payload[:-1] else []

    if final == "~":
        base = _TILDE_CODES.get(_safe_int(params[0]) if params else -1)
    else:
        base = _CURSOR_FINALS.get(final)
    if base is None:
        return KEY_UNKNOWN

    if len(params) == 2:
        code = _safe_int(params[1])
        if code is not None and code > 1:
            return _with_modifiers(base, code)
    return base


def _safe_int(s: str) -> int | None:
    """Return ``int(s)`` or ``None`` if *s* is not a valid integer."""
    try:
        return int(s)
    except (ValueError, TypeError):
        return None
