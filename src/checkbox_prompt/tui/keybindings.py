"""
Keybinding management.

Maps the prompt's logical actions to key descriptors.  Defaults give both
arrow keys and vi-style ``j``/``k`` navigation; user overrides (usually from
the ``keybindings`` section of the prompt configuration) replace the
descriptors of the actions they name.  A rebound key is dropped from the
default action that held it.
"""

from __future__ import annotations

from checkbox_prompt.tui.keys import Key

# ---------------------------------------------------------------------------
# Default keybinding map
# ---------------------------------------------------------------------------

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "down": ["down", "j"],
    "up": ["up", "k"],
    "toggle": ["space"],
    "interrupt": ["ctrl+c"],
}


# ---------------------------------------------------------------------------
# Descriptor normalisation
# ---------------------------------------------------------------------------

def _normalise_key_descriptor(descriptor: str) -> str:
    """
    Normalise a human-readable key descriptor to a canonical form.

    ``"Shift+Ctrl+Up"`` -> ``"ctrl+shift+up"``
    """
    parts = [p.strip().lower() for p in descriptor.split("+")]
    modifiers = sorted(parts[:-1])
    return "+".join(modifiers + [parts[-1]])


def _key_to_descriptor(key: Key) -> str:
    """
    Convert a parsed :class:`Key` into a canonical descriptor string.

    >>> _key_to_descriptor(Key(name="ctrl+c", char="c", ctrl=True))
    'ctrl+c'
    >>> _key_to_descriptor(Key(name="j", char="j"))
    'j'
    """
    # ``ctrl+c`` style names already carry their modifiers
    parts = key.name.lower().split("+") if len(key.name) > 1 else [key.name]
    modifiers = set(parts[:-1])
    modifiers.update(
        name
        for name, held in (("ctrl", key.ctrl), ("alt", key.alt), ("shift", key.shift))
        if held
    )
    return "+".join(sorted(modifiers) + [parts[-1]])


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------

class KeybindingsManager:
    """
    Maps logical action names (``up``, ``down``, ``toggle``, ``interrupt``)
    to key descriptors.

    Parameters
    ----------
    user_overrides:
        Optional mapping of action names to key descriptor lists that
        replace the defaults for those actions.
    """

    def __init__(self, user_overrides: dict[str, list[str]] | None = None) -> None:
        overrides = {action: list(keys) for action, keys in (user_overrides or {}).items()}
        claimed = {_normalise_key_descriptor(d) for keys in overrides.values() for d in keys}

        # A rebound key leaves whichever default action held it
        self._bindings: dict[str, list[str]] = {
            action: [d for d in keys if _normalise_key_descriptor(d) not in claimed]
            for action, keys in DEFAULT_KEYBINDINGS.items()
        }
        self._bindings.update(overrides)

        self._normalised: dict[str, list[str]] = {
            action: [_normalise_key_descriptor(d) for d in descriptors]
            for action, descriptors in self._bindings.items()
        }

    def matches(self, key: Key | str, action: str) -> bool:
        """
        Test whether *key* matches any binding for *action*.

        *key* is either a :class:`Key` or a raw descriptor such as ``"ctrl+c"``.
        """
        descriptors = self._normalised.get(action)
        if descriptors is None:
            return False

        if isinstance(key, str):
            normalised = _normalise_key_descriptor(key)
        else:
            normalised = _key_to_descriptor(key)

        return normalised in descriptors

    def get_keys(self, action: str) -> list[str]:
        """Return the descriptors bound to *action*, as originally written."""
        return list(self._bindings.get(action, []))

    def actions(self) -> list[str]:
        """Return all registered action names."""
        return list(self._bindings.keys())

    def find_action(self, key: Key | str) -> str | None:
        """Find the first action that matches *key*, in insertion order."""
        for action in self._bindings:
            if self.matches(key, action):
                return action
        return None
