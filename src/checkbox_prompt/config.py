"""
Configuration for the checkbox prompt.

Glyphs, fixed texts, colour and keybinding overrides.  A config can be
built programmatically or loaded from YAML.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from checkbox_prompt.logging import get_logger

logger = get_logger("config")

CONFIG_ENV_VAR = "CHECKBOX_PROMPT_CONFIG"


def default_color() -> bool:
    """Colour is on unless ``NO_COLOR`` is set to a non-empty value."""
    return not os.environ.get("NO_COLOR")


def default_config_path() -> Path:
    return Path.home() / ".checkbox-prompt" / "config.yaml"


@dataclass
class PromptConfig:
    """
    Display and input settings for a checkbox prompt.

    Example YAML:
        pointer: ">"
        checked: "[x]"
        unchecked: "[ ]"
        color: false
        keybindings:
          toggle: ["space", "x"]
    """

    # Glyphs
    pointer: str = "❯"
    checked: str = "◉"
    unchecked: str = "◯"
    disabled_marker: str = "-"
    separator: str = "--------"

    # Texts
    help_text: str = "(Press <space> to select)"
    disabled_label: str = "Disabled"
    invalid_message: str = "Please enter a valid value"

    color: bool = field(default_factory=default_color)
    keybindings: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PromptConfig:
        """Create config from a dictionary; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

        values = {k: v for k, v in data.items() if k in known}
        if "keybindings" in values:
            values["keybindings"] = {
                action: [keys] if isinstance(keys, str) else list(keys)
                for action, keys in (values["keybindings"] or {}).items()
            }
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Path) -> PromptConfig:
        """Load config from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_yaml_string(cls, content: str) -> PromptConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {})

    @classmethod
    def load(cls, path: str | Path | None = None) -> PromptConfig:
        """
        Load config from the first location that exists.

        Search order:

        1. *path*, when given (must exist)
        2. ``$CHECKBOX_PROMPT_CONFIG``
        3. ``~/.checkbox-prompt/config.yaml``
        4. Defaults only.
        """
        if path is not None:
            return cls.from_yaml(Path(path))

        env_path = os.environ.get(CONFIG_ENV_VAR)
        candidates = [Path(env_path)] if env_path else []
        candidates.append(default_config_path())

        for candidate in candidates:
            if candidate.is_file():
                logger.debug("Loading prompt config from %s", candidate)
                return cls.from_yaml(candidate)
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "pointer": self.pointer,
            "checked": self.checked,
            "unchecked": self.unchecked,
            "disabled_marker": self.disabled_marker,
            "separator": self.separator,
            "help_text": self.help_text,
            "disabled_label": self.disabled_label,
            "invalid_message": self.invalid_message,
            "color": self.color,
            "keybindings": {k: list(v) for k, v in self.keybindings.items()},
        }
