"""
Choice list model.

A :class:`ChoiceList` is built once per prompt from raw choice specs and an
optional ``default``.  It owns the checked/disabled state of every entry and
knows which positions the cursor may rest on; the prompt controller only
moves a pointer over it and asks it to toggle, render and extract answers.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from checkbox_prompt.config import PromptConfig
from checkbox_prompt.exceptions import ChoiceSpecError, InvalidDefaultShapeError
from checkbox_prompt.logging import get_logger
from checkbox_prompt.tui.ansi import FG, style

logger = get_logger("choices")

# False / True / reason / fn(answers) -> False | True | reason
DisabledSpec = Union[bool, str, Callable[[Mapping[str, Any]], Union[bool, str, None]]]

_CHOICE_KEYS = frozenset({"name", "value", "checked", "disabled"})


@dataclass
class Separator:
    """A display-only spacer line.  ``None`` uses the configured separator."""

    line: str | None = None

    def text(self, config: PromptConfig) -> str:
        return self.line if self.line is not None else config.separator


@dataclass
class Choice:
    """
    One selectable line item.

    Attributes
    ----------
    name:
        Display label.
    value:
        Answer payload, defaults to *name*.
    checked:
        Current selection state.
    disabled:
        ``False``, ``True``, a reason string, or a callable over the prior
        answers returning one of those.
    reason:
        The evaluated disabled state: ``None`` when selectable, otherwise
        ``True`` or the reason string.  Set by :class:`ChoiceList`.
    """

    name: str
    value: Any = None
    checked: bool = False
    disabled: DisabledSpec = False
    reason: bool | str | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        self.name = str(self.name)
        if self.value is None:
            self.value = self.name
        self.checked = bool(self.checked)

    @property
    def is_disabled(self) -> bool:
        return self.reason is not None

    def evaluate_disabled(self, answers: Mapping[str, Any]) -> bool | str | None:
        """Resolve :attr:`disabled` against *answers* and store it on :attr:`reason`."""
        result = self.disabled(answers) if callable(self.disabled) else self.disabled
        self.reason = result if result else None
        return self.reason

    @classmethod
    def from_spec(cls, spec: Any) -> Choice | Separator:
        """
        Build an entry from a raw spec.

        Accepts a plain string (or number), a mapping with ``name`` and any of
        ``value``/``checked``/``disabled``, ``{"separator": True | "line"}``,
        or an existing :class:`Choice`/:class:`Separator` (copied).
        """
        if isinstance(spec, Separator):
            return dataclasses.replace(spec)
        if isinstance(spec, Choice):
            return dataclasses.replace(spec)
        if isinstance(spec, (str, int, float)) and not isinstance(spec, bool):
            return cls(name=str(spec))
        if isinstance(spec, Mapping):
            if "separator" in spec:
                line = spec["separator"]
                return Separator(line=line if isinstance(line, str) else None)
            unknown = set(spec) - _CHOICE_KEYS
            if unknown:
                raise ChoiceSpecError(
                    f"Unknown choice keys: {', '.join(sorted(map(str, unknown)))}"
                )
            if spec.get("name") is None:
                raise ChoiceSpecError(f"Choice spec has no name: {dict(spec)!r}")
            return cls(
                name=spec["name"],
                value=spec.get("value"),
                checked=spec.get("checked", False),
                disabled=spec.get("disabled", False),
            )
        raise ChoiceSpecError(f"Unsupported choice spec: {spec!r}")


Entry = Union[Choice, Separator]


class ChoiceList:
    """
    Ordered ``Choice | Separator`` entries with their selection state.

    Parameters
    ----------
    specs:
        Raw choice specs, see :meth:`Choice.from_spec`.
    default:
        Either booleans aligned with the non-separator choices, or values
        matched against each choice's ``value`` or ``name``.
    answers:
        Answers from earlier prompts, passed read-only to callable
        ``disabled`` specs.

    Raises
    ------
    ChoiceSpecError
        A spec could not be parsed.
    InvalidDefaultShapeError
        *default* is not a list, mixes booleans with values, or is a boolean
        list whose length differs from the number of choices.
    """

    def __init__(
        self,
        specs: Iterable[Any],
        default: list[Any] | tuple[Any, ...] | None = None,
        answers: Mapping[str, Any] | None = None,
    ) -> None:
        self._entries: list[Entry] = [Choice.from_spec(spec) for spec in specs]
        context: Mapping[str, Any] = MappingProxyType(dict(answers or {}))

        for choice in self.choices:
            choice.evaluate_disabled(context)

        self._apply_default(default)

        for choice in self.choices:
            if choice.is_disabled and choice.checked:
                logger.debug("Unchecking disabled choice %r", choice.name)
                choice.checked = False

        logger.debug(
            "Built choice list: %d entries, %d active, %d checked",
            len(self._entries),
            sum(1 for _ in self.active_indices()),
            len(self.checked_values()),
        )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _apply_default(self, default: Any) -> None:
        if default is None:
            return
        if not isinstance(default, (list, tuple)):
            raise InvalidDefaultShapeError(
                f"default must be a list of booleans or values, got {type(default).__name__}"
            )
        if not default:
            return

        flags = [isinstance(item, bool) for item in default]
        choices = self.choices

        if all(flags):
            if len(default) != len(choices):
                raise InvalidDefaultShapeError(
                    f"default has {len(default)} flags for {len(choices)} choices"
                )
            for choice, flag in zip(choices, default):
                if flag:
                    choice.checked = True
            return

        if any(flags):
            raise InvalidDefaultShapeError("default mixes booleans with values")

        matched: set[int] = set()
        for choice in choices:
            for i, wanted in enumerate(default):
                if wanted == choice.value or wanted == choice.name:
                    choice.checked = True
                    matched.add(i)

        unmatched = [wanted for i, wanted in enumerate(default) if i not in matched]
        if unmatched:
            logger.warning("Default values match no choice: %r", unmatched)

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    @property
    def choices(self) -> list[Choice]:
        """Non-separator entries, disabled ones included."""
        return [e for e in self._entries if isinstance(e, Choice)]

    @property
    def real_length(self) -> int:
        return len(self.choices)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_selectable(self, index: int) -> bool:
        if not 0 <= index < len(self._entries):
            return False
        entry = self._entries[index]
        return isinstance(entry, Choice) and not entry.is_disabled

    def active_indices(self) -> Iterator[int]:
        """Yield the indices of selectable entries, in order."""
        for index in range(len(self._entries)):
            if self.is_selectable(index):
                yield index

    def choice_index(self, position: int) -> int | None:
        """
        List index of the *position*-th choice (0-based), counting disabled
        choices but not separators.
        """
        if position < 0:
            return None
        seen = 0
        for index, entry in enumerate(self._entries):
            if isinstance(entry, Separator):
                continue
            if seen == position:
                return index
            seen += 1
        return None

    def checked_choices(self) -> list[Choice]:
        return [c for c in self.choices if c.checked and not c.is_disabled]

    def checked_values(self) -> list[Any]:
        """Values of all checked, non-disabled choices in list order."""
        return [c.value for c in self.checked_choices()]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def toggle_at(self, index: int) -> bool:
        """Flip ``checked`` at *index*; returns ``False`` if nothing changed."""
        if not self.is_selectable(index):
            return False
        choice = self._entries[index]
        assert isinstance(choice, Choice)
        choice.checked = not choice.checked
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_lines(self, pointer: int, config: PromptConfig | None = None) -> list[str]:
        """One display line per entry, the entry at *pointer* highlighted."""
        config = config or PromptConfig()
        color = config.color
        lines: list[str] = []

        for index, entry in enumerate(self._entries):
            if isinstance(entry, Separator):
                lines.append(style(entry.text(config), dim=True, enabled=color))
                continue

            if entry.is_disabled:
                reason = config.disabled_label if entry.reason is True else entry.reason
                text = f"{config.disabled_marker} {entry.name} ({reason})"
                lines.append(style(text, dim=True, enabled=color))
                continue

            glyph = config.checked if entry.checked else config.unchecked
            if index == pointer:
                text = f"{config.pointer}{glyph} {entry.name}"
                lines.append(style(text, fg=FG.CYAN, enabled=color))
            else:
                if entry.checked:
                    glyph = style(glyph, fg=FG.GREEN, enabled=color)
                lines.append(f" {glyph} {entry.name}")

        return lines
