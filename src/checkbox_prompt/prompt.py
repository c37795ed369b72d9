"""
Checkbox prompt controller.

``CheckboxPrompt`` is a small state machine over a :class:`ChoiceList`:

    AWAITING_INPUT --(line, validation passes)--> RESOLVED

While awaiting input every accepted key press moves the pointer or toggles
a choice and redraws the frame.  A submit runs the optional filter and
validator; a rejection is shown under the list and the prompt keeps waiting.
Once resolved, further events are ignored and the resolution callback has
fired exactly once.

Example:
    from checkbox_prompt import CheckboxPrompt, Separator

    prompt = CheckboxPrompt(
        "Toppings",
        ["Cheese", Separator(), {"name": "Ham", "disabled": "out of stock"}],
        validate=lambda picked: bool(picked) or "Pick at least one",
    )
    toppings = await prompt.run()
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterable, Mapping
from enum import Enum
from typing import Any, Protocol, Union

from checkbox_prompt.choices import ChoiceList
from checkbox_prompt.config import PromptConfig
from checkbox_prompt.events import EventSource, KeypressEvent, LineEvent, PromptEvent
from checkbox_prompt.exceptions import CheckboxPromptError, PromptAbortedError
from checkbox_prompt.logging import get_logger
from checkbox_prompt.tui.ansi import FG, style
from checkbox_prompt.tui.component import Component
from checkbox_prompt.tui.keybindings import KeybindingsManager
from checkbox_prompt.tui.keys import Key
from checkbox_prompt.tui.renderer import InlineRenderer
from checkbox_prompt.tui.terminal import TerminalInput

logger = get_logger("prompt")

ValidationResult = Union[bool, str, None]
Validator = Callable[[Any], Union[ValidationResult, Awaitable[ValidationResult]]]
AnswerFilter = Callable[[list[Any]], Any]
AnswerCallback = Callable[[Any], Any]


class Output(Protocol):
    """Where rendered frames go.  Each call carries one complete frame."""

    def write(self, frame: str) -> Any: ...


class PromptState(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    RESOLVED = "resolved"


class CheckboxPrompt(Component):
    """
    Interactive multi-select prompt.

    Parameters
    ----------
    message:
        The question shown above the list.
    choices:
        Raw choice specs (strings, mappings, ``Choice``, ``Separator``).
    default:
        Booleans by position or a list of values to pre-check.
    answers:
        Answers from earlier prompts, handed to callable ``disabled`` specs.
    validate:
        ``fn(values) -> True | False | str`` (may be async).  A string is
        the error message to display.
    filter:
        ``fn(values) -> answer`` applied before validation; its result is
        what the prompt resolves to.
    output:
        Frame sink with a ``write(str)`` method, defaults to an
        :class:`InlineRenderer` on stdout.
    config:
        Display and keybinding settings.
    keybindings:
        Explicit keybinding manager; built from *config* when omitted.

    Raises
    ------
    ChoiceSpecError, InvalidDefaultShapeError
        On malformed choices or defaults.
    """

    def __init__(
        self,
        message: str,
        choices: Iterable[Any],
        *,
        default: list[Any] | tuple[Any, ...] | None = None,
        answers: Mapping[str, Any] | None = None,
        validate: Validator | None = None,
        filter: AnswerFilter | None = None,
        output: Output | None = None,
        config: PromptConfig | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        super().__init__()
        self.message = message
        self.config = config or PromptConfig()
        self.choices = ChoiceList(choices, default=default, answers=answers)

        self._validate = validate
        self._filter = filter
        self._output: Output = output if output is not None else InlineRenderer()
        self._keybindings = keybindings or KeybindingsManager(self.config.keybindings)

        self.state = PromptState.AWAITING_INPUT
        self.pointer: int = next(self.choices.active_indices(), 0)
        self.error: str | None = None
        self.answer: Any = None

        self._first_render = True
        self._aborted = False
        self._callback_fired = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def done(self) -> bool:
        return self.state is PromptState.RESOLVED

    @property
    def aborted(self) -> bool:
        return self._aborted

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    async def run(
        self,
        callback: AnswerCallback | None = None,
        source: EventSource | None = None,
    ) -> Any:
        """
        Draw the prompt and consume events until it resolves.

        *callback* receives the answer once (it may be async).  Without a
        *source*, keys are read from the terminal.

        Raises
        ------
        PromptAbortedError
            The source closed, or the interrupt key was pressed, first.
        """
        if self.done or self._aborted:
            raise CheckboxPromptError("Prompt has already finished")

        source = source if source is not None else TerminalInput()
        self._draw()

        while not self.done:
            event = await source.get()
            if event is None:
                self._finish()
                raise PromptAbortedError("Input closed before an answer was submitted")
            await self.dispatch(event)
            if self._aborted:
                self._finish()
                raise PromptAbortedError("Interrupted")

        self._finish()
        await self._fire_callback(callback)
        return self.answer

    async def dispatch(self, event: PromptEvent) -> None:
        """Apply one input event.  Events after resolution are dropped."""
        if self.done or self._aborted:
            logger.debug("Ignoring %s, prompt already finished", type(event).__name__)
            return

        if isinstance(event, LineEvent):
            await self.submit()
        elif isinstance(event, KeypressEvent):
            if self.handle_input(event.resolved_key()):
                self._draw()

    # ------------------------------------------------------------------
    # Key handling
    # ------------------------------------------------------------------

    def handle_input(self, key: Key) -> bool:
        """Apply a key press; ``True`` when the prompt changed and should redraw."""
        if self.done or not self.focused:
            return False

        action = self._keybindings.find_action(key)
        if action == "interrupt":
            logger.debug("Interrupt key pressed")
            self._aborted = True
            return False
        if action == "down":
            changed = self._move(1)
        elif action == "up":
            changed = self._move(-1)
        elif action == "toggle":
            changed = self.choices.toggle_at(self.pointer)
        elif key.is_digit:
            changed = self._jump(int(key.char))
        else:
            return False

        if changed:
            self.error = None
            self.invalidate()
        return changed

    def _move(self, step: int) -> bool:
        active = list(self.choices.active_indices())
        if not active:
            return False
        if step > 0:
            target = next((i for i in active if i > self.pointer), active[0])
        else:
            target = next((i for i in reversed(active) if i < self.pointer), active[-1])
        logger.debug("Pointer %d -> %d", self.pointer, target)
        self.pointer = target
        return True

    def _jump(self, number: int) -> bool:
        """Move to the *number*-th choice (1-based); never toggles."""
        index = self.choices.choice_index(number - 1) if number >= 1 else None
        if index is None or not self.choices.is_selectable(index):
            return False
        self.pointer = index
        return True

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(self) -> bool:
        """Validate the current selection and resolve if it is accepted."""
        if self.done:
            return False

        values = self.choices.checked_values()
        try:
            answer = self._filter(values) if self._filter is not None else values
        except Exception as e:
            logger.warning("Answer filter failed: %s", e)
            return self._reject(str(e) or self.config.invalid_message)

        verdict = await self._check(answer)
        if verdict is not None:
            return self._reject(verdict)

        self.answer = answer
        self.error = None
        self.state = PromptState.RESOLVED
        logger.debug("Resolved with %d value(s)", len(values))
        self.invalidate()
        self._draw()
        return True

    async def _check(self, answer: Any) -> str | None:
        """Run the validator; returns the error message, or ``None`` when accepted."""
        if self._validate is None:
            return None
        try:
            result = self._validate(answer)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.warning("Validator raised: %s", e)
            return str(e) or self.config.invalid_message

        if isinstance(result, str):
            return result or self.config.invalid_message
        if not result:
            return self.config.invalid_message
        return None

    def _reject(self, message: str) -> bool:
        logger.debug("Submission rejected: %s", message)
        self.error = message
        self.invalidate()
        self._draw()
        return False

    async def _fire_callback(self, callback: AnswerCallback | None) -> None:
        if callback is None or self._callback_fired:
            return
        self._callback_fired = True
        result = callback(self.answer)
        if inspect.isawaitable(result):
            await result

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> list[str]:
        color = self.config.color
        header = f"{style('?', fg=FG.GREEN, enabled=color)} {style(self.message, bold=True, enabled=color)}"

        if self.done:
            names = ", ".join(c.name for c in self.choices.checked_choices())
            self._dirty = False
            return [f"{header} {style(names, fg=FG.CYAN, enabled=color)}"]

        if self._first_render:
            header = f"{header} {self.config.help_text}"
            self._first_render = False

        lines = [header, *self.choices.render_lines(self.pointer, self.config)]
        if self.error:
            lines.append(f"{style('>>', fg=FG.RED, enabled=color)} {self.error}")

        self._dirty = False
        return lines

    def _draw(self) -> None:
        if not self.dirty:
            return
        self._output.write("\n".join(self.render()))

    def _finish(self) -> None:
        finish = getattr(self._output, "finish", None)
        if callable(finish):
            finish()
