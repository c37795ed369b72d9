"""Tests for the CheckboxPrompt controller."""

from __future__ import annotations

import random

import pytest

from checkbox_prompt import (
    CheckboxPrompt,
    CheckboxPromptError,
    InvalidDefaultShapeError,
    LineEvent,
    PromptAbortedError,
    PromptConfig,
    PromptState,
    QueueInput,
    Separator,
)
from checkbox_prompt.events import KeypressEvent
from checkbox_prompt.tui.keys import KEY_DOWN, KEY_SPACE, KEY_UP, Key, parse_key


DISABLED_CHOICES = [
    "choice 1",
    "choice 2",
    "choice 3",
    {"name": "dis1", "disabled": True},
    {"name": "dis2", "disabled": "uh oh"},
]


# ---------------------------------------------------------------------------
# Answer scenarios
# ---------------------------------------------------------------------------


class TestAnswers:
    """End-to-end keypress sequences and the answers they resolve to."""

    @pytest.mark.asyncio
    async def test_single_selected_choice(self, make_prompt, source) -> None:
        """Space then enter resolves to the first choice."""
        source.keypress(" ", "space").line()
        answer = await make_prompt().run(source=source)

        assert answer == ["choice 1"]

    @pytest.mark.asyncio
    async def test_multiple_selected_choices(self, make_prompt, source) -> None:
        """Several toggled choices are all returned."""
        source.keypress(" ", "space").keypress(None, "down").keypress(" ", "space").line()
        answer = await make_prompt().run(source=source)

        assert answer == ["choice 1", "choice 2"]

    @pytest.mark.asyncio
    async def test_checked_choices_are_default(self, make_prompt, source) -> None:
        """Choices marked checked are pre-selected."""
        prompt = make_prompt([
            {"name": "1", "checked": True},
            {"name": "2", "checked": False},
            {"name": "3", "checked": False},
        ])
        source.line()

        assert await prompt.run(source=source) == ["1"]

    @pytest.mark.asyncio
    async def test_default_as_array_of_values(self, make_prompt, source) -> None:
        """A list of default values pre-checks those choices."""
        prompt = make_prompt(["1", "2", "3"], default=["1", "3"])
        source.line()

        assert await prompt.run(source=source) == ["1", "3"]

    @pytest.mark.asyncio
    async def test_space_toggles_back_off(self, make_prompt, source) -> None:
        """A second space unchecks the choice."""
        source.keypress(" ", "space").keypress(None, "down")
        source.keypress(" ", "space").keypress(" ", "space").line()

        assert await make_prompt().run(source=source) == ["choice 1"]

    @pytest.mark.asyncio
    async def test_arrow_navigation(self, make_prompt, source) -> None:
        """Arrow keys move the pointer."""
        source.keypress(None, "down").keypress(None, "down").keypress(None, "up")
        source.keypress(" ", "space").line()

        assert await make_prompt().run(source=source) == ["choice 2"]

    @pytest.mark.asyncio
    async def test_vi_style_navigation(self, make_prompt, source) -> None:
        """j and k move the pointer like the arrow keys."""
        source.keypress("j", "j").keypress("j", "j").keypress("k", "k")
        source.keypress(" ", "space").line()

        assert await make_prompt().run(source=source) == ["choice 2"]

    @pytest.mark.asyncio
    async def test_number_key_moves_without_toggling(self, make_prompt, source) -> None:
        """A digit moves the pointer but leaves the selection alone."""
        prompt = make_prompt()
        source.keypress("2").line()

        assert await prompt.run(source=source) == []
        assert prompt.pointer == 1

    @pytest.mark.asyncio
    async def test_number_key_then_space_checks_target(self, make_prompt, source) -> None:
        """Space after a digit toggles the jumped-to choice."""
        source.keypress("2").keypress(" ", "space").line()

        assert await make_prompt().run(source=source) == ["choice 2"]

    @pytest.mark.asyncio
    async def test_number_key_keeps_default_checked(self, make_prompt, source) -> None:
        """A digit does not uncheck a default choice."""
        source.keypress("2").line()

        assert await make_prompt(default=["choice 2"]).run(source=source) == ["choice 2"]

    @pytest.mark.asyncio
    async def test_values_are_returned_instead_of_names(self, make_prompt, source) -> None:
        """The answer holds values, not display names."""
        prompt = make_prompt([
            {"name": "Small", "value": "s"},
            {"name": "Large", "value": "l"},
        ])
        source.keypress(None, "down").keypress(" ", "space").line()

        assert await prompt.run(source=source) == ["l"]

    @pytest.mark.asyncio
    async def test_answer_keeps_list_order(self, make_prompt, source) -> None:
        """Answers follow list order, not toggle order."""
        source.keypress(None, "up").keypress(" ", "space")
        source.keypress(None, "up").keypress(" ", "space").line()

        assert await make_prompt().run(source=source) == ["choice 2", "choice 3"]


# ---------------------------------------------------------------------------
# Disabled choices
# ---------------------------------------------------------------------------


class TestDisabledChoices:
    @pytest.mark.asyncio
    async def test_disabled_choices_and_custom_messages(self, make_prompt, source, output) -> None:
        """Disabled choices show their reason or the default label."""
        source.line()
        await make_prompt(DISABLED_CHOICES).run(source=source)

        assert "- dis1 (Disabled)" in output.text
        assert "- dis2 (uh oh)" in output.text

    @pytest.mark.asyncio
    async def test_navigation_skips_disabled_choices(self, make_prompt, source) -> None:
        """Moving down never lands on a disabled choice."""
        source.keypress(None, "down").keypress(None, "down").keypress(None, "down")
        source.keypress(" ", "space").line()

        answer = await make_prompt(DISABLED_CHOICES).run(source=source)

        assert answer[0] == "choice 1"

    @pytest.mark.asyncio
    async def test_cursor_never_leaves_only_active_choice(self, make_prompt, source) -> None:
        """With one active choice the pointer stays put."""
        prompt = make_prompt([
            "choice 1",
            {"name": "choice 2", "disabled": True},
            {"name": "choice 3", "disabled": "nope"},
        ])
        for _ in range(3):
            source.keypress(None, "down")
        source.keypress(" ", "space").line()

        assert await prompt.run(source=source) == ["choice 1"]
        assert prompt.pointer == 0

    @pytest.mark.asyncio
    async def test_disabled_default_is_unchecked(self, make_prompt, source) -> None:
        """A disabled choice is unchecked even when marked checked."""
        prompt = make_prompt([
            {"name": "1", "checked": True, "disabled": True},
            {"name": "2"},
        ])
        source.line()

        assert await prompt.run(source=source) == []

    @pytest.mark.asyncio
    async def test_disabled_can_be_a_function(self, make_prompt, source, output) -> None:
        """Callable disabled specs receive the answers context."""
        seen = {}

        def disabled(answers):
            seen.update(answers)
            return True

        prompt = make_prompt([{"name": "dis1", "disabled": disabled}], answers={"foo": "foo"})
        source.line()
        await prompt.run(source=source)

        assert seen == {"foo": "foo"}
        assert "- dis1 (Disabled)" in output.text

    @pytest.mark.asyncio
    async def test_number_key_ignores_disabled_target(self, make_prompt, source) -> None:
        """A digit pointing at a disabled choice is ignored."""
        prompt = make_prompt(DISABLED_CHOICES)
        source.keypress("4").keypress(" ", "space").line()

        assert await prompt.run(source=source) == ["choice 1"]
        assert prompt.pointer == 0

    @pytest.mark.asyncio
    async def test_number_key_beyond_list_is_ignored(self, make_prompt, source) -> None:
        """A digit past the end of the list is ignored."""
        prompt = make_prompt()
        source.keypress("9").keypress(" ", "space").line()

        assert await prompt.run(source=source) == ["choice 1"]

    @pytest.mark.asyncio
    async def test_no_active_choices_resolves_empty(self, make_prompt, source) -> None:
        """A list with nothing selectable resolves to an empty answer."""
        prompt = make_prompt([
            {"name": "a", "disabled": True, "checked": True},
            {"name": "b", "disabled": "later"},
        ])
        source.keypress(" ", "space").keypress(None, "down").keypress(" ", "space").line()

        assert await prompt.run(source=source) == []
        assert prompt.done


# ---------------------------------------------------------------------------
# Navigation policy
# ---------------------------------------------------------------------------


class TestNavigation:
    def test_initial_pointer_is_first_active_choice(self, make_prompt) -> None:
        """The pointer starts on the first selectable entry."""
        prompt = make_prompt([Separator(), {"name": "off", "disabled": True}, "on"])

        assert prompt.pointer == 2

    def test_down_wraps_to_first(self, make_prompt) -> None:
        """Moving down from the last choice wraps to the first."""
        prompt = make_prompt()
        for _ in range(3):
            prompt.handle_input(KEY_DOWN)

        assert prompt.pointer == 0

    def test_up_wraps_to_last(self, make_prompt) -> None:
        """Moving up from the first choice wraps to the last."""
        prompt = make_prompt()
        prompt.handle_input(KEY_UP)

        assert prompt.pointer == 2

    def test_separators_are_transparent(self, make_prompt) -> None:
        """Navigation steps over separators."""
        prompt = make_prompt(["a", Separator(), "b"])
        prompt.handle_input(KEY_DOWN)

        assert prompt.pointer == 2

    def test_random_navigation_stays_on_selectable_entries(self, make_prompt) -> None:
        """Any key sequence leaves the pointer on a selectable entry."""
        prompt = make_prompt([
            Separator(),
            "a",
            {"name": "b", "disabled": True},
            Separator("==="),
            "c",
            {"name": "d", "disabled": "x"},
            "e",
        ])
        keys = [KEY_UP, KEY_DOWN, Key(name="j", char="j"), Key(name="k", char="k")]
        rng = random.Random(1234)

        for _ in range(200):
            prompt.handle_input(rng.choice(keys))
            assert prompt.choices.is_selectable(prompt.pointer)

    def test_navigation_without_active_choices_is_a_noop(self, make_prompt) -> None:
        """Keys do nothing when no choice is selectable."""
        prompt = make_prompt([{"name": "a", "disabled": True}])

        assert prompt.handle_input(KEY_DOWN) is False
        assert prompt.handle_input(KEY_SPACE) is False
        assert prompt.pointer == 0

    def test_unknown_key_is_ignored(self, make_prompt) -> None:
        """Unbound keys and 0 are ignored."""
        prompt = make_prompt()

        assert prompt.handle_input(Key(name="x", char="x")) is False
        assert prompt.handle_input(Key(name="0", char="0")) is False
        assert prompt.pointer == 0

    @pytest.mark.asyncio
    async def test_unknown_key_does_not_redraw(self, make_prompt, output) -> None:
        """An ignored key produces no frame."""
        prompt = make_prompt()
        await prompt.dispatch(KeypressEvent(char="x"))

        assert output.frames == []

    def test_custom_keybindings(self, make_prompt) -> None:
        """Configured keys replace the default toggle key."""
        prompt = make_prompt(config=PromptConfig(color=False, keybindings={"toggle": ["x"]}))

        assert prompt.handle_input(Key(name="x", char="x")) is True
        assert prompt.handle_input(KEY_SPACE) is False
        assert prompt.choices.checked_values() == ["choice 1"]

    def test_rebinding_a_default_key_moves_it(self, make_prompt) -> None:
        """A key bound to a new action no longer triggers its default one."""
        prompt = make_prompt(config=PromptConfig(color=False, keybindings={"toggle": ["j"]}))

        assert prompt.handle_input(Key(name="j", char="j")) is True
        assert prompt.pointer == 0
        assert prompt.choices.checked_values() == ["choice 1"]
        assert prompt.handle_input(KEY_DOWN) is True
        assert prompt.pointer == 1

    @pytest.mark.asyncio
    async def test_non_ascii_digits_are_ignored(self, make_prompt, output) -> None:
        """Only ASCII digits act as shortcuts."""
        prompt = make_prompt()

        await prompt.dispatch(KeypressEvent(char="²"))
        await prompt.dispatch(KeypressEvent(char="٣", key=Key(name="٣", char="٣")))

        assert prompt.handle_input(Key(name="٣", char="٣")) is False
        assert prompt.pointer == 0
        assert output.frames == []

    def test_parsed_terminal_keys_drive_the_prompt(self, make_prompt) -> None:
        """Raw terminal bytes parse into working keys."""
        prompt = make_prompt()
        prompt.handle_input(parse_key(b"\x1b[B"))
        prompt.handle_input(parse_key(b" "))

        assert prompt.choices.checked_values() == ["choice 2"]


# ---------------------------------------------------------------------------
# Resolution and validation
# ---------------------------------------------------------------------------


class TestResolution:
    @pytest.mark.asyncio
    async def test_duplicate_line_fires_callback_once(self, make_prompt, source) -> None:
        """A second submit does not fire the callback again."""
        calls = []
        prompt = make_prompt()
        source.keypress(" ", "space").line().line()

        answer = await prompt.run(calls.append, source=source)
        await prompt.dispatch(LineEvent())

        assert calls == [["choice 1"]]
        assert answer == ["choice 1"]
        assert prompt.state is PromptState.RESOLVED

    @pytest.mark.asyncio
    async def test_events_after_resolution_do_not_mutate(self, make_prompt) -> None:
        """Events after resolution change nothing."""
        prompt = make_prompt()
        await prompt.dispatch(LineEvent())
        await prompt.dispatch(KeypressEvent(char=" ", key=KEY_SPACE))

        assert prompt.answer == []
        assert prompt.choices.checked_values() == []

    @pytest.mark.asyncio
    async def test_async_callback_is_awaited(self, make_prompt, source) -> None:
        """An async callback is awaited with the answer."""
        received = []

        async def callback(answer):
            received.append(answer)

        source.line()
        await make_prompt(default=["choice 3"]).run(callback, source=source)

        assert received == [["choice 3"]]

    @pytest.mark.asyncio
    async def test_validation_rejection_keeps_waiting(self, make_prompt, source, output) -> None:
        """A rejected submit shows the message and accepts further input."""
        prompt = make_prompt(validate=lambda values: bool(values) or "Pick at least one")
        source.line().keypress(" ", "space").line()

        answer = await prompt.run(source=source)

        assert answer == ["choice 1"]
        assert ">> Pick at least one" in output.text

    @pytest.mark.asyncio
    async def test_rejection_surfaces_error_and_stays_awaiting(self, make_prompt, output) -> None:
        """A False verdict uses the configured invalid message."""
        prompt = make_prompt(validate=lambda values: False)
        await prompt.dispatch(LineEvent())

        assert prompt.state is PromptState.AWAITING_INPUT
        assert prompt.error == "Please enter a valid value"
        assert output.last.endswith(">> Please enter a valid value")

    @pytest.mark.asyncio
    async def test_error_clears_after_next_keypress(self, make_prompt, output) -> None:
        """The error line goes away on the next accepted key."""
        prompt = make_prompt(validate=lambda values: "nope")
        await prompt.dispatch(LineEvent())
        await prompt.dispatch(KeypressEvent(key=KEY_DOWN))

        assert prompt.error is None
        assert ">>" not in output.last

    @pytest.mark.asyncio
    async def test_async_validator(self, make_prompt, source) -> None:
        """Async validators are awaited."""
        async def validate(values):
            return len(values) == 2 or "Pick two"

        prompt = make_prompt(validate=validate)
        source.keypress(" ", "space").line()
        source.keypress(None, "down").keypress(" ", "space").line()

        assert await prompt.run(source=source) == ["choice 1", "choice 2"]

    @pytest.mark.asyncio
    async def test_raising_validator_is_a_rejection(self, make_prompt) -> None:
        """A validator exception becomes the error line."""
        def validate(values):
            raise RuntimeError("backend down")

        prompt = make_prompt(validate=validate)
        await prompt.dispatch(LineEvent())

        assert prompt.error == "backend down"
        assert not prompt.done

    @pytest.mark.asyncio
    async def test_validator_sees_checked_values(self, make_prompt) -> None:
        """The validator receives the checked values in order."""
        seen = []
        prompt = make_prompt(default=[True, False, True], validate=lambda v: seen.append(v) or True)
        await prompt.dispatch(LineEvent())

        assert seen == [["choice 1", "choice 3"]]
        assert prompt.done

    @pytest.mark.asyncio
    async def test_filter_transforms_answer(self, make_prompt, source) -> None:
        """The filter result is what the prompt resolves to."""
        prompt = make_prompt(filter=lambda values: [v.upper() for v in values])
        source.keypress(" ", "space").line()

        assert await prompt.run(source=source) == ["CHOICE 1"]

    @pytest.mark.asyncio
    async def test_closed_source_aborts(self, make_prompt, source) -> None:
        """Closing the input before submit aborts the prompt."""
        source.keypress(" ", "space")
        source.close()

        with pytest.raises(PromptAbortedError):
            await make_prompt().run(source=source)

    @pytest.mark.asyncio
    async def test_interrupt_key_aborts(self, make_prompt, source) -> None:
        """Ctrl+C aborts without calling the callback."""
        calls = []
        source.keypress("\x03", "ctrl+c").line()

        with pytest.raises(PromptAbortedError):
            await make_prompt().run(calls.append, source=source)
        assert calls == []

    @pytest.mark.asyncio
    async def test_run_after_resolution_is_rejected(self, make_prompt, source) -> None:
        """A resolved prompt cannot be run again."""
        prompt = make_prompt()
        source.line()
        await prompt.run(source=source)

        with pytest.raises(CheckboxPromptError):
            await prompt.run(source=QueueInput())


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRendering:
    @pytest.mark.asyncio
    async def test_first_frame_shows_help(self, make_prompt, output) -> None:
        """The help hint is only on the first frame."""
        prompt = make_prompt()
        await prompt.dispatch(KeypressEvent(key=KEY_DOWN))
        await prompt.dispatch(KeypressEvent(key=KEY_DOWN))

        assert len(output.frames) == 2
        assert "(Press <space> to select)" in output.frames[0]
        assert "(Press <space> to select)" not in output.frames[-1]

    def test_frame_lists_every_entry(self, make_prompt) -> None:
        """The frame shows header, choices and separators."""
        prompt = make_prompt(["a", Separator(), {"name": "b", "checked": True}])

        assert prompt.render() == [
            "? Pick some (Press <space> to select)",
            "❯◯ a",
            "--------",
            " ◉ b",
        ]

    @pytest.mark.asyncio
    async def test_resolved_frame_summarises_names(self, make_prompt, source, output) -> None:
        """The final frame lists the checked choice names."""
        prompt = make_prompt([{"name": "Alpha", "value": 1}, {"name": "Beta", "value": 2}])
        source.keypress(" ", "space").keypress(None, "down").keypress(" ", "space").line()

        assert await prompt.run(source=source) == [1, 2]
        assert output.last == "? Pick some Alpha, Beta"

    def test_colour_is_applied_when_enabled(self, output) -> None:
        """Colour config adds ANSI styling."""
        prompt = CheckboxPrompt("Q", ["a"], output=output, config=PromptConfig(color=True))

        assert "\x1b[" in "\n".join(prompt.render())

    @pytest.mark.asyncio
    async def test_drawn_prompt_is_clean(self, make_prompt, output) -> None:
        """A frame is only written while the prompt is dirty."""
        prompt = make_prompt()
        assert prompt.dirty is True

        await prompt.dispatch(KeypressEvent(key=KEY_DOWN))

        assert prompt.dirty is False
        assert len(output.frames) == 1


class TestConstruction:
    def test_bad_default_fails_fast(self, make_prompt) -> None:
        """A wrong-length boolean default fails at construction."""
        with pytest.raises(InvalidDefaultShapeError):
            make_prompt(default=[True])

    def test_default_must_be_a_list(self, make_prompt) -> None:
        """A string default fails at construction."""
        with pytest.raises(InvalidDefaultShapeError):
            make_prompt(default="choice 1")

    def test_initial_state(self, make_prompt) -> None:
        """A new prompt is awaiting input with no answer."""
        prompt = make_prompt()

        assert prompt.state is PromptState.AWAITING_INPUT
        assert prompt.done is False
        assert prompt.answer is None
        assert prompt.error is None

    def test_unfocused_prompt_ignores_keys(self, make_prompt) -> None:
        """Keys are dropped while the prompt is not focused."""
        prompt = make_prompt()
        prompt.focused = False

        assert prompt.handle_input(KEY_SPACE) is False
        assert prompt.choices.checked_values() == []
        prompt.focused = True
        assert prompt.handle_input(KEY_SPACE) is True
