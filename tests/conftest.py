"""Shared pytest fixtures for checkbox-prompt tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from checkbox_prompt import CheckboxPrompt, PromptConfig, QueueInput
from checkbox_prompt.tui.ansi import strip_ansi


class FrameCollector:
    """Output collaborator that records every frame written to it."""

    def __init__(self) -> None:
        self.frames: list[str] = []

    def write(self, frame: str) -> FrameCollector:
        self.frames.append(frame)
        return self

    @property
    def text(self) -> str:
        return strip_ansi("\n".join(self.frames))

    @property
    def last(self) -> str:
        return strip_ansi(self.frames[-1]) if self.frames else ""


@pytest.fixture
def plain_config() -> PromptConfig:
    """Config with colour off, so frames can be compared as plain text."""
    return PromptConfig(color=False)


@pytest.fixture
def output() -> FrameCollector:
    return FrameCollector()


@pytest.fixture
def source() -> QueueInput:
    return QueueInput()


@pytest.fixture
def fixture_choices() -> list[str]:
    return ["choice 1", "choice 2", "choice 3"]


@pytest.fixture
def make_prompt(
    output: FrameCollector, plain_config: PromptConfig, fixture_choices: list[str]
) -> Callable[..., CheckboxPrompt]:
    """Build a prompt writing to the frame collector; choices default to the fixture list."""

    def factory(choices: list[Any] | None = None, **kwargs: Any) -> CheckboxPrompt:
        kwargs.setdefault("output", output)
        kwargs.setdefault("config", plain_config)
        return CheckboxPrompt(
            kwargs.pop("message", "Pick some"),
            fixture_choices if choices is None else choices,
            **kwargs,
        )

    return factory
