"""Exceptions raised by checkbox-prompt."""

from __future__ import annotations


class CheckboxPromptError(Exception):
    """Base class for all prompt errors."""


class ChoiceSpecError(CheckboxPromptError, ValueError):
    """A raw choice spec could not be turned into a choice."""


class InvalidDefaultShapeError(CheckboxPromptError, ValueError):
    """The ``default`` argument does not fit the choice list."""


class PromptAbortedError(CheckboxPromptError):
    """Raised by ``run()`` when input ends or is interrupted before an answer."""

    def __init__(self, reason: str = "Prompt aborted") -> None:
        super().__init__(reason)
        self.reason = reason
