"""
checkbox-prompt: an interactive terminal checkbox prompt.

Example:
    import asyncio
    from checkbox_prompt import CheckboxPrompt, Separator

    prompt = CheckboxPrompt(
        "Which services should start?",
        ["api", "worker", Separator(), {"name": "legacy", "disabled": "retired"}],
        default=["api"],
    )
    services = asyncio.run(prompt.run())
"""

from checkbox_prompt.choices import Choice, ChoiceList, Separator
from checkbox_prompt.config import PromptConfig
from checkbox_prompt.events import EventSource, KeypressEvent, LineEvent, QueueInput
from checkbox_prompt.exceptions import (
    CheckboxPromptError,
    ChoiceSpecError,
    InvalidDefaultShapeError,
    PromptAbortedError,
)
from checkbox_prompt.logging import get_logger, setup_logging
from checkbox_prompt.prompt import CheckboxPrompt, PromptState

__version__ = "0.1.0"

__all__ = [
    # Prompt
    "CheckboxPrompt",
    "PromptState",
    # Model
    "Choice",
    "ChoiceList",
    "Separator",
    # Events
    "EventSource",
    "KeypressEvent",
    "LineEvent",
    "QueueInput",
    # Config
    "PromptConfig",
    # Errors
    "CheckboxPromptError",
    "ChoiceSpecError",
    "InvalidDefaultShapeError",
    "PromptAbortedError",
    # Logging
    "setup_logging",
    "get_logger",
]
