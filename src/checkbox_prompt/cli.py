"""
Command-line interface: ask a checkbox question and print the answer.

    checkbox-prompt -m "Deploy which regions?" -c eu -c us -c apac -d eu
    checkbox-prompt --choices-file services.yaml --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from rich.console import Console

from checkbox_prompt.config import PromptConfig
from checkbox_prompt.exceptions import CheckboxPromptError, PromptAbortedError
from checkbox_prompt.logging import get_logger, setup_logging
from checkbox_prompt.prompt import CheckboxPrompt

console = Console()
err_console = Console(stderr=True)
logger = get_logger("cli")

EXIT_USAGE = 2
EXIT_ABORTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Ask an interactive checkbox question in the terminal",
        prog="checkbox-prompt",
    )
    parser.add_argument(
        "-m",
        "--message",
        help="Question to display",
    )
    parser.add_argument(
        "-c",
        "--choice",
        action="append",
        dest="choices",
        default=[],
        help="Choice name (repeatable)",
    )
    parser.add_argument(
        "--choices-file",
        type=Path,
        help="YAML file with a list of choices, or a mapping with message/choices/default",
    )
    parser.add_argument(
        "-d",
        "--default",
        action="append",
        dest="defaults",
        default=[],
        help="Value to pre-check (repeatable)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Prompt config YAML (default: $CHECKBOX_PROMPT_CONFIG or ~/.checkbox-prompt/config.yaml)",
    )
    parser.add_argument(
        "--min",
        type=int,
        default=0,
        dest="min_selected",
        help="Require at least this many selections",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the answer as a JSON array",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    return parser


def load_choices_file(path: Path) -> dict[str, Any]:
    """
    Read a choices file.

    The file holds either a bare list of choice specs or a mapping with
    ``choices`` and optional ``message`` and ``default`` keys.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if isinstance(data, list):
        return {"choices": data}
    if isinstance(data, dict) and isinstance(data.get("choices"), list):
        return data
    raise CheckboxPromptError(f"{path}: expected a list of choices or a mapping with 'choices'")


def min_selected_validator(minimum: int):
    def validate(values: list[Any]) -> bool | str:
        if len(values) >= minimum:
            return True
        return f"Select at least {minimum} option{'s' if minimum != 1 else ''}"

    return validate


def build_prompt(args: argparse.Namespace) -> CheckboxPrompt:
    spec: dict[str, Any] = {}
    if args.choices_file is not None:
        spec = load_choices_file(args.choices_file)

    choices = list(spec.get("choices", [])) + list(args.choices)
    if not choices:
        raise CheckboxPromptError("No choices given (use --choice or --choices-file)")

    message = args.message or spec.get("message") or "Select options"
    default = args.defaults or spec.get("default")
    validate = min_selected_validator(args.min_selected) if args.min_selected > 0 else None

    return CheckboxPrompt(
        message,
        choices,
        default=default,
        validate=validate,
        config=PromptConfig.load(args.config),
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    if args.verbose:
        setup_logging("DEBUG")

    try:
        prompt = build_prompt(args)
    except (CheckboxPromptError, OSError, yaml.YAMLError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        sys.exit(EXIT_USAGE)

    try:
        answer = asyncio.run(prompt.run())
    except PromptAbortedError as e:
        logger.debug("Prompt aborted: %s", e.reason)
        err_console.print("[dim]Aborted.[/dim]")
        sys.exit(EXIT_ABORTED)

    if args.json:
        console.print_json(json.dumps(answer))
    else:
        for value in answer:
            console.print(str(value), highlight=False, markup=False)


if __name__ == "__main__":
    main()
