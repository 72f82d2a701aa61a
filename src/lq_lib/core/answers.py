# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Sources of operator answers.

Every question lq asks goes through an `AnswerSource`. The interactive source
prompts on the terminal, the file source reads the answers from a YAML file,
which allows unattended runs and makes the planning logic testable.

Each question is identified by a dotted key (e.g. `queue_driver` or
`queues.1.processes`, where list items are addressed by their index).
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Self

import click
import yaml
from rich.console import Console

from .common import load_yaml_loader, yes_or_no_prompt
from .error import LQError
from .logger import get_logger

logger = get_logger(__name__)


class AnswerSource(ABC):
    """
    Abstract provider of answers to lq's questions.
    """

    @abstractmethod
    def _answer(self, key: str, prompt: str, default: str | None) -> str:
        """
        Return the raw answer to a question.

        Args:
            key (str): Identifier of the question.
            prompt (str): Text of the question.
            default (str | None): Answer used if none is given. None means the answer is required.
        """
        pass

    @abstractmethod
    def confirm(self, key: str, prompt: str) -> bool:
        """
        Ask a yes/no question. The default answer is 'no'.

        Args:
            key (str): Identifier of the question.
            prompt (str): Text of the question.

        Returns:
            bool: True if the answer is 'yes'.
        """
        pass

    def _showMenu(self, title: str, options: list[str]) -> None:
        """Display a numbered menu. Non-interactive sources do not display anything."""
        pass

    def askText(self, key: str, prompt: str, default: str | None = None) -> str:
        """
        Ask for a free-text answer.

        Returns:
            str: The answer with surrounding whitespace stripped.
        """
        return self._answer(key, prompt, default).strip()

    def askInt(
        self,
        key: str,
        prompt: str,
        default: int | None = None,
        minimum: int | None = None,
        maximum: int | None = None,
    ) -> int:
        """
        Ask for an integer answer.

        Raises:
            LQError: If the answer is not an integer or lies outside of the allowed range.
        """
        raw = self._answer(key, prompt, None if default is None else str(default))
        try:
            value = int(raw.strip())
        except ValueError:
            raise LQError(f"Invalid answer '{raw}' to '{prompt}': expected an integer.")

        if (minimum is not None and value < minimum) or (
            maximum is not None and value > maximum
        ):
            bounds = f"{'' if minimum is None else minimum}-{'' if maximum is None else maximum}"
            raise LQError(
                f"Invalid answer '{value}' to '{prompt}': expected a value in range {bounds}."
            )

        return value

    def askChoice(
        self, key: str, title: str, options: list[str], default: int | None = None
    ) -> int:
        """
        Ask the operator to pick one of the numbered options.

        Args:
            key (str): Identifier of the question.
            title (str): Heading of the menu.
            options (list[str]): Descriptions of the options, numbered from 1.
            default (int | None): Option picked if no answer is given.

        Returns:
            int: The 1-based number of the selected option.

        Raises:
            LQError: If the selection is not one of the offered options.
        """
        self._showMenu(title, options)
        prompt = f"Select {title.lower()} (1-{len(options)})"
        raw = self._answer(key, prompt, None if default is None else str(default))

        try:
            choice = int(raw.strip())
        except ValueError:
            choice = None

        if choice is None or not 1 <= choice <= len(options):
            raise LQError(f"Invalid {title.lower()} selection '{raw}'.")

        return choice


class InteractiveAnswers(AnswerSource):
    """
    Asks the operator on the terminal.
    """

    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    def _answer(self, key: str, prompt: str, default: str | None) -> str:
        return click.prompt(prompt, default=default, type=str, show_default=True)

    def confirm(self, key: str, prompt: str) -> bool:
        return yes_or_no_prompt(prompt)

    def _showMenu(self, title: str, options: list[str]) -> None:
        self._console.print(f"\n[bold]{title} options:[/bold]")
        for i, option in enumerate(options, start=1):
            self._console.print(f"  {i}) {option}")


class FileAnswers(AnswerSource):
    """
    Reads answers from a mapping, typically loaded from a YAML answer file.

    Questions without an answer fall back to their default.
    Unanswered confirmations are treated as 'no'.
    """

    def __init__(self, data: dict[str, Any]):
        self._data = data

    @classmethod
    def fromFile(cls, path: Path) -> Self:
        """
        Load answers from a YAML file.

        Raises:
            LQError: If the file does not exist or is not a valid YAML mapping.
        """
        try:
            with path.open() as f:
                data = yaml.load(f, Loader=load_yaml_loader())
        except FileNotFoundError:
            raise LQError(f"Answer file '{path}' does not exist.")
        except (OSError, yaml.YAMLError) as e:
            raise LQError(f"Could not read answer file '{path}': {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise LQError(f"Answer file '{path}' must contain a mapping.")

        logger.debug(f"Loaded answers from '{path}': {data}.")
        return cls(data)

    def _answer(self, key: str, prompt: str, default: str | None) -> str:
        value = self._lookup(key)
        if value is None:
            if default is None:
                raise LQError(f"The answer file does not answer '{prompt}' ({key}).")
            value = default

        logger.debug(f"{prompt}: {value}")
        return str(value)

    def confirm(self, key: str, prompt: str) -> bool:
        value = self._lookup(key)
        if value is None:
            logger.debug(f"{prompt}: no")
            return False

        if not isinstance(value, bool):
            raise LQError(f"Invalid answer '{value}' to '{prompt}' ({key}): expected true or false.")

        logger.debug(f"{prompt}: {'yes' if value else 'no'}")
        return value

    def _lookup(self, key: str) -> Any:
        """Follow a dotted key through nested mappings and lists."""
        node: Any = self._data
        for part in key.split("."):
            if isinstance(node, dict):
                node = node.get(part)
            elif isinstance(node, list) and part.isdigit() and int(part) < len(node):
                node = node[int(part)]
            else:
                return None

            if node is None:
                return None

        return node
