# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for the lq library.

This module provides helpers for YAML I/O, interactive confirmation,
panel sizing and validation of names that end up in file paths
and Supervisor program names.
"""

import re
from functools import lru_cache

import readchar
import yaml
from rich.console import Console
from rich.live import Live
from rich.text import Text

from .error import LQError
from .logger import get_logger

logger = get_logger(__name__)

# characters allowed in project and queue names
_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


@lru_cache(maxsize=1)
def load_yaml_dumper() -> type[yaml.Dumper]:
    """Return the fastest available YAML dumper (CDumper if possible)."""
    try:
        from yaml import CDumper as Dumper  # type: ignore[attr-defined]

        logger.debug("Loaded YAML CDumper.")
    except ImportError:
        from yaml import Dumper

        logger.debug("Loaded default YAML dumper.")
    return Dumper


@lru_cache(maxsize=1)
def load_yaml_loader() -> type[yaml.SafeLoader]:
    """Return the fastest available safe YAML loader (CSafeLoader if possible)."""
    try:
        from yaml import CSafeLoader as SafeLoader  # type: ignore[attr-defined]

        logger.debug("Loaded YAML CLoader.")
    except ImportError:
        from yaml import SafeLoader

        logger.debug("Loaded default YAML loader.")

    return SafeLoader


def yes_or_no_prompt(prompt: str) -> bool:
    """
    Display an interactive yes/no prompt to the user and return the selection.

    The prompt highlights the pressed key ('y' in green for yes, 'N' in red for no)
    and defaults to 'No' if the user presses any key other than 'y'.

    Args:
        prompt (str): The text to display as the question.

    Returns:
        bool: True if the user selects 'yes' (presses 'y'), False otherwise.
    """
    prompt = f"   {prompt} "
    question = Text("PROMPT", style="magenta") + Text(prompt, style="default")

    with Live(question + Text("[y/N]", style="bold default"), refresh_per_second=1) as live:
        key = readchar.readkey().lower()

        if key == "y":
            choice = (
                Text("[", style="bold default")
                + Text("y", style="bold green")
                + Text("/N]", style="bold default")
            )
        else:
            choice = (
                Text("[y/", style="bold default")
                + Text("N", style="bold red")
                + Text("]", style="bold default")
            )

        live.update(question + choice)

    return key == "y"


def validate_name(name: str, what: str) -> str:
    """
    Make sure that a name can be used in file paths and Supervisor program names.

    Args:
        name (str): The name to check. Surrounding whitespace is stripped.
        what (str): Description of the named object used in the error message.

    Returns:
        str: The stripped name.

    Raises:
        LQError: If the name is empty or contains unsupported characters.
    """
    name = name.strip()
    if not name:
        raise LQError(f"The {what} name must not be empty.")

    if not _NAME_PATTERN.fullmatch(name):
        raise LQError(
            f"Invalid {what} name '{name}'. Use letters, digits, '_', '-' and '.' only."
        )

    return name


def project_name_from_repository(url: str) -> str:
    """
    Derive the project directory name from a git repository URL.

    Examples:
        "https://github.com/acme/shop.git" -> "shop"
        "git@github.com:acme/shop"         -> "shop"

    Args:
        url (str): The repository URL.

    Returns:
        str: The name of the directory git clones the repository into.
    """
    name = url.rstrip("/").rsplit("/", maxsplit=1)[-1].rsplit(":", maxsplit=1)[-1]
    name = name.removesuffix(".git")
    return validate_name(name, "project")


def get_panel_width(
    console: Console, factor: int, min_width: int | None, max_width: int | None
) -> int:
    """
    Calculate the width of a panel relative to the console width, constrained by
    optional minimum and maximum width values.

    Args:
        console (Console): A rich Console-like object that provides terminal size.
        factor (int): A divisor used to scale down the terminal width.
        min_width (int | None): The minimum allowable panel width.
        max_width (int | None): The maximum allowable panel width.

    Returns:
        int: The computed panel width after applying scaling and bounds.
    """
    panel_width = console.size.width // factor
    if min_width is not None:
        panel_width = max(panel_width, min_width)
    if max_width is not None:
        panel_width = min(panel_width, max_width)

    return panel_width
