# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Self

from .error import LQError
from .logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChainResult:
    """
    Outcome of a FallbackChain.

    Attributes:
        strategy (str | None): Name of the attempt that succeeded, None if all failed.
        value (Any): Return value of the successful attempt.
        errors (dict[str, LQError]): Errors of the failed attempts, in evaluation order.
    """

    strategy: str | None
    value: Any = None
    errors: dict[str, LQError] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        """True if any of the attempts succeeded."""
        return self.strategy is not None


class FallbackChain:
    """
    Ordered list of alternative ways to perform one operation.

    Attempts are evaluated in the order they were added until one of them finishes
    without raising an `LQError`. Any other exception propagates immediately.
    """

    def __init__(self, description: str):
        self._description = description
        self._attempts: list[tuple[str, Callable, tuple, dict]] = []

    def add(self, name: str, func: Callable, *args: Any, **kwargs: Any) -> Self:
        """
        Append an attempt to the chain.

        Args:
            name (str): Name reported when this attempt succeeds.
            func (Callable): Function performing the attempt.
            *args (Any): Positional arguments forwarded to `func`.
            **kwargs (Any): Keyword arguments forwarded to `func`.

        Returns:
            FallbackChain: The chain itself.
        """
        self._attempts.append((name, func, args, kwargs))
        return self

    def run(self) -> ChainResult:
        """
        Evaluate the attempts until one succeeds.

        Returns:
            ChainResult: The successful strategy, or a result with no strategy
                if every attempt failed.
        """
        errors: dict[str, LQError] = {}
        for name, func, args, kwargs in self._attempts:
            logger.debug(f"{self._description}: trying '{name}'.")
            try:
                value = func(*args, **kwargs)
            except LQError as e:
                logger.warning(f"{self._description}: '{name}' failed. {e}")
                errors[name] = e
                continue

            logger.debug(f"{self._description}: '{name}' succeeded.")
            return ChainResult(strategy=name, value=value, errors=errors)

        return ChainResult(strategy=None, errors=errors)
