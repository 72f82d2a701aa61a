# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Callable
from typing import Any


class Repeater:
    """
    Apply one operation to every item of a list, isolating failures of single items.

    An exception raised for an item is passed to the handler registered for its type
    and the remaining items are processed afterwards. Exceptions without a handler
    stop the iteration.

    Attributes:
        items (list[Any]): Items to process, in order.
        encountered_errors (dict[int, BaseException]): Handled exceptions keyed by
            the index of the item that raised them.
        current_iteration (int): Index of the item being processed.

    Args:
        items (list[Any]): Items to process.
        func (Callable): Operation called as `func(item, *args, **kwargs)`.
        *args (Any): Extra positional arguments of `func`.
        **kwargs (Any): Extra keyword arguments of `func`.
    """

    def __init__(self, items: list[Any], func: Callable, *args: Any, **kwargs: Any):
        self.items = items
        self.encountered_errors: dict[int, BaseException] = {}
        self.current_iteration = 0

        self._func = func
        self._args = args
        self._kwargs = kwargs
        self._handlers: list[tuple[type[BaseException], Callable]] = []

    def onException(self, exc_type: type[BaseException], handler: Callable) -> None:
        """
        Handle exceptions of `exc_type` (including its subclasses) with `handler`.

        The handler is called as `handler(exception, repeater)`. If several registered
        types match an exception, the one registered first wins.
        """
        self._handlers.append((exc_type, handler))

    def run(self) -> None:
        """
        Process all items.

        Raises:
            BaseException: Any exception for which no handler is registered.
        """
        for i, item in enumerate(self.items):
            self.current_iteration = i
            try:
                self._func(item, *self._args, **self._kwargs)
            except BaseException as e:
                handler = self._handlerFor(e)
                if handler is None:
                    raise

                self.encountered_errors[i] = e
                handler(e, self)

    def _handlerFor(self, exception: BaseException) -> Callable | None:
        for exc_type, handler in self._handlers:
            if isinstance(exception, exc_type):
                return handler
        return None
