# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass

from lq_lib.core.answers import AnswerSource
from lq_lib.core.error import LQError
from lq_lib.core.logger import get_logger
from lq_lib.properties.drivers import DriverSelection, QueueDriver, StoreDriver

logger = get_logger(__name__)


@dataclass(frozen=True)
class UserChoices:
    """
    Raw menu selections of the operator (1-based option numbers).
    """

    queue: int = 1
    cache: int = 1
    session: int = 1


class DriverSelector:
    """
    Maps the operator's menu selections to queue, cache and session drivers.
    """

    # (description, primary driver, fallback driver)
    QUEUE_OPTIONS: list[tuple[str, QueueDriver, QueueDriver | None]] = [
        ("Database - Simple, no additional setup", QueueDriver.DATABASE, None),
        ("Redis - Fast, recommended for production", QueueDriver.REDIS, None),
        (
            "Both - Database as fallback, Redis as primary",
            QueueDriver.REDIS,
            QueueDriver.DATABASE,
        ),
    ]

    CACHE_OPTIONS: list[tuple[str, StoreDriver]] = [
        ("File - Simple file-based caching", StoreDriver.FILE),
        ("Redis - Fast in-memory caching (recommended)", StoreDriver.REDIS),
        ("Database - Store cache in database", StoreDriver.DATABASE),
    ]

    SESSION_OPTIONS: list[tuple[str, StoreDriver]] = [
        ("File - Store sessions in files", StoreDriver.FILE),
        ("Redis - Fast session storage (recommended for multiple servers)", StoreDriver.REDIS),
        ("Database - Store sessions in database", StoreDriver.DATABASE),
    ]

    @staticmethod
    def collect(answers: AnswerSource) -> UserChoices:
        """
        Ask the operator for the three driver selections.

        Raises:
            LQError: If any selection is not one of the offered options.
        """
        queue = answers.askChoice(
            "queue_driver",
            "Queue driver",
            [o[0] for o in DriverSelector.QUEUE_OPTIONS],
            default=1,
        )
        cache = answers.askChoice(
            "cache_driver",
            "Cache driver",
            [o[0] for o in DriverSelector.CACHE_OPTIONS],
            default=1,
        )
        session = answers.askChoice(
            "session_driver",
            "Session driver",
            [o[0] for o in DriverSelector.SESSION_OPTIONS],
            default=1,
        )

        return UserChoices(queue=queue, cache=cache, session=session)

    @staticmethod
    def select(choices: UserChoices) -> DriverSelection:
        """
        Convert menu selections to a DriverSelection.

        Args:
            choices (UserChoices): The operator's selections.

        Returns:
            DriverSelection: The selected drivers.

        Raises:
            LQError: If any selection is out of range. Nothing is selected in that case.
        """
        _, queue_driver, fallback = DriverSelector._pick(
            DriverSelector.QUEUE_OPTIONS, choices.queue, "queue driver"
        )
        _, cache_driver = DriverSelector._pick(
            DriverSelector.CACHE_OPTIONS, choices.cache, "cache driver"
        )
        _, session_driver = DriverSelector._pick(
            DriverSelector.SESSION_OPTIONS, choices.session, "session driver"
        )

        selection = DriverSelection(
            queue_driver=queue_driver,
            queue_fallback=fallback,
            cache_driver=cache_driver,
            session_driver=session_driver,
        )

        logger.info(
            f"Queue driver: {selection.queue_driver}"
            + (f" (fallback: {fallback})" if fallback else "")
            + f", cache driver: {selection.cache_driver}"
            + f", session driver: {selection.session_driver}."
        )
        if selection.needs_in_memory_store:
            logger.info("Redis will be installed.")

        return selection

    @staticmethod
    def _pick(options: list, choice: int, what: str) -> tuple:
        if not 1 <= choice <= len(options):
            raise LQError(f"Invalid {what} selection '{choice}'.")
        return options[choice - 1]
