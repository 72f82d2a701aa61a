# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Iterator

from lq_lib.core.error import LQError
from lq_lib.core.logger import get_logger

from .queue_definition import QueueDefinition

logger = get_logger(__name__)


class QueuePlan:
    """
    Ordered collection of queue definitions with unique names.

    The order in which queues are added is the order in which they are configured.
    """

    def __init__(self, queues: list[QueueDefinition] | None = None):
        self._queues: list[QueueDefinition] = []
        for queue in queues or []:
            self.add(queue)

    def add(self, queue: QueueDefinition) -> None:
        """
        Append a queue definition to the plan.

        Raises:
            LQError: If the plan already contains a queue with the same name.
        """
        if queue.name in self.names:
            raise LQError(
                f"Queue '{queue.name}' is defined more than once. Queue names must be unique."
            )

        logger.debug(f"Added queue to the plan: {queue}.")
        self._queues.append(queue)

    @property
    def queues(self) -> list[QueueDefinition]:
        """Queue definitions in the order they were added."""
        return list(self._queues)

    @property
    def names(self) -> list[str]:
        """Names of the queues in the plan."""
        return [q.name for q in self._queues]

    @property
    def total_processes(self) -> int:
        """Number of worker processes across all queues."""
        return sum(q.process_count for q in self._queues)

    def __iter__(self) -> Iterator[QueueDefinition]:
        return iter(self._queues)

    def __len__(self) -> int:
        return len(self._queues)
