# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Definition of a single Laravel queue and the worker processes serving it.
"""

from dataclasses import dataclass

from lq_lib.core.common import validate_name
from lq_lib.core.config import CFG
from lq_lib.core.error import LQError


@dataclass(frozen=True)
class QueueDefinition:
    """
    A named queue served by a group of Supervisor-managed worker processes.

    Attributes:
        name (str): Name of the queue. Used in file paths and in the name of the
            Supervisor program.
        process_count (int): Number of worker processes.
        priority (int): Priority of the queue, 1 is the highest, 5 the lowest.
        max_runtime_seconds (int): Number of seconds after which a worker is recycled.
    """

    name: str
    process_count: int
    priority: int = CFG.queue_defaults.priority
    max_runtime_seconds: int = CFG.queue_defaults.max_runtime

    def __post_init__(self):
        object.__setattr__(self, "name", validate_name(self.name, "queue"))

        if self.process_count < 1:
            raise LQError(
                f"Queue '{self.name}' must have at least one process, got '{self.process_count}'."
            )

        lowest, highest = CFG.queue_defaults.min_priority, CFG.queue_defaults.max_priority
        if not lowest <= self.priority <= highest:
            raise LQError(
                f"Priority of queue '{self.name}' must be between {lowest} and {highest}, got '{self.priority}'."
            )

        if self.max_runtime_seconds < 1:
            raise LQError(
                f"Max runtime of queue '{self.name}' must be a positive number of seconds, got '{self.max_runtime_seconds}'."
            )

    @property
    def supervisor_priority(self) -> int:
        """Priority of the Supervisor program. Lower values start first and stop last."""
        return CFG.worker.priority_base + self.priority * CFG.worker.priority_step

    @property
    def stop_wait_seconds(self) -> int:
        """Seconds Supervisor waits for a worker to stop before killing it."""
        return self.max_runtime_seconds + CFG.worker.stop_wait_margin

    @property
    def command_timeout(self) -> int:
        """Seconds a single job may run before the worker kills it."""
        return self.max_runtime_seconds + CFG.worker.timeout_margin
