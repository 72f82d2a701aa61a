# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from lq_lib.core.answers import AnswerSource
from lq_lib.core.config import CFG
from lq_lib.core.logger import get_logger
from lq_lib.properties.host_profile import HostProfile
from lq_lib.properties.queue_definition import QueueDefinition
from lq_lib.properties.queue_plan import QueuePlan

logger = get_logger(__name__)


class QueuePlanBuilder:
    """
    Collects queue definitions from the operator and validates them against the host.

    Attributes:
        _profile (HostProfile): Capacity of the host the workers will run on.
        _answers (AnswerSource): Provider of the operator's answers.
    """

    def __init__(self, profile: HostProfile, answers: AnswerSource):
        self._profile = profile
        self._answers = answers

    def askQueueCount(self) -> int:
        """
        Ask how many different queues should be configured.

        Raises:
            LQError: If the answer is not a positive integer.
        """
        return self._answers.askInt(
            "queue_count",
            "How many different queue types do you want to configure?",
            default=1,
            minimum=1,
        )

    def build(self, count: int) -> QueuePlan:
        """
        Collect `count` queue definitions.

        Args:
            count (int): Number of queues to define.

        Returns:
            QueuePlan: The definitions in the order they were entered.

        Raises:
            LQError: If any answer is invalid or a queue name is repeated.
        """
        plan = QueuePlan()
        for slot in range(1, count + 1):
            queue = self._buildQueue(slot)
            plan.add(queue)
            logger.info(
                f"Queue '{queue.name}': {queue.process_count} processes, "
                f"priority {queue.priority}, max time {queue.max_runtime_seconds}s."
            )

        return plan

    def _buildQueue(self, slot: int) -> QueueDefinition:
        """
        Collect the definition of the queue in the given 1-based slot.
        """
        defaults = CFG.queue_defaults
        key = f"queues.{slot - 1}"

        if slot == 1:
            default_name = defaults.first_name
            default_processes = self._profile.recommended_processes
        else:
            default_name = defaults.name_pattern % slot
            default_processes = defaults.other_processes

        name = self._answers.askText(f"{key}.name", "Queue name", default_name)

        logger.info(
            f"This server can handle up to {self._profile.recommended_processes} processes efficiently. "
            "Light workloads (emails, notifications) need 1-2 processes, medium workloads "
            "(file processing, API calls) 3-5 and heavy workloads (image processing, reports) 5+."
        )
        processes = self._answers.askInt(
            f"{key}.processes",
            f"Number of processes for '{name}'",
            default=default_processes,
            minimum=1,
        )
        processes = self._validateProcessCount(f"{key}.confirm_overload", processes)

        priority = self._answers.askInt(
            f"{key}.priority",
            f"Priority for '{name}' ({defaults.min_priority}=highest, {defaults.max_priority}=lowest)",
            default=defaults.priority,
            minimum=defaults.min_priority,
            maximum=defaults.max_priority,
        )
        max_runtime = self._answers.askInt(
            f"{key}.max_runtime",
            "Max execution time in seconds",
            default=defaults.max_runtime,
            minimum=1,
        )

        return QueueDefinition(
            name=name,
            process_count=processes,
            priority=priority,
            max_runtime_seconds=max_runtime,
        )

    def _validateProcessCount(self, key: str, processes: int) -> int:
        """
        Require confirmation for a process count that may overload the host.

        If the operator declines, the recommended number of processes is used instead.

        Returns:
            int: The process count to use.
        """
        recommended = self._profile.recommended_processes
        if processes <= recommended * CFG.queue_defaults.overload_factor:
            return processes

        logger.warning(f"{processes} processes might overload your server!")
        if self._answers.confirm(key, f"Continue with {processes} processes?"):
            return processes

        logger.info(f"Reset to recommended: {recommended} processes.")
        return recommended
