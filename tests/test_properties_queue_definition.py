# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import pytest

from lq_lib.core.error import LQError
from lq_lib.properties.queue_definition import QueueDefinition
from lq_lib.properties.queue_plan import QueuePlan


def test_queue_definition_defaults():
    queue = QueueDefinition(name="default", process_count=2)

    assert queue.priority == 3
    assert queue.max_runtime_seconds == 3600


def test_queue_definition_derived_values():
    queue = QueueDefinition(
        name="default", process_count=16, priority=1, max_runtime_seconds=3600
    )

    assert queue.supervisor_priority == 1000
    assert queue.stop_wait_seconds == 3720
    assert queue.command_timeout == 3660


@pytest.mark.parametrize("priority,expected", [(1, 1000), (3, 1020), (5, 1040)])
def test_queue_definition_supervisor_priority(priority, expected):
    queue = QueueDefinition(name="q", process_count=1, priority=priority)
    assert queue.supervisor_priority == expected


def test_queue_definition_name_is_stripped():
    assert QueueDefinition(name=" emails ", process_count=1).name == "emails"


@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"name": "", "process_count": 1}, "must not be empty"),
        ({"name": "bad name", "process_count": 1}, "Invalid queue name"),
        ({"name": "q", "process_count": 0}, "at least one process"),
        ({"name": "q", "process_count": 1, "priority": 0}, "between 1 and 5"),
        ({"name": "q", "process_count": 1, "priority": 6}, "between 1 and 5"),
        ({"name": "q", "process_count": 1, "max_runtime_seconds": 0}, "positive number"),
    ],
)
def test_queue_definition_invalid(kwargs, message):
    with pytest.raises(LQError, match=message):
        QueueDefinition(**kwargs)


def test_queue_plan_keeps_order():
    plan = QueuePlan(
        [
            QueueDefinition(name="default", process_count=4),
            QueueDefinition(name="emails", process_count=2),
            QueueDefinition(name="reports", process_count=1),
        ]
    )

    assert plan.names == ["default", "emails", "reports"]
    assert len(plan) == 3
    assert plan.total_processes == 7
    assert [q.name for q in plan] == plan.names


def test_queue_plan_rejects_duplicate_names():
    plan = QueuePlan([QueueDefinition(name="emails", process_count=2)])

    with pytest.raises(LQError, match="Queue 'emails' is defined more than once"):
        plan.add(QueueDefinition(name="emails", process_count=4))

    assert len(plan) == 1


def test_queue_plan_queues_returns_copy():
    plan = QueuePlan([QueueDefinition(name="default", process_count=1)])
    plan.queues.clear()

    assert len(plan) == 1


def test_queue_plan_empty():
    plan = QueuePlan()

    assert plan.names == []
    assert plan.total_processes == 0
