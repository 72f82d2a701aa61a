# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration of Supervisor-managed Laravel queue workers.

This module ties the host profiler, the driver selector, the queue plan builder,
the Supervisor program emitter and the queue monitor installer into a single
pipeline (`WorkerConfigurator`) and defines the `lq workers` command.
"""

from .configurator import WorkerConfigurator, WorkersReport
from .presenter import PlanPresenter

__all__ = ["PlanPresenter", "WorkerConfigurator", "WorkersReport"]
