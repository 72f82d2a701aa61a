# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Inspection of the host capacity.

This module provides `HostProfiler`, which reads the CPU count and memory of the
host and recommends the number of queue worker processes, and `ProfilePresenter`,
which renders the result. The `lq profile` command is defined in `cli.py`.
"""

from .presenter import ProfilePresenter
from .profiler import HostProfiler

__all__ = ["HostProfiler", "ProfilePresenter"]
