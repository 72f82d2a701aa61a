# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the lq command-line tool.

This package profiles the host, collects the queue, cache and session drivers
and the queues of a Laravel application, renders one Supervisor program per
queue, and drives the surrounding provisioning steps (Supervisor, Composer,
permissions, Redis) through external commands. All lq CLI commands ultimately
delegate to the functionality implemented here.
"""

from .lq import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "core",
    "drivers",
    "emit",
    "monitor",
    "plan",
    "profile",
    "properties",
    "provision",
    "workers",
]
