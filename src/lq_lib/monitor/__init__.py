# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from .installer import QueueMonitorInstaller

__all__ = ["QueueMonitorInstaller"]
