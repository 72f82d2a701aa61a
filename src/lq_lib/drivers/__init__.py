# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from .selector import DriverSelector, UserChoices

__all__ = ["DriverSelector", "UserChoices"]
