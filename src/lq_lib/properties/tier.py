# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Coarse classification of host capacity.
"""

from enum import Enum

from lq_lib.core.config import CFG


class Tier(Enum):
    """
    Capacity tier of the host, used to pick the default worker concurrency.
    """

    BASIC = 1
    MEDIUM = 2
    HIGH = 3

    def __str__(self):
        return self.name.lower()

    def describe(self) -> str:
        """Return a human-readable description of the tier."""
        if self == Tier.BASIC:
            return "Basic"
        return f"{self.name.capitalize()}-performance"

    @property
    def color(self) -> str:
        """Style used to display the tier."""
        return getattr(CFG.tier_colors, str(self))
