# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import re
from dataclasses import dataclass
from typing import Self

from lq_lib.core.error import LQError


@dataclass(init=False, frozen=True)
class Size:
    """
    Represents an amount of memory.

    The value is stored internally in kibibytes, the unit used by the kernel
    in /proc/meminfo.
    """

    value: int

    _unit_map = {
        "kb": 1,
        "mb": 1024,
        "gb": 1024 * 1024,
        "tb": 1024 * 1024 * 1024,
    }

    def __init__(self, value: int, unit: str = "kb"):
        unit = unit.lower()
        if unit not in self._unit_map:
            raise LQError(f"Unsupported unit for size '{unit}'.")

        object.__setattr__(self, "value", value * self._unit_map[unit])

    @classmethod
    def fromString(cls, s: str) -> Self:
        """
        Create a Size object from a string.

        Args:
            s (str): A string representation of the size, e.g., "16318412 kB", "8gb", "4G".

        Returns:
            Size: A Size instance with parsed value and unit.

        Raises:
            LQError: If the string cannot be parsed or contains an invalid unit.
        """
        match = re.match(r"^\s*(\d+)\s*([a-zA-Z]+)\s*$", s)
        if not match:
            raise LQError(f"Invalid size string: '{s}'.")
        value, unit = match.groups()

        # normalize single-letter units to their full form
        if len(unit) == 1:
            unit = unit + "b"

        return cls(int(value), unit)

    def toGB(self) -> int:
        """Return the size in whole gibibytes, rounded down like `free -g`."""
        return self.value // self._unit_map["gb"]
