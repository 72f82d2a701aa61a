# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass

import yaml

from lq_lib.core.common import load_yaml_dumper
from lq_lib.core.error import LQError

from .tier import Tier


@dataclass(frozen=True)
class HostProfile:
    """
    Capacity of the host the queue workers will run on.

    Attributes:
        cpu_cores (int): Number of CPU cores available.
        total_ram_gb (int): Total memory in whole GB.
        available_ram_gb (int): Memory available for new processes in whole GB.
        tier (Tier): Coarse classification of the host.
        recommended_processes (int): Number of worker processes the host handles efficiently.
    """

    cpu_cores: int
    total_ram_gb: int
    available_ram_gb: int
    tier: Tier
    recommended_processes: int

    def __post_init__(self):
        if self.cpu_cores < 1:
            raise LQError(f"Invalid number of CPU cores '{self.cpu_cores}'.")
        if self.total_ram_gb < 0 or self.available_ram_gb < 0:
            raise LQError("Amount of memory cannot be negative.")
        if self.recommended_processes < 1:
            raise LQError(
                f"Invalid number of recommended processes '{self.recommended_processes}'."
            )

    def toDict(self) -> dict[str, object]:
        """Return the profile as a plain dictionary."""
        return {
            "cpu_cores": self.cpu_cores,
            "total_ram_gb": self.total_ram_gb,
            "available_ram_gb": self.available_ram_gb,
            "tier": str(self.tier),
            "recommended_processes": self.recommended_processes,
        }

    def toYaml(self) -> str:
        """Return the YAML representation of the profile."""
        return yaml.dump(
            self.toDict(),
            default_flow_style=False,
            sort_keys=False,
            Dumper=load_yaml_dumper(),
        )
