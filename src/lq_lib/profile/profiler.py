# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import os
from pathlib import Path

from lq_lib.core.config import CFG
from lq_lib.core.error import LQError
from lq_lib.core.logger import get_logger
from lq_lib.properties.host_profile import HostProfile
from lq_lib.properties.size import Size
from lq_lib.properties.tier import Tier

logger = get_logger(__name__)


class HostProfiler:
    """
    Inspects the host and recommends the number of queue worker processes.
    """

    def __init__(self, meminfo: Path | None = None):
        """
        Args:
            meminfo (Path | None): File with kernel memory statistics.
                Defaults to the configured path (/proc/meminfo).
        """
        self._meminfo = meminfo or Path(CFG.paths.meminfo)

    def profile(self) -> HostProfile:
        """
        Read the CPU count and memory of the host and classify it.

        Returns:
            HostProfile: The capacity of the host.

        Raises:
            LQError: If the CPU count or memory could not be determined.
        """
        cores = self._getCpuCores()
        total, available = self._getMemory()

        profile = HostProfiler.classify(cores, total.toGB(), available.toGB())
        logger.debug(f"Host profile: {profile}.")
        return profile

    @staticmethod
    def classify(cpu_cores: int, total_ram_gb: int, available_ram_gb: int) -> HostProfile:
        """
        Classify a host and compute the recommended number of worker processes.

        - RAM >= 8 GB and >= 4 cores: high-performance, two processes per core.
        - RAM >= 4 GB and >= 2 cores: medium-performance, one process per core.
        - Otherwise: basic, a fixed number of processes regardless of the core count.

        Args:
            cpu_cores (int): Number of CPU cores.
            total_ram_gb (int): Total memory in whole GB.
            available_ram_gb (int): Available memory in whole GB.

        Returns:
            HostProfile: The classified host.
        """
        settings = CFG.profiler

        if total_ram_gb >= settings.high_ram_gb and cpu_cores >= settings.high_cores:
            tier = Tier.HIGH
            recommended = cpu_cores * settings.high_processes_per_core
        elif total_ram_gb >= settings.medium_ram_gb and cpu_cores >= settings.medium_cores:
            tier = Tier.MEDIUM
            recommended = cpu_cores
        else:
            tier = Tier.BASIC
            recommended = settings.basic_processes

        return HostProfile(
            cpu_cores=cpu_cores,
            total_ram_gb=total_ram_gb,
            available_ram_gb=available_ram_gb,
            tier=tier,
            recommended_processes=recommended,
        )

    @staticmethod
    def _getCpuCores() -> int:
        """
        Return the number of CPU cores usable by this process.

        Raises:
            LQError: If the number of cores cannot be determined.
        """
        try:
            # honors CPU affinity like `nproc`
            cores = len(os.sched_getaffinity(0))
        except AttributeError:
            cores = os.cpu_count() or 0

        if cores < 1:
            raise LQError("Could not determine the number of CPU cores.")

        return cores

    def _getMemory(self) -> tuple[Size, Size]:
        """
        Return the total and available memory of the host.

        Raises:
            LQError: If the memory statistics cannot be read or parsed.
        """
        try:
            content = self._meminfo.read_text()
        except OSError as e:
            raise LQError(f"Could not read memory statistics from '{self._meminfo}': {e}.")

        stats = {}
        for line in content.splitlines():
            key, sep, value = line.partition(":")
            if sep:
                stats[key.strip()] = value.strip()

        if "MemTotal" not in stats:
            raise LQError(f"Total memory not reported in '{self._meminfo}'.")

        total = Size.fromString(stats["MemTotal"])
        # older kernels do not report MemAvailable
        available = (
            Size.fromString(stats["MemAvailable"]) if "MemAvailable" in stats else total
        )

        return total, available
