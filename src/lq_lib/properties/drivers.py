# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Backends selected for Laravel's queue, cache and session stores.
"""

from dataclasses import dataclass
from enum import Enum


class QueueDriver(Enum):
    """Store handing off queued jobs to the workers."""

    DATABASE = "database"
    REDIS = "redis"

    def __str__(self):
        return self.value


class StoreDriver(Enum):
    """Store used for the cache or for sessions."""

    FILE = "file"
    REDIS = "redis"
    DATABASE = "database"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class DriverSelection:
    """
    Drivers chosen by the operator.

    Attributes:
        queue_driver (QueueDriver): Primary queue connection.
        queue_fallback (QueueDriver | None): Connection used when the primary one is unavailable.
        cache_driver (StoreDriver): Cache store.
        session_driver (StoreDriver): Session store.
    """

    queue_driver: QueueDriver
    cache_driver: StoreDriver
    session_driver: StoreDriver
    queue_fallback: QueueDriver | None = None

    @property
    def needs_in_memory_store(self) -> bool:
        """True if any of the drivers requires a Redis server."""
        return (
            self.queue_driver == QueueDriver.REDIS
            or self.cache_driver == StoreDriver.REDIS
            or self.session_driver == StoreDriver.REDIS
        )

    def toEnv(self) -> dict[str, str]:
        """Return the Laravel environment variables selecting the drivers."""
        return {
            "QUEUE_CONNECTION": str(self.queue_driver),
            "CACHE_DRIVER": str(self.cache_driver),
            "SESSION_DRIVER": str(self.session_driver),
        }
