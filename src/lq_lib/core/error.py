# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout lq.

Every lq-specific exception carries an exit code used by lq commands
to report failures consistently.
"""

from .config import CFG


class LQError(Exception):
    """Common exception type for all recoverable lq errors."""

    exit_code = CFG.exit_codes.default


class LQEmitError(LQError):
    """Raised when the Supervisor configuration of a single queue cannot be written."""

    def __init__(self, queue_name: str, reason: str):
        super().__init__(f"Could not configure queue '{queue_name}': {reason}")
        self.queue_name = queue_name
