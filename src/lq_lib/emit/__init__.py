# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Rendering and writing of Supervisor programs for queue workers.
"""

from .emitter import EmitResult, QueueOutcome, SupervisorConfigEmitter
from .stanza import SupervisorStanza

__all__ = ["EmitResult", "QueueOutcome", "SupervisorConfigEmitter", "SupervisorStanza"]
