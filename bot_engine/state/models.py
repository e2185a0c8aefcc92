"""
State Layer - Runtime Data Models

This module defines the runtime view of a block instance. The sequencer keeps
its own cursor; these models are the read-only picture it hands out to the
host for diagnostics and debugging.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class BlockStatus(str, Enum):
    """
    Lifecycle of a single block instance.

    IDLE: Nothing displayed yet.
    PROCESSING: A logic or integration step is being executed.
    WAITING_FOR_ANSWER: The current step is shown; waiting for advance().
    COMPLETED: on_block_end was invoked. Terminal.
    STALLED: A step id could not be resolved. Terminal, no callback.
    FAILED: An integration call failed. Terminal, no callback.
    CANCELLED: The host tore the block down. Terminal, no callback.
    """
    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    WAITING_FOR_ANSWER = "WAITING_FOR_ANSWER"
    COMPLETED = "COMPLETED"
    STALLED = "STALLED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (
            BlockStatus.COMPLETED,
            BlockStatus.STALLED,
            BlockStatus.FAILED,
            BlockStatus.CANCELLED,
        )


class BlockSnapshot(BaseModel):
    """
    Point-in-time view of a BlockSequencer.
    """
    status: BlockStatus
    step_ids: List[str] = Field(default_factory=list)
    displayed_step_ids: List[str] = Field(default_factory=list)
    current_step_id: Optional[str] = None

    # Set once the block is COMPLETED
    end_edge_id: Optional[str] = None

    # Diagnostics for STALLED / FAILED blocks
    stalled_step_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_finished(self) -> bool:
        return self.status.is_terminal
